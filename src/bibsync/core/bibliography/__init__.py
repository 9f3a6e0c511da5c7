"""Bibliography reading, normalisation and canonical storage.

Architecture
: `parse_entries` scans raw text for `@type{key, ...}` records using
  `read_value` for each field value. It never raises: damaged records are
  skipped and unterminated values run to the end of the input.
: `normalize_entry` turns a `RawEntry` into a `BibliographyEntry` whose values
  are single-line, brace-free strings, dropping denylisted and empty fields.
: `serialize_entries` writes entries back with their fields sorted by name.
  Parsing and normalising that output yields the same entries again.
: `BibliographyCollection` ties the steps together and applies the duplicate
  key policy: the first definition wins and conflicting ones become issues.

Usage Example

```pycon
>>> from bibsync.core.bibliography import BibliographyCollection
>>> collection = BibliographyCollection()
>>> collection.load_text(\"\"\"@article{doe2023,
...   author = {Doe, Jane},
...   title = {{A Minimal} Example},
...   year = {2023},
... }\"\"\")
1
>>> collection.find("doe2023").fields["title"]
'A Minimal Example'
```
"""

from __future__ import annotations

from .entries import BibliographyEntry, RawEntry
from .issues import BibliographyIssue
from .normalize import DROP_FIELDS, normalize_entries, normalize_entry, normalize_text
from .parsing import ValueToken, parse_entries, read_value
from .serialize import serialize_entries, serialize_entry
from .collection import BibliographyCollection


__all__ = [
    "DROP_FIELDS",
    "BibliographyCollection",
    "BibliographyEntry",
    "BibliographyIssue",
    "RawEntry",
    "ValueToken",
    "normalize_entries",
    "normalize_entry",
    "normalize_text",
    "parse_entries",
    "read_value",
    "serialize_entries",
    "serialize_entry",
]
