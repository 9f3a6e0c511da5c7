"""Field normalisation applied to freshly parsed records."""

from __future__ import annotations

from collections.abc import Iterable
import re

from .entries import BibliographyEntry, RawEntry


DROP_FIELDS: frozenset[str] = frozenset({"file", "langid", "urldate", "shortjournal", "issue"})

# Only these sequences are unescaped; any other backslash pair stays literal.
ESCAPE_SEQUENCES: tuple[tuple[str, str], ...] = (
    (r"\&", "&"),
    (r"\,", ","),
    (r"\%", "%"),
    (r"\_", "_"),
)

_WHITESPACE_RE = re.compile(r"\s+")


def _unescape(text: str) -> str:
    # Repeat until stable: `\\&` leaves a fresh `\&` behind after one pass.
    previous = None
    while previous != text:
        previous = text
        for sequence, replacement in ESCAPE_SEQUENCES:
            text = text.replace(sequence, replacement)
    return text


def normalize_text(value: str | None) -> str:
    """Return ``value`` as a single-line, brace-free, whitespace-collapsed string."""
    if not value:
        return ""
    text = value.strip()
    while len(text) >= 2 and text.startswith("{") and text.endswith("}"):
        text = text[1:-1].strip()
    text = text.replace("{", "").replace("}", "")
    return _WHITESPACE_RE.sub(" ", _unescape(text)).strip()


def normalize_entry(
    entry: RawEntry,
    *,
    drop_fields: Iterable[str] = DROP_FIELDS,
) -> BibliographyEntry:
    """Normalise every field of ``entry``, dropping denylisted and empty ones."""
    denylist = {name.lower() for name in drop_fields}
    fields: dict[str, str] = {}
    for name, raw_value in entry.fields.items():
        if name in denylist:
            continue
        normalized = normalize_text(raw_value)
        if not normalized:
            continue
        fields[name] = normalized
    return BibliographyEntry(type=entry.type, key=entry.key, fields=fields)


def normalize_entries(
    entries: Iterable[RawEntry],
    *,
    drop_fields: Iterable[str] = DROP_FIELDS,
) -> list[BibliographyEntry]:
    """Normalise a sequence of raw entries, preserving their order."""
    denylist = frozenset(drop_fields)
    return [normalize_entry(entry, drop_fields=denylist) for entry in entries]


__all__ = [
    "DROP_FIELDS",
    "ESCAPE_SEQUENCES",
    "normalize_entries",
    "normalize_entry",
    "normalize_text",
]
