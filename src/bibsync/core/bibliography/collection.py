"""Aggregation of normalised entries with a first-definition-wins key policy."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
import logging
from pathlib import Path

from pybtex.database import BibliographyData, Entry, Person

from bibsync.core.publications.authors import split_authors
from bibsync.core.publications.ordering import order_entries

from .entries import BibliographyEntry
from .issues import BibliographyIssue
from .normalize import DROP_FIELDS, normalize_entry
from .parsing import parse_entries
from .serialize import serialize_entries


logger = logging.getLogger(__name__)

PERSON_FIELDS: tuple[str, ...] = ("author", "editor")


class BibliographyCollection:
    """Aggregate entries from one or more bibliography sources."""

    def __init__(self, *, drop_fields: Iterable[str] = DROP_FIELDS) -> None:
        self._drop_fields = frozenset(drop_fields)
        self._entries: dict[str, BibliographyEntry] = {}
        self._issues: list[BibliographyIssue] = []
        self._file_entry_counts: dict[Path, int] = {}
        self._file_order: list[Path] = []

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    @property
    def issues(self) -> Sequence[BibliographyIssue]:
        """Return the list of issues discovered while loading references."""
        return tuple(self._issues)

    @property
    def file_stats(self) -> Sequence[tuple[Path, int]]:
        """Return (file, entry_count) pairs in the order files were processed."""
        return tuple((path, self._file_entry_counts.get(path, 0)) for path in self._file_order)

    def load_files(self, files: Iterable[Path | str]) -> None:
        """Load entries from one or more files."""
        for file_path in files:
            path = Path(file_path).resolve()
            self.load_text(path.read_text(encoding="utf-8"), source=path)

    def load_text(self, text: str, *, source: Path | str | None = None) -> int:
        """Parse and merge ``text``; return the number of records found."""
        source_path = self._resolve_source_path(source)
        if source_path not in self._file_order:
            self._file_order.append(source_path)

        raw_entries = parse_entries(text)
        self._file_entry_counts[source_path] = (
            self._file_entry_counts.get(source_path, 0) + len(raw_entries)
        )
        if not raw_entries:
            self._issues.append(
                BibliographyIssue(
                    message="No references found in file.",
                    key=None,
                    source=source_path,
                )
            )
            return 0

        for raw in raw_entries:
            self.add(normalize_entry(raw, drop_fields=self._drop_fields), source=source_path)
        return len(raw_entries)

    def add(self, entry: BibliographyEntry, *, source: Path | None = None) -> bool:
        """Add ``entry`` unless its key is taken; return whether it was stored."""
        existing = self._entries.get(entry.key)
        if existing is None:
            self._entries[entry.key] = entry
            return True

        if existing != entry:
            self._issues.append(
                BibliographyIssue(
                    message=(
                        "Duplicate entry conflicts with an existing "
                        "reference; ignoring the newer definition."
                    ),
                    key=entry.key,
                    source=source,
                )
            )
        else:
            logger.debug("Ignoring identical duplicate of entry '%s'", entry.key)
        return False

    def _resolve_source_path(self, source: Path | str | None) -> Path:
        if source is None:
            return Path("inline-bibliography.bib")
        return Path(source)

    def find(self, key: str) -> BibliographyEntry | None:
        return self._entries.get(key)

    def entries(self) -> list[BibliographyEntry]:
        """Return the entries in load order."""
        return list(self._entries.values())

    def ordered_entries(self) -> list[BibliographyEntry]:
        """Return the entries by year descending, then title."""
        return order_entries(self._entries.values())

    def to_bibtex(self) -> str:
        """Return the canonical text form of the ordered entries."""
        return serialize_entries(self.ordered_entries())

    def write_bibtex(self, target: Path | str) -> bool:
        """Persist the canonical form; return ``False`` when the file is unchanged."""
        path = Path(target)
        payload = self.to_bibtex()
        try:
            existing = path.read_text(encoding="utf-8")
        except OSError:
            existing = None
        if existing == payload:
            return False
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(payload, encoding="utf-8")
        return True

    def to_bibliography_data(self, *, keys: Iterable[str] | None = None) -> BibliographyData:
        """Export the entries as pybtex data, splitting person fields into ``Person``s."""
        if keys is None:
            selected = list(self._entries)
        else:
            selected = [key for key in keys if key in self._entries]

        data = BibliographyData()
        for key in selected:
            entry = self._entries[key]
            fields = {
                name: value for name, value in entry.fields.items() if name not in PERSON_FIELDS
            }
            persons = {
                role: [Person(name) for name in split_authors(entry.fields[role])]
                for role in PERSON_FIELDS
                if role in entry.fields
            }
            data.add_entry(key, Entry(entry.type, fields=fields, persons=persons))
        return data


__all__ = ["BibliographyCollection"]
