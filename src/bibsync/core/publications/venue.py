"""Human-readable venue descriptions, one builder per entry type."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
import re
from types import MappingProxyType

from bibsync.core.bibliography.entries import BibliographyEntry


THESIS_TYPES: frozenset[str] = frozenset({"phdthesis", "mastersthesis"})

PATENT_STATUS_LABELS: Mapping[str, str] = MappingProxyType(
    {
        "published_application": "Published application",
        "granted": "Granted",
        "pending": "Pending",
        "abandoned": "Abandoned",
    }
)

_STATUS_SEPARATOR_RE = re.compile(r"[\s-]+")


def format_patent_status(status: str | None) -> str:
    """Return the display label of a patent status code."""
    if not status:
        return ""
    code = _STATUS_SEPARATOR_RE.sub("_", status.lower())
    label = PATENT_STATUS_LABELS.get(code)
    if label is not None:
        return label
    return " ".join(token[0].upper() + token[1:] for token in code.split("_") if token)


def _join(pieces: Iterable[str | None]) -> str:
    return ", ".join(piece for piece in pieces if piece)


def _article_venue(entry: BibliographyEntry) -> str:
    volume = entry.fields.get("volume", "")
    number = entry.fields.get("number")
    if number:
        volume += f"({number})"
    return _join([entry.first("journaltitle", "journal"), volume, entry.fields.get("pages")])


def _proceedings_venue(entry: BibliographyEntry) -> str:
    pages = entry.fields.get("pages")
    return _join(
        [
            entry.first("booktitle", "eventtitle"),
            entry.fields.get("location"),
            entry.first("date", "year"),
            f"pp. {pages}" if pages else None,
        ]
    )


def _patent_venue(entry: BibliographyEntry) -> str:
    status = format_patent_status(entry.fields.get("status"))
    return _join(
        [
            f"Status: {status}" if status else None,
            entry.fields.get("number"),
            entry.fields.get("location"),
            entry.fields.get("date"),
        ]
    )


def _thesis_venue(entry: BibliographyEntry) -> str:
    supervisor = entry.first("advisor", "supervisor")
    return _join(
        [
            entry.fields.get("school"),
            f"Supervisor: {supervisor}" if supervisor else None,
            entry.first("year", "date"),
        ]
    )


def build_venue(entry: BibliographyEntry) -> str:
    """Assemble the venue line for ``entry`` from its type-specific fields."""
    match entry.type:
        case "article":
            return _article_venue(entry)
        case "inproceedings":
            return _proceedings_venue(entry)
        case "patent":
            return _patent_venue(entry)
        case entry_type if entry_type in THESIS_TYPES:
            return _thesis_venue(entry)
        case "unpublished":
            return entry.first("note", "year") or ""
        case _:
            venue = entry.first("booktitle", "journaltitle", "note")
            return _join([venue, entry.fields.get("year")])


__all__ = [
    "PATENT_STATUS_LABELS",
    "THESIS_TYPES",
    "build_venue",
    "format_patent_status",
]
