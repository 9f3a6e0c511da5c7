"""Year derivation, ordering and category grouping of bibliography entries."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
import re
from types import MappingProxyType
from typing import NamedTuple
import unicodedata

from bibsync.core.bibliography.entries import BibliographyEntry


UNKNOWN_YEAR = "Unknown"
DEFAULT_CATEGORY = "Other"

_YEAR_NUMBER_RE = re.compile(r"\d+(?:\.\d+)?", re.ASCII)

CATEGORY_ORDER: tuple[str, ...] = (
    "Publications",
    "Proceedings",
    "Patent Applications",
    "Talks",
    DEFAULT_CATEGORY,
)

TYPE_TO_CATEGORY: Mapping[str, str] = MappingProxyType(
    {
        "article": "Publications",
        "inproceedings": "Proceedings",
        "patent": "Patent Applications",
        "phdthesis": "Publications",
        "mastersthesis": "Publications",
        "unpublished": "Talks",
    }
)


class CategoryBucket(NamedTuple):
    name: str
    entries: list[BibliographyEntry]


class YearBucket(NamedTuple):
    year: str
    categories: list[CategoryBucket]


def entry_year(entry: BibliographyEntry) -> str:
    """Return the declared year, the year prefix of ``date``, or ``Unknown``."""
    year = entry.fields.get("year")
    if year:
        return year
    date = entry.fields.get("date")
    if date:
        return date[:4]
    return UNKNOWN_YEAR


def year_number(year: str) -> float:
    """Coerce a year label to a number, mapping anything non-numeric to 0."""
    found = _YEAR_NUMBER_RE.fullmatch(year.strip())
    return float(found.group(0)) if found else 0.0


def title_sort_key(title: str | None) -> tuple[str, str]:
    """Return a case- and accent-insensitive key, the raw title breaking ties."""
    raw = title or ""
    decomposed = unicodedata.normalize("NFKD", raw)
    base = "".join(char for char in decomposed if not unicodedata.combining(char))
    return base.casefold(), raw


def order_entries(entries: Iterable[BibliographyEntry]) -> list[BibliographyEntry]:
    """Sort by numeric year descending, then title ascending (stable)."""
    by_title = sorted(entries, key=lambda entry: title_sort_key(entry.fields.get("title")))
    return sorted(by_title, key=lambda entry: -year_number(entry_year(entry)))


def classify(entry: BibliographyEntry) -> str:
    """Map the entry type to its display category."""
    return TYPE_TO_CATEGORY.get(entry.type, DEFAULT_CATEGORY)


def group_entries(entries: Iterable[BibliographyEntry]) -> list[YearBucket]:
    """Group entries by year, then by category in the declared category order."""
    by_year: dict[str, dict[str, list[BibliographyEntry]]] = {}
    for entry in entries:
        by_category = by_year.setdefault(entry_year(entry), {})
        by_category.setdefault(classify(entry), []).append(entry)

    buckets: list[YearBucket] = []
    for year in sorted(by_year, key=lambda label: -year_number(label)):
        by_category = by_year[year]
        categories = [
            CategoryBucket(
                name,
                sorted(
                    by_category[name],
                    key=lambda entry: title_sort_key(entry.fields.get("title")),
                ),
            )
            for name in CATEGORY_ORDER
            if by_category.get(name)
        ]
        buckets.append(YearBucket(year, categories))
    return buckets


__all__ = [
    "CATEGORY_ORDER",
    "DEFAULT_CATEGORY",
    "TYPE_TO_CATEGORY",
    "UNKNOWN_YEAR",
    "CategoryBucket",
    "YearBucket",
    "classify",
    "entry_year",
    "group_entries",
    "order_entries",
    "title_sort_key",
    "year_number",
]
