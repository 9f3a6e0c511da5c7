"""Author list formatting with optional highlighting of one person."""

from __future__ import annotations

from dataclasses import dataclass
import re

from markupsafe import Markup, escape
from slugify import slugify


_AND_RE = re.compile(r"\s+and\s+", re.IGNORECASE)


@dataclass(frozen=True, slots=True)
class AuthorHighlight:
    """Person whose name is emphasised wherever it appears in author lists."""

    surname: str
    given_name: str

    def matches(self, first: str, last: str) -> bool:
        target_surname = _surname_key(self.surname)
        if not target_surname or _surname_key(last) != target_surname:
            return False
        given = first.strip()
        target_given = self.given_name.strip()
        if not target_given:
            return True
        if target_given.casefold() in given.casefold():
            return True
        initial = re.escape(target_given[0])
        return re.match(rf"^{initial}(\.|$)", given, re.IGNORECASE) is not None


def _surname_key(value: str) -> str:
    return slugify(value, separator="")


def split_authors(field: str) -> list[str]:
    """Split an ``and``-separated author field into trimmed person strings."""
    return [person.strip() for person in _AND_RE.split(field) if person.strip()]


def split_name(person: str) -> tuple[str, str]:
    """Return ``(first, last)`` for ``Last, First`` or ``First ... Last`` forms."""
    if "," in person:
        parts = person.split(",")
        return parts[1].strip(), parts[0].strip()
    tokens = person.split()
    if len(tokens) > 1:
        return " ".join(tokens[:-1]), tokens[-1]
    return person, ""


def format_author(person: str, highlight: AuthorHighlight | None = None) -> Markup:
    """Render one person as escaped ``First Last``."""
    first, last = split_name(person)
    display = f"{first} {last}".strip() or person
    safe_name = escape(display)
    if highlight is not None and highlight.matches(first, last):
        return Markup("<strong>{}</strong>").format(safe_name)
    return Markup(safe_name)


def format_authors(field: str | None, highlight: AuthorHighlight | None = None) -> Markup:
    """Render an author field as a comma-separated, HTML-safe list."""
    if not field:
        return Markup("")
    return Markup(", ").join(format_author(person, highlight) for person in split_authors(field))


__all__ = [
    "AuthorHighlight",
    "format_author",
    "format_authors",
    "split_authors",
    "split_name",
]
