"""Canonical text form used to store the bibliography."""

from __future__ import annotations

from collections.abc import Iterable

from .entries import BibliographyEntry


def serialize_entry(entry: BibliographyEntry) -> str:
    """Render a single entry with its fields sorted by name."""
    lines = [f"@{entry.type}{{{entry.key},"]
    for name in sorted(entry.fields):
        lines.append(f"  {name} = {{{entry.fields[name]}}},")
    lines.append("}")
    return "\n".join(lines)


def serialize_entries(entries: Iterable[BibliographyEntry]) -> str:
    """Render ``entries`` in the given order, separated by blank lines.

    Parsing and normalising the result yields the same entries again, as long
    as the entries were normalised in the first place.
    """
    chunks = [serialize_entry(entry) for entry in entries]
    return "\n\n".join(chunks) + "\n"


__all__ = ["serialize_entries", "serialize_entry"]
