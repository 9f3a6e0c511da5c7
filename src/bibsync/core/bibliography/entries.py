"""Record types flowing through the bibliography pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(slots=True)
class RawEntry:
    """One ``@type{key, ...}`` record as found in the source text."""

    type: str
    key: str
    fields: dict[str, str] = field(default_factory=dict)


@dataclass(slots=True)
class BibliographyEntry:
    """A record whose fields are single-line, brace-free and non-empty."""

    type: str
    key: str
    fields: dict[str, str] = field(default_factory=dict)

    def first(self, *names: str) -> str | None:
        """Return the value of the first field present among ``names``."""
        for name in names:
            value = self.fields.get(name)
            if value:
                return value
        return None


__all__ = ["BibliographyEntry", "RawEntry"]
