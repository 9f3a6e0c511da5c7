"""Custom exception hierarchy for the publication sync pipeline."""

from __future__ import annotations


class BibsyncError(RuntimeError):
    """Base exception for bibsync failures."""


class MarkerNotFoundError(BibsyncError):
    """Raised when a host document lacks the markers delimiting the publications."""


class ConfigurationError(BibsyncError):
    """Raised when the sync configuration cannot be loaded or validated."""


def exception_messages(exc: BaseException) -> list[str]:
    """Return the collected message chain for an exception and its causes."""
    messages: list[str] = []
    visited: set[int] = set()
    current: BaseException | None = exc
    while current is not None and id(current) not in visited:
        visited.add(id(current))
        text = str(current).strip()
        if text:
            first_line = text.splitlines()[0].strip()
            if first_line:
                messages.append(first_line)
        current = current.__cause__ or current.__context__
    return messages


__all__ = [
    "BibsyncError",
    "ConfigurationError",
    "MarkerNotFoundError",
    "exception_messages",
]
