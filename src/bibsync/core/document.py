"""Splicing of generated publications into the host HTML document."""

from __future__ import annotations

from datetime import datetime, timezone
import re

from .config import MarkerConfig
from .exceptions import MarkerNotFoundError


LAST_UPDATED_PREFIX = "Site last updated on:"
_LAST_UPDATED_RE = re.compile(re.escape(LAST_UPDATED_PREFIX) + r"[^<]*")

# English names regardless of LC_TIME.
MONTH_NAMES: tuple[str, ...] = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)


def splice_publications(
    document: str,
    html: str,
    markers: MarkerConfig | None = None,
) -> str:
    """Replace the content between the start and end markers with ``html``."""
    markers = markers or MarkerConfig()
    start = document.find(markers.start)
    end = document.find(markers.end, start + len(markers.start)) if start != -1 else -1
    if start == -1 or end == -1:
        raise MarkerNotFoundError(
            f"Missing publication markers '{markers.start}' and '{markers.end}' in document."
        )
    replacement = f"{markers.start}\n{html}\n        {markers.end}"
    return document[:start] + replacement + document[end + len(markers.end) :]


def format_build_date(when: datetime) -> str:
    """Return ``Month D, YYYY`` for ``when`` expressed in UTC."""
    if when.tzinfo is not None:
        when = when.astimezone(timezone.utc)
    return f"{MONTH_NAMES[when.month - 1]} {when.day}, {when.year}"


def stamp_last_updated(
    document: str,
    when: datetime | None = None,
    markers: MarkerConfig | None = None,
) -> str:
    """Insert or refresh the "Site last updated on" stamp."""
    markers = markers or MarkerConfig()
    when = when or datetime.now(timezone.utc)
    stamp = f"{LAST_UPDATED_PREFIX} {format_build_date(when)} (UTC)"
    if markers.last_updated in document:
        return document.replace(markers.last_updated, stamp, 1)
    if _LAST_UPDATED_RE.search(document):
        return _LAST_UPDATED_RE.sub(stamp, document)
    raise MarkerNotFoundError(
        f"Missing last-updated marker '{markers.last_updated}' in document."
    )


def update_document(
    document: str,
    html: str,
    *,
    markers: MarkerConfig | None = None,
    when: datetime | None = None,
    stamp: bool = True,
) -> str:
    """Splice ``html`` and, when requested, refresh the last-updated stamp."""
    updated = splice_publications(document, html, markers)
    if stamp:
        updated = stamp_last_updated(updated, when, markers)
    return updated


__all__ = [
    "LAST_UPDATED_PREFIX",
    "MONTH_NAMES",
    "format_build_date",
    "splice_publications",
    "stamp_last_updated",
    "update_document",
]
