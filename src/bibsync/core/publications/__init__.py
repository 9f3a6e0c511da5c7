"""Ordering, grouping and display formatting of bibliography entries."""

from __future__ import annotations

from .authors import AuthorHighlight, format_author, format_authors
from .links import (
    AssetDirectory,
    AssetOracle,
    Link,
    LinkResolver,
    looks_like_link,
    resolve_links,
)
from .ordering import (
    CATEGORY_ORDER,
    TYPE_TO_CATEGORY,
    classify,
    entry_year,
    group_entries,
    order_entries,
)
from .render import (
    PublicationPayload,
    PublicationRenderer,
    build_payload,
    escape_html,
    render_html,
)
from .venue import build_venue, format_patent_status


__all__ = [
    "CATEGORY_ORDER",
    "TYPE_TO_CATEGORY",
    "AssetDirectory",
    "AssetOracle",
    "AuthorHighlight",
    "Link",
    "LinkResolver",
    "PublicationPayload",
    "PublicationRenderer",
    "build_payload",
    "build_venue",
    "classify",
    "entry_year",
    "escape_html",
    "format_author",
    "format_authors",
    "format_patent_status",
    "group_entries",
    "looks_like_link",
    "order_entries",
    "render_html",
    "resolve_links",
]
