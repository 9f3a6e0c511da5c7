"""Primary public API for bibsync."""

from __future__ import annotations

from bibsync.core.bibliography import (
    BibliographyCollection,
    BibliographyEntry,
    BibliographyIssue,
    RawEntry,
    normalize_entry,
    parse_entries,
    read_value,
    serialize_entries,
)
from bibsync.core.config import HighlightConfig, MarkerConfig, SyncConfig, load_config
from bibsync.core.diagnostics import DiagnosticEmitter, LoggingEmitter, NullEmitter
from bibsync.core.document import splice_publications, stamp_last_updated, update_document
from bibsync.core.exceptions import BibsyncError, ConfigurationError, MarkerNotFoundError
from bibsync.core.pipeline import (
    PublicationBuild,
    SyncReport,
    build_publications,
    sync_publications,
)
from bibsync.core.publications import (
    AssetDirectory,
    AuthorHighlight,
    Link,
    LinkResolver,
    PublicationPayload,
    build_payload,
    build_venue,
    escape_html,
    format_authors,
    group_entries,
    order_entries,
    render_html,
    resolve_links,
)
from bibsync.version import get_version


__version__ = get_version()


__all__ = [
    "AssetDirectory",
    "AuthorHighlight",
    "BibliographyCollection",
    "BibliographyEntry",
    "BibliographyIssue",
    "BibsyncError",
    "ConfigurationError",
    "DiagnosticEmitter",
    "HighlightConfig",
    "Link",
    "LinkResolver",
    "LoggingEmitter",
    "MarkerConfig",
    "MarkerNotFoundError",
    "NullEmitter",
    "PublicationBuild",
    "PublicationPayload",
    "RawEntry",
    "SyncConfig",
    "SyncReport",
    "__version__",
    "build_payload",
    "build_publications",
    "build_venue",
    "escape_html",
    "format_authors",
    "get_version",
    "group_entries",
    "load_config",
    "normalize_entry",
    "order_entries",
    "parse_entries",
    "read_value",
    "render_html",
    "resolve_links",
    "serialize_entries",
    "splice_publications",
    "stamp_last_updated",
    "sync_publications",
    "update_document",
]
