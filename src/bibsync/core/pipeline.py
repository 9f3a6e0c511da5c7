"""End-to-end sync: canonical bibliography rewrite plus publication rendering."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from datetime import datetime
import logging
from pathlib import Path

from .bibliography import BibliographyCollection, BibliographyEntry, BibliographyIssue
from .config import SyncConfig
from .diagnostics import DiagnosticEmitter, NullEmitter
from .document import update_document
from .publications import (
    AssetDirectory,
    AssetOracle,
    LinkResolver,
    PublicationPayload,
    build_payload,
    render_html,
)


logger = logging.getLogger(__name__)


@dataclass(slots=True)
class PublicationBuild:
    """Everything derived from one bibliography text."""

    entries: list[BibliographyEntry]
    canonical: str
    payload: PublicationPayload
    html: str
    issues: Sequence[BibliographyIssue] = field(default_factory=tuple)


@dataclass(slots=True)
class SyncReport:
    """Outcome of a sync run against the configured files."""

    build: PublicationBuild
    bibliography_path: Path
    document_path: Path
    bibliography_changed: bool = False
    document_changed: bool = False

    @property
    def entry_count(self) -> int:
        return len(self.build.entries)


def make_link_resolver(
    config: SyncConfig, asset_exists: AssetOracle | None = None
) -> LinkResolver:
    """Return a resolver checking assets in ``config.asset_dir`` unless overridden."""
    oracle = asset_exists or AssetDirectory(config.asset_dir, config.asset_extension)
    return LinkResolver(
        oracle,
        asset_prefix=config.asset_prefix,
        asset_extension=config.asset_extension,
    )


def _report_issues(issues: Sequence[BibliographyIssue], emitter: DiagnosticEmitter) -> None:
    for issue in issues:
        prefix = f"[{issue.key}] " if issue.key else ""
        emitter.warning(f"{prefix}{issue.message}")


def build_publications(
    text: str,
    *,
    config: SyncConfig,
    asset_exists: AssetOracle | None = None,
    emitter: DiagnosticEmitter | None = None,
    source: Path | str | None = None,
) -> PublicationBuild:
    """Parse ``text`` and derive the canonical form, the payload and its HTML."""
    emitter = emitter or NullEmitter()
    collection = BibliographyCollection(drop_fields=config.drop_fields)
    found = collection.load_text(text, source=source)
    entries = collection.ordered_entries()
    emitter.event(
        "bibliography_parsed",
        {
            "source": str(source) if source else None,
            "entries": len(entries),
            "duplicates": found - len(entries),
        },
    )
    _report_issues([issue for issue in collection.issues if issue.key], emitter)

    payload = build_payload(
        entries,
        make_link_resolver(config, asset_exists),
        highlight=config.author_highlight,
    )
    return PublicationBuild(
        entries=entries,
        canonical=collection.to_bibtex(),
        payload=payload,
        html=render_html(payload),
        issues=collection.issues,
    )


def _write_if_changed(path: Path, payload: str, current: str | None) -> bool:
    if current == payload:
        return False
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(payload, encoding="utf-8")
    return True


def sync_publications(
    config: SyncConfig,
    *,
    asset_exists: AssetOracle | None = None,
    emitter: DiagnosticEmitter | None = None,
    now: datetime | None = None,
    dry_run: bool = False,
) -> SyncReport:
    """Rewrite the bibliography canonically and regenerate the document block.

    The host document is validated before anything is written, so a document
    without markers leaves both files untouched.
    """
    emitter = emitter or NullEmitter()
    bib_path = config.bibliography
    doc_path = config.document

    raw_bib = bib_path.read_text(encoding="utf-8")
    build = build_publications(
        raw_bib,
        config=config,
        asset_exists=asset_exists,
        emitter=emitter,
        source=bib_path,
    )

    document = doc_path.read_text(encoding="utf-8")
    updated = update_document(
        document,
        build.html,
        markers=config.markers,
        when=now,
        stamp=config.stamp_last_updated,
    )

    report = SyncReport(build=build, bibliography_path=bib_path, document_path=doc_path)
    if dry_run:
        logger.info("Dry run: skipping writes to %s and %s", bib_path, doc_path)
        report.bibliography_changed = build.canonical != raw_bib
        report.document_changed = updated != document
        return report

    report.bibliography_changed = _write_if_changed(bib_path, build.canonical, raw_bib)
    emitter.event(
        "canonical_written", {"path": str(bib_path), "changed": report.bibliography_changed}
    )
    report.document_changed = _write_if_changed(doc_path, updated, document)
    emitter.event(
        "document_updated", {"path": str(doc_path), "changed": report.document_changed}
    )
    return report


__all__ = [
    "PublicationBuild",
    "SyncReport",
    "build_publications",
    "make_link_resolver",
    "sync_publications",
]
