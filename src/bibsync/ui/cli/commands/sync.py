"""Implementation of the ``bibsync sync`` command."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Annotated

import typer

from bibsync.core.config import SyncConfig, build_config, load_config
from bibsync.core.exceptions import BibsyncError
from bibsync.core.pipeline import sync_publications

from ..diagnostics import CliEmitter
from ..state import emit_error, get_cli_state


INPUTS_PANEL = "Inputs"
OUTPUT_PANEL = "Output"

ConfigOption = Annotated[
    Path | None,
    typer.Option(
        "--config",
        "-c",
        help="YAML file describing the bibliography, document and asset locations.",
        exists=True,
        file_okay=True,
        dir_okay=False,
        readable=True,
        resolve_path=True,
        rich_help_panel=INPUTS_PANEL,
    ),
]

BibliographyOption = Annotated[
    Path | None,
    typer.Option(
        "--bib",
        help="BibTeX file to normalise in place (default: publications.bib).",
        rich_help_panel=INPUTS_PANEL,
    ),
]

DocumentOption = Annotated[
    Path | None,
    typer.Option(
        "--document",
        help="HTML document receiving the publication list (default: index.html).",
        rich_help_panel=INPUTS_PANEL,
    ),
]

AssetDirOption = Annotated[
    Path | None,
    typer.Option(
        "--asset-dir",
        help="Directory holding per-entry assets named '<key>.pdf'.",
        rich_help_panel=INPUTS_PANEL,
    ),
]

PayloadOption = Annotated[
    Path | None,
    typer.Option(
        "--payload",
        help="Also write the structured rendering payload as JSON to this file.",
        rich_help_panel=OUTPUT_PANEL,
    ),
]

DryRunOption = Annotated[
    bool,
    typer.Option(
        "--dry-run",
        help="Compute everything but leave the bibliography and the document untouched.",
        rich_help_panel=OUTPUT_PANEL,
    ),
]


def _resolve_config(
    config_path: Path | None,
    bibliography: Path | None,
    document: Path | None,
    asset_dir: Path | None,
) -> SyncConfig:
    overrides = {
        "bibliography": bibliography.resolve() if bibliography else None,
        "document": document.resolve() if document else None,
        "asset_dir": asset_dir.resolve() if asset_dir else None,
    }
    if config_path is not None:
        return load_config(config_path, **overrides)
    return build_config(**overrides)


def sync(
    config_path: ConfigOption = None,
    bibliography: BibliographyOption = None,
    document: DocumentOption = None,
    asset_dir: AssetDirOption = None,
    payload_path: PayloadOption = None,
    dry_run: DryRunOption = False,
) -> None:
    """Normalise the bibliography and regenerate the publication list."""
    state = get_cli_state()
    emitter = CliEmitter()
    try:
        config = _resolve_config(config_path, bibliography, document, asset_dir)
        report = sync_publications(config, emitter=emitter, dry_run=dry_run)
    except OSError as exc:
        emit_error(f"Unable to access input files: {exc}", exception=exc)
        raise typer.Exit(code=1) from exc
    except BibsyncError as exc:
        emit_error(str(exc), exception=exc)
        raise typer.Exit(code=1) from exc

    if payload_path is not None:
        payload_path.parent.mkdir(parents=True, exist_ok=True)
        payload_path.write_text(
            json.dumps(report.build.payload.to_dict(), indent=2, ensure_ascii=False) + "\n",
            encoding="utf-8",
        )

    verb = "Would update" if dry_run else "Updated"
    state.console.print(
        f"{verb} {report.entry_count} BibTeX entries and regenerated publications "
        f"in {report.document_path.name}",
        soft_wrap=True,
    )
    outcome = emitter.outcome()
    if outcome:
        state.console.print(outcome, soft_wrap=True)


__all__ = ["sync"]
