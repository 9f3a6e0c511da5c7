"""Typer application wiring for the bibsync CLI."""

from __future__ import annotations

from pathlib import Path

import typer

from bibsync.core.bibliography import BibliographyCollection
from bibsync.core.exceptions import exception_messages
from bibsync.version import get_version

from .bibliography import export_bibliography, print_bibliography_overview
from .commands.sync import sync
from .state import configure_logging, debug_enabled, emit_error, get_cli_state, set_cli_state


app = typer.Typer(
    help="Normalise a BibTeX bibliography and publish it into an HTML page.",
    context_settings={"help_option_names": ["--help"]},
    no_args_is_help=True,
)

bibliography_app = typer.Typer(
    help="Inspect BibTeX bibliography files.",
    context_settings={"help_option_names": ["--help"]},
)

app.add_typer(bibliography_app, name="bibliography")
app.command(name="sync")(sync)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(get_version())
        raise typer.Exit(code=0)


@app.callback()
def _app_root(
    ctx: typer.Context,
    verbose: int = typer.Option(
        0,
        "--verbose",
        "-v",
        count=True,
        help=("Increase CLI verbosity. Combine multiple times for additional diagnostics."),
    ),
    debug: bool = typer.Option(
        False,
        "--debug/--no-debug",
        help="Show full tracebacks when an unexpected error occurs.",
    ),
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Print the installed version and exit.",
    ),
) -> None:
    ctx.obj = get_cli_state()
    state = set_cli_state(verbosity=verbose, debug=debug)
    configure_logging(state)


@bibliography_app.command(name="list")
def bibliography_list(
    bib_files: list[Path] = typer.Argument(
        ...,
        metavar="BIBFILE",
        help="One or more BibTeX files to inspect.",
        exists=True,
        file_okay=True,
        dir_okay=False,
        readable=True,
        resolve_path=True,
    ),
    export: Path | None = typer.Option(
        None,
        "--export",
        help="Also write the merged entries through pybtex as a BibTeX file.",
        dir_okay=False,
    ),
) -> None:
    """Load the given BibTeX files and print a formatted overview."""
    collection = BibliographyCollection()
    collection.load_files(bib_files)
    print_bibliography_overview(collection)
    if export is not None:
        count = export_bibliography(collection, export)
        get_cli_state().console.print(f"Exported {count} entries to {export}", soft_wrap=True)


def main() -> None:
    """Entry point compatible with console scripts."""
    try:
        app()
    except typer.Exit:
        raise
    except KeyboardInterrupt as exc:
        if debug_enabled():
            raise
        emit_error("Operation cancelled by user.", exception=exc)
        raise typer.Exit(code=1) from exc
    except SystemExit:
        raise
    except Exception as exc:  # pragma: no cover - last-resort reporting
        state = get_cli_state()
        if state.show_tracebacks:
            from rich.traceback import Traceback

            tb = Traceback.from_exception(
                type(exc),
                exc,
                exc.__traceback__,
                show_locals=state.verbosity >= 2,
            )
            state.err_console.print(tb)
        else:
            messages = exception_messages(exc)
            emit_error(messages[-1] if messages else repr(exc), exception=exc)
        raise typer.Exit(code=1) from exc


__all__ = ["app", "main"]
