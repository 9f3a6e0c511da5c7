"""Per-invocation CLI state: verbosity, traceback policy and Rich consoles."""

from __future__ import annotations

from contextvars import ContextVar
from dataclasses import dataclass, field
import logging
import sys
from typing import TYPE_CHECKING, TextIO

import click
import typer

from bibsync.core.exceptions import exception_messages


if TYPE_CHECKING:
    from rich.console import Console

__all__ = [
    "CLIState",
    "configure_logging",
    "debug_enabled",
    "emit_error",
    "emit_warning",
    "get_cli_state",
    "render_message",
    "set_cli_state",
]


def _bound_console(console: Console | None, stream: TextIO, **options: object) -> Console:
    # CliRunner swaps sys.stdout/sys.stderr per invocation.
    from rich.console import Console

    if console is not None and console.file is stream:
        return console
    return Console(file=stream, **options)


@dataclass(slots=True)
class CLIState:
    """Options set by the root callback and read by every command."""

    verbosity: int = 0
    show_tracebacks: bool = False
    _console: Console | None = field(default=None, init=False, repr=False)
    _err_console: Console | None = field(default=None, init=False, repr=False)

    @property
    def console(self) -> Console:
        self._console = _bound_console(self._console, sys.stdout)
        return self._console

    @property
    def err_console(self) -> Console:
        self._err_console = _bound_console(self._err_console, sys.stderr, highlight=False)
        return self._err_console


_STATE_VAR: ContextVar[CLIState | None] = ContextVar("bibsync_cli_state", default=None)


def get_cli_state(
    ctx: typer.Context | click.Context | None = None,
    *,
    create: bool = True,
) -> CLIState:
    """Return the state stored on the root Click context of the running command.

    Outside of a command (library use, tests calling helpers directly) the last
    state seen in this context variable is reused.
    """
    ctx = ctx or click.get_current_context(silent=True)
    if ctx is not None:
        root = ctx.find_root()
        if not isinstance(root.obj, CLIState):
            if not create:
                raise RuntimeError("CLI state is not initialised for this context.")
            root.obj = CLIState()
        _STATE_VAR.set(root.obj)
        return root.obj

    state = _STATE_VAR.get()
    if state is None:
        if not create:
            raise RuntimeError("CLI state is not initialised for this context.")
        state = CLIState()
        _STATE_VAR.set(state)
    return state


def set_cli_state(
    *,
    ctx: typer.Context | None = None,
    verbosity: int | None = None,
    debug: bool | None = None,
) -> CLIState:
    state = get_cli_state(ctx)
    if verbosity is not None:
        state.verbosity = max(0, verbosity)
    if debug is not None:
        state.show_tracebacks = debug
    return state


def configure_logging(state: CLIState) -> None:
    """Route the ``bibsync`` loggers to stderr through Rich from ``-vv`` on."""
    if state.verbosity < 2:
        return
    from rich.logging import RichHandler

    package_logger = logging.getLogger("bibsync")
    package_logger.handlers = [RichHandler(console=state.err_console, show_path=False)]
    package_logger.setLevel(logging.DEBUG if state.verbosity >= 3 else logging.INFO)


def render_message(
    level: str,
    message: str,
    *,
    exception: BaseException | None = None,
) -> None:
    """Print ``message``; info needs ``-v``, warnings and errors go to stderr."""
    state = get_cli_state()

    if level == "info":
        if state.verbosity >= 1:
            state.console.log(message)
        return

    from rich.text import Text

    style = "red" if level == "error" else "yellow"
    text = Text.assemble((f"{level}: ", f"bold {style}"), (message, style))
    if exception is not None and state.verbosity >= 1:
        details = [line for line in exception_messages(exception) if line not in message]
        details.append(f"type: {type(exception).__name__}")
        text.append("\n" + "\n".join(details), style=style)

    state.err_console.print(text)


def emit_warning(message: str, *, exception: BaseException | None = None) -> None:
    render_message("warning", message, exception=exception)


def emit_error(message: str, *, exception: BaseException | None = None) -> None:
    render_message("error", message, exception=exception)


def debug_enabled() -> bool:
    """Return whether ``--debug`` asked for full tracebacks."""
    try:
        return get_cli_state(create=False).show_tracebacks
    except RuntimeError:
        return False
