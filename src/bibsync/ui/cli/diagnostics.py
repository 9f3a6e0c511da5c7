"""Diagnostic emitter used by the CLI commands."""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from typing import Any

from bibsync.core.diagnostics import format_event_message

from .state import emit_error, emit_warning, render_message


WRITE_EVENTS = frozenset({"canonical_written", "document_updated"})


class CliEmitter:
    """Print pipeline diagnostics and keep track of the files a run touched."""

    def __init__(self) -> None:
        self.warnings = 0
        self.written: list[Path] = []
        self.unchanged: list[Path] = []

    def warning(self, message: str, exc: BaseException | None = None) -> None:
        self.warnings += 1
        emit_warning(message, exception=exc)

    def error(self, message: str, exc: BaseException | None = None) -> None:
        emit_error(message, exception=exc)

    def event(self, name: str, payload: Mapping[str, Any]) -> None:
        if name in WRITE_EVENTS and payload.get("path"):
            target = Path(payload["path"])
            (self.written if payload.get("changed") else self.unchanged).append(target)
        message = format_event_message(name, payload)
        if message:
            render_message("info", message)

    def outcome(self) -> str | None:
        """Summarise written files and warnings, or return ``None`` when there is neither."""
        parts: list[str] = []
        if self.written:
            parts.append("Wrote " + ", ".join(path.name for path in self.written))
        elif self.unchanged:
            parts.append("Nothing to write: " + ", ".join(path.name for path in self.unchanged))
        if self.warnings:
            parts.append(f"{self.warnings} warning" + ("s" if self.warnings > 1 else ""))
        return "; ".join(parts) or None


__all__ = ["CliEmitter", "WRITE_EVENTS"]
