"""CLI command implementations exposed via `bibsync.ui.cli`."""

from __future__ import annotations

from .sync import sync


__all__ = ["sync"]
