"""Bibliography-related CLI helpers."""

from __future__ import annotations

from collections import Counter
from pathlib import Path
from typing import TYPE_CHECKING

from bibsync.core.bibliography import BibliographyCollection, BibliographyEntry
from bibsync.core.publications import (
    CATEGORY_ORDER,
    classify,
    entry_year,
    format_authors,
)
from bibsync.core.publications.venue import build_venue

from .state import get_cli_state


if TYPE_CHECKING:
    from rich.panel import Panel


def plain_authors(field: str | None) -> str:
    """Return the display form of an author field without HTML escaping."""
    return format_authors(field).unescape()


def build_entry_panel(entry: BibliographyEntry) -> Panel:
    """Create a Rich panel that visualises a single bibliography entry."""
    from rich import box
    from rich.panel import Panel
    from rich.table import Table

    fields = dict(entry.fields)
    grid = Table.grid(padding=(0, 1))
    grid.add_column(style="bold green", no_wrap=True)
    grid.add_column()

    def _add_field(label: str, value: str | None) -> None:
        if value:
            grid.add_row(label, value)

    _add_field("Title", fields.pop("title", None))
    _add_field("Year", entry_year(entry))
    _add_field("Category", classify(entry))
    _add_field("Authors", plain_authors(fields.pop("author", None)))
    _add_field("Venue", build_venue(entry))

    for key, value in sorted(fields.items()):
        _add_field(key.title(), value)

    return Panel(grid, title=f"{entry.key} ({entry.type})", box=box.SIMPLE)


def print_bibliography_overview(collection: BibliographyCollection) -> None:
    """Render a formatted summary of bibliography files, issues, and entries."""
    from rich import box
    from rich.table import Table
    from rich.text import Text

    console = get_cli_state().console
    entries = collection.ordered_entries()

    stats = collection.file_stats
    if stats:
        stats_table = Table(
            title="Bibliography Files",
            box=box.SQUARE,
            show_edge=True,
            header_style="bold cyan",
        )
        stats_table.add_column("File", overflow="fold")
        stats_table.add_column("Entries", justify="right")
        for file_path, entry_count in stats:
            stats_table.add_row(str(file_path), str(entry_count))
        stats_table.add_row(
            Text("Total", style="bold"), Text(str(sum(count for _, count in stats)))
        )
        console.print(stats_table)

    if collection.issues:
        issue_table = Table(
            title="Warnings",
            box=box.SQUARE,
            header_style="bold cyan",
            show_edge=True,
        )
        issue_table.add_column("Key", style="yellow", no_wrap=True)
        issue_table.add_column("Message", style="yellow")
        issue_table.add_column("Source", style="yellow")
        for issue in collection.issues:
            issue_table.add_row(
                issue.key or "-",
                issue.message,
                str(issue.source) if issue.source else "-",
            )
        console.print(issue_table)

    if not entries:
        console.print("[dim]No references found.[/]")
        return

    for entry in entries:
        console.print(build_entry_panel(entry))
        console.print()

    per_category = Counter(classify(entry) for entry in entries)
    summary_table = Table(
        title="Bibliography Summary",
        box=box.SQUARE,
        header_style="bold cyan",
        show_edge=True,
    )
    summary_table.add_column("Category", style="bold")
    summary_table.add_column("Count", justify="right")
    summary_table.add_row("Total entries", str(len(entries)))
    for category in CATEGORY_ORDER:
        if per_category[category]:
            summary_table.add_row(category, str(per_category[category]))
    console.print(summary_table)


def export_bibliography(collection: BibliographyCollection, target: Path) -> int:
    """Write the ordered entries to ``target`` with pybtex; return how many were written."""
    keys = [entry.key for entry in collection.ordered_entries()]
    data = collection.to_bibliography_data(keys=keys)
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(data.to_string("bibtex"), encoding="utf-8")
    return len(data.entries)


__all__ = [
    "build_entry_panel",
    "export_bibliography",
    "plain_authors",
    "print_bibliography_overview",
]
