"""Build the rendering payload and turn it into HTML through a Jinja2 partial."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, Template, select_autoescape
from markupsafe import Markup, escape

from bibsync.core.bibliography.entries import BibliographyEntry

from .authors import AuthorHighlight, format_authors
from .links import Link, LinkResolver, doi_href
from .ordering import group_entries
from .venue import build_venue


TEMPLATE_DIR = Path(__file__).resolve().parent / "partials"
PUBLICATIONS_TEMPLATE = "publications.html"


def escape_html(value: object) -> str:
    """Escape ``&``, ``<``, ``>`` and quotes for embedding in HTML."""
    return str(escape(value))


@dataclass(slots=True)
class RenderedEntry:
    """Display-ready view of a single bibliography entry."""

    key: str
    title: str
    title_href: str | None
    authors: Markup
    venue: str
    links: list[Link] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "key": self.key,
            "title": self.title,
            "title_href": self.title_href,
            "authors": str(self.authors),
            "venue": self.venue,
            "links": [{"label": link.label, "href": link.href} for link in self.links],
        }


@dataclass(slots=True)
class CategoryGroup:
    name: str
    entries: list[RenderedEntry] = field(default_factory=list)


@dataclass(slots=True)
class YearGroup:
    year: str
    categories: list[CategoryGroup] = field(default_factory=list)


@dataclass(slots=True)
class PublicationPayload:
    """Years, then categories, then formatted entries, in display order."""

    years: list[YearGroup] = field(default_factory=list)

    def __len__(self) -> int:
        return sum(len(group.entries) for year in self.years for group in year.categories)

    def to_dict(self) -> dict[str, Any]:
        return {
            "years": [
                {
                    "year": year.year,
                    "categories": [
                        {
                            "name": group.name,
                            "entries": [entry.to_dict() for entry in group.entries],
                        }
                        for group in year.categories
                    ],
                }
                for year in self.years
            ]
        }


def title_link(entry: BibliographyEntry) -> str | None:
    """Return the URL the entry title points to, preferring ``url`` over ``doi``."""
    url = entry.fields.get("url")
    if url:
        return url
    doi = entry.fields.get("doi")
    return doi_href(doi) if doi else None


def render_entry(
    entry: BibliographyEntry,
    resolver: LinkResolver,
    *,
    highlight: AuthorHighlight | None = None,
) -> RenderedEntry:
    return RenderedEntry(
        key=entry.key,
        title=entry.fields.get("title") or entry.key,
        title_href=title_link(entry),
        authors=format_authors(entry.fields.get("author"), highlight),
        venue=build_venue(entry),
        links=resolver.resolve(entry),
    )


def build_payload(
    entries: Iterable[BibliographyEntry],
    resolver: LinkResolver | None = None,
    *,
    highlight: AuthorHighlight | None = None,
) -> PublicationPayload:
    """Group, order and format ``entries`` for display."""
    resolver = resolver or LinkResolver()
    payload = PublicationPayload()
    for bucket in group_entries(entries):
        year_group = YearGroup(year=bucket.year)
        for category in bucket.categories:
            year_group.categories.append(
                CategoryGroup(
                    name=category.name,
                    entries=[
                        render_entry(entry, resolver, highlight=highlight)
                        for entry in category.entries
                    ],
                )
            )
        payload.years.append(year_group)
    return payload


class PublicationRenderer:
    """Render publication payloads with the HTML partials."""

    def __init__(self, template_dir: Path = TEMPLATE_DIR) -> None:
        self.env = Environment(
            loader=FileSystemLoader(template_dir),
            autoescape=select_autoescape(["html"]),
            trim_blocks=True,
            lstrip_blocks=True,
        )
        self._template: Template | None = None

    @property
    def template(self) -> Template:
        if self._template is None:
            self._template = self.env.get_template(PUBLICATIONS_TEMPLATE)
        return self._template

    def render(self, payload: PublicationPayload) -> str:
        return self.template.render(years=payload.years).rstrip("\n")


def render_html(payload: PublicationPayload) -> str:
    """Render ``payload`` with the bundled publications partial."""
    return PublicationRenderer().render(payload)


__all__ = [
    "TEMPLATE_DIR",
    "CategoryGroup",
    "PublicationPayload",
    "PublicationRenderer",
    "RenderedEntry",
    "YearGroup",
    "build_payload",
    "escape_html",
    "render_entry",
    "render_html",
    "title_link",
]
