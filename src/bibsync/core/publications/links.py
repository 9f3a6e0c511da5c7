"""Selection of asset links (drafts, slides, posters, DOIs) for each entry."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass
from pathlib import Path
import re
from types import MappingProxyType

from bibsync.core.bibliography.entries import BibliographyEntry


AssetOracle = Callable[[str], bool]

DOCUMENT_EXTENSIONS: tuple[str, ...] = ("pdf",)
DOI_RESOLVER = "https://doi.org/"

_ABSOLUTE_TARGET_RE = re.compile(r"^(https?://|mailto:|\.{0,2}/)", re.IGNORECASE)
_DOI_URL_RE = re.compile(r"doi\.org/", re.IGNORECASE)

FINAL_DRAFT_FIELDS = ("final_draft", "final_draft_url", "paper_pdf", "paper_url", "pdf")


@dataclass(frozen=True, slots=True)
class Link:
    """A labelled hyperlink rendered next to an entry."""

    label: str
    href: str


@dataclass(frozen=True, slots=True)
class LinkRule:
    """Candidate fields, in priority order, for one link label."""

    label: str
    fields: tuple[str, ...]


@dataclass(frozen=True, slots=True)
class LinkRuleSet:
    rules: tuple[LinkRule, ...]
    fallback_label: str


_THESIS_RULES = LinkRuleSet(
    rules=(
        LinkRule("Final Draft", FINAL_DRAFT_FIELDS),
        LinkRule(
            "Presentation",
            (
                "presentation_url",
                "presentation_link",
                "presentation_pdf",
                "slides_url",
                "slides_link",
                "slides_pdf",
            ),
        ),
    ),
    fallback_label="Final Draft",
)

LINK_RULES: Mapping[str, LinkRuleSet] = MappingProxyType(
    {
        "article": LinkRuleSet(
            rules=(LinkRule("Final Draft", FINAL_DRAFT_FIELDS),),
            fallback_label="Final Draft",
        ),
        "phdthesis": _THESIS_RULES,
        "mastersthesis": _THESIS_RULES,
        "inproceedings": LinkRuleSet(
            rules=(
                LinkRule("Abstract", ("abstract_url", "abstract_link", "abstract_pdf", "abstract")),
                LinkRule(
                    "Presentation",
                    (
                        "presentation_url",
                        "presentation_link",
                        "presentation_pdf",
                        "talk_url",
                        "talk_pdf",
                    ),
                ),
                LinkRule("Poster", ("poster_url", "poster_link", "poster_pdf", "poster")),
            ),
            fallback_label="Abstract",
        ),
        "unpublished": LinkRuleSet(
            rules=(LinkRule("Slides", ("slides_url", "slides_link", "slides_pdf", "slides")),),
            fallback_label="Slides",
        ),
    }
)


def looks_like_link(value: str, *, extensions: Iterable[str] = DOCUMENT_EXTENSIONS) -> bool:
    """Return whether ``value`` is a URL, a path, or a document file name."""
    candidate = value.strip()
    if _ABSOLUTE_TARGET_RE.match(candidate):
        return True
    for extension in extensions:
        pattern = rf"\.{re.escape(extension.lstrip('.'))}($|[?#])"
        if re.search(pattern, candidate, re.IGNORECASE):
            return True
    return False


def normalize_link_target(value: str, *, asset_prefix: str = "pdfs") -> str:
    """Keep URLs and paths as they are; place bare file names under ``asset_prefix``."""
    candidate = value.strip()
    if _ABSOLUTE_TARGET_RE.match(candidate):
        return candidate
    return f"{asset_prefix.rstrip('/')}/{candidate}"


class AssetDirectory:
    """Presence oracle checking for ``<directory>/<key>.<extension>`` on disk."""

    def __init__(self, directory: Path | str, extension: str = "pdf") -> None:
        self.directory = Path(directory)
        self.extension = extension.lstrip(".")

    def path_for(self, key: str) -> Path:
        return self.directory / f"{key}.{self.extension}"

    def exists(self, key: str) -> bool:
        return self.path_for(key).is_file()

    def __call__(self, key: str) -> bool:
        return self.exists(key)


def _never(_key: str) -> bool:
    return False


class LinkResolver:
    """Resolve at most one link per label for an entry, without duplicate targets."""

    def __init__(
        self,
        asset_exists: AssetOracle | None = None,
        *,
        asset_prefix: str = "pdfs",
        asset_extension: str = "pdf",
        rules: Mapping[str, LinkRuleSet] = LINK_RULES,
    ) -> None:
        self.asset_exists = asset_exists or _never
        self.asset_prefix = asset_prefix.rstrip("/")
        self.asset_extension = asset_extension.lstrip(".")
        self.rules = rules
        self._extensions = tuple(dict.fromkeys((*DOCUMENT_EXTENSIONS, self.asset_extension)))

    def default_asset_href(self, key: str) -> str:
        return f"{self.asset_prefix}/{key}.{self.asset_extension}"

    def resolve(self, entry: BibliographyEntry) -> list[Link]:
        links: list[Link] = []
        seen: set[str] = set()

        def add(label: str, href: str | None) -> None:
            if not href or href in seen:
                return
            seen.add(href)
            links.append(Link(label, href))

        rule_set = self.rules.get(entry.type)
        if rule_set is None:
            self._resolve_generic(entry, add)
            return links

        for rule in rule_set.rules:
            add(rule.label, self._first_candidate(entry, rule.fields))
        if not links and self.asset_exists(entry.key):
            add(rule_set.fallback_label, self.default_asset_href(entry.key))
        return links

    def _first_candidate(self, entry: BibliographyEntry, fields: Iterable[str]) -> str | None:
        for name in fields:
            raw = entry.fields.get(name)
            if not raw or not looks_like_link(raw, extensions=self._extensions):
                continue
            return normalize_link_target(raw, asset_prefix=self.asset_prefix)
        return None

    def _resolve_generic(
        self, entry: BibliographyEntry, add: Callable[[str, str | None], None]
    ) -> None:
        url = entry.fields.get("url")
        doi = entry.fields.get("doi")
        is_doi_url = bool(url and _DOI_URL_RE.search(url))
        if url:
            add("DOI" if is_doi_url else "Link", url)
        if doi and not is_doi_url:
            add("DOI", doi_href(doi))
        if self.asset_exists(entry.key):
            add("PDF", self.default_asset_href(entry.key))


def doi_href(doi: str) -> str:
    """Return the resolver URL for a DOI given bare, as ``doi:...`` or as a URL."""
    candidate = doi.strip()
    lowered = candidate.lower()
    for prefix in (
        "https://doi.org/",
        "http://doi.org/",
        "https://dx.doi.org/",
        "http://dx.doi.org/",
    ):
        if lowered.startswith(prefix):
            candidate = candidate[len(prefix) :]
            break
    if candidate.lower().startswith("doi:"):
        candidate = candidate.split(":", 1)[1]
    return f"{DOI_RESOLVER}{candidate.strip().strip('/')}"


def resolve_links(
    entry: BibliographyEntry,
    asset_exists: AssetOracle | None = None,
    *,
    asset_prefix: str = "pdfs",
    asset_extension: str = "pdf",
) -> list[Link]:
    """Shortcut resolving the links of one entry with a throwaway resolver."""
    resolver = LinkResolver(
        asset_exists, asset_prefix=asset_prefix, asset_extension=asset_extension
    )
    return resolver.resolve(entry)


__all__ = [
    "DOCUMENT_EXTENSIONS",
    "LINK_RULES",
    "AssetDirectory",
    "AssetOracle",
    "Link",
    "LinkResolver",
    "LinkRule",
    "LinkRuleSet",
    "doi_href",
    "looks_like_link",
    "normalize_link_target",
    "resolve_links",
]
