from pathlib import Path

import pytest

from bibsync.core.bibliography import BibliographyEntry
from bibsync.core.publications.links import (
    AssetDirectory,
    Link,
    LinkResolver,
    doi_href,
    looks_like_link,
    normalize_link_target,
    resolve_links,
)


def _entry(entry_type: str, key: str = "k1", **fields: str) -> BibliographyEntry:
    return BibliographyEntry(entry_type, key, dict(fields))


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("https://example.com/paper", True),
        ("HTTP://EXAMPLE.COM", True),
        ("mailto:me@example.com", True),
        ("/static/paper", True),
        ("./paper", True),
        ("../paper", True),
        ("paper.pdf", True),
        ("paper.PDF?download=1", True),
        ("paper.pdf#page=2", True),
        ("paper.pdfx", False),
        ("See the appendix", False),
        ("", False),
    ],
)
def test_looks_like_link(value: str, expected: bool) -> None:
    assert looks_like_link(value) is expected


def test_normalize_link_target_prefixes_bare_names_only() -> None:
    assert normalize_link_target("paper.pdf") == "pdfs/paper.pdf"
    assert normalize_link_target(" paper.pdf ", asset_prefix="assets/") == "assets/paper.pdf"
    assert normalize_link_target("https://x.org/a.pdf") == "https://x.org/a.pdf"
    assert normalize_link_target("/abs/a.pdf") == "/abs/a.pdf"


def test_article_final_draft_from_field() -> None:
    entry = _entry("article", paper_pdf="draft.pdf")

    assert resolve_links(entry) == [Link("Final Draft", "pdfs/draft.pdf")]


def test_article_skips_values_that_are_not_links() -> None:
    entry = _entry("article", final_draft="available on request", pdf="https://x.org/p")

    assert resolve_links(entry) == [Link("Final Draft", "https://x.org/p")]


def test_article_falls_back_to_asset_when_present() -> None:
    entry = _entry("article", key="doe2020")

    assert resolve_links(entry, lambda key: key == "doe2020") == [
        Link("Final Draft", "pdfs/doe2020.pdf")
    ]
    assert resolve_links(entry, lambda key: False) == []
    assert resolve_links(entry) == []


def test_fallback_is_not_used_when_fields_produce_a_link() -> None:
    entry = _entry("article", key="doe2020", pdf="https://x.org/p.pdf")

    links = resolve_links(entry, lambda key: True)

    assert links == [Link("Final Draft", "https://x.org/p.pdf")]


def test_proceedings_presentation_priority() -> None:
    entry = _entry(
        "inproceedings",
        presentation_url="https://x.org/talk",
        presentation_pdf="talk.pdf",
        poster="poster.pdf",
    )

    assert resolve_links(entry) == [
        Link("Presentation", "https://x.org/talk"),
        Link("Poster", "pdfs/poster.pdf"),
    ]


def test_proceedings_fallback_label_is_abstract() -> None:
    entry = _entry("inproceedings", key="smith2021")

    assert resolve_links(entry, lambda key: True) == [Link("Abstract", "pdfs/smith2021.pdf")]


def test_duplicate_targets_are_emitted_once() -> None:
    entry = _entry(
        "inproceedings",
        abstract_pdf="same.pdf",
        presentation_pdf="same.pdf",
        poster_pdf="poster.pdf",
    )

    assert resolve_links(entry) == [
        Link("Abstract", "pdfs/same.pdf"),
        Link("Poster", "pdfs/poster.pdf"),
    ]


def test_thesis_and_talk_rules() -> None:
    thesis = _entry("phdthesis", final_draft="thesis.pdf", slides_url="https://x.org/s")
    talk = _entry("unpublished", slides="talk.pdf")

    assert resolve_links(thesis) == [
        Link("Final Draft", "pdfs/thesis.pdf"),
        Link("Presentation", "https://x.org/s"),
    ]
    assert resolve_links(talk) == [Link("Slides", "pdfs/talk.pdf")]


def test_generic_entry_with_url_and_doi() -> None:
    entry = _entry("misc", key="blog", url="https://blog.example.com", doi="10.1/xyz")

    assert resolve_links(entry, lambda key: True) == [
        Link("Link", "https://blog.example.com"),
        Link("DOI", "https://doi.org/10.1/xyz"),
        Link("PDF", "pdfs/blog.pdf"),
    ]


def test_generic_entry_with_doi_url_is_not_duplicated() -> None:
    entry = _entry("book", url="https://doi.org/10.1/xyz", doi="10.1/xyz")

    assert resolve_links(entry) == [Link("DOI", "https://doi.org/10.1/xyz")]


def test_generic_entry_with_only_a_doi_gets_a_doi_link() -> None:
    entry = _entry("book", doi="doi:10.1/xyz")

    assert resolve_links(entry) == [Link("DOI", "https://doi.org/10.1/xyz")]


def test_generic_entry_without_fields_has_no_links() -> None:
    assert resolve_links(_entry("misc")) == []


def test_resolver_uses_custom_prefix_and_extension() -> None:
    resolver = LinkResolver(lambda key: True, asset_prefix="files/", asset_extension=".ps")

    assert resolver.default_asset_href("k") == "files/k.ps"
    assert resolver.resolve(_entry("article", key="k")) == [Link("Final Draft", "files/k.ps")]
    assert resolver.resolve(_entry("article", pdf="draft.ps")) == [
        Link("Final Draft", "files/draft.ps")
    ]


def test_asset_directory_checks_files(tmp_path: Path) -> None:
    (tmp_path / "doe2020.pdf").write_bytes(b"%PDF-1.4")
    (tmp_path / "folder.pdf").mkdir()
    oracle = AssetDirectory(tmp_path)

    assert oracle.path_for("doe2020") == tmp_path / "doe2020.pdf"
    assert oracle("doe2020") is True
    assert oracle("folder") is False
    assert oracle.exists("missing") is False


@pytest.mark.parametrize(
    "value",
    [
        "10.1000/xyz",
        " doi:10.1000/xyz ",
        "https://doi.org/10.1000/xyz",
        "http://dx.doi.org/10.1000/xyz",
        "DOI:10.1000/xyz/",
    ],
)
def test_doi_href(value: str) -> None:
    assert doi_href(value) == "https://doi.org/10.1000/xyz"
