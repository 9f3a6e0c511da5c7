import pytest

from bibsync.core.bibliography import BibliographyEntry
from bibsync.core.publications.venue import build_venue, format_patent_status


def _entry(entry_type: str, **fields: str) -> BibliographyEntry:
    return BibliographyEntry(entry_type, "key", dict(fields))


def test_article_venue() -> None:
    entry = _entry("article", journal="J", volume="3", number="2", pages="1--5")

    assert build_venue(entry) == "J, 3(2), 1--5"


def test_article_venue_prefers_journaltitle_and_skips_blanks() -> None:
    assert build_venue(_entry("article", journal="J", journaltitle="Long J")) == "Long J"
    assert build_venue(_entry("article", journal="J")) == "J"
    assert build_venue(_entry("article", number="4")) == "(4)"


def test_proceedings_venue() -> None:
    entry = _entry(
        "inproceedings",
        booktitle="Conf",
        location="Paris",
        date="2021-06-01",
        year="2021",
        pages="10--12",
    )

    assert build_venue(entry) == "Conf, Paris, 2021-06-01, pp. 10--12"


def test_proceedings_venue_falls_back_to_event_and_year() -> None:
    entry = _entry("inproceedings", eventtitle="Event", year="2021")

    assert build_venue(entry) == "Event, 2021"


def test_patent_venue() -> None:
    entry = _entry(
        "patent",
        status="published-application",
        number="US123",
        location="US",
        date="2020-01-01",
    )

    assert build_venue(entry) == "Status: Published application, US123, US, 2020-01-01"


@pytest.mark.parametrize(
    ("status", "expected"),
    [
        ("Granted", "Granted"),
        ("published application", "Published application"),
        ("under-review_now", "Under Review Now"),
        ("", ""),
        (None, ""),
    ],
)
def test_format_patent_status(status: str | None, expected: str) -> None:
    assert format_patent_status(status) == expected


def test_thesis_venue_checks_both_supervisor_fields() -> None:
    with_advisor = _entry("phdthesis", school="Uni", advisor="Prof A", supervisor="Prof B")
    with_supervisor = _entry("mastersthesis", school="Uni", supervisor="Prof B", date="2018-09")

    assert build_venue(with_advisor) == "Uni, Supervisor: Prof A"
    assert build_venue(with_supervisor) == "Uni, Supervisor: Prof B, 2018-09"


def test_talk_venue() -> None:
    assert build_venue(_entry("unpublished", note="Seminar", year="2021")) == "Seminar"
    assert build_venue(_entry("unpublished", year="2021")) == "2021"
    assert build_venue(_entry("unpublished")) == ""


def test_default_venue() -> None:
    assert build_venue(_entry("misc", note="Blog", year="2020")) == "Blog, 2020"
    assert build_venue(_entry("book", booktitle="Series", note="N")) == "Series"
    assert build_venue(_entry("misc", year="2020")) == "2020"
