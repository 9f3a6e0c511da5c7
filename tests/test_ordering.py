import pytest

from bibsync.core.bibliography import BibliographyEntry
from bibsync.core.publications.ordering import (
    CATEGORY_ORDER,
    classify,
    entry_year,
    group_entries,
    order_entries,
    year_number,
)


def _entry(key: str, entry_type: str = "article", **fields: str) -> BibliographyEntry:
    return BibliographyEntry(entry_type, key, dict(fields))


def test_entry_year_prefers_year_then_date() -> None:
    assert entry_year(_entry("a", year="2020", date="2019-01-01")) == "2020"
    assert entry_year(_entry("b", date="2019-05-01")) == "2019"
    assert entry_year(_entry("c")) == "Unknown"


@pytest.mark.parametrize(
    ("label", "expected"),
    [
        ("2020", 2020),
        (" 1999 ", 1999),
        ("2020.5", 2020.5),
        ("Unknown", 0),
        ("", 0),
        ("nan", 0),
        ("inf", 0),
        ("20xx", 0),
        ("2_020", 0),
        ("1e3", 0),
        ("-5", 0),
    ],
)
def test_year_number(label: str, expected: float) -> None:
    assert year_number(label) == expected


def test_order_entries_by_year_desc_then_title() -> None:
    entries = [
        _entry("old", year="2019", title="B"),
        _entry("newz", year="2021", title="Z"),
        _entry("unknown", title="C"),
        _entry("newa", year="2021", title="A"),
        _entry("untitled", year="2019"),
    ]

    ordered = order_entries(entries)

    assert [entry.key for entry in ordered] == ["newa", "newz", "untitled", "old", "unknown"]


def test_order_entries_is_stable_for_equal_year_and_title() -> None:
    entries = [_entry(f"k{index}", year="2020", title="Same") for index in range(5)]

    assert [entry.key for entry in order_entries(entries)] == [f"k{index}" for index in range(5)]


def test_order_entries_ignores_case_and_accents() -> None:
    entries = [
        _entry("zeta", year="2020", title="zeta"),
        _entry("eclair", year="2020", title="Éclair"),
        _entry("eagle", year="2020", title="Eagle"),
    ]

    assert [entry.key for entry in order_entries(entries)] == ["eagle", "eclair", "zeta"]


def test_classify_uses_fixed_table_with_default() -> None:
    assert classify(_entry("a", "article")) == "Publications"
    assert classify(_entry("b", "mastersthesis")) == "Publications"
    assert classify(_entry("c", "inproceedings")) == "Proceedings"
    assert classify(_entry("d", "patent")) == "Patent Applications"
    assert classify(_entry("e", "unpublished")) == "Talks"
    assert classify(_entry("f", "misc")) == "Other"


def test_group_entries_orders_years_and_categories() -> None:
    entries = [
        _entry("other", "misc", year="2020", title="A"),
        _entry("talk", "unpublished", year="2020", title="B"),
        _entry("paper2", "article", year="2020", title="Z"),
        _entry("paper1", "article", year="2020", title="M"),
        _entry("nodate", "article", title="N"),
        _entry("older", "inproceedings", year="2018", title="O"),
    ]

    buckets = group_entries(entries)

    assert [bucket.year for bucket in buckets] == ["2020", "2018", "Unknown"]
    first = buckets[0]
    assert [category.name for category in first.categories] == ["Publications", "Talks", "Other"]
    assert [entry.key for entry in first.categories[0].entries] == ["paper1", "paper2"]


def test_group_entries_places_every_entry_exactly_once() -> None:
    entries = [
        _entry(f"k{index}", entry_type, year=year, title=f"T{index % 3}")
        for index, (entry_type, year) in enumerate(
            [
                ("article", "2020"),
                ("patent", "2019"),
                ("misc", "2020"),
                ("unpublished", "n/a"),
                ("inproceedings", "2019"),
                ("phdthesis", "2020"),
            ]
        )
    ]

    buckets = group_entries(entries)
    placed = [
        entry.key for bucket in buckets for category in bucket.categories for entry in category.entries
    ]

    assert sorted(placed) == sorted(entry.key for entry in entries)
    for bucket in buckets:
        assert bucket.categories
        for category in bucket.categories:
            assert category.entries
            assert category.name in CATEGORY_ORDER
