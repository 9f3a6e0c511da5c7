from pathlib import Path

from bibsync.core.bibliography import (
    BibliographyEntry,
    normalize_entries,
    parse_entries,
    serialize_entries,
)


FIXTURE = Path(__file__).resolve().parent / "fixtures" / "publications.bib"


def _load(text: str) -> list[BibliographyEntry]:
    return normalize_entries(parse_entries(text))


def test_serialize_entries_sorts_fields_by_name() -> None:
    entry = BibliographyEntry("article", "k1", {"year": "2020", "title": "T", "author": "A"})

    assert serialize_entries([entry]) == (
        "@article{k1,\n  author = {A},\n  title = {T},\n  year = {2020},\n}\n"
    )


def test_serialize_entries_separates_entries_with_blank_line() -> None:
    first = BibliographyEntry("misc", "a", {"title": "A"})
    second = BibliographyEntry("misc", "b", {"title": "B"})

    text = serialize_entries([first, second])

    assert text == "@misc{a,\n  title = {A},\n}\n\n@misc{b,\n  title = {B},\n}\n"


def test_canonical_form_is_a_fixed_point() -> None:
    entries = _load(FIXTURE.read_text(encoding="utf-8"))
    canonical = serialize_entries(entries)

    assert _load(canonical) == entries
    assert serialize_entries(_load(canonical)) == canonical


def test_round_trip_preserves_special_characters() -> None:
    entries = [
        BibliographyEntry(
            "misc",
            "odd",
            {
                "title": 'Quotes " and @ signs, commas & 100% = fine',
                "note": r"caf\'e \alpha",
                "url": "https://example.com/a_b?c=d#e",
            },
        ),
        BibliographyEntry("", "typeless", {"year": "2001"}),
    ]

    assert _load(serialize_entries(entries)) == entries


def test_round_trip_of_empty_set() -> None:
    assert _load(serialize_entries([])) == []


def test_doubled_backslash_escapes_reach_a_fixed_point() -> None:
    entries = _load(r"@misc{k, title = {R\\&D at 50\\% \\_x \\,y}}")

    assert entries[0].fields["title"] == "R&D at 50% _x ,y"
    assert _load(serialize_entries(entries)) == entries
