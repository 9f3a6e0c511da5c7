"""Permissive reader for ``@type{key, name = value, ...}`` records.

The reader never raises on malformed input. Damaged records are abandoned and
scanning resumes at the next ``@``; unterminated values run to the end of the
text.
"""

from __future__ import annotations

from typing import NamedTuple

from .entries import RawEntry


class ValueToken(NamedTuple):
    """A field value and the index right after it."""

    value: str
    next_index: int


def _is_name_char(char: str) -> bool:
    return char.isascii() and (char.isalnum() or char in "_-")


def _skip_whitespace(text: str, index: int) -> int:
    length = len(text)
    while index < length and text[index].isspace():
        index += 1
    return index


def read_value(text: str, start: int) -> ValueToken:
    """Read one field value starting at ``start`` (just past ``=`` and spaces)."""
    length = len(text)
    index = start

    if index < length and text[index] == "{":
        depth = 0
        while index < length:
            char = text[index]
            if char == "{":
                depth += 1
            elif char == "}":
                depth -= 1
                if depth == 0:
                    index += 1
                    break
            index += 1
        return ValueToken(text[start:index], index)

    if index < length and text[index] == '"':
        index += 1
        value_start = index
        while index < length:
            if text[index] == '"' and text[index - 1] != "\\":
                break
            index += 1
        value = text[value_start:index]
        if index < length:
            index += 1
        return ValueToken(value, index)

    while index < length and text[index] not in ",}":
        index += 1
    return ValueToken(text[start:index], index)


def parse_entries(text: str) -> list[RawEntry]:
    """Extract every well-formed record from ``text`` in order of appearance."""
    entries: list[RawEntry] = []
    length = len(text)
    index = 0

    while index < length:
        at = text.find("@", index)
        if at == -1:
            break

        index = _skip_whitespace(text, at + 1)
        type_start = index
        while index < length and text[index].isascii() and text[index].isalpha():
            index += 1
        entry_type = text[type_start:index].lower()

        index = _skip_whitespace(text, index)
        if index >= length or text[index] != "{":
            continue
        index = _skip_whitespace(text, index + 1)

        key_start = index
        while index < length and text[index] not in ",}":
            index += 1
        if index >= length or text[index] != ",":
            continue
        key = text[key_start:index].strip()
        index += 1

        fields: dict[str, str] = {}
        while index < length:
            while index < length and (text[index].isspace() or text[index] == ","):
                index += 1
            if index < length and text[index] == "}":
                index += 1
                break

            name_start = index
            while index < length and _is_name_char(text[index]):
                index += 1
            name = text[name_start:index].lower()

            index = _skip_whitespace(text, index)
            if index >= length or text[index] != "=":
                break
            index = _skip_whitespace(text, index + 1)

            token = read_value(text, index)
            index = token.next_index
            if name:
                fields[name] = token.value.strip()

        entries.append(RawEntry(type=entry_type, key=key, fields=fields))

    return entries


__all__ = ["ValueToken", "parse_entries", "read_value"]
