"""Tests for jsxprops.analyzers.values."""

from __future__ import annotations

import pytest

from jsxprops.analyzers.values import ELLIPSIS, parse_number, truncate


def test_truncate_collapses_whitespace() -> None:
    assert truncate("  a \n   b\t c ") == "a b c"


def test_truncate_appends_ellipsis_past_limit() -> None:
    result = truncate("abcdefghijklmnop", 8)
    assert result == "abcdefg" + ELLIPSIS
    assert len(result) == 8


def test_truncate_keeps_short_text() -> None:
    assert truncate("short", 8) == "short"


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("3", 3),
        ("1.5", 1.5),
        ("0x1f", 31),
        ("1_000", 1000),
        ("10n", 10),
        ("1e3", 1000),
        ("1.0", 1),
        ("08", 8),
    ],
)
def test_parse_number_handles_js_literals(text: str, expected: float) -> None:
    number = parse_number(text)
    assert number == expected
    assert type(number) is type(expected)


def test_parse_number_rejects_garbage() -> None:
    assert parse_number("abc") is None
