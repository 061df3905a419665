from __future__ import annotations

import pytest

from edlin.commands.address import AddressKind, AddressToken, parse_address
from edlin.errors import CommandSyntaxError


def test_no_address_is_not_an_error() -> None:
    assert parse_address("p") is None
    assert parse_address("") is None


def test_literal_address() -> None:
    token, consumed = parse_address("12p")
    assert token == AddressToken(AddressKind.LITERAL, 12)
    assert consumed == 2
    assert token.resolve(cursor=0, count=3) == 12


def test_current_and_last_resolve_against_buffer_state() -> None:
    current, _ = parse_address(".")
    last, _ = parse_address("$")
    # Line numbers are 1-based: '.' names the cursor line, '$' the last line.
    assert current.resolve(cursor=4, count=9) == 5
    assert last.resolve(cursor=4, count=9) == 9


def test_relative_offsets() -> None:
    token, consumed = parse_address("10+3,")
    assert consumed == 4
    assert token.relative
    assert token.resolve(cursor=0, count=0) == 13

    token, _ = parse_address("$-2")
    assert token.resolve(cursor=0, count=7) == 5

    token, _ = parse_address(".+1")
    assert token.resolve(cursor=2, count=7) == 4


def test_bare_offset_is_relative_to_cursor() -> None:
    token, consumed = parse_address("-1d")
    assert consumed == 2
    assert token.kind is AddressKind.CURRENT
    assert token.resolve(cursor=5, count=10) == 5


def test_parse_from_offset() -> None:
    token, consumed = parse_address("1,22d", 2)
    assert token.value == 22
    assert consumed == 2


@pytest.mark.parametrize("text", ["3+", "3-x", "+", "$-"])
def test_sign_without_digits_is_invalid(text: str) -> None:
    with pytest.raises(CommandSyntaxError):
        parse_address(text)
