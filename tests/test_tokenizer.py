from __future__ import annotations

import pytest

from edlin.commands import split_commands, tokenize
from edlin.commands.ranges import (
    LineRange,
    RangeDefault,
    line_index,
    resolve_destination,
    resolve_range,
)
from edlin.errors import AddressRangeError, CommandSyntaxError


def test_addresses_opcode_and_arguments() -> None:
    command = tokenize("1,3rfoo,bar", cursor=0, count=5)

    assert command.addresses == (1, 3)
    assert command.opcode == "r"
    assert command.arg1 == "foo"
    assert command.arg2 == "bar"


def test_symbolic_addresses_resolve_at_parse_time() -> None:
    command = tokenize(".,$p", cursor=2, count=6)

    assert command.addresses == (3, 6)
    assert line_index(command.addresses[0]) == 2


def test_no_opcode_means_bare_address() -> None:
    command = tokenize("7", cursor=0, count=9)

    assert command.opcode is None
    assert command.addresses == (7,)


def test_arguments_split_on_first_unescaped_comma() -> None:
    command = tokenize(r"ra\,b,c,d", cursor=0, count=1)

    assert command.arg1 == "a,b"
    assert command.arg2 == "c,d"
    assert command.text == "a,b,c,d"


def test_arguments_are_escape_decoded() -> None:
    command = tokenize(r"r\t,\x41", cursor=0, count=1)

    assert command.arg1 == "\t"
    assert command.arg2 == "A"


def test_missing_tail_leaves_arguments_absent() -> None:
    command = tokenize("p", cursor=0, count=1)

    assert command.arg1 is None
    assert command.arg2 is None
    assert command.argc == 0


def test_four_addresses_for_copy() -> None:
    assert tokenize("1,2,3,4c", cursor=0, count=5).addresses == (1, 2, 3, 4)


@pytest.mark.parametrize("text", ["1,2,3,4,5c", "1,p", "2-p", "sfoo\\"])
def test_malformed_commands(text: str) -> None:
    with pytest.raises(CommandSyntaxError):
        tokenize(text, cursor=0, count=5)


def test_split_commands_honours_escaped_semicolons() -> None:
    assert split_commands(r"1p;sa\;b;q") == ["1p", r"sa\;b", "q"]


def test_range_defaults_without_addresses() -> None:
    assert resolve_range((), cursor=1, count=4) == LineRange(1, 2)
    assert resolve_range((), cursor=4, count=4) == LineRange(4, 4)
    assert resolve_range(
        (), cursor=1, count=4, default=RangeDefault.BUFFER
    ) == LineRange(0, 4)
    assert resolve_range(
        (), cursor=1, count=4, default=RangeDefault.TO_END
    ) == LineRange(1, 4)


def test_single_address_is_one_clamped_line() -> None:
    assert resolve_range((2,), cursor=0, count=4) == LineRange(1, 2)
    assert resolve_range((9,), cursor=0, count=4) == LineRange(4, 4)


def test_second_address_is_inclusive_and_clamped() -> None:
    assert resolve_range((2, 3), cursor=0, count=4) == LineRange(1, 3)
    assert len(resolve_range((1, 99), cursor=0, count=4)) == 4


@pytest.mark.parametrize("addresses", [(3, 1), (6, 7), (-1, 2)])
def test_inverted_or_out_of_bounds_ranges_are_rejected(addresses) -> None:
    with pytest.raises(AddressRangeError):
        resolve_range(addresses, cursor=0, count=4)


def test_destination_may_precede_source() -> None:
    assert resolve_destination((3, 1), cursor=0, count=3) == LineRange(2, 1)
    assert resolve_destination((2, 0), cursor=0, count=2) == LineRange(1, 0)
    assert resolve_destination((1, 9), cursor=0, count=3) == LineRange(0, 3)


def test_destination_falls_back_to_line_range() -> None:
    assert resolve_destination((), cursor=1, count=3) == LineRange(1, 2)
    assert resolve_destination((2,), cursor=0, count=3) == LineRange(1, 2)


def test_negative_destination_is_rejected() -> None:
    with pytest.raises(AddressRangeError):
        resolve_destination((2, -1), cursor=0, count=3)
