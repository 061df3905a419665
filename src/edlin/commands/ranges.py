"""Turn parsed line numbers into half-open 0-based index ranges."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Sequence

from edlin.buffer import ensure_range
from edlin.errors import AddressRangeError


class RangeDefault(str, Enum):
    """What a command addresses when no address is written."""

    LINE = "line"
    BUFFER = "buffer"
    TO_END = "to_end"


@dataclass(frozen=True, slots=True)
class LineRange:
    low: int
    high: int

    def __len__(self) -> int:
        return self.high - self.low


def line_index(number: int) -> int:
    """Convert a 1-based line number to a 0-based index (``0`` stays ``0``)."""

    if number < 0:
        raise AddressRangeError(number, number, 0)
    return max(number - 1, 0)


def resolve_range(
    addresses: Sequence[int],
    *,
    cursor: int,
    count: int,
    default: RangeDefault = RangeDefault.LINE,
) -> LineRange:
    """Resolve up to two leading addresses into ``[low, high)``.

    The second address is inclusive, so ``high`` is one past it, clamped to
    ``count``. Addresses beyond the second are positional arguments and are
    left to the command.
    """

    if not addresses:
        if default is RangeDefault.BUFFER:
            return LineRange(0, count)
        low = min(cursor, count)
        if default is RangeDefault.TO_END:
            return LineRange(low, count)
        return LineRange(low, min(low + 1, count))

    if len(addresses) == 1:
        low = min(line_index(addresses[0]), count)
        return LineRange(low, min(low + 1, count))

    low = line_index(addresses[0])
    high = min(line_index(addresses[1]) + 1, count)
    return LineRange(*ensure_range(low, high, count))


def resolve_destination(
    addresses: Sequence[int], *, cursor: int, count: int
) -> LineRange:
    """Resolve ``source,target`` for commands that relocate lines.

    The second address names where lines go rather than the end of a range,
    so ``low`` is the source index and ``high`` the target index, which may
    come before the source. A target of ``0`` is the top of the buffer and
    targets past the end clamp to ``count``. Bounds against the block length
    are left to the buffer.
    """

    if len(addresses) < 2:
        return resolve_range(addresses, cursor=cursor, count=count)
    target = addresses[1]
    if target < 0:
        raise AddressRangeError(target, target, count)
    return LineRange(line_index(addresses[0]), min(target, count))


__all__ = [
    "LineRange",
    "RangeDefault",
    "line_index",
    "resolve_destination",
    "resolve_range",
]
