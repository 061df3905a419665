"""Range checks shared by every buffer mutator."""

from __future__ import annotations

from edlin.errors import AddressRangeError


def ensure_range(low: int, high: int, count: int) -> tuple[int, int]:
    if low < 0 or low > high or high > count:
        raise AddressRangeError(low, high, count)
    return low, high
