"""Address expressions: ``.``, ``$``, literal line numbers and offsets."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

from edlin.errors import CommandSyntaxError


class AddressKind(str, Enum):
    LITERAL = "literal"
    CURRENT = "current"
    LAST = "last"


_SYMBOLS = {".": AddressKind.CURRENT, "$": AddressKind.LAST}


@dataclass(frozen=True, slots=True)
class AddressToken:
    """One parsed address, resolved lazily against the buffer state.

    ``offset`` is the signed ``+n``/``-n`` suffix; ``relative`` records
    whether a suffix was written at all.
    """

    kind: AddressKind
    value: int = 0
    offset: int = 0
    relative: bool = False

    def base(self, *, cursor: int, count: int) -> int:
        if self.kind is AddressKind.CURRENT:
            return cursor + 1
        if self.kind is AddressKind.LAST:
            return count
        return self.value

    def resolve(self, *, cursor: int, count: int) -> int:
        """Return the 1-based line number this address names."""

        return self.base(cursor=cursor, count=count) + self.offset


def _scan_digits(text: str, start: int) -> int:
    end = start
    while end < len(text) and text[end].isdigit():
        end += 1
    return end


def parse_address(text: str, start: int = 0) -> Optional[Tuple[AddressToken, int]]:
    """Recognise one address at ``text[start:]``.

    Returns ``(token, consumed)`` or ``None`` when no address starts there.
    A sign with no digits after it raises :class:`CommandSyntaxError`.
    """

    pos = start
    kind: Optional[AddressKind] = None
    value = 0

    if pos < len(text) and text[pos] in _SYMBOLS:
        kind = _SYMBOLS[text[pos]]
        pos += 1
    else:
        end = _scan_digits(text, pos)
        if end > pos:
            kind = AddressKind.LITERAL
            value = int(text[pos:end])
            pos = end

    if pos < len(text) and text[pos] in "+-":
        sign = -1 if text[pos] == "-" else 1
        end = _scan_digits(text, pos + 1)
        if end == pos + 1:
            raise CommandSyntaxError(f"'{text[pos]}' must be followed by digits")
        token = AddressToken(
            kind=kind or AddressKind.CURRENT,
            value=value,
            offset=sign * int(text[pos + 1 : end]),
            relative=True,
        )
        return token, end - start

    if kind is None:
        return None
    return AddressToken(kind=kind, value=value), pos - start


__all__ = ["AddressKind", "AddressToken", "parse_address"]
