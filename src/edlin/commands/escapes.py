"""Backslash escape decoding for string arguments."""

from __future__ import annotations

from edlin.errors import EscapeDecodeError

ESCAPE = "\\"

_SIMPLE = {
    "\\": "\\",
    "a": "\a",
    "b": "\b",
    "e": "\x1b",
    "f": "\f",
    "n": "\n",
    "r": "\r",
    "t": "\t",
    "v": "\v",
}

_HEX_DIGITS = frozenset("0123456789abcdefABCDEF")


def decode_escapes(text: str) -> str:
    """Return ``text`` with every backslash escape interpreted.

    ``\\xHH`` takes one or two hex digits, a backslash before a newline
    joins the two lines, and any other escaped character stands for itself.
    A trailing lone backslash or a ``\\x`` with no hex digit raises
    :class:`EscapeDecodeError`.
    """

    if ESCAPE not in text:
        return text

    out: list[str] = []
    i = 0
    length = len(text)
    while i < length:
        ch = text[i]
        if ch != ESCAPE:
            out.append(ch)
            i += 1
            continue

        i += 1
        if i >= length:
            raise EscapeDecodeError(
                "trailing escape character", text=text, offset=i - 1
            )
        code = text[i]
        i += 1
        if code == "\n":
            continue
        if code in _SIMPLE:
            out.append(_SIMPLE[code])
        elif code == "x":
            digits = ""
            while i < length and len(digits) < 2 and text[i] in _HEX_DIGITS:
                digits += text[i]
                i += 1
            if not digits:
                raise EscapeDecodeError(
                    "\\x needs a hex digit", text=text, offset=i - 2
                )
            out.append(chr(int(digits, 16)))
        else:
            out.append(code)
    return "".join(out)


def find_unescaped(text: str, target: str, start: int = 0) -> int:
    """Index of the first ``target`` not preceded by an escape, or ``-1``."""

    i = start
    while i < len(text):
        ch = text[i]
        if ch == ESCAPE:
            i += 2
            continue
        if ch == target:
            return i
        i += 1
    return -1


def split_unescaped(text: str, separator: str) -> list[str]:
    """Split on every unescaped ``separator``; escapes are left in place."""

    parts: list[str] = []
    start = 0
    while True:
        index = find_unescaped(text, separator, start)
        if index < 0:
            parts.append(text[start:])
            return parts
        parts.append(text[start:index])
        start = index + 1


def ends_with_escape(text: str) -> bool:
    """True when ``text`` ends in a backslash that escapes nothing."""

    trailing = len(text) - len(text.rstrip(ESCAPE))
    return trailing % 2 == 1


__all__ = [
    "ESCAPE",
    "decode_escapes",
    "ends_with_escape",
    "find_unescaped",
    "split_unescaped",
]
