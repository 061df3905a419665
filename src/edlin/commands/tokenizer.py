"""Split a command line into addresses, an opcode and string arguments."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Tuple

from edlin.errors import CommandSyntaxError

from .address import AddressToken, parse_address
from .escapes import decode_escapes, find_unescaped, split_unescaped

MAX_ADDRESSES = 4
COMMAND_SEPARATOR = ";"
ARGUMENT_SEPARATOR = ","


@dataclass(slots=True)
class ParsedCommand:
    """One sub-command, with addresses already resolved to line numbers.

    ``addresses`` are 1-based line numbers computed from the cursor and line
    count at parse time. ``arg1``/``arg2`` are the escape-decoded halves of
    ``tail`` split on the first unescaped comma.
    """

    addresses: Tuple[int, ...] = ()
    opcode: Optional[str] = None
    tail: str = ""
    arg1: Optional[str] = None
    arg2: Optional[str] = None

    @property
    def argc(self) -> int:
        return len(self.addresses)

    @property
    def text(self) -> str:
        """The whole argument tail decoded, separators included."""

        return decode_escapes(self.tail)


def split_commands(line: str) -> List[str]:
    """Split a raw input line on unescaped ``;`` into sub-commands."""

    return split_unescaped(line, COMMAND_SEPARATOR)


def _parse_addresses(text: str) -> Tuple[List[AddressToken], int]:
    tokens: List[AddressToken] = []
    pos = 0
    while True:
        parsed = parse_address(text, pos)
        if parsed is None:
            if tokens:
                raise CommandSyntaxError("',' must be followed by an address")
            return tokens, pos
        token, consumed = parsed
        tokens.append(token)
        pos += consumed
        if pos >= len(text) or text[pos] != ARGUMENT_SEPARATOR:
            return tokens, pos
        if len(tokens) == MAX_ADDRESSES:
            raise CommandSyntaxError(f"at most {MAX_ADDRESSES} addresses allowed")
        pos += 1


def tokenize(command: str, *, cursor: int, count: int) -> ParsedCommand:
    """Parse one sub-command against the current cursor and line count."""

    text = command.rstrip("\r\n").lstrip(" \t")
    tokens, pos = _parse_addresses(text)
    addresses = tuple(token.resolve(cursor=cursor, count=count) for token in tokens)

    if pos >= len(text):
        return ParsedCommand(addresses=addresses)

    opcode = text[pos]
    tail = text[pos + 1 :]
    arg1: Optional[str] = None
    arg2: Optional[str] = None
    if tail:
        split = find_unescaped(tail, ARGUMENT_SEPARATOR)
        if split < 0:
            arg1 = decode_escapes(tail)
        else:
            arg1 = decode_escapes(tail[:split])
            arg2 = decode_escapes(tail[split + 1 :])

    return ParsedCommand(
        addresses=addresses,
        opcode=opcode,
        tail=tail,
        arg1=arg1,
        arg2=arg2,
    )


__all__ = [
    "COMMAND_SEPARATOR",
    "MAX_ADDRESSES",
    "ParsedCommand",
    "split_commands",
    "tokenize",
]
