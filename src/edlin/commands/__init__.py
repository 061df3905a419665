"""Command language: addresses, escapes, tokenizing, ranges and dispatch."""

from .address import AddressKind, AddressToken, parse_address
from .escapes import decode_escapes, split_unescaped
from .executor import COMMANDS, CommandExecutor, CommandResult, CommandDef
from .ranges import LineRange, RangeDefault, resolve_destination, resolve_range
from .tokenizer import ParsedCommand, split_commands, tokenize

__all__ = [
    "AddressKind",
    "AddressToken",
    "parse_address",
    "decode_escapes",
    "split_unescaped",
    "COMMANDS",
    "CommandExecutor",
    "CommandResult",
    "CommandDef",
    "LineRange",
    "RangeDefault",
    "resolve_destination",
    "resolve_range",
    "ParsedCommand",
    "split_commands",
    "tokenize",
]
