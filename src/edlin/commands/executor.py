"""Dispatch parsed commands to buffer mutators."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Optional

from edlin.context import EditorContext
from edlin.errors import (
    AddressRangeError,
    BufferLimitError,
    CommandSyntaxError,
    EdlinError,
    FatalEditorError,
    ResourceError,
)
from edlin.runtime import telemetry

from .ranges import LineRange, RangeDefault, resolve_destination, resolve_range
from .tokenizer import ParsedCommand, tokenize

QUESTION = "?"

HELP_TEXT = """\
EDLIN - a line editor

[#][,#]p        print lines, cursor moves past them
[#][,#]l        list lines, cursor stays
[#][,#]d        delete lines
[#]i            insert before line, '.' alone ends input
a               append after the last line
#,#[,#]m        swap # lines at the first address with the second
#,#[,#][,#]c    copy a block of lines, repeated, to the second address
[#][,#]r$,$     replace every match in the range
[#][,#]s$       search forward, cursor moves to the match
[#][,#]w<>      write lines to a file
[#][,#]e<>      write lines to a file and quit
[#]t<>          transfer a file in at the line
[#]v            set verbosity level
#               move the cursor to line
@               show editor status
? or h          show this help
q               quit

# is a line number, '.' (current line), '$' (last line) or either of
those followed by +n or -n. $ is a string and <> a file name; the
default file is the one being edited. Separate commands with ';'.
Backslash escapes \\n \\t \\xHH etc. work in strings; use \\, and \\;
for literal separators."""

REPORTABLE = (CommandSyntaxError, AddressRangeError, BufferLimitError, ResourceError)


@dataclass(slots=True)
class CommandResult:
    """Outcome of one sub-command.

    ``status`` is ``"ok"``, ``"error"`` (recoverable, already reported),
    ``"quit"`` or ``"fatal"``.
    """

    status: str = "ok"
    message: Optional[str] = None
    opcode: Optional[str] = None

    @property
    def terminal(self) -> bool:
        return self.status in {"quit", "fatal"}


Handler = Callable[[EditorContext, ParsedCommand, LineRange], Optional[CommandResult]]


@dataclass(frozen=True, slots=True)
class CommandDef:
    """Static description of one opcode.

    With ``destination`` set the second address is where lines go, not the
    end of a range.
    """

    name: str
    handler: Handler
    max_addresses: int = 2
    default: RangeDefault = RangeDefault.LINE
    destination: bool = False


def report_error(context: EditorContext, exc: EdlinError) -> CommandResult:
    """Notify the user of a recoverable failure and describe it."""

    if isinstance(exc, ResourceError):
        context.notify(f"{exc.name}{QUESTION}")
    else:
        context.notify(QUESTION)
    telemetry.record_event(
        "command.rejected",
        level="info",
        data={"error": type(exc).__name__, "reason": str(exc)},
    )
    return CommandResult(status="error", message=str(exc))


def _echo_line(context: EditorContext, index: int) -> None:
    context.notify(f"{index + 1:4d}: {context.buffer.get_line(index)}")


def _print_lines(context: EditorContext, rng: LineRange) -> None:
    buffer = context.buffer
    for index, text in enumerate(buffer.lines_in(rng.low, rng.high), rng.low):
        marker = "*" if index == buffer.cursor else ":"
        context.notify(f"{index + 1:4d}{marker} {text}")


def _resource_name(context: EditorContext, command: ParsedCommand) -> str:
    name = command.text.lstrip(" \t") or context.file_name
    if not name:
        raise CommandSyntaxError("no file name given")
    return name


def _handle_print(
    context: EditorContext, command: ParsedCommand, rng: LineRange
) -> None:
    _print_lines(context, rng)
    context.buffer.set_cursor(rng.high)


def _handle_list(
    context: EditorContext, command: ParsedCommand, rng: LineRange
) -> None:
    _print_lines(context, rng)


def _handle_delete(
    context: EditorContext, command: ParsedCommand, rng: LineRange
) -> None:
    context.buffer.delete(rng.low, rng.high)


def _positional(command: ParsedCommand, index: int, default: int = 1) -> int:
    if command.argc <= index:
        return default
    value = command.addresses[index]
    if value < 0:
        raise AddressRangeError(value, value, 0)
    return value


def _handle_move(
    context: EditorContext, command: ParsedCommand, rng: LineRange
) -> None:
    context.buffer.move(rng.low, rng.high, _positional(command, 2))


def _handle_copy(
    context: EditorContext, command: ParsedCommand, rng: LineRange
) -> None:
    context.buffer.copy(
        rng.low, rng.high, _positional(command, 2), _positional(command, 3)
    )


def _handle_replace(
    context: EditorContext, command: ParsedCommand, rng: LineRange
) -> None:
    match, repl = command.arg1, command.arg2
    if match is None or repl is None:
        raise CommandSyntaxError("replace needs match,replacement")
    if not match:
        raise CommandSyntaxError("empty match string")
    changed = context.buffer.replace(rng.low, rng.high, match, repl)
    if context.verbose:
        for index in changed:
            _echo_line(context, index)


def _handle_search(
    context: EditorContext, command: ParsedCommand, rng: LineRange
) -> None:
    needle = command.text
    if not needle:
        raise CommandSyntaxError("empty search string")
    found = context.buffer.search(rng.low, rng.high, needle)
    if found is not None and context.verbose:
        _echo_line(context, found)


def read_insert_text(context: EditorContext) -> int:
    """Insert lines from the command stream at the cursor until the sentinel.

    Returns the number of lines inserted. A line rejected by the buffer caps
    is reported, and the rest of the text up to the sentinel is discarded so
    it never runs as commands.
    """

    buffer = context.buffer
    sentinel = context.config.end_of_insert
    inserted = 0
    rejected: Optional[BufferLimitError] = None
    context.bus.emit("insert.start", buffer.cursor)
    while True:
        if context.verbose and rejected is None:
            context.messages.prompt(":")
        line = context.commands.read_line()
        if line is None or line == sentinel:
            break
        if rejected is not None:
            continue
        try:
            buffer.insert_line(line)
            inserted += 1
        except BufferLimitError as exc:
            rejected = exc
            report_error(context, exc)
    context.bus.emit("insert.end", inserted)
    return inserted


def _handle_insert(
    context: EditorContext, command: ParsedCommand, rng: LineRange
) -> None:
    context.buffer.set_cursor(rng.low)
    read_insert_text(context)


def _handle_append(
    context: EditorContext, command: ParsedCommand, rng: LineRange
) -> None:
    context.buffer.set_cursor(context.buffer.count)
    read_insert_text(context)


def _write(context: EditorContext, command: ParsedCommand, rng: LineRange) -> None:
    lines = context.buffer.lines_in(rng.low, rng.high)
    name = _resource_name(context, command)
    context.store.write_lines(name, lines, context.config.line_ending)
    if context.verbose:
        context.notify(f"w '{name}'")


def _handle_write(
    context: EditorContext, command: ParsedCommand, rng: LineRange
) -> None:
    _write(context, command, rng)


def _handle_write_quit(
    context: EditorContext, command: ParsedCommand, rng: LineRange
) -> CommandResult:
    try:
        _write(context, command, rng)
    except REPORTABLE as exc:
        report_error(context, exc)
    return CommandResult(status="quit", message="write-and-quit")


def load_resource(context: EditorContext, name: str) -> int:
    """Splice every line of ``name`` in at the cursor, all or nothing."""

    lines = context.store.read_lines(name)
    try:
        return context.buffer.insert_lines(lines)
    except BufferLimitError as exc:
        raise ResourceError(name, str(exc)) from exc


def _handle_transfer(
    context: EditorContext, command: ParsedCommand, rng: LineRange
) -> None:
    name = _resource_name(context, command)
    context.buffer.set_cursor(rng.low)
    load_resource(context, name)


def _handle_quit(
    context: EditorContext, command: ParsedCommand, rng: LineRange
) -> CommandResult:
    return CommandResult(status="quit", message="quit")


def _handle_help(
    context: EditorContext, command: ParsedCommand, rng: LineRange
) -> None:
    for line in HELP_TEXT.splitlines():
        context.notify(line)


def _handle_info(
    context: EditorContext, command: ParsedCommand, rng: LineRange
) -> None:
    buffer = context.buffer
    context.notify(
        f"file='{context.file_name}' pos={buffer.cursor} count={buffer.count}"
    )


def _handle_verbosity(
    context: EditorContext, command: ParsedCommand, rng: LineRange
) -> None:
    context.verbosity = _positional(command, 0)


COMMANDS: Dict[str, CommandDef] = {
    "p": CommandDef("print", _handle_print, default=RangeDefault.BUFFER),
    "l": CommandDef("list", _handle_list, default=RangeDefault.BUFFER),
    "d": CommandDef("delete", _handle_delete),
    "m": CommandDef("move", _handle_move, max_addresses=3, destination=True),
    "c": CommandDef("copy", _handle_copy, max_addresses=4, destination=True),
    "r": CommandDef("replace", _handle_replace),
    "s": CommandDef("search", _handle_search, default=RangeDefault.TO_END),
    "i": CommandDef("insert", _handle_insert, max_addresses=1),
    "a": CommandDef("append", _handle_append, max_addresses=0),
    "w": CommandDef("write", _handle_write, default=RangeDefault.BUFFER),
    "e": CommandDef(
        "write-and-quit", _handle_write_quit, default=RangeDefault.BUFFER
    ),
    "t": CommandDef("transfer", _handle_transfer, max_addresses=1),
    "q": CommandDef("quit", _handle_quit, max_addresses=0),
    "h": CommandDef("help", _handle_help, max_addresses=0),
    "?": CommandDef("help", _handle_help, max_addresses=0),
    "@": CommandDef("info", _handle_info, max_addresses=0),
    "v": CommandDef("verbosity", _handle_verbosity, max_addresses=1),
}


class CommandExecutor:
    """Runs sub-commands against one :class:`EditorContext`.

    Recoverable failures are reported with ``?`` (or ``<name>?`` for a
    resource that would not open) and leave the buffer untouched. A fatal
    fault destroys the buffer, latches ``context.fatal`` and every later
    command is refused.
    """

    def __init__(self, context: EditorContext) -> None:
        self.context = context
        self._logger_name = "edlin.commands"

    def execute(self, text: str) -> CommandResult:
        if self.context.fatal:
            return CommandResult(status="fatal", message="session has faulted")
        try:
            result = self._execute(text)
        except (FatalEditorError, MemoryError) as exc:
            return self.fault(exc)
        self.context.bus.emit("command.executed", result)
        return result

    def _execute(self, text: str) -> CommandResult:
        buffer = self.context.buffer
        try:
            command = tokenize(text, cursor=buffer.cursor, count=buffer.count)
            if command.opcode is None:
                return self._jump(command)
            entry = COMMANDS.get(command.opcode)
            if entry is None:
                raise CommandSyntaxError(f"unknown command '{command.opcode}'")
            if command.argc > entry.max_addresses:
                raise CommandSyntaxError(
                    f"'{command.opcode}' takes at most "
                    f"{entry.max_addresses} address(es)"
                )
            if entry.destination:
                rng = resolve_destination(
                    command.addresses[:2], cursor=buffer.cursor, count=buffer.count
                )
            else:
                rng = resolve_range(
                    command.addresses[:2],
                    cursor=buffer.cursor,
                    count=buffer.count,
                    default=entry.default,
                )
            with telemetry.span(
                f"command::{entry.name}",
                logger_name=self._logger_name,
                component="commands",
                metadata={"opcode": command.opcode, "argc": command.argc},
            ):
                outcome = entry.handler(self.context, command, rng)
        except REPORTABLE as exc:
            return report_error(self.context, exc)

        if outcome is None:
            return CommandResult(opcode=command.opcode)
        outcome.opcode = command.opcode
        return outcome

    def _jump(self, command: ParsedCommand) -> CommandResult:
        if command.argc == 0:
            return CommandResult(status="ok", message="empty")
        if command.argc > 1:
            raise CommandSyntaxError("a bare address takes one line number")
        buffer = self.context.buffer
        rng = resolve_range(command.addresses, cursor=buffer.cursor, count=buffer.count)
        buffer.set_cursor(rng.low)
        return CommandResult(message="jump")

    def fault(self, exc: BaseException) -> CommandResult:
        """Enter the terminal fatal state: tear down the buffer and latch."""

        self.context.fatal = True
        self.context.buffer.destroy()
        telemetry.record_event(
            "session.fatal",
            level="error",
            data={"error": type(exc).__name__, "reason": str(exc)},
            logger_name=self._logger_name,
        )
        self.context.bus.emit("session.fatal", str(exc))
        return CommandResult(status="fatal", message=str(exc) or type(exc).__name__)


__all__ = [
    "COMMANDS",
    "CommandExecutor",
    "CommandResult",
    "CommandDef",
    "HELP_TEXT",
    "load_resource",
    "read_insert_text",
    "report_error",
]
