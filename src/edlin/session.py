"""Editing session: owns the buffer and runs the read-evaluate loop."""

from __future__ import annotations

from contextlib import AbstractContextManager
from enum import Enum
from typing import Optional

from edlin.buffer import LineBuffer
from edlin.commands import CommandExecutor, CommandResult, split_commands
from edlin.commands.escapes import ends_with_escape
from edlin.commands.executor import load_resource
from edlin.context import EditorContext, EventBus
from edlin.errors import BufferLimitError, FatalEditorError, ResourceError
from edlin.io import (
    ChunkedLineSource,
    FileResourceStore,
    LineSource,
    MessageSink,
    ResourceStore,
)
from edlin.runtime import EditorConfig, telemetry


class SessionStatus(str, Enum):
    COMPLETED = "completed"
    QUIT = "quit"
    FATAL = "fatal"


class EditorSession(AbstractContextManager["EditorSession"]):
    """One editing session over a command stream.

    Commands and insert-mode text come from ``commands``; every notification
    goes to ``messages``. When ``file_name`` is given its lines are loaded by
    :meth:`open` and it becomes the default target of ``w``, ``e`` and ``t``.
    Leaving the ``with`` block releases the buffer.
    """

    def __init__(
        self,
        *,
        commands: LineSource,
        messages: MessageSink,
        store: Optional[ResourceStore] = None,
        config: Optional[EditorConfig] = None,
        file_name: Optional[str] = None,
        bus: Optional[EventBus] = None,
    ) -> None:
        config = config or EditorConfig()
        self._reader = ChunkedLineSource(commands, config.max_command_length)
        buffer = LineBuffer(
            name=file_name or "default",
            max_line_length=config.max_line_length,
            max_line_count=config.max_line_count,
        )
        self.context = EditorContext(
            buffer=buffer,
            config=config,
            commands=self._reader,
            messages=messages,
            store=store or FileResourceStore(encoding=config.encoding),
            file_name=file_name or "",
            verbosity=config.verbosity,
            bus=bus or EventBus(),
        )
        self.executor = CommandExecutor(self.context)
        self._logger_name = "edlin.session"
        self.status: Optional[SessionStatus] = None
        self._opened = False

    @property
    def buffer(self) -> LineBuffer:
        return self.context.buffer

    def __exit__(self, exc_type, exc, tb) -> bool:
        self.close()
        return False

    def open(self) -> None:
        """Load the associated file, if any; a missing file starts empty."""

        if self._opened:
            return
        self._opened = True
        name = self.context.file_name
        if not name:
            return
        try:
            loaded = load_resource(self.context, name)
        except (ResourceError, BufferLimitError) as exc:
            telemetry.record_event(
                "session.load_failed",
                level="info",
                data={"file": name, "reason": exc},
                logger_name=self._logger_name,
            )
            if self.context.verbose:
                self.context.notify(f"{name}?")
            return
        finally:
            self.buffer.set_cursor(0)
        telemetry.record_event(
            "session.loaded",
            data={"file": name, "lines": loaded},
            logger_name=self._logger_name,
        )

    def read_command(self) -> Optional[str]:
        """Read one logical command line, joining backslash continuations."""

        line = self._reader.read_chunk()
        if line is None:
            return None
        while ends_with_escape(line):
            more = self._reader.read_chunk()
            if more is None:
                break
            line = f"{line}\n{more}"
        return line

    def execute_line(self, line: str) -> CommandResult:
        """Run every ``;``-separated sub-command, stopping at quit or fault."""

        result = CommandResult(message="empty")
        if not line.strip():
            return result
        for part in split_commands(line):
            result = self.executor.execute(part)
            if result.terminal:
                break
        return result

    def run(self) -> SessionStatus:
        """Process commands until end of stream, ``q``/``e`` or a fatal fault."""

        with telemetry.span(
            "session::run",
            logger_name=self._logger_name,
            component="session",
            metadata={"file": self.context.file_name},
        ):
            try:
                self.open()
                self.context.bus.emit("session.start", self.context.file_name)
                status = self._loop()
            except (FatalEditorError, MemoryError) as exc:
                self.executor.fault(exc)
                status = SessionStatus.FATAL
        self.status = status
        self.context.bus.emit("session.end", status)
        return status

    def _loop(self) -> SessionStatus:
        while not self.context.fatal:
            line = self.read_command()
            if line is None:
                return SessionStatus.COMPLETED
            result = self.execute_line(line)
            if result.status == "quit":
                return SessionStatus.QUIT
        return SessionStatus.FATAL

    def close(self) -> None:
        self.buffer.destroy()


__all__ = ["EditorSession", "SessionStatus"]
