"""Message sinks: where notifications and printed lines go."""

from __future__ import annotations

from typing import Callable, Protocol, TextIO

from edlin.errors import FatalEditorError


class MessageSink(Protocol):
    def emit(self, text: str) -> None:
        """Write ``text`` followed by the configured line terminator."""
        ...

    def prompt(self, text: str) -> None:
        """Write ``text`` with no terminator."""
        ...


class StreamMessageSink:
    """Writes messages to a text stream; any write failure is fatal."""

    def __init__(self, stream: TextIO, *, line_ending: str = "\n") -> None:
        self.stream = stream
        self.line_ending = line_ending

    def _write(self, text: str) -> None:
        try:
            self.stream.write(text)
            self.stream.flush()
        except (OSError, ValueError) as exc:
            raise FatalEditorError(f"message stream failed: {exc}") from exc

    def emit(self, text: str) -> None:
        self._write(f"{text}{self.line_ending}")

    def prompt(self, text: str) -> None:
        self._write(text)


class CallbackMessageSink:
    """Hands each message to a callable, e.g. ``list.append`` or a UI hook."""

    def __init__(
        self,
        callback: Callable[[str], None],
        *,
        on_prompt: Callable[[str], None] | None = None,
    ) -> None:
        self.callback = callback
        self.on_prompt = on_prompt

    def emit(self, text: str) -> None:
        self.callback(text)

    def prompt(self, text: str) -> None:
        if self.on_prompt is not None:
            self.on_prompt(text)


__all__ = ["CallbackMessageSink", "MessageSink", "StreamMessageSink"]
