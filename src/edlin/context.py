"""Shared per-session state handed to every command handler."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Dict

from edlin.buffer import LineBuffer
from edlin.io import LineSource, MessageSink, ResourceStore
from edlin.runtime import EditorConfig


class EventBus:
    """Minimal publish/subscribe hub so hosts can observe a session."""

    def __init__(self) -> None:
        self._subscribers: Dict[str, list[Callable[[object], None]]] = {}

    def subscribe(self, event: str, callback: Callable[[object], None]) -> None:
        self._subscribers.setdefault(event, []).append(callback)

    def emit(self, event: str, payload: object | None = None) -> None:
        for callback in self._subscribers.get(event, []):
            callback(payload)


@dataclass(slots=True)
class EditorContext:
    """Everything a command can touch: the buffer plus injected capabilities."""

    buffer: LineBuffer
    config: EditorConfig
    commands: LineSource
    messages: MessageSink
    store: ResourceStore
    file_name: str = ""
    verbosity: int = 0
    fatal: bool = False
    bus: EventBus = field(default_factory=EventBus)

    @property
    def verbose(self) -> bool:
        return self.verbosity > 0

    def notify(self, text: str) -> None:
        self.messages.emit(text)


__all__ = ["EditorContext", "EventBus"]
