"""UI-agnostic bridge between an editing session and Textual widgets."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Optional

from edlin.commands import CommandResult
from edlin.io import CallbackMessageSink, QueueLineSource, ResourceStore
from edlin.runtime import EditorConfig
from edlin.session import EditorSession, SessionStatus


def _noop(*_args, **_kwargs) -> None:  # pragma: no cover - default hook
    return None


@dataclass(slots=True)
class TextualUIHooks:
    """Callbacks the adapter uses to update the host UI."""

    append_message: Callable[[str], None]
    update_status: Callable[[str], None] = _noop
    session_ended: Callable[[SessionStatus], None] = _noop
    log: Callable[[str], None] = _noop


class TextualEdlinAdapter:
    """Feeds submitted input lines to a session and surfaces its output.

    ``run_session`` blocks until the session ends, so a Textual host runs it
    in a worker thread; ``submit`` and ``close_input`` are safe to call from
    the UI thread.
    """

    def __init__(
        self,
        hooks: TextualUIHooks,
        *,
        config: Optional[EditorConfig] = None,
        file_name: Optional[str] = None,
        store: Optional[ResourceStore] = None,
    ) -> None:
        self.hooks = hooks
        self.input = QueueLineSource()
        self.session = EditorSession(
            commands=self.input,
            messages=CallbackMessageSink(hooks.append_message),
            store=store,
            config=config,
            file_name=file_name,
        )
        self._inserting = False
        self._subscribe_events()

    def submit(self, line: str) -> None:
        self._log_state("input ->", line=line)
        self.input.put(line)

    def close_input(self) -> None:
        self.input.close()

    def run_session(self) -> SessionStatus:
        with self.session:
            status = self.session.run()
        self._log_state("session <-", status=status.value)
        self.hooks.session_ended(status)
        return status

    def status_text(self) -> str:
        context = self.session.context
        buffer = context.buffer
        mode = "INSERT" if self._inserting else "COMMAND"
        name = context.file_name or "[no file]"
        return f"{name}  line {buffer.cursor + 1}/{buffer.count}  {mode}"

    def _subscribe_events(self) -> None:
        bus = self.session.context.bus
        bus.subscribe("session.start", lambda _: self._refresh_status())
        bus.subscribe("command.executed", self._on_command)
        bus.subscribe("insert.start", lambda _: self._set_inserting(True))
        bus.subscribe("insert.end", lambda _: self._set_inserting(False))
        bus.subscribe("session.fatal", self._on_fatal)

    def _on_command(self, payload: object | None) -> None:
        if isinstance(payload, CommandResult):
            self._log_state("result <-", status=payload.status, opcode=payload.opcode)
        self._refresh_status()

    def _on_fatal(self, payload: object | None) -> None:
        self._log_state("fatal <-", reason=payload)
        self.hooks.update_status(f"fatal: {payload}")

    def _set_inserting(self, inserting: bool) -> None:
        self._inserting = inserting
        self._refresh_status()

    def _refresh_status(self) -> None:
        self.hooks.update_status(self.status_text())

    def _log_state(self, prefix: str, **fields: object) -> None:
        snapshot: Dict[str, object] = {
            "inserting": self._inserting,
            "cursor": self.session.buffer.cursor,
            "count": self.session.buffer.count,
        }
        snapshot.update({k: v for k, v in fields.items() if v is not None})
        parts = [prefix] + [f"{key}={value!r}" for key, value in snapshot.items()]
        self.hooks.log(" ".join(parts))


__all__ = ["TextualEdlinAdapter", "TextualUIHooks"]
