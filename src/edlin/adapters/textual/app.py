"""Executable Textual app hosting an editing session."""

from __future__ import annotations

import argparse
from typing import Callable, Optional, Sequence

try:  # pragma: no cover - imported only when the TUI is run
    from textual.app import App, ComposeResult
    from textual.widgets import Footer, Header, Input, RichLog, Static
except ModuleNotFoundError as exc:  # pragma: no cover - friendly error for missing dep
    raise RuntimeError(
        "Install the 'textual' package (edlin[tui]) to use edlin.adapters.textual.app"
    ) from exc

from edlin.runtime import EditorConfig, telemetry
from edlin.session import SessionStatus

from .controller import TextualEdlinAdapter, TextualUIHooks


class EdlinApp(App[int]):
    """Message log on top, status line, command input at the bottom."""

    CSS = """
	Screen {
		layout: vertical;
	}

	#messages {
		height: 1fr;
		border: round $accent;
		padding: 0 1;
	}

	#status-line {
		height: 1;
		background: $surface-darken-1;
		padding: 0 1;
	}
	"""

    BINDINGS = [
        ("ctrl+q", "quit", "Quit"),
    ]

    def __init__(
        self, *, file_name: Optional[str] = None, config: Optional[EditorConfig] = None
    ) -> None:
        super().__init__()
        self._file_name = file_name
        self._config = config
        self.adapter: TextualEdlinAdapter | None = None
        self._messages: RichLog | None = None
        self._status: Static | None = None
        self._logger = telemetry.get_logger("edlin.tui")

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)
        self._messages = RichLog(id="messages", wrap=False, markup=False)
        yield self._messages
        self._status = Static("", id="status-line")
        yield self._status
        yield Input(placeholder="command", id="command-line")
        yield Footer()

    def on_mount(self) -> None:
        hooks = TextualUIHooks(
            append_message=self._from_worker(self._append_message),
            update_status=self._from_worker(self._update_status),
            session_ended=self._from_worker(self._session_ended),
            log=self._logger.debug,
        )
        self.adapter = TextualEdlinAdapter(
            hooks, config=self._config, file_name=self._file_name
        )
        self.run_worker(self.adapter.run_session, thread=True, exclusive=True)
        self.query_one(Input).focus()

    def on_unmount(self) -> None:
        if self.adapter:
            self.adapter.close_input()

    def on_input_submitted(self, event: Input.Submitted) -> None:
        if not self.adapter:
            return
        if self._messages:
            self._messages.write(f"> {event.value}")
        self.adapter.submit(event.value)
        event.input.value = ""

    def _from_worker(self, callback: Callable[..., None]) -> Callable[..., None]:
        def relay(*args: object) -> None:
            if self.is_running:
                self.call_from_thread(callback, *args)

        return relay

    def _append_message(self, text: str) -> None:
        if self._messages:
            self._messages.write(text)

    def _update_status(self, status: str) -> None:
        if self._status:
            self._status.update(status)

    def _session_ended(self, status: SessionStatus) -> None:
        self.exit(1 if status is SessionStatus.FATAL else 0)


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run the editor in a Textual UI.")
    parser.add_argument("file", nargs="?", help="file to edit")
    parser.add_argument(
        "--log-preset",
        choices=("development", "production", "quiet"),
        help="telemetry preset; otherwise EDLIN_LOG_* variables apply",
    )
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = _parse_args(argv)
    if args.log_preset:
        telemetry.configure(preset=args.log_preset)
    app = EdlinApp(file_name=args.file, config=EditorConfig.from_env())
    return app.run() or 0


if __name__ == "__main__":  # pragma: no cover - manual demo
    raise SystemExit(main())
