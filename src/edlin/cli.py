"""Command-line entry point: ``edlin [FILE ...]``."""

from __future__ import annotations

import argparse
import sys
from typing import Optional, Sequence, TextIO

from edlin.commands.escapes import decode_escapes
from edlin.errors import EscapeDecodeError
from edlin.io import FileResourceStore, StreamLineSource, StreamMessageSink
from edlin.runtime import EditorConfig, telemetry
from edlin.session import EditorSession, SessionStatus


def _escaped(text: str) -> str:
    try:
        return decode_escapes(text)
    except EscapeDecodeError as exc:
        raise argparse.ArgumentTypeError(str(exc)) from exc


def _parse_args(
    argv: Optional[Sequence[str]], defaults: EditorConfig
) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="edlin", description="A line editor in the spirit of EDLIN."
    )
    parser.add_argument("files", nargs="*", help="files to edit, one after another")
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=defaults.verbosity,
        help="raise the initial verbosity level (default: EDLIN_VERBOSE or 0)",
    )
    parser.add_argument(
        "--line-ending",
        type=_escaped,
        default=defaults.line_ending,
        help="terminator for messages and written lines, escapes allowed",
    )
    parser.add_argument(
        "--max-line-length",
        type=int,
        default=defaults.max_line_length,
        help="reject lines longer than this (0 disables)",
    )
    parser.add_argument(
        "--max-line-count",
        type=int,
        default=defaults.max_line_count,
        help="reject documents with more lines than this (0 disables)",
    )
    parser.add_argument(
        "--encoding",
        default=defaults.encoding,
        help="text encoding of edited files (default: utf-8)",
    )
    parser.add_argument(
        "--log-preset",
        choices=("development", "production", "quiet"),
        help="telemetry preset; otherwise EDLIN_LOG_* variables apply",
    )
    return parser.parse_args(argv)


def edit(
    file_name: Optional[str],
    config: EditorConfig,
    *,
    stdin: TextIO,
    stdout: TextIO,
) -> SessionStatus:
    """Run one session over ``stdin``/``stdout`` for ``file_name``."""

    session = EditorSession(
        commands=StreamLineSource(stdin),
        messages=StreamMessageSink(stdout, line_ending=config.line_ending),
        store=FileResourceStore(encoding=config.encoding),
        config=config,
        file_name=file_name,
    )
    with session:
        return session.run()


def main(
    argv: Optional[Sequence[str]] = None,
    *,
    stdin: Optional[TextIO] = None,
    stdout: Optional[TextIO] = None,
) -> int:
    defaults = EditorConfig.from_env()
    args = _parse_args(argv, defaults)
    if args.log_preset:
        telemetry.configure(preset=args.log_preset)
    try:
        config = defaults.with_overrides(
            verbosity=args.verbose,
            line_ending=args.line_ending,
            max_line_length=args.max_line_length,
            max_line_count=args.max_line_count,
            encoding=args.encoding,
        )
    except ValueError as exc:
        print(f"edlin: {exc}", file=sys.stderr)
        return 2

    stdin = stdin or sys.stdin
    stdout = stdout or sys.stdout
    for file_name in args.files or [None]:
        if edit(file_name, config, stdin=stdin, stdout=stdout) is SessionStatus.FATAL:
            return 1
    return 0


if __name__ == "__main__":  # pragma: no cover - manual entry point
    sys.exit(main())
