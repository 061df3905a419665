"""Editor configuration and environment helpers."""

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from typing import Optional

ENV_PREFIX = "EDLIN_"


def env(name: str, default: Optional[str] = None) -> Optional[str]:
    return os.getenv(f"{ENV_PREFIX}{name}", default)


def env_flag(name: str, default: bool) -> bool:
    raw = env(name)
    if raw is None:
        return default
    return raw.lower() in {"1", "true", "yes", "on"}


def env_int(name: str, default: int) -> int:
    raw = env(name)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


@dataclass(frozen=True, slots=True)
class EditorConfig:
    """Per-session settings shared by the executor and the I/O capabilities.

    ``max_line_length`` and ``max_line_count`` are optional caps where ``0``
    disables the limit. ``line_ending`` terminates both printed messages and
    the lines written to resources.
    """

    line_ending: str = "\n"
    end_of_insert: str = "."
    max_line_length: int = 0
    max_line_count: int = 0
    max_command_length: int = 255
    verbosity: int = 0
    encoding: str = "utf-8"

    def __post_init__(self) -> None:
        if self.max_line_length < 0 or self.max_line_count < 0:
            raise ValueError("line limits cannot be negative")
        if self.max_command_length < 1:
            raise ValueError("max_command_length must be positive")

    @classmethod
    def from_env(cls) -> "EditorConfig":
        # Imported lazily: the escape decoder lives in the command layer.
        from edlin.commands.escapes import decode_escapes

        defaults = cls()
        line_ending = env("LINE_ENDING")
        return cls(
            line_ending=(
                decode_escapes(line_ending) if line_ending else defaults.line_ending
            ),
            max_line_length=env_int("MAX_LINE_LENGTH", defaults.max_line_length),
            max_line_count=env_int("MAX_LINE_COUNT", defaults.max_line_count),
            max_command_length=env_int(
                "MAX_COMMAND_LENGTH", defaults.max_command_length
            ),
            verbosity=env_int("VERBOSE", defaults.verbosity),
            encoding=env("ENCODING") or defaults.encoding,
        )

    def with_overrides(self, **changes: object) -> "EditorConfig":
        """Return a copy with every non-``None`` override applied."""

        applied = {key: value for key, value in changes.items() if value is not None}
        return replace(self, **applied)


__all__ = ["ENV_PREFIX", "EditorConfig", "env", "env_flag", "env_int"]
