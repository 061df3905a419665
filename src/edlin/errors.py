"""Exception hierarchy shared by the buffer, command and session layers."""

from __future__ import annotations


class EdlinError(RuntimeError):
    """Base class for every editor failure."""


class CommandSyntaxError(EdlinError):
    """Raised for a malformed address, argument or unknown opcode."""


class EscapeDecodeError(CommandSyntaxError):
    """Raised when a backslash escape cannot be decoded."""

    def __init__(self, message: str, *, text: str, offset: int) -> None:
        super().__init__(message)
        self.text = text
        self.offset = offset


class AddressRangeError(EdlinError):
    """Raised when a resolved range falls outside the buffer."""

    def __init__(self, low: int, high: int, count: int) -> None:
        super().__init__(f"invalid range [{low}, {high}) for {count} line(s)")
        self.low = low
        self.high = high
        self.count = count


class BufferLimitError(EdlinError):
    """Raised when a line length or line count cap would be exceeded."""


class ResourceError(EdlinError):
    """Raised when a named resource cannot be opened."""

    def __init__(self, name: str, reason: str = "") -> None:
        super().__init__(f"{name}: {reason}" if reason else name)
        self.name = name
        self.reason = reason


class FatalEditorError(EdlinError):
    """Unrecoverable fault: the buffer is torn down and the session ends."""


__all__ = [
    "EdlinError",
    "CommandSyntaxError",
    "EscapeDecodeError",
    "AddressRangeError",
    "BufferLimitError",
    "ResourceError",
    "FatalEditorError",
]
