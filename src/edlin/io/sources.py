"""Line sources feeding commands and insert-mode text to a session."""

from __future__ import annotations

import queue
from collections import deque
from typing import Deque, Iterable, Iterator, List, Optional, Protocol, TextIO

from edlin.errors import FatalEditorError


def strip_terminator(line: str) -> str:
    if line.endswith("\n"):
        line = line[:-1]
    if line.endswith("\r"):
        line = line[:-1]
    return line


def _ends_with_escape(chunk: str) -> bool:
    trailing = len(chunk) - len(chunk.rstrip("\\"))
    return trailing % 2 == 1


class LineSource(Protocol):
    """Anything that yields raw text lines, ``None`` once exhausted."""

    def read_line(self) -> Optional[str]:
        """Return the next line without its terminator."""
        ...


class StreamLineSource:
    """Reads lines from a text stream such as ``sys.stdin``."""

    def __init__(self, stream: TextIO) -> None:
        self.stream = stream

    def read_line(self) -> Optional[str]:
        try:
            line = self.stream.readline()
        except OSError as exc:
            raise FatalEditorError(f"command stream failed: {exc}") from exc
        if not line:
            return None
        return strip_terminator(line)


class IterableLineSource:
    """Serves lines from any iterable, e.g. a list of scripted commands."""

    def __init__(self, lines: Iterable[str]) -> None:
        self._lines: Iterator[str] = iter(lines)

    def read_line(self) -> Optional[str]:
        return next(self._lines, None)


class QueueLineSource:
    """Thread-safe source fed by another thread; ``close()`` ends the stream."""

    _CLOSED = object()

    def __init__(self) -> None:
        self._queue: "queue.Queue[object]" = queue.Queue()

    def put(self, line: str) -> None:
        self._queue.put(line)

    def close(self) -> None:
        self._queue.put(self._CLOSED)

    def read_line(self) -> Optional[str]:
        item = self._queue.get()
        if item is self._CLOSED:
            # Keep the marker so every later read also sees end of stream.
            self._queue.put(item)
            return None
        return str(item)


class ChunkedLineSource:
    """Wraps a source so command lines never exceed ``limit`` characters.

    ``read_chunk`` splits longer physical lines into consecutive chunks, each
    read back as its own command. A chunk never ends on an unescaped
    backslash (unless ``limit`` is 1), so an escape stays with the character
    it escapes. ``read_line`` hands out whole lines for insert-mode text,
    after any chunks still pending.
    """

    def __init__(self, source: LineSource, limit: int) -> None:
        self.source = source
        self.limit = limit
        self._pending: Deque[str] = deque()

    def read_line(self) -> Optional[str]:
        if self._pending:
            return self._pending.popleft()
        return self.source.read_line()

    def read_chunk(self) -> Optional[str]:
        if self._pending:
            return self._pending.popleft()
        line = self.source.read_line()
        if line is None or len(line) <= self.limit:
            return line
        chunks = self._split(line)
        self._pending.extend(chunks[1:])
        return chunks[0]

    def _split(self, line: str) -> List[str]:
        chunks: List[str] = []
        start = 0
        while len(line) - start > self.limit:
            end = start + self.limit
            if end - start > 1 and _ends_with_escape(line[start:end]):
                end -= 1
            chunks.append(line[start:end])
            start = end
        chunks.append(line[start:])
        return chunks


__all__ = [
    "ChunkedLineSource",
    "IterableLineSource",
    "LineSource",
    "QueueLineSource",
    "StreamLineSource",
    "strip_terminator",
]
