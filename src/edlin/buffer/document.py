"""Line buffer holding the document being edited."""

from __future__ import annotations

from contextlib import contextmanager
from typing import Dict, Iterable, Iterator, List, Optional, Sequence

from edlin.errors import AddressRangeError, BufferLimitError
from edlin.runtime import telemetry

from .validation import ensure_range


class LineBuffer:
    """Ordered, owned sequence of text lines with a cursor.

    The cursor is an index in ``[0, count]`` where ``count`` means "past the
    last line". Every mutator either completes or raises before touching
    ``_lines``, so a failed command leaves the buffer unchanged.

    ``max_line_length`` and ``max_line_count`` are optional caps; ``0``
    disables a cap. Violations raise :class:`BufferLimitError`.
    """

    def __init__(
        self,
        lines: Optional[Iterable[str]] = None,
        *,
        name: str = "default",
        max_line_length: int = 0,
        max_line_count: int = 0,
    ) -> None:
        self.name = name
        self.max_line_length = max_line_length
        self.max_line_count = max_line_count
        self._lines: List[str] = []
        self._cursor = 0
        self.destroyed = False
        if lines is not None:
            self.insert_lines(lines)
            self._cursor = 0

    @property
    def count(self) -> int:
        return len(self._lines)

    @property
    def cursor(self) -> int:
        return self._cursor

    def set_cursor(self, index: int) -> None:
        if index < 0 or index > self.count:
            raise AddressRangeError(index, index, self.count)
        self._cursor = index

    def snapshot(self) -> Sequence[str]:
        """Return the current lines without exposing internal mutability."""

        return tuple(self._lines)

    def get_line(self, index: int) -> str:
        return self._lines[index]

    def lines_in(self, low: int, high: int) -> Sequence[str]:
        ensure_range(low, high, self.count)
        return tuple(self._lines[low:high])

    def check_line(self, text: str) -> str:
        if not isinstance(text, str):
            raise TypeError(f"buffer lines must be str, not {type(text).__name__}")
        if self.max_line_length and len(text) > self.max_line_length:
            raise BufferLimitError(
                f"line of {len(text)} characters exceeds limit "
                f"{self.max_line_length}"
            )
        return text

    def _reserve(self, more: int) -> None:
        if self.max_line_count and self.count + more > self.max_line_count:
            raise BufferLimitError(
                f"{self.count + more} lines exceeds limit {self.max_line_count}"
            )

    @contextmanager
    def _mutation(self, label: str, **metadata: object) -> Iterator[None]:
        with telemetry.span(
            f"buffer::{label}",
            component="buffer",
            metadata={"buffer": self.name, **metadata},
        ):
            yield

    def insert_line(self, text: str) -> None:
        """Insert ``text`` at the cursor and advance the cursor past it."""

        self.check_line(text)
        with self._mutation("insert_line", cursor=self._cursor):
            self._reserve(1)
            self._lines.insert(self._cursor, text)
            self._cursor += 1

    def insert_lines(self, lines: Iterable[str]) -> int:
        """Splice ``lines`` in at the cursor, all or nothing."""

        incoming = [self.check_line(line) for line in lines]
        with self._mutation("insert_lines", lines=len(incoming)):
            self._reserve(len(incoming))
            self._lines[self._cursor : self._cursor] = incoming
            self._cursor += len(incoming)
        return len(incoming)

    def delete(self, low: int, high: int) -> int:
        ensure_range(low, high, self.count)
        with self._mutation("delete", low=low, high=high):
            del self._lines[low:high]
            self._cursor = min(self._cursor, self.count)
        return high - low

    def move(self, source: int, target: int, length: int) -> None:
        """Swap ``length`` lines at ``source`` pairwise with those at ``target``."""

        count = self.count
        if (
            target > count
            or source >= count
            or source + length > count
            or target + length > count
        ):
            raise AddressRangeError(source, target + length, count)
        if length == 0 or source == target:
            return
        with self._mutation("move", source=source, target=target, length=length):
            self._swap_block(source, target, length)

    def _swap_block(self, source: int, target: int, length: int) -> None:
        lines = self._lines
        for i in range(length):
            lines[target + i], lines[source + i] = lines[source + i], lines[target + i]

    def copy(self, source: int, target: int, block: int, repeat: int) -> int:
        """Duplicate a ``block``-line run ``repeat`` times into ``target``.

        Duplicates are appended at the end of the buffer, then swapped into
        place. The cursor lands just past the inserted lines.
        """

        count = self.count
        if target > count or source >= count or source + block > count:
            raise AddressRangeError(source, source + block, count)
        if repeat == 0:
            return 0
        total = block * repeat
        self._reserve(total)
        duplicates = list(self._lines[source : source + block]) * repeat
        with self._mutation("copy", source=source, target=target, lines=total):
            end = count
            self._lines.extend(duplicates)
            self._swap_block(end, target, total)
            self._cursor = target + total
        return total

    def replace(self, low: int, high: int, match: str, repl: str) -> List[int]:
        """Replace every occurrence of ``match`` in ``[low, high)``.

        Returns the indices of the lines that changed.
        """

        ensure_range(low, high, self.count)
        if not match:
            raise ValueError("match string cannot be empty")
        updates: Dict[int, str] = {}
        for index in range(low, high):
            line = self._lines[index]
            if match in line:
                updates[index] = self.check_line(line.replace(match, repl))
        with self._mutation("replace", low=low, high=high, changed=len(updates)):
            for index, text in updates.items():
                self._lines[index] = text
        return sorted(updates)

    def search(self, low: int, high: int, needle: str) -> Optional[int]:
        """Move the cursor to the first line in range containing ``needle``.

        With no match the cursor moves past the end and ``None`` is returned.
        """

        ensure_range(low, high, self.count)
        with self._mutation("search", low=low, high=high):
            for index in range(low, high):
                if needle in self._lines[index]:
                    self._cursor = index
                    return index
            self._cursor = self.count
        return None

    def destroy(self) -> None:
        """Release every line and mark the buffer as torn down."""

        self._lines.clear()
        self._cursor = 0
        self.destroyed = True


__all__ = ["LineBuffer"]
