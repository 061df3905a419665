"""Named-resource access: reading a document in and writing it out."""

from __future__ import annotations

from typing import Dict, Iterable, List, Optional, Protocol, Set

from edlin.errors import FatalEditorError, ResourceError

from .sources import strip_terminator


class ResourceStore(Protocol):
    """Opens named resources for whole-document reads and writes.

    Failing to open raises :class:`ResourceError`. A failure after a writer
    was opened raises :class:`FatalEditorError`.
    """

    def read_lines(self, name: str) -> List[str]:
        ...

    def write_lines(self, name: str, lines: Iterable[str], line_ending: str) -> int:
        ...


class FileResourceStore:
    """Filesystem-backed store; names are paths."""

    def __init__(self, *, encoding: str = "utf-8") -> None:
        self.encoding = encoding

    def read_lines(self, name: str) -> List[str]:
        try:
            with open(name, "r", encoding=self.encoding, newline="") as handle:
                return [strip_terminator(line) for line in handle]
        except (OSError, UnicodeDecodeError) as exc:
            raise ResourceError(name, str(exc)) from exc

    def write_lines(self, name: str, lines: Iterable[str], line_ending: str) -> int:
        try:
            handle = open(name, "w", encoding=self.encoding, newline="")
        except OSError as exc:
            raise ResourceError(name, exc.strerror or str(exc)) from exc
        written = 0
        try:
            with handle:
                for line in lines:
                    handle.write(f"{line}{line_ending}")
                    written += 1
        except (OSError, UnicodeEncodeError) as exc:
            raise FatalEditorError(f"writing '{name}' failed: {exc}") from exc
        return written


class MemoryResourceStore:
    """Dict-backed store for embedding and tests.

    Names in ``readonly`` cannot be opened for writing; names in ``broken``
    open fine but fail part-way through a write.
    """

    def __init__(
        self,
        files: Optional[Dict[str, List[str]]] = None,
        *,
        readonly: Iterable[str] = (),
        broken: Iterable[str] = (),
    ) -> None:
        self.files: Dict[str, List[str]] = {
            name: list(lines) for name, lines in (files or {}).items()
        }
        self.readonly: Set[str] = set(readonly)
        self.broken: Set[str] = set(broken)

    def read_lines(self, name: str) -> List[str]:
        if name not in self.files:
            raise ResourceError(name, "no such resource")
        return list(self.files[name])

    def write_lines(self, name: str, lines: Iterable[str], line_ending: str) -> int:
        del line_ending
        if not name or name in self.readonly:
            raise ResourceError(name, "cannot open for writing")
        if name in self.broken:
            raise FatalEditorError(f"writing '{name}' failed")
        self.files[name] = list(lines)
        return len(self.files[name])


__all__ = ["FileResourceStore", "MemoryResourceStore", "ResourceStore"]
