from __future__ import annotations

from typing import List

from edlin.adapters.textual import TextualEdlinAdapter, TextualUIHooks
from edlin.io import MemoryResourceStore
from edlin.session import SessionStatus


def test_adapter_runs_submitted_lines_and_reports_status() -> None:
    messages: List[str] = []
    statuses: List[str] = []
    ended: List[SessionStatus] = []
    hooks = TextualUIHooks(
        append_message=messages.append,
        update_status=statuses.append,
        session_ended=ended.append,
    )
    adapter = TextualEdlinAdapter(hooks, store=MemoryResourceStore())

    for line in ("i", "hello", ".", "1p"):
        adapter.submit(line)
    adapter.close_input()
    status = adapter.run_session()

    assert status is SessionStatus.COMPLETED
    assert ended == [SessionStatus.COMPLETED]
    assert messages == ["   1: hello"]
    assert any(text.endswith("INSERT") for text in statuses)
    assert statuses[-1] == "[no file]  line 2/1  COMMAND"


def test_adapter_status_names_the_file() -> None:
    statuses: List[str] = []
    hooks = TextualUIHooks(append_message=lambda _: None, update_status=statuses.append)
    store = MemoryResourceStore({"notes.txt": ["a", "b"]})
    adapter = TextualEdlinAdapter(hooks, store=store, file_name="notes.txt")

    adapter.submit("q")
    adapter.run_session()

    assert statuses[0] == "notes.txt  line 1/2  COMMAND"


def test_adapter_surfaces_fatal_faults() -> None:
    statuses: List[str] = []
    ended: List[SessionStatus] = []
    hooks = TextualUIHooks(
        append_message=lambda _: None,
        update_status=statuses.append,
        session_ended=ended.append,
    )
    store = MemoryResourceStore({"doc.txt": ["a"]}, broken={"doc.txt"})
    adapter = TextualEdlinAdapter(hooks, store=store, file_name="doc.txt")

    adapter.submit("w")
    adapter.close_input()

    assert adapter.run_session() is SessionStatus.FATAL
    assert ended == [SessionStatus.FATAL]
    assert any(text.startswith("fatal:") for text in statuses)


def test_adapter_emits_log_lines() -> None:
    logs: List[str] = []
    hooks = TextualUIHooks(append_message=lambda _: None, log=logs.append)
    adapter = TextualEdlinAdapter(hooks, store=MemoryResourceStore())

    adapter.submit("q")
    adapter.run_session()

    assert any(line.startswith("input ->") for line in logs)
    assert any(line.startswith("session <-") for line in logs)
