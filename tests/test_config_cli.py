from __future__ import annotations

import io
from pathlib import Path

import pytest

from edlin.cli import main
from edlin.runtime import EditorConfig


class BrokenStream(io.StringIO):
    def write(self, text: str) -> int:
        raise OSError("stream closed")


def test_config_reads_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("EDLIN_MAX_LINE_COUNT", "50")
    monkeypatch.setenv("EDLIN_LINE_ENDING", "\\r\\n")
    monkeypatch.setenv("EDLIN_VERBOSE", "2")

    config = EditorConfig.from_env()

    assert config.max_line_count == 50
    assert config.line_ending == "\r\n"
    assert config.verbosity == 2


def test_config_ignores_malformed_numbers(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("EDLIN_MAX_LINE_LENGTH", "lots")

    assert EditorConfig.from_env().max_line_length == 0


def test_config_overrides_skip_unset_values() -> None:
    config = EditorConfig(max_line_count=10)

    updated = config.with_overrides(max_line_count=None, verbosity=3)

    assert updated.max_line_count == 10
    assert updated.verbosity == 3


def test_config_rejects_negative_limits() -> None:
    with pytest.raises(ValueError):
        EditorConfig(max_line_length=-1)


def test_cli_prints_file(tmp_path: Path) -> None:
    target = tmp_path / "doc.txt"
    target.write_text("hello\n")
    stdout = io.StringIO()

    code = main([str(target)], stdin=io.StringIO("1p\nq\n"), stdout=stdout)

    assert code == 0
    assert stdout.getvalue() == "   1* hello\n"


def test_cli_writes_changes_back(tmp_path: Path) -> None:
    target = tmp_path / "doc.txt"
    target.write_text("hello\n")

    main(
        [str(target)],
        stdin=io.StringIO("1,1rhello,bye\nw\nq\n"),
        stdout=io.StringIO(),
    )

    assert target.read_text() == "bye\n"


def test_cli_line_ending_option(tmp_path: Path) -> None:
    target = tmp_path / "doc.txt"
    target.write_text("a\n")
    stdout = io.StringIO()

    main(
        ["--line-ending", "\\r\\n", str(target)],
        stdin=io.StringIO("l\nw\n"),
        stdout=stdout,
    )

    assert stdout.getvalue() == "   1* a\r\n"
    assert target.read_bytes() == b"a\r\n"


def test_cli_fatal_output_failure_exits_nonzero(tmp_path: Path) -> None:
    target = tmp_path / "doc.txt"
    target.write_text("a\n")

    code = main([str(target)], stdin=io.StringIO("1p\n"), stdout=BrokenStream())

    assert code == 1


def test_cli_rejects_invalid_limits(capsys: pytest.CaptureFixture[str]) -> None:
    code = main(["--max-line-length", "-1"], stdin=io.StringIO(""))

    assert code == 2
    assert "negative" in capsys.readouterr().err
