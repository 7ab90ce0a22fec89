from __future__ import annotations

import logging
from pathlib import Path

import pytest

import cmdline.cli as cli


@pytest.fixture
def captured_repl(monkeypatch: pytest.MonkeyPatch) -> list[Path]:
    cursors: list[Path] = []

    def _fake_run_repl(*, cursor: Path) -> int:
        cursors.append(cursor)
        return 0

    monkeypatch.setattr(cli, "run_repl", _fake_run_repl)
    return cursors


@pytest.fixture
def reset_root_logger():
    yield
    root = logging.getLogger()
    for handler in list(root.handlers):
        handler.close()
        root.removeHandler(handler)
    logging.disable(logging.NOTSET)


def test_main_starts_repl_in_start_dir(tmp_path: Path, captured_repl: list[Path]) -> None:
    exit_code = cli.main(["--start-dir", str(tmp_path)])

    assert exit_code == 0
    assert captured_repl == [tmp_path]


def test_main_defaults_to_working_directory(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
    captured_repl: list[Path],
) -> None:
    monkeypatch.chdir(tmp_path)

    assert cli.main([]) == 0
    assert captured_repl == [Path.cwd()]


def test_main_reports_missing_start_dir(
    tmp_path: Path,
    capsys: pytest.CaptureFixture[str],
    captured_repl: list[Path],
) -> None:
    exit_code = cli.main(["--start-dir", str(tmp_path / "ghost")])

    captured = capsys.readouterr()
    assert exit_code == 1
    assert "ERROR: --start-dir does not exist" in captured.out
    assert captured_repl == []


def test_main_writes_structured_log(
    tmp_path: Path,
    captured_repl: list[Path],
    reset_root_logger: None,
) -> None:
    log_file = tmp_path / "logs" / "run.log"

    assert cli.main(["--start-dir", str(tmp_path), "--log", str(log_file)]) == 0

    log_text = log_file.read_text(encoding="utf-8")
    assert "=== app_start ===" in log_text
    assert f"cursor: {tmp_path}" in log_text
    assert "=== app_stop ===" in log_text
    assert "reason: normal" in log_text
