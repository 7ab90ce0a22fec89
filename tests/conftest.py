"""Pytest configuration and fixtures for cmdline tests."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest


@pytest.fixture
def sample_tree(tmp_path: Path) -> Path:
    """tree/a.txt, tree/b/a.txt, tree/b/c.md"""
    root = tmp_path / "tree"
    (root / "b").mkdir(parents=True)
    (root / "a.txt").write_text("top", encoding="utf-8")
    (root / "b" / "a.txt").write_text("nested", encoding="utf-8")
    (root / "b" / "c.md").write_text("# md", encoding="utf-8")
    return root


@pytest.fixture
def notes_dir(tmp_path: Path) -> Path:
    """notes/a.txt and notes/sub/b.txt"""
    notes = tmp_path / "notes"
    (notes / "sub").mkdir(parents=True)
    (notes / "a.txt").write_text("alpha", encoding="utf-8")
    (notes / "sub" / "b.txt").write_text("beta", encoding="utf-8")
    return notes


@pytest.fixture
def scripted_input():
    """Build a line reader that replays lines, then signals end of input."""

    def _build(lines: list[str]):
        pending = list(lines)
        prompts: list[str] = []

        def _read_line(prompt: str) -> str:
            prompts.append(prompt)
            if not pending:
                raise EOFError
            return pending.pop(0)

        _read_line.prompts = prompts  # type: ignore[attr-defined]
        return _read_line

    return _build


@pytest.fixture
def enabled_logging():
    """Undo any global logging.disable() left behind by CLI startup."""
    logging.disable(logging.NOTSET)
    yield
    logging.disable(logging.NOTSET)
