"""User-facing text rendering."""

from __future__ import annotations

import calendar
from datetime import date
from pathlib import Path

from .constants import LIST_NAME_WIDTH, TREE_INDENT, WELCOME_TEXT
from .models import DirectoryEntry

_ERROR_PREFIX = "ERROR:"


def render_welcome() -> str:
    return WELCOME_TEXT


def render_prompt(cursor: Path, suffix: str) -> str:
    return f"{cursor}{suffix}"


def render_error(message: str) -> str:
    return f"{_ERROR_PREFIX} {message}"


def render_directory_rows(entries: list[DirectoryEntry]) -> str:
    return "\n".join(
        f"{entry.name:<{LIST_NAME_WIDTH}} size: {entry.size}" for entry in entries
    )


def render_tree_rows(rows: list[tuple[int, str, bool]]) -> str:
    lines = []
    for depth, name, is_dir in rows:
        suffix = "/" if is_dir else ""
        lines.append(f"{TREE_INDENT * depth}{name}{suffix}")
    return "\n".join(lines)


def render_command_names(names: list[str]) -> str:
    lines = ["Command line contains next commands: "]
    lines.extend(f"[{index}] {name}" for index, name in enumerate(names, start=1))
    return "\n".join(lines)


def render_month_calendar(today: date) -> str:
    grid = calendar.TextCalendar(firstweekday=calendar.MONDAY).formatmonth(
        today.year, today.month
    )
    return f"{grid.rstrip()}\nToday: {today.isoformat()}"
