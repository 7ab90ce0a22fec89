"""Dataclasses shared across cmdline layers."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from pathlib import Path


class Effect(StrEnum):
    NONE = "none"
    EXIT = "exit"
    SET_CURSOR = "set_cursor"


@dataclass(frozen=True)
class Outcome:
    """What a command hands back to the session loop."""

    text: str = ""
    effect: Effect = Effect.NONE
    cursor: Path | None = None

    @property
    def is_exit(self) -> bool:
        return self.effect is Effect.EXIT

    @property
    def is_cursor_change(self) -> bool:
        return self.effect is Effect.SET_CURSOR


@dataclass(frozen=True)
class DirectoryEntry:
    name: str
    size: int
    is_dir: bool


@dataclass(frozen=True)
class ArchiveEntry:
    name: str  # POSIX-style, first segment is the packed root's base name
    source_path: Path


@dataclass(frozen=True)
class RemoveResult:
    removed_count: int
    failed_path: Path | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.failed_path is None
