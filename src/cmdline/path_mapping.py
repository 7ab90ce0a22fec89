"""Resolve raw command arguments against the session cursor."""

from __future__ import annotations

import os
import unicodedata
from pathlib import Path

from .errors import StartupValidationError, UsageError


def normalize_path(path: Path) -> Path:
    """Collapse `.`/`..` segments lexically without following symlinks."""
    return Path(os.path.normpath(path))


def resolve_argument(cursor: Path, raw_path: str) -> Path:
    """Return the absolute, normalized path a raw argument refers to.

    Relative arguments are joined to the cursor; absolute ones pass through.
    A leading `~` expands to the user's home directory.
    """
    normalized_input = unicodedata.normalize("NFC", raw_path)
    if "\0" in normalized_input:
        raise UsageError(f"Path contains NUL (\\0): {raw_path!r}")

    candidate = Path(normalized_input)
    if normalized_input.startswith("~"):
        try:
            candidate = candidate.expanduser()
        except RuntimeError as exc:
            raise UsageError(f"Failed to expand user home in path: {raw_path}") from exc

    if not candidate.is_absolute():
        candidate = cursor / candidate
    return normalize_path(candidate)


def resolve_start_directory(raw_path: str | None) -> Path:
    """Map the --start-dir argument (or the working directory) to a cursor."""
    cwd = normalize_path(Path.cwd())
    if raw_path is None:
        return cwd

    try:
        start_dir = resolve_argument(cwd, raw_path)
    except UsageError as exc:
        raise StartupValidationError(f"--start-dir: {exc}") from exc

    if not start_dir.exists():
        raise StartupValidationError(f"--start-dir does not exist: {start_dir}")
    if not start_dir.is_dir():
        raise StartupValidationError(f"--start-dir must be a directory: {start_dir}")
    return start_dir
