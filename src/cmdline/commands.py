"""Filesystem command logic for cmdline.

Each executor takes the raw argument tuple and the current cursor and
returns an Outcome. Argument problems are raised as UsageError and
filesystem problems as AppError subclasses; the Command boundary in
dispatcher turns both into display text.
"""

from __future__ import annotations

import logging
from datetime import date
from pathlib import Path

from . import archive_service, fs_gateway, presenters
from .constants import ARCHIVE_GET, ARCHIVE_PUT, RECURSIVE_FLAG
from .errors import UsageError
from .logging_utils import log_event
from .models import Effect, Outcome
from .path_mapping import resolve_argument


def _require_arg_count(args: tuple[str, ...], minimum: int, maximum: int | None = None) -> None:
    if len(args) < minimum:
        raise UsageError()
    if maximum is not None and len(args) > maximum:
        raise UsageError()


def exec_current_path(args: tuple[str, ...], cursor: Path) -> Outcome:
    return Outcome(text=str(cursor))


def exec_change_path(args: tuple[str, ...], cursor: Path) -> Outcome:
    """Move the cursor to an existing directory; anything else keeps it."""
    new_cursor = cursor
    if args:
        target_abs = resolve_argument(cursor, args[0])
        if target_abs.is_dir():
            new_cursor = target_abs

    if new_cursor != cursor:
        log_event(
            "cursor_change",
            level=logging.INFO,
            old_cursor=cursor,
            new_cursor=new_cursor,
        )
    return Outcome(text=str(new_cursor), effect=Effect.SET_CURSOR, cursor=new_cursor)


def exec_list_dir(args: tuple[str, ...], cursor: Path) -> Outcome:
    _require_arg_count(args, 0, 1)
    directory_abs = resolve_argument(cursor, args[0]) if args else cursor
    entries = fs_gateway.list_directory(directory_abs)
    return Outcome(text=presenters.render_directory_rows(entries))


def exec_make_dir(args: tuple[str, ...], cursor: Path) -> Outcome:
    _require_arg_count(args, 1)
    fs_gateway.make_directory(resolve_argument(cursor, args[0]))
    return Outcome()


def exec_remove(args: tuple[str, ...], cursor: Path) -> Outcome:
    recursive = RECURSIVE_FLAG in args
    targets = [arg for arg in args if arg != RECURSIVE_FLAG]
    if len(targets) != 1:
        raise UsageError()

    target_abs = resolve_argument(cursor, targets[0])
    if not recursive:
        fs_gateway.remove_path(target_abs)
        return Outcome()

    result = fs_gateway.remove_tree(target_abs)
    if result.ok:
        return Outcome()

    log_event(
        "remove_failed",
        level=logging.WARNING,
        target=target_abs,
        failed_path=result.failed_path,
        removed_count=result.removed_count,
        error=result.error,
    )
    return Outcome(
        text=(
            f"Error with removing: {result.failed_path} ({result.error})! "
            f"Removed {result.removed_count} entry(s) before stopping."
        )
    )


def exec_copy(args: tuple[str, ...], cursor: Path) -> Outcome:
    _require_arg_count(args, 2)
    fs_gateway.copy_tree(
        resolve_argument(cursor, args[0]),
        resolve_argument(cursor, args[1]),
    )
    return Outcome()


def exec_move(args: tuple[str, ...], cursor: Path) -> Outcome:
    _require_arg_count(args, 2)
    fs_gateway.move_path(
        resolve_argument(cursor, args[0]),
        resolve_argument(cursor, args[1]),
    )
    return Outcome()


def exec_print(args: tuple[str, ...], cursor: Path) -> Outcome:
    _require_arg_count(args, 1)
    file_abs = resolve_argument(cursor, args[0])
    if file_abs.is_dir():
        raise UsageError()
    return Outcome(text="\n".join(fs_gateway.read_lines(file_abs)))


def exec_find(args: tuple[str, ...], cursor: Path) -> Outcome:
    _require_arg_count(args, 2)
    matches = fs_gateway.find_by_glob(resolve_argument(cursor, args[0]), args[1])
    return Outcome(text="\n".join(str(path_abs) for path_abs in matches))


def exec_file_tree(args: tuple[str, ...], cursor: Path) -> Outcome:
    _require_arg_count(args, 1)
    rows = fs_gateway.collect_tree_rows(resolve_argument(cursor, args[0]))
    return Outcome(text=presenters.render_tree_rows(rows))


def exec_calendar(args: tuple[str, ...], cursor: Path) -> Outcome:
    return Outcome(text=presenters.render_month_calendar(date.today()))


def exec_archive(args: tuple[str, ...], cursor: Path) -> Outcome:
    _require_arg_count(args, 2)
    mode = args[0]
    target_abs = resolve_argument(cursor, args[1])

    if mode == ARCHIVE_PUT:
        return Outcome(text=str(archive_service.pack(target_abs)))
    if mode == ARCHIVE_GET:
        return Outcome(text=str(archive_service.unpack(target_abs)))
    raise UsageError()
