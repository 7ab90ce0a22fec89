"""Filesystem primitives behind the shell commands."""

from __future__ import annotations

from collections.abc import Callable, Iterator
import os
import shutil
import stat
from pathlib import Path

from .errors import FileOperationError, NotFoundError
from .glob_pattern import compile_glob, matches_glob
from .models import ArchiveEntry, DirectoryEntry, RemoveResult


def is_hidden(path: Path) -> bool:
    """Dot-prefixed names, plus the hidden attribute on Windows."""
    if path.name.startswith("."):
        return True
    if os.name != "nt":
        return False
    try:
        attributes = getattr(path.lstat(), "st_file_attributes", 0)
    except OSError:
        return False
    return bool(attributes & stat.FILE_ATTRIBUTE_HIDDEN)


def list_children(directory_abs: Path) -> list[Path]:
    """Children in the platform's native listing order (not sorted)."""
    try:
        with os.scandir(directory_abs) as entries:
            return [Path(entry.path) for entry in entries]
    except FileNotFoundError as exc:
        raise NotFoundError(f"No such directory: {directory_abs}") from exc
    except OSError as exc:
        raise FileOperationError(f"Failed to read directory: {directory_abs}") from exc


def list_directory(directory_abs: Path) -> list[DirectoryEntry]:
    if not directory_abs.is_dir():
        raise NotFoundError(f"No such directory: {directory_abs}")

    rows: list[DirectoryEntry] = []
    for child_abs in list_children(directory_abs):
        try:
            child_stat = child_abs.lstat()
        except OSError as exc:
            raise FileOperationError(f"Failed to read entry: {child_abs}") from exc
        rows.append(
            DirectoryEntry(
                name=child_abs.name,
                size=child_stat.st_size,
                is_dir=stat.S_ISDIR(child_stat.st_mode),
            )
        )
    return rows


def make_directory(directory_abs: Path) -> None:
    try:
        directory_abs.mkdir()
    except OSError as exc:
        raise FileOperationError(
            f"Error with creating new directory: {directory_abs.name}!"
        ) from exc


def remove_path(target_abs: Path) -> None:
    """Delete a file, a symlink, or an empty directory."""
    if not target_abs.exists() and not target_abs.is_symlink():
        raise NotFoundError(f"No such file or directory: {target_abs.name}")
    try:
        if target_abs.is_dir() and not target_abs.is_symlink():
            _delete_directory(target_abs)
        else:
            _delete_file(target_abs)
    except OSError as exc:
        raise FileOperationError(f"Error with removing: {target_abs.name}!") from exc


def remove_tree(target_abs: Path) -> RemoveResult:
    """Depth-first post-order delete that stops at the first failure.

    Whatever was deleted before the failure stays deleted.
    """
    if not target_abs.exists() and not target_abs.is_symlink():
        raise NotFoundError(f"No such file or directory: {target_abs.name}")

    removed_count = 0
    failure: tuple[Path, OSError] | None = None

    def visit(path_abs: Path) -> bool:
        nonlocal removed_count
        nonlocal failure

        try:
            if path_abs.is_dir() and not path_abs.is_symlink():
                with os.scandir(path_abs) as entries:
                    children = [Path(entry.path) for entry in entries]
                for child_abs in children:
                    if not visit(child_abs):
                        return False
                _delete_directory(path_abs)
            else:
                _delete_file(path_abs)
        except OSError as exc:
            failure = (path_abs, exc)
            return False

        removed_count += 1
        return True

    visit(target_abs)
    if failure is None:
        return RemoveResult(removed_count=removed_count)

    failed_path, error = failure
    return RemoveResult(
        removed_count=removed_count,
        failed_path=failed_path,
        error=error.strerror or str(error),
    )


def copy_tree(source_abs: Path, dest_abs: Path) -> int:
    """Copy a file, or a directory tree rooted at `dest_abs`. Returns file count."""
    if not source_abs.exists():
        raise NotFoundError(f"No such file or directory: {source_abs.name}")
    if source_abs.is_symlink():
        raise FileOperationError(f"Cannot copy a symbolic link: {source_abs.name}")
    if dest_abs.exists() or dest_abs.is_symlink():
        raise FileOperationError(f"Destination already exists: {dest_abs}")
    if source_abs.is_dir() and _is_ancestor(source_abs, dest_abs):
        raise FileOperationError(
            f"Cannot copy a directory into itself: {source_abs} -> {dest_abs}"
        )

    copied_files = 0

    def copy_entry(current_source: Path, current_dest: Path) -> None:
        nonlocal copied_files

        if current_source.is_symlink():
            return
        if current_source.is_dir():
            current_dest.mkdir()
            for child_abs in list_children(current_source):
                copy_entry(child_abs, current_dest / child_abs.name)
            return

        shutil.copyfile(current_source, current_dest)
        copied_files += 1

    try:
        copy_entry(source_abs, dest_abs)
    except OSError as exc:
        raise FileOperationError(
            f"Error with copying: {source_abs.name} -> {dest_abs.name}"
        ) from exc
    return copied_files


def move_path(source_abs: Path, dest_abs: Path) -> None:
    if not source_abs.exists() and not source_abs.is_symlink():
        raise NotFoundError(f"No such file or directory: {source_abs.name}")
    if dest_abs.exists() or dest_abs.is_symlink():
        raise FileOperationError(f"Destination already exists: {dest_abs}")
    try:
        shutil.move(str(source_abs), str(dest_abs))
    except (OSError, shutil.Error) as exc:
        raise FileOperationError(
            f"Error with moving: {source_abs.name} -> {dest_abs.name}"
        ) from exc


def read_lines(file_abs: Path) -> list[str]:
    if not file_abs.exists():
        raise NotFoundError(f"No such file: {file_abs.name}")
    try:
        return file_abs.read_text(encoding="utf-8", errors="replace").splitlines()
    except OSError as exc:
        raise FileOperationError(f"Error with printing file: {file_abs.name}") from exc


def iter_tree(root_abs: Path) -> Iterator[tuple[Path, int]]:
    """Pre-order walk yielding `(path, depth)`; the root comes first at depth 0.

    Symlinked directories are listed but not descended into.
    """
    yield root_abs, 0
    if not root_abs.is_dir() or root_abs.is_symlink():
        return

    stack: list[tuple[Path, int]] = [
        (child_abs, 1) for child_abs in reversed(list_children(root_abs))
    ]
    while stack:
        current_abs, depth = stack.pop()
        yield current_abs, depth
        if current_abs.is_dir() and not current_abs.is_symlink():
            children = list_children(current_abs)
            stack.extend((child_abs, depth + 1) for child_abs in reversed(children))


def find_by_glob(root_abs: Path, pattern: str) -> list[Path]:
    if not root_abs.exists():
        raise NotFoundError(f"No such file or directory: {root_abs}")
    compiled = compile_glob(pattern)
    return [
        path_abs
        for path_abs, _ in iter_tree(root_abs)
        if matches_glob(compiled, path_abs.name)
    ]


def collect_tree_rows(root_abs: Path) -> list[tuple[int, str, bool]]:
    """Rows of `(depth, name, is_dir)` with siblings sorted by name."""
    if not root_abs.exists():
        raise NotFoundError(f"No such file or directory: {root_abs}")

    rows: list[tuple[int, str, bool]] = []

    def walk(current_abs: Path, depth: int) -> None:
        is_dir = current_abs.is_dir() and not current_abs.is_symlink()
        rows.append((depth, current_abs.name or str(current_abs), is_dir))
        if not is_dir:
            return
        for child_abs in sorted(list_children(current_abs), key=lambda p: p.name):
            walk(child_abs, depth + 1)

    walk(root_abs, 0)
    return rows


def iter_archive_entries(
    source_abs: Path,
    *,
    on_skipped: Callable[[Path], None] | None = None,
) -> Iterator[ArchiveEntry]:
    """Depth-first pre-order file entries for packing `source_abs`.

    Entry names start with the source's base name. Hidden entries and
    symlinks are skipped together with everything below them; directories
    yield no entry of their own.
    """

    def walk(current_abs: Path, entry_name: str) -> Iterator[ArchiveEntry]:
        if is_hidden(current_abs) or current_abs.is_symlink():
            if on_skipped is not None:
                on_skipped(current_abs)
            return

        if current_abs.is_dir():
            for child_abs in list_children(current_abs):
                yield from walk(child_abs, f"{entry_name}/{child_abs.name}")
            return

        yield ArchiveEntry(name=entry_name, source_path=current_abs)

    yield from walk(source_abs, source_abs.name)


def _delete_file(path_abs: Path) -> None:
    path_abs.unlink()


def _delete_directory(path_abs: Path) -> None:
    path_abs.rmdir()


def _is_ancestor(ancestor: Path, descendant: Path) -> bool:
    try:
        descendant.relative_to(ancestor)
    except ValueError:
        return False
    return True
