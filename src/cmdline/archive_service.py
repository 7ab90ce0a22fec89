"""Pack and unpack workflows for the `archive` command.

Archives are plain zip files. Packing writes one entry per regular file,
named by its path relative to the packed root's parent, so every name
starts with the root's base name (`notes/a.txt`, `notes/sub/b.txt`).
Directories get no entry of their own. As a consequence, empty
directories are not stored and an unpack cannot recreate them.
"""

from __future__ import annotations

import logging
from pathlib import Path, PurePosixPath

from .constants import ARCHIVE_SUFFIX
from .errors import ArchiveError, NotFoundError
from .fs_gateway import iter_archive_entries
from .logging_utils import log_event
from .zip_gateway import extract_archive, read_entry_names, write_archive


def derive_archive_path(source_abs: Path) -> Path:
    """Sibling `<stem>.zip`, where stem is the name up to its first dot.

    `report.draft` and `report.final` both map to `report.zip`.
    """
    stem = source_abs.name.split(".", 1)[0]
    return source_abs.with_name(f"{stem}{ARCHIVE_SUFFIX}")


def pack(source_abs: Path) -> Path:
    """Pack a file or directory into a zip beside it and return the zip path."""
    if not source_abs.exists():
        raise NotFoundError(f"No such file: {source_abs.name}")
    if not source_abs.name:
        raise ArchiveError(f"Cannot archive the filesystem root: {source_abs}")

    zip_path_abs = derive_archive_path(source_abs)
    if zip_path_abs == source_abs:
        raise ArchiveError(f"Archive would overwrite its own source: {source_abs.name}")

    skipped: list[Path] = []
    entry_count = write_archive(
        zip_path_abs=zip_path_abs,
        entries=iter_archive_entries(source_abs, on_skipped=skipped.append),
    )
    log_event(
        "archive_pack",
        level=logging.INFO,
        source=source_abs,
        archive=zip_path_abs,
        entry_count=entry_count,
        skipped_count=len(skipped),
    )
    return zip_path_abs


def compute_extraction_root(zip_path_abs: Path, entry_names: list[str]) -> Path:
    """First segment of the first entry, under the archive's directory."""
    parent_abs = zip_path_abs.parent
    if not entry_names:
        return parent_abs
    first_parts = PurePosixPath(entry_names[0].replace("\\", "/")).parts
    if not first_parts:
        return parent_abs
    return parent_abs / first_parts[0]


def unpack(zip_path_abs: Path) -> Path:
    """Extract an archive into its own directory and return the extraction root."""
    if not zip_path_abs.exists():
        raise NotFoundError(f"No such zip file: {zip_path_abs.name}")
    if zip_path_abs.is_dir():
        raise ArchiveError(f"Not a zip file: {zip_path_abs.name}")

    entry_names = read_entry_names(zip_path_abs)
    extraction_root = compute_extraction_root(zip_path_abs, entry_names)
    extracted_count = extract_archive(
        zip_path_abs=zip_path_abs,
        target_dir_abs=zip_path_abs.parent,
    )
    log_event(
        "archive_unpack",
        level=logging.INFO,
        archive=zip_path_abs,
        extracted_root=extraction_root,
        entry_count=extracted_count,
    )
    return extraction_root
