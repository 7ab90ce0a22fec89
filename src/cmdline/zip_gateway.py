"""Zip read/write helpers."""

from __future__ import annotations

from collections.abc import Callable
import shutil
import zipfile
from pathlib import Path, PurePosixPath
from typing import Iterable

from .constants import COPY_CHUNK_SIZE
from .errors import ArchiveError
from .models import ArchiveEntry


def write_archive(
    *,
    zip_path_abs: Path,
    entries: Iterable[ArchiveEntry],
    on_entry_written: Callable[[ArchiveEntry], None] | None = None,
) -> int:
    """Stream every entry's file into a new archive, in the order given.

    An existing file at `zip_path_abs` is overwritten.
    """
    written_count = 0
    try:
        with zipfile.ZipFile(zip_path_abs, mode="w", compression=zipfile.ZIP_DEFLATED) as zf:
            for entry in entries:
                _write_entry(zf, entry)
                written_count += 1
                if on_entry_written is not None:
                    on_entry_written(entry)
    except OSError as exc:
        raise ArchiveError(f"Failed to write zip archive: {zip_path_abs}") from exc
    return written_count


def _write_entry(zf: zipfile.ZipFile, entry: ArchiveEntry) -> None:
    zip_info = zipfile.ZipInfo.from_file(
        entry.source_path, arcname=entry.name, strict_timestamps=False
    )
    zip_info.compress_type = zipfile.ZIP_DEFLATED
    force_zip64 = zip_info.file_size >= zipfile.ZIP64_LIMIT
    with entry.source_path.open("rb") as source, zf.open(
        zip_info, mode="w", force_zip64=force_zip64
    ) as target:
        shutil.copyfileobj(source, target, COPY_CHUNK_SIZE)


def read_entry_names(zip_path_abs: Path) -> list[str]:
    """Entry names in stored order."""
    try:
        with zipfile.ZipFile(zip_path_abs, mode="r") as zf:
            return [member.filename for member in zf.infolist()]
    except zipfile.BadZipFile as exc:
        raise ArchiveError(f"Invalid zip archive: {zip_path_abs}") from exc
    except OSError as exc:
        raise ArchiveError(f"Failed to read zip archive: {zip_path_abs}") from exc


def extract_archive(
    *,
    zip_path_abs: Path,
    target_dir_abs: Path,
    on_entry_extracted: Callable[[Path], None] | None = None,
) -> int:
    """Recreate every entry under `target_dir_abs`, in stored order.

    Directories are only created when an entry is an explicit directory
    marker or when the target already exists as a directory; file entries
    get their parent chain created on demand.
    """
    extracted_count = 0
    try:
        with zipfile.ZipFile(zip_path_abs, mode="r") as zf:
            members = zf.infolist()
            _validate_members_safe_for_extract(members)
            for member in members:
                target_abs = target_dir_abs.joinpath(*_entry_parts(member.filename))
                if member.is_dir() or target_abs.is_dir():
                    target_abs.mkdir(parents=True, exist_ok=True)
                    continue

                target_abs.parent.mkdir(parents=True, exist_ok=True)
                with zf.open(member, mode="r") as source, target_abs.open("wb") as target:
                    shutil.copyfileobj(source, target, COPY_CHUNK_SIZE)
                extracted_count += 1
                if on_entry_extracted is not None:
                    on_entry_extracted(target_abs)
    except zipfile.BadZipFile as exc:
        raise ArchiveError(f"Invalid zip archive: {zip_path_abs}") from exc
    except OSError as exc:
        raise ArchiveError(f"Failed to extract zip archive: {zip_path_abs}") from exc
    return extracted_count


def _entry_parts(entry_name: str) -> tuple[str, ...]:
    return PurePosixPath(entry_name.replace("\\", "/")).parts


def _validate_members_safe_for_extract(members: list[zipfile.ZipInfo]) -> None:
    for member in members:
        entry_name = member.filename
        if entry_name.startswith("/") or entry_name.startswith("\\"):
            raise ArchiveError(f"Unsafe zip entry path: {entry_name}")

        entry_parts = _entry_parts(entry_name)
        if ".." in entry_parts:
            raise ArchiveError(f"Unsafe zip entry path: {entry_name}")
        if entry_parts and entry_parts[0].endswith(":"):
            raise ArchiveError(f"Unsafe zip entry path: {entry_name}")
