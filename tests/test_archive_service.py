from __future__ import annotations

import os
import zipfile
from pathlib import Path

import pytest

from cmdline import archive_service
from cmdline.errors import ArchiveError, NotFoundError
from cmdline.fs_gateway import remove_tree


def _entry_names(zip_path: Path) -> list[str]:
    with zipfile.ZipFile(zip_path, mode="r") as zf:
        return zf.namelist()


@pytest.mark.parametrize(
    ("source_name", "archive_name"),
    [
        ("notes", "notes.zip"),
        ("report.txt", "report.zip"),
        ("a.b.c", "a.zip"),
        (".hidden", ".zip"),
    ],
)
def test_derive_archive_path_strips_from_first_dot(
    tmp_path: Path, source_name: str, archive_name: str
) -> None:
    assert archive_service.derive_archive_path(tmp_path / source_name) == tmp_path / archive_name


def test_pack_directory_writes_only_file_entries(notes_dir: Path) -> None:
    zip_path = archive_service.pack(notes_dir)

    assert zip_path == notes_dir.parent / "notes.zip"
    assert sorted(_entry_names(zip_path)) == ["notes/a.txt", "notes/sub/b.txt"]


def test_pack_entries_follow_depth_first_preorder(notes_dir: Path) -> None:
    (notes_dir / "sub" / "deeper").mkdir()
    (notes_dir / "sub" / "deeper" / "c.txt").write_text("gamma", encoding="utf-8")

    names = _entry_names(archive_service.pack(notes_dir))
    sub_positions = [index for index, name in enumerate(names) if name.startswith("notes/sub/")]

    assert sorted(names) == ["notes/a.txt", "notes/sub/b.txt", "notes/sub/deeper/c.txt"]
    assert sub_positions == list(range(sub_positions[0], sub_positions[0] + 2))


def test_pack_skips_hidden_entries(notes_dir: Path) -> None:
    (notes_dir / ".secret").write_text("s", encoding="utf-8")
    (notes_dir / ".git").mkdir()
    (notes_dir / ".git" / "config").write_text("c", encoding="utf-8")

    names = _entry_names(archive_service.pack(notes_dir))

    assert sorted(names) == ["notes/a.txt", "notes/sub/b.txt"]


def test_pack_single_file(tmp_path: Path) -> None:
    source = tmp_path / "report.txt"
    source.write_text("report", encoding="utf-8")

    zip_path = archive_service.pack(source)

    assert zip_path == tmp_path / "report.zip"
    assert _entry_names(zip_path) == ["report.txt"]


def test_pack_same_stem_overwrites_silently(tmp_path: Path) -> None:
    draft = tmp_path / "report.draft"
    final = tmp_path / "report.final"
    draft.write_text("draft", encoding="utf-8")
    final.write_text("final", encoding="utf-8")

    first = archive_service.pack(draft)
    second = archive_service.pack(final)

    assert first == second
    assert _entry_names(second) == ["report.final"]


def test_pack_twice_overwrites(notes_dir: Path) -> None:
    archive_service.pack(notes_dir)
    (notes_dir / "a.txt").unlink()

    names = _entry_names(archive_service.pack(notes_dir))

    assert names == ["notes/sub/b.txt"]


def test_pack_missing_source(tmp_path: Path) -> None:
    with pytest.raises(NotFoundError, match="No such file: ghost"):
        archive_service.pack(tmp_path / "ghost")


def test_pack_and_unpack_roundtrip(tmp_path: Path) -> None:
    source = tmp_path / "data"
    (source / "nested" / "deeper").mkdir(parents=True)
    payloads = {
        Path("plain.txt"): b"plain text\n",
        Path("nested") / "blob.bin": os.urandom(200 * 1024),
        Path("nested") / "deeper" / "empty.dat": b"",
        Path("nested") / "日本語.txt": "文字".encode("utf-8"),
    }
    for rel_path, payload in payloads.items():
        (source / rel_path).write_bytes(payload)

    zip_path = archive_service.pack(source)
    remove_tree(source)
    extracted_root = archive_service.unpack(zip_path)

    assert extracted_root == source
    for rel_path, payload in payloads.items():
        assert (source / rel_path).read_bytes() == payload


def test_unpack_does_not_recreate_empty_directories(notes_dir: Path) -> None:
    (notes_dir / "sub" / "b.txt").unlink()
    (notes_dir / "keep").mkdir()
    (notes_dir / "keep" / "k.txt").write_text("k", encoding="utf-8")

    zip_path = archive_service.pack(notes_dir)
    remove_tree(notes_dir)
    archive_service.unpack(zip_path)

    assert (notes_dir / "a.txt").read_text(encoding="utf-8") == "alpha"
    assert (notes_dir / "keep" / "k.txt").exists()
    assert not (notes_dir / "sub").exists()


def test_unpack_overwrites_existing_files(notes_dir: Path) -> None:
    zip_path = archive_service.pack(notes_dir)
    (notes_dir / "a.txt").write_text("changed", encoding="utf-8")

    archive_service.unpack(zip_path)

    assert (notes_dir / "a.txt").read_text(encoding="utf-8") == "alpha"


def test_unpack_empty_archive_returns_parent(tmp_path: Path) -> None:
    zip_path = tmp_path / "empty.zip"
    with zipfile.ZipFile(zip_path, mode="w"):
        pass

    assert archive_service.unpack(zip_path) == tmp_path


def test_unpack_explicit_directory_entries(tmp_path: Path) -> None:
    zip_path = tmp_path / "pkg.zip"
    with zipfile.ZipFile(zip_path, mode="w") as zf:
        zf.writestr("pkg/", b"")
        zf.writestr("pkg/empty/", b"")
        zf.writestr("pkg/file.txt", b"payload")

    extracted_root = archive_service.unpack(zip_path)

    assert extracted_root == tmp_path / "pkg"
    assert (tmp_path / "pkg" / "empty").is_dir()
    assert (tmp_path / "pkg" / "file.txt").read_bytes() == b"payload"


def test_unpack_invalid_archive(tmp_path: Path) -> None:
    broken = tmp_path / "broken.zip"
    broken.write_text("not a zip", encoding="utf-8")

    with pytest.raises(ArchiveError, match="Invalid zip archive"):
        archive_service.unpack(broken)


def test_unpack_missing_archive(tmp_path: Path) -> None:
    with pytest.raises(NotFoundError, match="No such zip file: ghost.zip"):
        archive_service.unpack(tmp_path / "ghost.zip")


def test_pack_refuses_to_overwrite_its_own_source(tmp_path: Path) -> None:
    source = tmp_path / "bundle.zip"
    source.write_bytes(b"original")

    with pytest.raises(ArchiveError, match="overwrite its own source"):
        archive_service.pack(source)

    assert source.read_bytes() == b"original"


def test_pack_refuses_filesystem_root() -> None:
    with pytest.raises(ArchiveError, match="Cannot archive the filesystem root"):
        archive_service.pack(Path("/"))
