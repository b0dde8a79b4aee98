"""Shared fixtures — in-memory files, hand-built trees and a sample directory."""

from datetime import datetime, timezone
from pathlib import Path

import pytest

from folderio.models import FileEntity, FolderEntity, file_from_bytes

EPOCH = datetime(2024, 1, 1, tzinfo=timezone.utc)


def make_file(name: str, data: bytes = b"", path: str | None = None, chunk_size: int = 4) -> FileEntity:
    return file_from_bytes(data, name, path=path, last_modified_date=EPOCH, chunk_size=chunk_size)


def make_folder(name: str, *children, path: str | None = None) -> FolderEntity:
    return FolderEntity(name=name, path=path or name, last_modified_date=EPOCH, children=tuple(children))


@pytest.fixture
def sample_dir(tmp_path) -> Path:
    """Create the following structure and return ``first-level``:

    first-level/
        first-level-file.xpto
        subdirectory-level/
            subdirectory-file
            subdirectory-file-1.xpto
    """
    first = tmp_path / "first-level"
    second = first / "subdirectory-level"
    second.mkdir(parents=True)
    (first / "first-level-file.xpto").write_bytes(b"first")
    (second / "subdirectory-file").write_bytes(b"")
    (second / "subdirectory-file-1.xpto").write_bytes(b"second level")
    return first
