"""Uniform file/folder node types produced by every tree source."""

from __future__ import annotations

from collections.abc import AsyncIterator
from dataclasses import dataclass, field
from datetime import datetime
from typing import TYPE_CHECKING, TypeVar, Union

from folderio.exceptions import EntityNameCollisionError

if TYPE_CHECKING:
    from folderio.models.readers import ByteRangeReader

T = TypeVar("T", "FileEntity", "FolderEntity")


@dataclass(frozen=True)
class FileEntity:
    """A leaf file with lazily read, restartable content."""

    name: str
    path: str
    content_type: str
    last_modified_date: datetime
    reader: ByteRangeReader = field(repr=False, compare=False)

    async def length(self) -> int:
        """Byte count; stream-backed readers may compute it on demand."""
        return await self.reader.size()

    def open_read_stream(self, start: int = 0, end: int | None = None) -> AsyncIterator[bytes]:
        """Return a fresh async iterator over the bytes in ``[start, end)``."""
        if start < 0 or (end is not None and end < start):
            raise ValueError(f"Invalid byte range [{start}, {end})")
        return self.reader.read_range(start, end)

    async def read_as_bytes(self) -> bytes:
        return b"".join([chunk async for chunk in self.open_read_stream()])

    async def read_as_string(self, encoding: str = "utf-8") -> str:
        return (await self.read_as_bytes()).decode(encoding)


@dataclass(frozen=True, eq=False)
class FolderEntity:
    """A folder node owning its child files and folders.

    Two folders are equal when ``name`` and ``path`` match, whatever they
    contain. Child names are unique within one folder.
    """

    name: str
    path: str
    last_modified_date: datetime
    children: tuple[Entity, ...] = ()

    def __post_init__(self) -> None:
        seen: set[str] = set()
        for child in self.children:
            if child.name in seen:
                raise EntityNameCollisionError(self.path, child.name)
            seen.add(child.name)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FolderEntity):
            return NotImplemented
        return (self.name, self.path) == (other.name, other.path)

    def __hash__(self) -> int:
        return hash((self.name, self.path))

    def list_content(self) -> list[Entity]:
        """Immediate children in construction order."""
        return list(self.children)

    def list_subfolders(self) -> list[FolderEntity]:
        """Every folder below this one; a subfolder's descendants come before its siblings."""
        return _collect(self, FolderEntity, [])

    def list_files(self) -> list[FileEntity]:
        """Every file below this one, in the same order as ``list_subfolders``."""
        return _collect(self, FileEntity, [])


Entity = Union[FileEntity, FolderEntity]


def _collect(folder: FolderEntity, kind: type[T], found: list[T]) -> list[T]:
    """Recurse into each subfolder first, then append this folder's direct matches."""
    for child in folder.children:
        if isinstance(child, FolderEntity):
            _collect(child, kind, found)
    found.extend(child for child in folder.children if isinstance(child, kind))
    return found
