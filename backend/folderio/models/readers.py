"""Byte-range readers and one constructor function per file source."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import AsyncIterator, Awaitable, Callable
from datetime import datetime, timezone
from pathlib import Path
from typing import Protocol

from folderio.config import settings
from folderio.models.entities import FileEntity
from folderio.utils.mime import lookup_mime_type_with_default
from folderio.utils.paths import basename

logger = logging.getLogger(__name__)

StreamFactory = Callable[[int, int | None], AsyncIterator[bytes]]


class ByteRangeReader(Protocol):
    """Read primitive behind a FileEntity."""

    async def size(self) -> int: ...

    def read_range(self, start: int, end: int | None) -> AsyncIterator[bytes]: ...


class LocalFileReader:
    """Reads a local file in fixed-size chunks, seeking to ``start``."""

    def __init__(self, path: Path, chunk_size: int | None = None):
        self._path = path
        self._chunk_size = chunk_size or settings.read_chunk_size

    async def size(self) -> int:
        return self._path.stat().st_size

    async def read_range(self, start: int, end: int | None) -> AsyncIterator[bytes]:
        with open(self._path, "rb") as f:
            f.seek(start)
            remaining = None if end is None else end - start
            while remaining is None or remaining > 0:
                want = self._chunk_size if remaining is None else min(self._chunk_size, remaining)
                chunk = await asyncio.to_thread(f.read, want)
                if not chunk:
                    break
                if remaining is not None:
                    remaining -= len(chunk)
                yield chunk


class BytesReader:
    """Serves in-memory content, sliced into chunks."""

    def __init__(self, data: bytes, chunk_size: int | None = None):
        self._data = bytes(data)
        self._chunk_size = chunk_size or settings.read_chunk_size

    async def size(self) -> int:
        return len(self._data)

    async def read_range(self, start: int, end: int | None) -> AsyncIterator[bytes]:
        stop = len(self._data) if end is None else min(end, len(self._data))
        for offset in range(start, stop, self._chunk_size):
            yield self._data[offset:min(offset + self._chunk_size, stop)]


class StreamReader:
    """Delegates to a ``factory(start, end)`` returning an async chunk iterator.

    ``size`` is either known up front or an async callable evaluated on demand.
    """

    def __init__(self, factory: StreamFactory, size: int | Callable[[], Awaitable[int]]):
        self._factory = factory
        self._size = size

    async def size(self) -> int:
        if callable(self._size):
            return await self._size()
        return self._size

    def read_range(self, start: int, end: int | None) -> AsyncIterator[bytes]:
        return self._factory(start, end)


def file_from_path(path: str | Path, chunk_size: int | None = None) -> FileEntity:
    """Wrap a local file; metadata is read once, content lazily."""
    path = Path(path)
    stat = path.stat()
    name = basename(str(path))
    return FileEntity(
        name=name,
        path=str(path),
        content_type=lookup_mime_type_with_default(name),
        last_modified_date=datetime.fromtimestamp(stat.st_mtime, tz=timezone.utc),
        reader=LocalFileReader(path, chunk_size),
    )


def file_from_bytes(
    data: bytes,
    name: str,
    path: str | None = None,
    content_type: str | None = None,
    last_modified_date: datetime | None = None,
    chunk_size: int | None = None,
) -> FileEntity:
    """Wrap in-memory content (e.g. a received upload)."""
    return FileEntity(
        name=name,
        path=path or name,
        content_type=content_type or lookup_mime_type_with_default(name),
        last_modified_date=last_modified_date or datetime.now(timezone.utc),
        reader=BytesReader(data, chunk_size),
    )


def file_from_stream(
    factory: StreamFactory,
    size: int | Callable[[], Awaitable[int]],
    name: str,
    path: str | None = None,
    content_type: str | None = None,
    last_modified_date: datetime | None = None,
) -> FileEntity:
    """Wrap a stream-backed source such as a remote download or picker result."""
    return FileEntity(
        name=name,
        path=path or name,
        content_type=content_type or lookup_mime_type_with_default(name),
        last_modified_date=last_modified_date or datetime.now(timezone.utc),
        reader=StreamReader(factory, size),
    )
