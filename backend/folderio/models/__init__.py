"""File and folder entity models."""

from folderio.models.entities import Entity, FileEntity, FolderEntity
from folderio.models.readers import (
    ByteRangeReader,
    BytesReader,
    LocalFileReader,
    StreamReader,
    file_from_bytes,
    file_from_path,
    file_from_stream,
)

__all__ = [
    "Entity",
    "FileEntity",
    "FolderEntity",
    "ByteRangeReader",
    "BytesReader",
    "LocalFileReader",
    "StreamReader",
    "file_from_bytes",
    "file_from_path",
    "file_from_stream",
]
