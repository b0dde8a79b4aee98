"""Error taxonomy shared by tree builders, pickers and the persister."""

from __future__ import annotations

from pathlib import Path


class FolderIOError(Exception):
    """Base class for all folderio errors."""


class InvalidPathError(FolderIOError, ValueError):
    """Empty or malformed path passed to a path operation or tree builder."""

    def __init__(self, path: str = "", reason: str = "path must not be empty"):
        self.path = path
        self.reason = reason
        super().__init__(f"Invalid path {path!r}: {reason}")


class EntityNameCollisionError(InvalidPathError):
    """Two entities claim the same name at one level of a tree."""

    def __init__(self, path: str, name: str):
        self.name = name
        super().__init__(path, f"duplicate entry name {name!r}")


class ActionCanceledError(FolderIOError):
    """The picker returned no selection."""

    def __init__(self, message: str = "Action canceled by the user"):
        super().__init__(message)


class UnsupportedPlatformError(FolderIOError):
    """The requested capability has no implementation on this platform."""


class PersistVerificationFailed(FolderIOError):
    """The verification signal resolved False; the written file was deleted."""

    def __init__(self, path: Path):
        self.path = path
        super().__init__(f"Verification failed, removed {path}")
