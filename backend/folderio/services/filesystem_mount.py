"""Mount a real directory as a FolderEntity tree."""

from __future__ import annotations

import logging
import os
import sys
from collections import Counter
from collections.abc import Iterator
from contextlib import AbstractContextManager, contextmanager
from datetime import datetime, timezone
from pathlib import Path
from typing import Protocol

from folderio.config import settings
from folderio.exceptions import UnsupportedPlatformError
from folderio.models.entities import Entity, FolderEntity
from folderio.models.readers import file_from_path
from folderio.utils.paths import basename

logger = logging.getLogger(__name__)

SANDBOXED_PLATFORMS = frozenset({"ios"})


class ScopedAccess(Protocol):
    """Grants read access to a directory on sandboxed platforms."""

    def access(self, path: Path) -> AbstractContextManager[None]: ...


class NullScopedAccess:
    """Access provider for platforms without resource scoping."""

    @contextmanager
    def access(self, path: Path) -> Iterator[None]:
        yield


def platform_requires_scoped_access() -> bool:
    return sys.platform in SANDBOXED_PLATFORMS or settings.require_scoped_access


def mount_directory(directory: str | Path, scoped_access: ScopedAccess | None = None) -> FolderEntity:
    """Snapshot ``directory`` and everything below it.

    Access is acquired once for the root and held for the whole recursive
    walk. Filesystem errors propagate and no partial tree is returned.
    """
    directory = Path(directory).absolute()
    if scoped_access is None:
        if platform_requires_scoped_access():
            raise UnsupportedPlatformError(
                f"Mounting a directory on {sys.platform} requires a scoped access provider"
            )
        scoped_access = NullScopedAccess()

    counts: Counter[str] = Counter()
    with scoped_access.access(directory):
        folder = _mount(directory, counts)

    logger.info("Mounted %s: %d files, %d folders", folder.path, counts["files"], counts["folders"])
    return folder


def _mount(directory: Path, counts: Counter[str]) -> FolderEntity:
    stat = directory.stat()
    with os.scandir(directory) as it:
        entries = sorted(it, key=lambda entry: entry.name)

    children: list[Entity] = []
    for entry in entries:
        # Directory links are not followed (no loop detection)
        if entry.is_dir(follow_symlinks=False):
            children.append(_mount(Path(entry.path), counts))
            counts["folders"] += 1
        elif entry.is_file():
            children.append(file_from_path(entry.path))
            counts["files"] += 1
        else:
            logger.debug("Skipping %s: not a regular file or directory", entry.path)

    return FolderEntity(
        name=basename(str(directory)),
        path=str(directory),
        last_modified_date=datetime.fromtimestamp(stat.st_mtime, tz=timezone.utc),
        children=tuple(children),
    )
