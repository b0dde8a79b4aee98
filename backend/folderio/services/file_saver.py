"""Save files into the download directory."""

from __future__ import annotations

import logging
from collections.abc import Awaitable
from pathlib import Path

from folderio.models.entities import FileEntity
from folderio.services.persister import StreamingPersister, resolved_signal
from folderio.utils.paths import unique_filename
from folderio.utils.storage import get_default_download_dir

logger = logging.getLogger(__name__)


class FileSaver:
    """Writes files under collision-free names in a download directory."""

    def __init__(self, download_dir: str | Path | None = None, persister: StreamingPersister | None = None):
        self._download_dir = Path(download_dir) if download_dir else None
        self._persister = persister or StreamingPersister()

    @property
    def download_dir(self) -> Path:
        if self._download_dir is not None:
            self._download_dir.mkdir(parents=True, exist_ok=True)
            return self._download_dir
        return get_default_download_dir()

    async def save(self, file: FileEntity) -> Path:
        """Save ``file`` unconditionally and return where it was written."""
        directory = self.download_dir
        target = directory / unique_filename(directory, file.name, file.content_type)
        await self._persister.persist_to_path(file, target, resolved_signal(True))
        return target

    async def save_stream(self, file: FileEntity, verified: Awaitable[bool]) -> bool:
        """Stream ``file`` to disk, keeping it only if ``verified`` resolves True."""
        return await self._persister.persist(file, self.download_dir, verified)
