"""Adapters turning picker results into entities.

The pickers themselves (dialogs, browser inputs) are injected callables.
A picker returning nothing means the user canceled.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import AsyncIterable, Awaitable, Callable, Sequence
from pathlib import Path

from folderio.exceptions import ActionCanceledError
from folderio.models.entities import FileEntity, FolderEntity
from folderio.services.filesystem_mount import ScopedAccess, mount_directory
from folderio.services.virtual_tree import PickedFile, folder_from_picked_files

logger = logging.getLogger(__name__)

# picker(allow_multiple, allowed_extensions)
FilePicker = Callable[[bool, Sequence[str] | None], Awaitable[Sequence[FileEntity] | None]]
# picker() -> batches of picked files, streamed as the browser reports them
FolderFilesPicker = Callable[[], AsyncIterable[Sequence[PickedFile]] | None]
DirectoryPicker = Callable[[], Awaitable[str | Path | None]]


class FilePickerProvider:
    """Single and multiple file selection."""

    def __init__(self, picker: FilePicker):
        self._picker = picker

    async def pick_file(self, allowed_extensions: Sequence[str] | None = None) -> FileEntity:
        files = await self._picker(False, allowed_extensions)
        if not files or len(files) != 1:
            raise ActionCanceledError()
        return files[0]

    async def pick_files(self, allowed_extensions: Sequence[str] | None = None) -> list[FileEntity]:
        files = await self._picker(True, allowed_extensions)
        if not files:
            raise ActionCanceledError()
        logger.debug("Picked %d files", len(files))
        return list(files)


class FolderPickerProvider:
    """Folder selection from a flat upload list (virtual paths only)."""

    def __init__(self, picker: FolderFilesPicker):
        self._picker = picker

    async def get_folder(self) -> FolderEntity:
        batches = self._picker()
        if batches is None:
            raise ActionCanceledError()

        picked: list[PickedFile] = []
        async for batch in batches:
            picked.extend(batch)

        if not picked:
            raise ActionCanceledError()
        return folder_from_picked_files(picked)


class DirectoryPickerProvider:
    """Folder selection backed by a real directory."""

    def __init__(self, picker: DirectoryPicker, scoped_access: ScopedAccess | None = None):
        self._picker = picker
        self._scoped_access = scoped_access

    async def get_folder(self) -> FolderEntity:
        directory = await self._picker()
        if directory is None:
            raise ActionCanceledError()
        return await asyncio.to_thread(mount_directory, directory, self._scoped_access)
