"""Tests for picker providers — cancellation and tree construction."""

from unittest.mock import AsyncMock

import pytest

from conftest import make_file
from folderio.exceptions import ActionCanceledError
from folderio.models import FolderEntity
from folderio.services.providers import (
    DirectoryPickerProvider,
    FilePickerProvider,
    FolderPickerProvider,
)
from folderio.services.virtual_tree import PickedFile


def _batches(*batches):
    async def stream():
        for batch in batches:
            yield batch

    return stream


class TestFilePicker:
    @pytest.mark.asyncio
    async def test_pick_file(self):
        picked = make_file("a.txt")
        picker = AsyncMock(return_value=[picked])

        assert await FilePickerProvider(picker).pick_file(["txt"]) is picked
        picker.assert_awaited_once_with(False, ["txt"])

    @pytest.mark.asyncio
    async def test_pick_file_canceled(self):
        with pytest.raises(ActionCanceledError):
            await FilePickerProvider(AsyncMock(return_value=None)).pick_file()

    @pytest.mark.asyncio
    async def test_pick_file_requires_single_result(self):
        picker = AsyncMock(return_value=[make_file("a.txt"), make_file("b.txt")])
        with pytest.raises(ActionCanceledError):
            await FilePickerProvider(picker).pick_file()

    @pytest.mark.asyncio
    async def test_pick_files(self):
        files = [make_file("a.txt"), make_file("b.txt")]
        picker = AsyncMock(return_value=files)

        assert await FilePickerProvider(picker).pick_files() == files
        picker.assert_awaited_once_with(True, None)

    @pytest.mark.asyncio
    async def test_pick_files_empty_is_canceled(self):
        with pytest.raises(ActionCanceledError):
            await FilePickerProvider(AsyncMock(return_value=[])).pick_files()


class TestFolderPicker:
    @pytest.mark.asyncio
    async def test_batches_collected_into_tree(self):
        picker = _batches(
            [PickedFile("docs/a.txt", make_file("a.txt", path="docs/a.txt"))],
            [
                PickedFile("docs/sub/b.txt", make_file("b.txt", path="docs/sub/b.txt")),
                PickedFile("docs/sub/c.txt", make_file("c.txt", path="docs/sub/c.txt")),
            ],
        )

        folder = await FolderPickerProvider(picker).get_folder()

        assert folder.name == "docs"
        assert len(folder.list_files()) == 3
        assert [f.name for f in folder.list_subfolders()] == ["sub"]

    @pytest.mark.asyncio
    async def test_no_result_is_canceled(self):
        with pytest.raises(ActionCanceledError):
            await FolderPickerProvider(lambda: None).get_folder()

    @pytest.mark.asyncio
    async def test_empty_batches_are_canceled(self):
        with pytest.raises(ActionCanceledError):
            await FolderPickerProvider(_batches([], [])).get_folder()


class TestDirectoryPicker:
    @pytest.mark.asyncio
    async def test_mounts_picked_directory(self, sample_dir):
        provider = DirectoryPickerProvider(AsyncMock(return_value=str(sample_dir)))
        folder = await provider.get_folder()
        assert isinstance(folder, FolderEntity)
        assert folder.path == str(sample_dir)
        assert len(folder.list_files()) == 3

    @pytest.mark.asyncio
    async def test_canceled(self):
        with pytest.raises(ActionCanceledError):
            await DirectoryPickerProvider(AsyncMock(return_value=None)).get_folder()
