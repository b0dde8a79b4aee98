"""Tests for FileSaver — whole-file and streamed saves into a download dir."""

from unittest.mock import patch

import pytest

from conftest import make_file
from folderio.services.file_saver import FileSaver
from folderio.services.persister import StreamingPersister, resolved_signal


@pytest.fixture
def saver(tmp_path):
    return FileSaver(download_dir=tmp_path / "downloads", persister=StreamingPersister(flush_threshold_bytes=64))


class TestSave:
    @pytest.mark.asyncio
    async def test_save_returns_written_path(self, saver, tmp_path):
        path = await saver.save(make_file("photo.png", b"\x89PNG"))
        assert path == tmp_path / "downloads" / "photo.png"
        assert path.read_bytes() == b"\x89PNG"

    @pytest.mark.asyncio
    async def test_second_save_gets_numbered_name(self, saver):
        first = await saver.save(make_file("photo.png", b"1"))
        second = await saver.save(make_file("photo.png", b"2"))
        assert second.name == "photo (1).png"
        assert first.read_bytes() == b"1"
        assert second.read_bytes() == b"2"


class TestSaveStream:
    @pytest.mark.asyncio
    async def test_verified_stream_kept(self, saver, tmp_path):
        assert await saver.save_stream(make_file("data.bin", b"x" * 500), resolved_signal(True)) is True
        assert (tmp_path / "downloads" / "data.bin").read_bytes() == b"x" * 500

    @pytest.mark.asyncio
    async def test_rejected_stream_removed(self, saver, tmp_path):
        assert await saver.save_stream(make_file("data.bin", b"x" * 500), resolved_signal(False)) is False
        assert not (tmp_path / "downloads" / "data.bin").exists()


class TestDownloadDir:
    @patch("folderio.utils.storage.settings")
    def test_defaults_to_configured_dir(self, mock_settings, tmp_path):
        mock_settings.download_dir = str(tmp_path / "configured")
        saver = FileSaver()
        assert saver.download_dir == tmp_path / "configured"
        assert saver.download_dir.is_dir()

    def test_explicit_dir_created(self, tmp_path):
        saver = FileSaver(download_dir=tmp_path / "new" / "dir")
        assert saver.download_dir.is_dir()
