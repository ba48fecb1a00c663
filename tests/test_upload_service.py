"""Unit tests for storing uploaded videos on disk."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import pytest
from unittest.mock import AsyncMock, MagicMock, patch
from crowdwatch.errors import SizeLimitExceeded, UnsupportedMediaType, ValidationError
from crowdwatch.services.upload_service import check_video_upload, discard_upload, save_upload


def make_upload(chunks, filename="match.mp4", content_type="video/mp4"):
    upload = MagicMock()
    upload.filename = filename
    upload.content_type = content_type
    upload.read = AsyncMock(side_effect=list(chunks) + [b""])
    return upload


class TestCheckVideoUpload:
    def test_missing_upload(self):
        with pytest.raises(ValidationError):
            check_video_upload(None)
        with pytest.raises(ValidationError):
            check_video_upload(make_upload([], filename=""))

    def test_non_video_content_type(self):
        with pytest.raises(UnsupportedMediaType):
            check_video_upload(make_upload([], content_type="image/png"))

    def test_video_content_type_case_insensitive(self):
        check_video_upload(make_upload([], content_type="Video/MP4"))


class TestSaveUpload:
    @pytest.mark.asyncio
    async def test_writes_all_chunks(self, tmp_path):
        filename, size = await save_upload(make_upload([b"abc", b"de"]), str(tmp_path), max_bytes=100)
        assert size == 5
        assert (tmp_path / filename).read_bytes() == b"abcde"

    @pytest.mark.asyncio
    async def test_file_writes_run_in_threadpool(self, tmp_path):
        offloaded = []

        async def run_inline(func, *args, **kwargs):
            offloaded.append(getattr(func, "__name__", repr(func)))
            return func(*args, **kwargs)

        with patch("crowdwatch.services.upload_service.run_in_threadpool", new=run_inline):
            await save_upload(make_upload([b"abc", b"de"]), str(tmp_path), max_bytes=100)

        assert offloaded.count("write") == 2
        assert "open" in offloaded

    @pytest.mark.asyncio
    async def test_oversize_removes_partial_file(self, tmp_path):
        upload = make_upload([b"x" * 6, b"x" * 6])
        with pytest.raises(SizeLimitExceeded):
            await save_upload(upload, str(tmp_path), max_bytes=10)
        assert list(tmp_path.iterdir()) == []

    @pytest.mark.asyncio
    async def test_rejected_type_never_touches_disk(self, tmp_path):
        target = tmp_path / "uploads"
        with pytest.raises(UnsupportedMediaType):
            await save_upload(make_upload([b"hi"], content_type="text/plain"), str(target), max_bytes=10)
        assert not target.exists()


class TestDiscardUpload:
    def test_removes_file(self, tmp_path):
        (tmp_path / "abc").write_bytes(b"1")
        discard_upload(str(tmp_path), "abc")
        assert list(tmp_path.iterdir()) == []

    def test_missing_file_is_ignored(self, tmp_path):
        discard_upload(str(tmp_path), "never-written")
