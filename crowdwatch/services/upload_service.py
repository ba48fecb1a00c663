# crowdwatch/services/upload_service.py
"""
Stores uploaded video files under UPLOAD_DIR with an opaque generated name.
Rejects non-video content types before touching the disk and enforces the
size limit while streaming, deleting the partial file if it is exceeded.

Disk I/O runs in the threadpool so a large upload does not hold up the
event loop the simulator ticks on.
"""

import os
import uuid
from fastapi import UploadFile
from starlette.concurrency import run_in_threadpool
from crowdwatch.errors import SizeLimitExceeded, UnsupportedMediaType, ValidationError
from crowdwatch.utils.logger import get_logger

logger = get_logger(__name__)

CHUNK_SIZE = 1024 * 1024


def check_video_upload(upload) -> None:
    if upload is None or not upload.filename:
        raise ValidationError("No video file provided")
    content_type = (upload.content_type or "").lower()
    if not content_type.startswith("video/"):
        raise UnsupportedMediaType(f"Only video files are allowed (got '{content_type or 'unknown'}')")


async def save_upload(upload: UploadFile, upload_dir: str, max_bytes: int) -> tuple[str, int]:
    """Write the upload to disk. Returns (stored filename, size in bytes)."""
    check_video_upload(upload)
    await run_in_threadpool(os.makedirs, upload_dir, exist_ok=True)

    filename = uuid.uuid4().hex
    path = media_path(upload_dir, filename)
    size = 0
    f = await run_in_threadpool(open, path, "wb")
    try:
        while True:
            chunk = await upload.read(CHUNK_SIZE)
            if not chunk:
                break
            size += len(chunk)
            if size > max_bytes:
                raise SizeLimitExceeded(f"Video exceeds the {max_bytes // (1024 * 1024)}MB upload limit")
            await run_in_threadpool(f.write, chunk)
    except Exception:
        f.close()
        discard_upload(upload_dir, filename)
        raise
    await run_in_threadpool(f.close)

    logger.info(f"[UPLOAD] Saved {upload.filename} as {filename} ({size} bytes)")
    return filename, size


def discard_upload(upload_dir: str, filename: str) -> None:
    """Remove a stored upload that will never get a media record."""
    path = media_path(upload_dir, filename)
    if os.path.exists(path):
        os.remove(path)
        logger.warning(f"[UPLOAD] Discarded {filename}")


def media_path(upload_dir: str, filename: str) -> str:
    return os.path.join(upload_dir, filename)
