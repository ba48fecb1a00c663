# crowdwatch/routers/videos.py
"""
Video upload, listing and byte-range streaming.
Each upload is handed to the heatmap analyzer as a background task; the
response returns immediately with the unprocessed record.
"""

import os
from typing import Optional
from fastapi import APIRouter, BackgroundTasks, Depends, File, Header, UploadFile
from fastapi.responses import StreamingResponse
from crowdwatch.config import settings
from crowdwatch.dependencies import get_analyzer, get_store
from crowdwatch.errors import NotFound
from crowdwatch.schemas.media import MediaOut
from crowdwatch.services.media_analyzer import MediaAnalyzer
from crowdwatch.services.store import StadiumStore
from crowdwatch.services.upload_service import discard_upload, media_path, save_upload
from crowdwatch.utils.byte_range import iter_file_range, parse_range
from crowdwatch.utils.logger import get_logger

router = APIRouter()
logger = get_logger(__name__)


@router.post("/videos/upload", response_model=MediaOut, summary="Upload a video for heatmap analysis")
async def upload_video(background_tasks: BackgroundTasks,
                       video: Optional[UploadFile] = File(None),
                       store: StadiumStore = Depends(get_store),
                       analyzer: MediaAnalyzer = Depends(get_analyzer)):
    """Multipart field `video`, video/* only, up to MAX_UPLOAD_BYTES."""
    filename, size = await save_upload(video, settings.UPLOAD_DIR, settings.MAX_UPLOAD_BYTES)
    try:
        media = store.create_media(filename=filename, original_name=video.filename,
                                   size=size, mime_type=video.content_type)
    except Exception:
        # No record means nothing can reach the file
        discard_upload(settings.UPLOAD_DIR, filename)
        raise
    background_tasks.add_task(analyzer.analyze, media.id)
    return media


@router.get("/videos", response_model=list[MediaOut], summary="All uploaded videos")
async def list_videos(store: StadiumStore = Depends(get_store)):
    return store.list_media()


@router.get("/videos/{media_id}", response_model=MediaOut)
async def get_video(media_id: int, store: StadiumStore = Depends(get_store)):
    media = store.get_media(media_id)
    if not media:
        raise NotFound("Video not found")
    return media


@router.get("/videos/{media_id}/stream", summary="Stream a video (supports Range)")
async def stream_video(media_id: int,
                       range_header: Optional[str] = Header(None, alias="Range"),
                       store: StadiumStore = Depends(get_store)):
    media = store.get_media(media_id)
    if not media:
        raise NotFound("Video not found")

    path = media_path(settings.UPLOAD_DIR, media.filename)
    if not os.path.isfile(path):
        raise NotFound("Video file not found")
    file_size = os.path.getsize(path)

    if range_header:
        start, end = parse_range(range_header, file_size)
        headers = {
            "Content-Range": f"bytes {start}-{end}/{file_size}",
            "Accept-Ranges": "bytes",
            "Content-Length": str(end - start + 1),
        }
        return StreamingResponse(iter_file_range(path, start, end), status_code=206,
                                 media_type=media.mime_type, headers=headers)

    headers = {"Accept-Ranges": "bytes", "Content-Length": str(file_size)}
    return StreamingResponse(iter_file_range(path, 0, file_size - 1),
                             media_type=media.mime_type, headers=headers)
