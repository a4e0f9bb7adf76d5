"""Thumbnails API router."""
from fastapi import APIRouter, Depends, File, UploadFile

from vidpub.application.publish_orchestrator import VideoUpload
from vidpub.application.thumbnail_publisher import ThumbnailPublisher
from vidpub.interfaces.api.dependencies import get_current_user_id, get_thumbnail_publisher
from vidpub.interfaces.api.routers.videos import require_video_id
from vidpub.interfaces.api.schemas.video import ErrorResponse, VideoResponse

router = APIRouter(prefix="/api/thumbnails", tags=["thumbnails"])


@router.post(
    "/{video_id}",
    response_model=VideoResponse,
    responses={code: {"model": ErrorResponse} for code in (400, 401, 403, 404, 502)},
)
async def upload_thumbnail(
    video_id: str,
    thumbnail: UploadFile = File(...),
    user_id: str = Depends(get_current_user_id),
    publisher: ThumbnailPublisher = Depends(get_thumbnail_publisher),
) -> VideoResponse:
    """Upload a thumbnail image for the video."""
    video_id = require_video_id(video_id)
    upload = VideoUpload(
        source=thumbnail, media_type=thumbnail.content_type, declared_size=thumbnail.size
    )
    record = await publisher.publish_thumbnail(video_id, user_id, upload)
    return VideoResponse(**record.model_dump())
