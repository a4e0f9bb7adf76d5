"""Videos API router."""
from fastapi import APIRouter, Depends, File, UploadFile

from vidpub.application.publish_orchestrator import PublishOrchestrator, VideoUpload
from vidpub.application.records import load_owned_record
from vidpub.domain.errors import BadRequest
from vidpub.domain.models.video import VideoRecord
from vidpub.infrastructure.persistence import VideoRepository, normalize_video_id
from vidpub.interfaces.api.dependencies import (
    get_current_user_id,
    get_publish_orchestrator,
    get_video_repository,
)
from vidpub.interfaces.api.schemas.video import CreateVideoRequest, ErrorResponse, VideoResponse

router = APIRouter(prefix="/api/videos", tags=["videos"])

_ERRORS = {
    400: {"model": ErrorResponse},
    401: {"model": ErrorResponse},
    403: {"model": ErrorResponse},
    404: {"model": ErrorResponse},
}


def require_video_id(video_id: str) -> str:
    """Return the stored (lowercase) form of ``video_id``."""
    normalized = normalize_video_id(video_id)
    if normalized is None:
        raise BadRequest("invalid video id")
    return normalized


def _to_response(record: VideoRecord) -> VideoResponse:
    return VideoResponse(**record.model_dump())


@router.post("", response_model=VideoResponse, status_code=201, responses=_ERRORS)
async def create_video(
    request: CreateVideoRequest,
    user_id: str = Depends(get_current_user_id),
    repository: VideoRepository = Depends(get_video_repository),
) -> VideoResponse:
    """Create a draft video record owned by the caller."""
    record = VideoRecord(
        id=repository.generate_video_id(),
        user_id=user_id,
        title=request.title,
        description=request.description,
    )
    repository.create_video(record)
    return _to_response(record)


@router.get("/{video_id}", response_model=VideoResponse, responses=_ERRORS)
async def get_video(
    video_id: str,
    user_id: str = Depends(get_current_user_id),
    repository: VideoRepository = Depends(get_video_repository),
) -> VideoResponse:
    """Get video details."""
    video_id = require_video_id(video_id)
    return _to_response(load_owned_record(repository, video_id, user_id))


@router.post(
    "/{video_id}",
    response_model=VideoResponse,
    responses={**_ERRORS, 422: {"model": ErrorResponse}, 502: {"model": ErrorResponse}},
)
async def upload_video(
    video_id: str,
    video: UploadFile = File(...),
    user_id: str = Depends(get_current_user_id),
    orchestrator: PublishOrchestrator = Depends(get_publish_orchestrator),
) -> VideoResponse:
    """Upload, fast-start remux and publish the video file."""
    video_id = require_video_id(video_id)
    upload = VideoUpload(source=video, media_type=video.content_type, declared_size=video.size)
    record = await orchestrator.publish_video(video_id, user_id, upload)
    return _to_response(record)
