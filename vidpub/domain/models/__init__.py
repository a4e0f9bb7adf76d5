"""Domain models."""
from vidpub.domain.models.media import (
    StagedFile,
    UploadPolicy,
    thumbnail_policy,
    video_policy,
)
from vidpub.domain.models.upload_job import (
    CommandLog,
    CommandStatus,
    InvalidTransition,
    Orientation,
    PipelineState,
    ProbeResult,
    UploadJob,
)
from vidpub.domain.models.video import VideoRecord

__all__ = [
    "CommandLog",
    "CommandStatus",
    "InvalidTransition",
    "Orientation",
    "PipelineState",
    "ProbeResult",
    "StagedFile",
    "UploadJob",
    "UploadPolicy",
    "VideoRecord",
    "thumbnail_policy",
    "video_policy",
]
