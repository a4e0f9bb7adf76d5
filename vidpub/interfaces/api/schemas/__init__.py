"""API schemas."""
from vidpub.interfaces.api.schemas.video import (
    CreateVideoRequest,
    ErrorResponse,
    VideoResponse,
)

__all__ = [
    "CreateVideoRequest",
    "ErrorResponse",
    "VideoResponse",
]
