"""Video API schemas."""
from datetime import datetime
from typing import Optional

from pydantic import BaseModel


class CreateVideoRequest(BaseModel):
    """Create draft video request."""
    title: str
    description: str = ""


class VideoResponse(BaseModel):
    """Video metadata response."""
    id: str
    user_id: str
    title: str
    description: str
    thumbnail_url: Optional[str] = None
    video_url: Optional[str] = None
    created_at: datetime
    updated_at: datetime


class ErrorResponse(BaseModel):
    """Error response."""
    kind: str
    detail: str
