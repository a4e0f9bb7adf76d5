"""Video record domain model."""
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class VideoRecord(BaseModel):
    """Video metadata (persisted to JSON)."""

    id: str
    user_id: str
    title: str = ""
    description: str = ""

    thumbnail_url: Optional[str] = None
    video_url: Optional[str] = None

    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)
