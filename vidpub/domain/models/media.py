"""Upload acceptance policies and staged file descriptors."""
from pathlib import Path
from typing import Dict

from pydantic import BaseModel


class UploadPolicy(BaseModel):
    """Size ceiling and media-type allowlist for one class of asset."""

    name: str
    max_bytes: int
    # MIME type -> file extension written to disk
    allowed_types: Dict[str, str]

    def extension_for(self, media_type: str) -> str:
        return self.allowed_types[media_type]


class StagedFile(BaseModel):
    """A file written into the staging directory."""

    path: Path
    size_bytes: int
    media_type: str

    @property
    def extension(self) -> str:
        return self.path.suffix.lstrip(".")


VIDEO_MEDIA_TYPES: Dict[str, str] = {"video/mp4": "mp4"}
IMAGE_MEDIA_TYPES: Dict[str, str] = {"image/jpeg": "jpg", "image/png": "png"}


def video_policy(max_bytes: int) -> UploadPolicy:
    return UploadPolicy(name="video", max_bytes=max_bytes, allowed_types=VIDEO_MEDIA_TYPES)


def thumbnail_policy(max_bytes: int) -> UploadPolicy:
    return UploadPolicy(name="thumbnail", max_bytes=max_bytes, allowed_types=IMAGE_MEDIA_TYPES)
