"""Video repository - JSON file persistence."""
import json
import logging
import os
import uuid
from datetime import datetime
from pathlib import Path
from typing import Optional

from vidpub.domain.errors import IOFailure
from vidpub.domain.models.video import VideoRecord

logger = logging.getLogger(__name__)


def normalize_video_id(video_id: str) -> Optional[str]:
    """Return the lowercase form of a hyphenated UUID string, or None if it is not one."""
    try:
        canonical = str(uuid.UUID(video_id))
    except (ValueError, AttributeError, TypeError):
        return None
    return canonical if canonical == video_id.lower() else None


def is_valid_video_id(video_id: str) -> bool:
    """Video ids are UUID strings in 8-4-4-4-12 form, in either case."""
    return normalize_video_id(video_id) is not None


class VideoRepository:
    """Video metadata storage repository."""

    def __init__(self, root_dir: Path):
        self.root_dir = root_dir.resolve()
        self.root_dir.mkdir(parents=True, exist_ok=True)

    def create_video(self, record: VideoRecord) -> VideoRecord:
        """Create new video record."""
        path = self._record_path(record.id)
        if path.exists():
            raise ValueError(f"Video {record.id} already exists")
        self._save(record)
        return record

    def get_video(self, video_id: str) -> Optional[VideoRecord]:
        """Get video record by ID."""
        video_id = normalize_video_id(video_id)
        if video_id is None:
            return None

        path = self._record_path(video_id)
        if not path.exists():
            return None

        try:
            with open(path, "r", encoding="utf-8") as f:
                return VideoRecord(**json.load(f))
        except (OSError, ValueError) as exc:
            logger.error(f"Unreadable video record {video_id}: {exc}")
            return None

    def update_video(self, record: VideoRecord) -> None:
        """Update video record."""
        record.updated_at = datetime.utcnow()
        self._save(record)

    def generate_video_id(self) -> str:
        """Generate unique video ID."""
        return str(uuid.uuid4())

    def _record_path(self, video_id: str) -> Path:
        return self.root_dir / f"{video_id}.json"

    def _save(self, record: VideoRecord) -> None:
        """Write the record atomically (temp file + rename)."""
        path = self._record_path(record.id)
        tmp_path = path.with_suffix(".json.tmp")
        try:
            with open(tmp_path, "w", encoding="utf-8") as f:
                json.dump(record.model_dump(mode="json"), f, ensure_ascii=False, indent=2)
            os.replace(tmp_path, path)
        except OSError as exc:
            tmp_path.unlink(missing_ok=True)
            raise IOFailure(f"failed to save video {record.id}: {exc}") from exc
