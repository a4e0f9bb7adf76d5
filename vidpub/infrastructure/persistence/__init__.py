"""Persistence infrastructure."""
from vidpub.infrastructure.persistence.orphan_ledger import OrphanEntry, OrphanLedger
from vidpub.infrastructure.persistence.video_repository import (
    VideoRepository,
    is_valid_video_id,
    normalize_video_id,
)

__all__ = [
    "OrphanEntry",
    "OrphanLedger",
    "VideoRepository",
    "is_valid_video_id",
    "normalize_video_id",
]
