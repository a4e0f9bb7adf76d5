"""Application layer - use cases and orchestration."""
from vidpub.application.publish_orchestrator import PublishOrchestrator, VideoUpload
from vidpub.application.records import load_owned_record
from vidpub.application.staging_janitor import StagingJanitor
from vidpub.application.thumbnail_publisher import ThumbnailPublisher

__all__ = [
    "PublishOrchestrator",
    "StagingJanitor",
    "ThumbnailPublisher",
    "VideoUpload",
    "load_owned_record",
]
