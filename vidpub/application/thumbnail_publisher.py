"""Thumbnail publish flow: stage, upload, commit. No tool stage."""
import logging
from contextlib import ExitStack

from vidpub.application.publish_orchestrator import VideoUpload
from vidpub.application.records import load_owned_record
from vidpub.domain.errors import CommitFailure, IOFailure
from vidpub.domain.models.media import UploadPolicy
from vidpub.domain.models.video import VideoRecord
from vidpub.domain.services.identifiers import build_object_key
from vidpub.infrastructure.filesystem.file_ops import discard_file
from vidpub.infrastructure.filesystem.staging import StagingWriter
from vidpub.infrastructure.persistence.orphan_ledger import OrphanEntry, OrphanLedger
from vidpub.infrastructure.persistence.video_repository import VideoRepository
from vidpub.infrastructure.storage.object_publisher import ObjectPublisher

logger = logging.getLogger(__name__)


class ThumbnailPublisher:
    """Publishes a thumbnail image and points the video record at it."""

    def __init__(
        self,
        stager: StagingWriter,
        publisher: ObjectPublisher,
        repository: VideoRepository,
        orphan_ledger: OrphanLedger,
        policy: UploadPolicy,
    ) -> None:
        self.stager = stager
        self.publisher = publisher
        self.repository = repository
        self.orphan_ledger = orphan_ledger
        self.policy = policy

    async def publish_thumbnail(self, video_id: str, user_id: str, upload: VideoUpload) -> VideoRecord:
        record = load_owned_record(self.repository, video_id, user_id)
        logger.info(f"Uploading thumbnail for video {video_id} by user {user_id}")

        with ExitStack() as owned:
            staged = await self.stager.stage(
                upload.source, self.policy, upload.media_type, upload.declared_size
            )
            owned.callback(discard_file, staged.path)

            key = build_object_key(staged.extension)
            url = await self.publisher.publish(staged.path, key, staged.media_type)

            updated = record.model_copy(update={"thumbnail_url": url})
            try:
                self.repository.update_video(updated)
            except IOFailure as exc:
                logger.error(f"Video {video_id}: thumbnail commit failed, s3 object {key} is orphaned")
                self.orphan_ledger.record(
                    OrphanEntry(video_id=video_id, object_key=key, url=url, reason=str(exc))
                )
                raise CommitFailure("thumbnail uploaded but metadata update failed", key) from exc

        return updated
