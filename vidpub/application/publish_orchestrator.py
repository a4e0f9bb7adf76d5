"""Video publish pipeline - state machine orchestration."""
import logging
from contextlib import ExitStack
from dataclasses import dataclass
from datetime import datetime
from typing import Awaitable, Callable, Dict, Optional

from nanoid import generate

from vidpub.application.records import load_owned_record
from vidpub.domain.errors import CommitFailure, IOFailure
from vidpub.domain.models.media import UploadPolicy
from vidpub.domain.models.upload_job import (
    CommandLog,
    CommandStatus,
    PipelineState,
    UploadJob,
)
from vidpub.domain.models.video import VideoRecord
from vidpub.domain.services.identifiers import build_object_key
from vidpub.domain.services.orientation import classify_orientation
from vidpub.infrastructure.ffmpeg.prober import FFProber
from vidpub.infrastructure.ffmpeg.remuxer import FastStartTranscoder
from vidpub.infrastructure.filesystem.file_ops import discard_file
from vidpub.infrastructure.filesystem.staging import ByteSource, StagingWriter
from vidpub.infrastructure.persistence.orphan_ledger import OrphanEntry, OrphanLedger
from vidpub.infrastructure.persistence.video_repository import VideoRepository
from vidpub.infrastructure.storage.object_publisher import ObjectPublisher

logger = logging.getLogger(__name__)


def _now_tz():
    return datetime.now().astimezone()


def _make_command_callbacks(job: UploadJob):
    def add_command_log(command_type: str, command: str, source_file: str = None) -> str:
        command_id = generate(size=8)
        job.command_logs.append(
            CommandLog(
                command_id=command_id,
                command_type=command_type,
                command=command,
                status=CommandStatus.PENDING,
                source_file=source_file,
            )
        )
        return command_id

    def update_command_status(command_id: str, status: str, error: str = None):
        for cmd_log in job.command_logs:
            if cmd_log.command_id == command_id:
                cmd_log.status = CommandStatus(status)
                now = _now_tz()
                if status == "running":
                    cmd_log.started_at = now
                elif status in ("completed", "failed"):
                    cmd_log.completed_at = now
                if error:
                    cmd_log.error_message = error
                break

    return add_command_log, update_command_status


@dataclass
class VideoUpload:
    """The incoming byte stream plus what the client declared about it."""

    source: ByteSource
    media_type: Optional[str]
    declared_size: Optional[int] = None


@dataclass
class _PublishRun:
    job: UploadJob
    record: VideoRecord
    upload: VideoUpload
    owned: ExitStack


Step = Callable[[_PublishRun], Awaitable[PipelineState]]


class PublishOrchestrator:
    """
    Drives one upload through
    received -> staged -> probed -> classified -> transcoded -> uploaded -> committed.

    Each step returns the state it reached; any exception moves the job to
    ``failed``. Every temp file is registered on the run's ExitStack before
    (or as) it is created, so it is unlinked whichever state the run ends in.
    """

    def __init__(
        self,
        stager: StagingWriter,
        prober: FFProber,
        transcoder: FastStartTranscoder,
        publisher: ObjectPublisher,
        repository: VideoRepository,
        orphan_ledger: OrphanLedger,
        policy: UploadPolicy,
    ) -> None:
        self.stager = stager
        self.prober = prober
        self.transcoder = transcoder
        self.publisher = publisher
        self.repository = repository
        self.orphan_ledger = orphan_ledger
        self.policy = policy
        self._steps: Dict[PipelineState, Step] = {
            PipelineState.RECEIVED: self._stage,
            PipelineState.STAGED: self._probe,
            PipelineState.PROBED: self._classify,
            PipelineState.CLASSIFIED: self._transcode,
            PipelineState.TRANSCODED: self._upload,
            PipelineState.UPLOADED: self._commit,
        }

    async def publish_video(self, video_id: str, user_id: str, upload: VideoUpload) -> VideoRecord:
        """Publish an uploaded video for ``video_id`` and return the updated record."""
        # NotFound / Forbidden are raised here, before anything touches disk.
        record = load_owned_record(self.repository, video_id, user_id)
        logger.info(f"Uploading video {video_id} by user {user_id}")

        job = UploadJob(video_id=video_id, owner_id=user_id)
        return await self.execute(job, record, upload)

    async def execute(self, job: UploadJob, record: VideoRecord, upload: VideoUpload) -> VideoRecord:
        """Run ``job`` to a terminal state. ``job`` is updated in place."""
        with ExitStack() as owned:
            run = _PublishRun(job=job, record=record, upload=upload, owned=owned)
            try:
                while not job.is_terminal:
                    reached = await self._steps[job.state](run)
                    job.advance(reached)
                    logger.info(f"Video {job.video_id}: {reached.value}")
            except BaseException as exc:
                job.fail(exc)
                logger.error(f"Video {job.video_id} failed in state {job.failed_in.value}: {exc}")
                raise
        return run.record

    async def _stage(self, run: _PublishRun) -> PipelineState:
        upload = run.upload
        staged = await self.stager.stage(
            upload.source, self.policy, upload.media_type, upload.declared_size
        )
        run.owned.callback(discard_file, staged.path)
        run.job.source_path = staged.path
        return PipelineState.STAGED

    async def _probe(self, run: _PublishRun) -> PipelineState:
        add_cmd, update_cmd = _make_command_callbacks(run.job)
        run.job.probe = await self.prober.probe_dimensions(run.job.current_path, add_cmd, update_cmd)
        return PipelineState.PROBED

    async def _classify(self, run: _PublishRun) -> PipelineState:
        probe = run.job.probe
        run.job.orientation = classify_orientation(probe.width, probe.height)
        return PipelineState.CLASSIFIED

    async def _transcode(self, run: _PublishRun) -> PipelineState:
        add_cmd, update_cmd = _make_command_callbacks(run.job)
        source = run.job.current_path
        # ffmpeg may leave a partial output behind on failure.
        run.owned.callback(discard_file, self.transcoder.output_path_for(source))
        run.job.processed_path = await self.transcoder.remux_fast_start(source, add_cmd, update_cmd)
        return PipelineState.TRANSCODED

    async def _upload(self, run: _PublishRun) -> PipelineState:
        job = run.job
        processed = job.current_path
        job.assign_object_key(build_object_key(processed.suffix.lstrip("."), prefix=job.orientation.value))
        job.published_url = await self.publisher.publish(processed, job.object_key, run.upload.media_type)
        return PipelineState.UPLOADED

    async def _commit(self, run: _PublishRun) -> PipelineState:
        job = run.job
        updated = run.record.model_copy(update={"video_url": job.published_url})
        try:
            self.repository.update_video(updated)
        except IOFailure as exc:
            logger.error(
                f"Video {job.video_id}: metadata commit failed, s3 object {job.object_key} is orphaned"
            )
            self.orphan_ledger.record(
                OrphanEntry(
                    video_id=job.video_id,
                    object_key=job.object_key,
                    url=job.published_url,
                    reason=str(exc),
                )
            )
            raise CommitFailure("video uploaded but metadata update failed", job.object_key) from exc
        run.record = updated
        return PipelineState.COMMITTED
