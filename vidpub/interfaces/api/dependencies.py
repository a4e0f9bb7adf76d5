"""FastAPI dependency providers wiring the pipeline from settings."""
from functools import lru_cache
from typing import Optional

from fastapi import Header

from vidpub.application.publish_orchestrator import PublishOrchestrator
from vidpub.application.staging_janitor import StagingJanitor
from vidpub.application.thumbnail_publisher import ThumbnailPublisher
from vidpub.config import settings
from vidpub.domain.models.media import thumbnail_policy, video_policy
from vidpub.infrastructure.auth import get_bearer_token, validate_jwt
from vidpub.infrastructure.ffmpeg import FastStartTranscoder, FFProber
from vidpub.infrastructure.filesystem import StagingWriter
from vidpub.infrastructure.persistence import OrphanLedger, VideoRepository
from vidpub.infrastructure.storage import ObjectPublisher


@lru_cache
def get_video_repository() -> VideoRepository:
    return VideoRepository(settings.records_root_dir)


@lru_cache
def get_staging_writer() -> StagingWriter:
    return StagingWriter(settings.staging_dir)


@lru_cache
def get_object_publisher() -> ObjectPublisher:
    return ObjectPublisher(
        bucket=settings.s3_bucket,
        region=settings.s3_region,
        endpoint_url=settings.s3_endpoint_url,
        public_base_url=settings.public_base_url,
    )


@lru_cache
def get_publish_orchestrator() -> PublishOrchestrator:
    return PublishOrchestrator(
        stager=get_staging_writer(),
        prober=FFProber(settings.get_ffprobe_bin(), settings.tool_timeout),
        transcoder=FastStartTranscoder(settings.get_ffmpeg_bin(), settings.tool_timeout),
        publisher=get_object_publisher(),
        repository=get_video_repository(),
        orphan_ledger=OrphanLedger(settings.orphan_ledger_path),
        policy=video_policy(settings.video_max_bytes),
    )


@lru_cache
def get_thumbnail_publisher() -> ThumbnailPublisher:
    return ThumbnailPublisher(
        stager=get_staging_writer(),
        publisher=get_object_publisher(),
        repository=get_video_repository(),
        orphan_ledger=OrphanLedger(settings.orphan_ledger_path),
        policy=thumbnail_policy(settings.thumbnail_max_bytes),
    )


def get_staging_janitor() -> StagingJanitor:
    return StagingJanitor(
        settings.staging_dir,
        grace_seconds=settings.staging_grace_seconds,
        interval_seconds=settings.janitor_interval_seconds,
    )


def get_current_user_id(authorization: Optional[str] = Header(None)) -> str:
    """Authenticated user id from the bearer token."""
    token = get_bearer_token(authorization)
    return validate_jwt(token, settings.jwt_secret)
