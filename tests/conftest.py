"""Shared test fixtures for vidpub."""

from pathlib import Path
from typing import Optional

import pytest

from tests.fakes import OWNER_ID, FakeS3Client, InProcessProber, InProcessTranscoder
from vidpub.application.publish_orchestrator import PublishOrchestrator
from vidpub.domain.models.media import video_policy
from vidpub.domain.models.video import VideoRecord
from vidpub.infrastructure.filesystem.staging import StagingWriter
from vidpub.infrastructure.persistence.orphan_ledger import OrphanLedger
from vidpub.infrastructure.persistence.video_repository import VideoRepository
from vidpub.infrastructure.storage.object_publisher import ObjectPublisher


@pytest.fixture
def staging_dir(tmp_path: Path) -> Path:
    return tmp_path / "assets" / "tmp"


@pytest.fixture
def stager(staging_dir: Path) -> StagingWriter:
    return StagingWriter(staging_dir, chunk_size=1024)


@pytest.fixture
def s3_client() -> FakeS3Client:
    return FakeS3Client()


@pytest.fixture
def publisher(s3_client: FakeS3Client) -> ObjectPublisher:
    return ObjectPublisher(bucket="test-bucket", region="us-east-2", client=s3_client)


@pytest.fixture
def repository(tmp_path: Path) -> VideoRepository:
    return VideoRepository(tmp_path / "records")


@pytest.fixture
def orphan_ledger(tmp_path: Path) -> OrphanLedger:
    return OrphanLedger(tmp_path / "records" / "orphans.jsonl")


@pytest.fixture
def video_record(repository: VideoRepository) -> VideoRecord:
    record = VideoRecord(id=repository.generate_video_id(), user_id=OWNER_ID, title="Boots")
    repository.create_video(record)
    return record


@pytest.fixture
def make_orchestrator(stager, publisher, repository, orphan_ledger):
    def _make(prober=None, transcoder=None, repo: Optional[VideoRepository] = None, max_bytes: int = 1024 * 1024):
        return PublishOrchestrator(
            stager=stager,
            prober=prober or InProcessProber(),
            transcoder=transcoder or InProcessTranscoder(),
            publisher=publisher,
            repository=repo or repository,
            orphan_ledger=orphan_ledger,
            policy=video_policy(max_bytes),
        )

    return _make
