"""Tests for the staging writer."""

import asyncio

import pytest

from tests.fakes import MP4_BYTES, BytesSource
from vidpub.domain.errors import IOFailure, PayloadTooLarge, UnsupportedMediaType
from vidpub.domain.models.media import thumbnail_policy, video_policy
from vidpub.infrastructure.filesystem.staging import StagingWriter


@pytest.mark.asyncio
class TestStage:
    async def test_writes_file_with_random_name(self, stager, staging_dir):
        staged = await stager.stage(BytesSource(MP4_BYTES), video_policy(1 << 20), "video/mp4")

        assert staged.path.parent == staging_dir.resolve()
        assert staged.path.suffix == ".mp4"
        assert staged.size_bytes == len(MP4_BYTES)
        assert staged.path.read_bytes() == MP4_BYTES
        assert staged.media_type == "video/mp4"

    async def test_creates_missing_staging_dir(self, stager, staging_dir):
        assert not staging_dir.exists()
        await stager.stage(BytesSource(b"x"), video_policy(10), "video/mp4")
        assert staging_dir.is_dir()

    async def test_rejects_declared_oversize_before_writing(self, stager, staging_dir):
        with pytest.raises(PayloadTooLarge):
            await stager.stage(BytesSource(b"x"), video_policy(10), "video/mp4", declared_size=11)
        assert not staging_dir.exists()

    async def test_rejects_measured_oversize_and_removes_partial(self, stager, staging_dir):
        # Client claims 10 bytes but sends 5000; chunk size is 1024.
        with pytest.raises(PayloadTooLarge):
            await stager.stage(BytesSource(b"a" * 5000), video_policy(2048), "video/mp4", declared_size=10)
        assert list(staging_dir.iterdir()) == []

    async def test_exactly_at_ceiling_is_accepted(self, stager):
        staged = await stager.stage(BytesSource(b"a" * 2048), video_policy(2048), "video/mp4")
        assert staged.size_bytes == 2048

    @pytest.mark.parametrize("media_type", ["video/quicktime", "image/png", "", None])
    async def test_rejects_disallowed_video_type(self, stager, staging_dir, media_type):
        with pytest.raises(UnsupportedMediaType):
            await stager.stage(BytesSource(MP4_BYTES), video_policy(1 << 20), media_type)
        assert not staging_dir.exists()

    async def test_payload_too_large_is_a_bad_request(self, stager):
        from vidpub.domain.errors import BadRequest

        with pytest.raises(BadRequest):
            await stager.stage(BytesSource(b"x"), video_policy(0), "video/mp4", declared_size=1)

    @pytest.mark.parametrize("media_type,suffix", [("image/jpeg", ".jpg"), ("image/png", ".png")])
    async def test_thumbnail_types(self, stager, media_type, suffix):
        staged = await stager.stage(BytesSource(b"img"), thumbnail_policy(1024), media_type)
        assert staged.path.suffix == suffix

    async def test_unwritable_staging_dir_is_io_failure(self, tmp_path):
        blocker = tmp_path / "blocker"
        blocker.write_text("not a directory")
        writer = StagingWriter(blocker / "tmp")
        with pytest.raises(IOFailure):
            await writer.stage(BytesSource(b"x"), video_policy(10), "video/mp4")

    async def test_failing_source_removes_partial(self, stager, staging_dir):
        class BrokenSource:
            def __init__(self):
                self.calls = 0

            async def read(self, size=-1):
                self.calls += 1
                if self.calls > 1:
                    raise ConnectionResetError("client went away")
                return b"a" * size

        with pytest.raises(IOFailure):
            await stager.stage(BrokenSource(), video_policy(1 << 20), "video/mp4")
        assert list(staging_dir.iterdir()) == []

    async def test_concurrent_stages_never_share_a_filename(self, stager, staging_dir):
        n = 1000
        results = await asyncio.gather(
            *(stager.stage(BytesSource(b"v"), video_policy(10), "video/mp4") for _ in range(n))
        )
        paths = {r.path for r in results}
        assert len(paths) == n
        assert len(list(staging_dir.iterdir())) == n
