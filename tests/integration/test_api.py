"""HTTP-level tests for the videos and thumbnails routers."""

import pytest
from fastapi.testclient import TestClient

from tests.fakes import MP4_BYTES, OTHER_USER_ID, OWNER_ID, InProcessProber, ScriptedProber, staged_files
from vidpub.application.thumbnail_publisher import ThumbnailPublisher
from vidpub.config import settings
from vidpub.domain.models.media import thumbnail_policy
from vidpub.infrastructure.auth import make_jwt
from vidpub.interfaces.api.app import app
from vidpub.interfaces.api.dependencies import (
    get_publish_orchestrator,
    get_thumbnail_publisher,
    get_video_repository,
)


def auth(user_id: str = OWNER_ID) -> dict:
    return {"Authorization": f"Bearer {make_jwt(user_id, settings.jwt_secret)}"}


@pytest.fixture
def wire(make_orchestrator, stager, publisher, repository, orphan_ledger):
    """Point the app's providers at test instances; returns a setter for the prober."""
    state = {"prober": InProcessProber()}

    app.dependency_overrides[get_video_repository] = lambda: repository
    app.dependency_overrides[get_publish_orchestrator] = lambda: make_orchestrator(prober=state["prober"])
    app.dependency_overrides[get_thumbnail_publisher] = lambda: ThumbnailPublisher(
        stager, publisher, repository, orphan_ledger, thumbnail_policy(1024)
    )
    yield state
    app.dependency_overrides.clear()


@pytest.fixture
def client(wire) -> TestClient:
    return TestClient(app)


class TestHealth:
    def test_health(self):
        assert TestClient(app).get("/health").json() == {"status": "healthy"}


class TestVideoRecords:
    def test_create_and_get(self, client):
        created = client.post("/api/videos", json={"title": "Boots"}, headers=auth())
        assert created.status_code == 201
        body = created.json()
        assert body["user_id"] == OWNER_ID
        assert body["video_url"] is None

        fetched = client.get(f"/api/videos/{body['id']}", headers=auth())
        assert fetched.status_code == 200
        assert fetched.json()["title"] == "Boots"

    def test_requires_token(self, client):
        response = client.post("/api/videos", json={"title": "Boots"})
        assert response.status_code == 401
        assert response.json()["kind"] == "unauthorized"

    def test_other_users_record_is_forbidden(self, client, video_record):
        response = client.get(f"/api/videos/{video_record.id}", headers=auth(OTHER_USER_ID))
        assert response.status_code == 403

    def test_uppercase_id_resolves_to_stored_record(self, client, video_record):
        response = client.get(f"/api/videos/{video_record.id.upper()}", headers=auth())
        assert response.status_code == 200
        assert response.json()["id"] == video_record.id


class TestUploadVideo:
    def _post(self, client, video_id, data=MP4_BYTES, content_type="video/mp4", user_id=OWNER_ID):
        return client.post(
            f"/api/videos/{video_id}",
            files={"video": ("clip.mp4", data, content_type)},
            headers=auth(user_id),
        )

    def test_success_returns_updated_record(self, client, video_record, s3_client, staging_dir):
        response = self._post(client, video_record.id)

        assert response.status_code == 200
        body = response.json()
        assert body["id"] == video_record.id
        assert body["video_url"].startswith("https://test-bucket.s3.us-east-2.amazonaws.com/landscape/")
        assert len(s3_client.objects) == 1
        assert staged_files(staging_dir) == []

    def test_uppercase_id_publishes_to_stored_record(self, client, video_record, repository, s3_client):
        response = self._post(client, video_record.id.upper())

        assert response.status_code == 200
        assert response.json()["id"] == video_record.id
        assert repository.get_video(video_record.id).video_url == response.json()["video_url"]
        assert len(s3_client.objects) == 1

    def test_invalid_video_id(self, client):
        response = self._post(client, "not-a-uuid")
        assert response.status_code == 400
        assert response.json()["kind"] == "bad_request"

    def test_unknown_video(self, client, repository):
        response = self._post(client, repository.generate_video_id())
        assert response.status_code == 404

    def test_owner_mismatch(self, client, video_record, staging_dir, s3_client):
        response = self._post(client, video_record.id, user_id=OTHER_USER_ID)
        assert response.status_code == 403
        assert response.json()["kind"] == "forbidden"
        assert not staging_dir.exists()
        assert s3_client.objects == {}

    def test_wrong_type(self, client, video_record):
        response = self._post(client, video_record.id, content_type="video/quicktime")
        assert response.status_code == 400
        assert response.json()["kind"] == "unsupported_media_type"

    def test_oversize(self, client, video_record, s3_client):
        response = self._post(client, video_record.id, data=b"a" * (2 * 1024 * 1024))
        assert response.status_code == 400
        assert response.json()["kind"] == "payload_too_large"
        assert s3_client.objects == {}

    def test_probe_failure_hides_stderr(self, client, wire, video_record, s3_client, staging_dir):
        wire["prober"] = ScriptedProber("import sys; sys.stderr.write('secret /srv/path detail'); sys.exit(1)")

        response = self._post(client, video_record.id)

        assert response.status_code == 400
        body = response.json()
        assert body["kind"] == "tool_failure"
        assert "secret" not in body["detail"]
        assert s3_client.objects == {}
        assert staged_files(staging_dir) == []


class TestUploadThumbnail:
    def test_success(self, client, video_record, s3_client):
        response = client.post(
            f"/api/thumbnails/{video_record.id}",
            files={"thumbnail": ("thumb.png", b"\x89PNG....", "image/png")},
            headers=auth(),
        )
        assert response.status_code == 200
        assert response.json()["thumbnail_url"].endswith(".png")
        assert len(s3_client.objects) == 1

    def test_rejects_video_as_thumbnail(self, client, video_record):
        response = client.post(
            f"/api/thumbnails/{video_record.id}",
            files={"thumbnail": ("clip.mp4", MP4_BYTES, "video/mp4")},
            headers=auth(),
        )
        assert response.status_code == 400
