"""Record lookup shared by the publish flows."""
from vidpub.domain.errors import Forbidden, NotFound
from vidpub.domain.models.video import VideoRecord
from vidpub.infrastructure.persistence.video_repository import VideoRepository


def load_owned_record(repository: VideoRepository, video_id: str, user_id: str) -> VideoRecord:
    """Fetch ``video_id`` and require that ``user_id`` owns it."""
    record = repository.get_video(video_id)
    if record is None:
        raise NotFound(f"Couldn't find video {video_id}")
    if record.user_id != user_id:
        raise Forbidden("You are not the owner of this video")
    return record
