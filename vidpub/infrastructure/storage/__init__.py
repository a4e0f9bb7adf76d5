"""Object storage infrastructure."""
from vidpub.infrastructure.storage.object_publisher import ObjectPublisher

__all__ = ["ObjectPublisher"]
