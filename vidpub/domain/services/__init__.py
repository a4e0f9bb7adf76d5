"""Domain services."""
from vidpub.domain.services.identifiers import build_object_key, random_id
from vidpub.domain.services.orientation import classify_orientation

__all__ = [
    "build_object_key",
    "classify_orientation",
    "random_id",
]
