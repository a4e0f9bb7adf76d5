"""Orientation classification (pure math, no I/O)."""
from typing import Any

from vidpub.domain.errors import UnprocessableMedia
from vidpub.domain.models.upload_job import Orientation

LANDSCAPE_RATIO = 16 / 9
PORTRAIT_RATIO = 9 / 16
# Absorbs encoder rounding (e.g. 1920x1088, 854x480). Changing it reshuffles
# the storage prefix of existing content.
RATIO_TOLERANCE = 0.01


def _positive_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value > 0


def classify_orientation(width: Any, height: Any) -> Orientation:
    """Classify frame dimensions as landscape, portrait or other."""
    if not _positive_int(width) or not _positive_int(height):
        raise UnprocessableMedia(f"Could not determine video dimensions ({width}x{height})")

    ratio = width / height
    if abs(ratio - LANDSCAPE_RATIO) < RATIO_TOLERANCE:
        return Orientation.LANDSCAPE
    if abs(ratio - PORTRAIT_RATIO) < RATIO_TOLERANCE:
        return Orientation.PORTRAIT
    return Orientation.OTHER
