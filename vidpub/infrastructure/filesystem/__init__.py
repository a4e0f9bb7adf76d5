"""Filesystem infrastructure."""
from vidpub.infrastructure.filesystem.file_ops import (
    discard_file,
    sweep_stale_files,
)
from vidpub.infrastructure.filesystem.staging import ByteSource, StagingWriter

__all__ = [
    "ByteSource",
    "StagingWriter",
    "discard_file",
    "sweep_stale_files",
]
