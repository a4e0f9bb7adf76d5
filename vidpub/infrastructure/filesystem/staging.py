"""Staging writer: receives upload bytes into the scratch directory."""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional, Protocol

from vidpub.domain.errors import IOFailure, PayloadTooLarge, UnsupportedMediaType
from vidpub.domain.models.media import StagedFile, UploadPolicy
from vidpub.domain.services.identifiers import random_id
from vidpub.infrastructure.filesystem.file_ops import discard_file

logger = logging.getLogger(__name__)

CHUNK_SIZE = 1024 * 1024


class ByteSource(Protocol):
    """Anything with an async ``read(size)``, e.g. a Starlette ``UploadFile``."""

    async def read(self, size: int = -1) -> bytes: ...


class StagingWriter:
    """Writes accepted uploads to ``<staging_dir>/<random-id>.<ext>``."""

    def __init__(self, staging_dir: Path, chunk_size: int = CHUNK_SIZE):
        self.staging_dir = staging_dir.resolve()
        self.chunk_size = chunk_size

    def new_path(self, extension: str) -> Path:
        return self.staging_dir / f"{random_id()}.{extension}"

    def check(self, policy: UploadPolicy, media_type: Optional[str], declared_size: Optional[int]) -> str:
        """Validate declared type and size; return the file extension to use."""
        if declared_size is not None and declared_size > policy.max_bytes:
            raise PayloadTooLarge(f"{policy.name} exceeds {policy.max_bytes} bytes")
        if not media_type or media_type not in policy.allowed_types:
            allowed = ", ".join(sorted(policy.allowed_types))
            raise UnsupportedMediaType(f"unsupported {policy.name} type {media_type!r}; expected {allowed}")
        return policy.extension_for(media_type)

    async def stage(
        self,
        source: ByteSource,
        policy: UploadPolicy,
        media_type: Optional[str],
        declared_size: Optional[int] = None,
    ) -> StagedFile:
        """
        Stream ``source`` into a new staging file.

        The measured size is enforced while writing, so a client that lies
        about its size is cut off at the ceiling. On any error the partial
        file is removed; on success the caller owns the returned path.

        Raises:
            PayloadTooLarge, UnsupportedMediaType, IOFailure
        """
        extension = self.check(policy, media_type, declared_size)

        try:
            self.staging_dir.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise IOFailure(f"staging directory unavailable: {exc}") from exc

        path = self.new_path(extension)
        written = 0
        try:
            with open(path, "xb") as f:
                while True:
                    chunk = await source.read(self.chunk_size)
                    if not chunk:
                        break
                    written += len(chunk)
                    if written > policy.max_bytes:
                        raise PayloadTooLarge(f"{policy.name} exceeds {policy.max_bytes} bytes")
                    f.write(chunk)
        except OSError as exc:
            discard_file(path)
            raise IOFailure(f"failed to write staging file: {exc}") from exc
        except BaseException:
            discard_file(path)
            raise

        logger.debug(f"Staged {written} bytes at {path.name}")
        return StagedFile(path=path, size_bytes=written, media_type=media_type)
