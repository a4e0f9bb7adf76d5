"""Object storage publisher (S3 or S3-compatible)."""
from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Any, Optional

import boto3
from boto3.exceptions import S3UploadFailedError
from boto3.s3.transfer import TransferConfig
from botocore.exceptions import BotoCoreError, ClientError

from vidpub.domain.errors import StorageFailure

logger = logging.getLogger(__name__)

MULTIPART_THRESHOLD = 8 * 1024 * 1024
MULTIPART_CHUNKSIZE = 16 * 1024 * 1024


class ObjectPublisher:
    """Uploads finished local files and returns their public address."""

    def __init__(
        self,
        bucket: str,
        region: str,
        endpoint_url: Optional[str] = None,
        public_base_url: Optional[str] = None,
        client: Any = None,
    ):
        self.bucket = bucket
        self.region = region
        self.endpoint_url = endpoint_url
        self.public_base_url = public_base_url.rstrip("/") if public_base_url else None
        self._client = client
        self.transfer_config = TransferConfig(
            multipart_threshold=MULTIPART_THRESHOLD,
            multipart_chunksize=MULTIPART_CHUNKSIZE,
            max_concurrency=4,
            use_threads=True,
        )

    @property
    def client(self) -> Any:
        if self._client is None:
            self._client = boto3.client("s3", region_name=self.region, endpoint_url=self.endpoint_url)
        return self._client

    def public_url(self, key: str) -> str:
        """Deterministic URL for ``key``; virtual-hosted S3 style unless overridden."""
        if self.public_base_url:
            return f"{self.public_base_url}/{key}"
        return f"https://{self.bucket}.s3.{self.region}.amazonaws.com/{key}"

    async def publish(self, local_path: Path, key: str, content_type: str) -> str:
        """
        Upload ``local_path`` under ``key`` and return the public URL.

        The URL is only returned once ``head_object`` confirms the stored
        object has the local file's size.

        Raises:
            StorageFailure: Upload failed or could not be confirmed.
        """
        try:
            size = local_path.stat().st_size
        except OSError as exc:
            raise StorageFailure(f"cannot read {local_path.name}: {exc}") from exc

        try:
            await asyncio.to_thread(self._upload_and_verify, local_path, key, content_type, size)
        except StorageFailure:
            raise
        except (BotoCoreError, ClientError, S3UploadFailedError, OSError) as exc:
            logger.error(f"Upload of s3://{self.bucket}/{key} failed: {exc}")
            raise StorageFailure(f"upload of {key} did not complete") from exc

        logger.info(f"Uploaded s3://{self.bucket}/{key} ({size} bytes)")
        return self.public_url(key)

    def _upload_and_verify(self, local_path: Path, key: str, content_type: str, size: int) -> None:
        self.client.upload_file(
            str(local_path),
            self.bucket,
            key,
            ExtraArgs={"ContentType": content_type},
            Config=self.transfer_config,
        )
        head = self.client.head_object(Bucket=self.bucket, Key=key)
        remote_size = head.get("ContentLength")
        if remote_size != size:
            logger.error(f"s3://{self.bucket}/{key} has {remote_size} bytes, expected {size}")
            raise StorageFailure(f"upload of {key} could not be verified")
