"""
Application settings.

Centralizes configuration using Pydantic BaseSettings. This keeps defaults
in one place and allows overriding via environment variables.
"""
from __future__ import annotations

from pathlib import Path
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict

GIB = 1024 * 1024 * 1024
MIB = 1024 * 1024


class Settings(BaseSettings):
    """Application configuration."""

    # Server
    host: str = "0.0.0.0"
    port: int = 8091

    # Storage
    assets_root_dir: Path = Path("./assets")
    records_root_dir: Path = Path("./records")
    orphan_ledger_path: Path = Path("./records/orphans.jsonl")

    # Upload limits
    video_max_bytes: int = 1 * GIB
    thumbnail_max_bytes: int = 10 * MIB

    # FFmpeg
    ffmpeg_path: Optional[str] = None
    tool_timeout: int = 600

    # Object storage
    s3_bucket: str = "vidpub-media"
    s3_region: str = "us-east-1"
    s3_endpoint_url: Optional[str] = None
    public_base_url: Optional[str] = None

    # Auth
    jwt_secret: str = "change-me"

    # Staging janitor
    staging_grace_seconds: int = 3600
    janitor_interval_seconds: int = 300

    # Logging
    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_prefix="VIDPUB_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    @property
    def staging_dir(self) -> Path:
        """Scratch directory for files mid-pipeline."""
        return self.assets_root_dir / "tmp"

    def get_ffmpeg_bin(self) -> str:
        """Return ffmpeg binary path (uses custom path if configured)."""
        if self.ffmpeg_path:
            return str(Path(self.ffmpeg_path) / "ffmpeg")
        return "ffmpeg"

    def get_ffprobe_bin(self) -> str:
        """Return ffprobe binary path (uses custom path if configured)."""
        if self.ffmpeg_path:
            return str(Path(self.ffmpeg_path) / "ffprobe")
        return "ffprobe"


# Singleton instance
settings = Settings()
