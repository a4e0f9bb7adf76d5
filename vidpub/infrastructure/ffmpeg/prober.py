"""FFprobe operations."""
from __future__ import annotations

import json
from pathlib import Path
from typing import Any, List, Optional

from vidpub.domain.errors import UnprocessableMedia
from vidpub.domain.models.upload_job import ProbeResult
from vidpub.infrastructure.ffmpeg.runner import run_tool_command


class FFProber:
    """FFprobe wrapper for stream dimension extraction."""

    def __init__(self, ffprobe_path: str = "ffprobe", timeout: int = 600):
        self.ffprobe_path = ffprobe_path
        self.timeout = timeout

    def build_command(self, video_path: Path) -> List[str]:
        return [
            self.ffprobe_path,
            "-v", "error",
            "-select_streams", "v:0",
            "-show_entries", "stream=width,height",
            "-of", "json",
            str(video_path),
        ]

    async def probe_dimensions(
        self,
        video_path: Path,
        add_command_callback=None,
        update_status_callback=None,
    ) -> ProbeResult:
        """Get width and height of the first video stream."""
        output = await run_tool_command(
            self.build_command(video_path),
            timeout=self.timeout,
            command_type="probe",
            error_prefix="ffprobe failed",
            source_file=str(video_path),
            add_command_callback=add_command_callback,
            update_status_callback=update_status_callback,
        )
        return parse_dimensions(output.stdout_text)


def parse_dimensions(payload: str) -> ProbeResult:
    """Parse ``streams[0].width/height`` from ffprobe JSON output."""
    try:
        info: Any = json.loads(payload)
    except ValueError as exc:
        raise UnprocessableMedia("failed to parse ffprobe output") from exc

    streams = info.get("streams") if isinstance(info, dict) else None
    if not streams or not isinstance(streams[0], dict):
        raise UnprocessableMedia("No video stream found")

    width: Optional[Any] = streams[0].get("width")
    height: Optional[Any] = streams[0].get("height")
    if not isinstance(width, int) or not isinstance(height, int) or width <= 0 or height <= 0:
        raise UnprocessableMedia("Could not determine video dimensions")

    return ProbeResult(width=width, height=height)
