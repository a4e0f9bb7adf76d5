"""Fast-start remux (stream copy, no re-encode)."""
from __future__ import annotations

from pathlib import Path
from typing import List

from vidpub.infrastructure.ffmpeg.runner import run_tool_command


class FastStartTranscoder:
    """Relocates the moov atom to the front of an MP4 so playback can start early."""

    def __init__(self, ffmpeg_path: str = "ffmpeg", timeout: int = 600):
        self.ffmpeg_path = ffmpeg_path
        self.timeout = timeout

    @staticmethod
    def output_path_for(source_path: Path) -> Path:
        """``<source>.processed.<ext>`` next to the source."""
        extension = source_path.suffix.lstrip(".") or "mp4"
        return source_path.with_name(f"{source_path.name}.processed.{extension}")

    def build_command(self, input_path: Path, output_path: Path) -> List[str]:
        return [
            self.ffmpeg_path,
            "-i", str(input_path),
            "-movflags", "faststart",
            "-map_metadata", "0",
            "-codec", "copy",
            "-f", "mp4",
            str(output_path),
        ]

    async def remux_fast_start(
        self,
        input_path: Path,
        add_command_callback=None,
        update_status_callback=None,
    ) -> Path:
        """Write the remuxed copy and return its path. The source is left untouched."""
        output_path = self.output_path_for(input_path)
        await run_tool_command(
            self.build_command(input_path, output_path),
            timeout=self.timeout,
            command_type="remux",
            error_prefix="ffmpeg failed",
            source_file=str(input_path),
            add_command_callback=add_command_callback,
            update_status_callback=update_status_callback,
            timeout_message="ffmpeg remux timed out",
        )
        return output_path
