"""FFmpeg infrastructure."""
from vidpub.infrastructure.ffmpeg.prober import FFProber, parse_dimensions
from vidpub.infrastructure.ffmpeg.remuxer import FastStartTranscoder
from vidpub.infrastructure.ffmpeg.runner import ToolOutput, run_tool_command

__all__ = [
    "FFProber",
    "FastStartTranscoder",
    "ToolOutput",
    "parse_dimensions",
    "run_tool_command",
]
