"""Background sweep of abandoned staging files."""
import asyncio
import logging
from pathlib import Path
from typing import List, Optional

from vidpub.infrastructure.filesystem.file_ops import sweep_stale_files

logger = logging.getLogger(__name__)


class StagingJanitor:
    """
    Removes staging files older than a grace period.

    Uploads whose client disconnected mid-transfer never reach the
    orchestrator's cleanup, so their partial files are only reclaimed here.
    The grace period must exceed the longest legitimate pipeline run.
    """

    def __init__(self, staging_dir: Path, grace_seconds: float, interval_seconds: float) -> None:
        self.staging_dir = staging_dir
        self.grace_seconds = grace_seconds
        self.interval_seconds = interval_seconds
        self.running = False
        self._stop_event = asyncio.Event()

    def sweep_once(self, now: Optional[float] = None) -> List[Path]:
        removed = sweep_stale_files(self.staging_dir, self.grace_seconds, now=now)
        if removed:
            logger.warning(f"Removed {len(removed)} abandoned staging file(s)")
        return removed

    async def start_background_sweeper(self) -> None:
        """Sweep until ``stop_background_sweeper`` is called."""
        self.running = True
        self._stop_event.clear()
        logger.info("Staging janitor started")

        while self.running:
            try:
                await asyncio.to_thread(self.sweep_once)
            except OSError as e:
                logger.error(f"Error in staging janitor: {str(e)}")
            try:
                await asyncio.wait_for(self._stop_event.wait(), timeout=self.interval_seconds)
            except asyncio.TimeoutError:
                pass

    def stop_background_sweeper(self) -> None:
        self.running = False
        self._stop_event.set()
        logger.info("Staging janitor stopped")
