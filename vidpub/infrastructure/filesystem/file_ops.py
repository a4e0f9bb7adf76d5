"""File operations infrastructure."""
import logging
import time
from pathlib import Path
from typing import List, Optional

logger = logging.getLogger(__name__)


def discard_file(path: Optional[Path]) -> bool:
    """Unlink ``path`` if it exists. Returns True when a file was removed."""
    if path is None:
        return False
    try:
        path.unlink()
        return True
    except FileNotFoundError:
        return False
    except OSError as exc:
        logger.error(f"Failed to remove temp file {path}: {exc}")
        return False


def sweep_stale_files(directory: Path, max_age_seconds: float, now: Optional[float] = None) -> List[Path]:
    """Remove regular files in ``directory`` not modified for ``max_age_seconds``."""
    removed: List[Path] = []
    if not directory.is_dir():
        return removed

    cutoff = (now if now is not None else time.time()) - max_age_seconds
    for entry in directory.iterdir():
        try:
            if not entry.is_file() or entry.stat().st_mtime >= cutoff:
                continue
        except FileNotFoundError:
            continue
        if discard_file(entry):
            removed.append(entry)
    return removed
