"""Ledger of published objects that no metadata record points at."""
import json
import logging
from datetime import datetime
from pathlib import Path
from typing import List

from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)


class OrphanEntry(BaseModel):
    """An object written to storage whose metadata commit failed."""

    video_id: str
    object_key: str
    url: str
    reason: str
    recorded_at: datetime = Field(default_factory=lambda: datetime.now().astimezone())


class OrphanLedger:
    """Append-only JSON-lines file, read back by reconciliation tooling."""

    def __init__(self, path: Path):
        self.path = path

    def record(self, entry: OrphanEntry) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.path, "a", encoding="utf-8") as f:
                f.write(entry.model_dump_json() + "\n")
        except OSError as exc:
            # Ledger loss leaves only the log line below as a trace.
            logger.error(f"Could not record orphan {entry.object_key}: {exc}")

    def list_orphans(self) -> List[OrphanEntry]:
        if not self.path.exists():
            return []
        entries: List[OrphanEntry] = []
        with open(self.path, "r", encoding="utf-8") as f:
            for line in f:
                line = line.strip()
                if line:
                    entries.append(OrphanEntry.model_validate_json(line))
        return entries
