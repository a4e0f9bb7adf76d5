"""Upload job domain models."""
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Dict, FrozenSet, List, Optional

from pydantic import BaseModel, ConfigDict, Field


def _now_tz() -> datetime:
    return datetime.now().astimezone()


class Orientation(str, Enum):
    """Coarse aspect-ratio class of a video frame."""

    LANDSCAPE = "landscape"
    PORTRAIT = "portrait"
    OTHER = "other"


class PipelineState(str, Enum):
    """Publish pipeline state."""

    RECEIVED = "received"
    STAGED = "staged"
    PROBED = "probed"
    CLASSIFIED = "classified"
    TRANSCODED = "transcoded"
    UPLOADED = "uploaded"
    COMMITTED = "committed"
    FAILED = "failed"


TERMINAL_STATES: FrozenSet[PipelineState] = frozenset(
    {PipelineState.COMMITTED, PipelineState.FAILED}
)

# Forward edges; FAILED is reachable from every non-terminal state.
_NEXT_STATE: Dict[PipelineState, PipelineState] = {
    PipelineState.RECEIVED: PipelineState.STAGED,
    PipelineState.STAGED: PipelineState.PROBED,
    PipelineState.PROBED: PipelineState.CLASSIFIED,
    PipelineState.CLASSIFIED: PipelineState.TRANSCODED,
    PipelineState.TRANSCODED: PipelineState.UPLOADED,
    PipelineState.UPLOADED: PipelineState.COMMITTED,
}


class CommandStatus(str, Enum):
    """Command execution status."""

    PENDING = "pending"
    RUNNING = "running"
    COMPLETED = "completed"
    FAILED = "failed"


class CommandLog(BaseModel):
    """External tool execution log."""

    command_id: str
    command_type: str
    command: str
    status: CommandStatus = CommandStatus.PENDING
    source_file: Optional[str] = None
    started_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None
    error_message: Optional[str] = None


class ProbeResult(BaseModel):
    """Stream dimensions reported by the inspection tool."""

    width: int
    height: int


class InvalidTransition(RuntimeError):
    """Raised when the pipeline is driven along an edge it does not have."""


class UploadJob(BaseModel):
    """One publish request, owned and mutated only by the orchestrator."""

    video_id: str
    owner_id: str
    state: PipelineState = PipelineState.RECEIVED

    source_path: Optional[Path] = None
    processed_path: Optional[Path] = None
    probe: Optional[ProbeResult] = None
    orientation: Optional[Orientation] = None
    object_key: Optional[str] = None
    published_url: Optional[str] = None

    created_at: datetime = Field(default_factory=_now_tz)
    finished_at: Optional[datetime] = None
    failed_in: Optional[PipelineState] = None
    error_message: Optional[str] = None

    command_logs: List[CommandLog] = Field(default_factory=list)

    model_config = ConfigDict(arbitrary_types_allowed=True)

    @property
    def is_terminal(self) -> bool:
        return self.state in TERMINAL_STATES

    @property
    def current_path(self) -> Optional[Path]:
        """The file the next stage operates on."""
        return self.processed_path or self.source_path

    def advance(self, target: PipelineState) -> None:
        if _NEXT_STATE.get(self.state) != target:
            raise InvalidTransition(f"{self.state.value} -> {target.value}")
        self.state = target
        if target in TERMINAL_STATES:
            self.finished_at = _now_tz()

    def fail(self, error: Exception) -> None:
        if self.is_terminal:
            raise InvalidTransition(f"{self.state.value} -> failed")
        self.failed_in = self.state
        self.error_message = str(error)
        self.state = PipelineState.FAILED
        self.finished_at = _now_tz()

    def assign_object_key(self, key: str) -> None:
        if self.orientation is None:
            raise InvalidTransition("object key assigned before orientation is known")
        self.object_key = key
