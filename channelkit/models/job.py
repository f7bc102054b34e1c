"""Job handle - state of one in-flight or completed generation."""

import asyncio
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from .artifact import Artifact
from .history import HistoryItem
from .request import GenerationRequest
from ..errors import ClassifiedError


class JobStatus(Enum):
    IDLE = "idle"
    SUBMITTING = "submitting"
    POLLING = "polling"
    SUCCEEDED = "succeeded"
    FAILED = "failed"
    TIMED_OUT = "timed_out"
    CANCELLED = "cancelled"

    @property
    def is_terminal(self) -> bool:
        return self in TERMINAL_STATUSES


TERMINAL_STATUSES = frozenset({
    JobStatus.SUCCEEDED,
    JobStatus.FAILED,
    JobStatus.TIMED_OUT,
    JobStatus.CANCELLED,
})

# status -> statuses it may move to
TRANSITIONS: dict[JobStatus, frozenset[JobStatus]] = {
    JobStatus.IDLE: frozenset({JobStatus.SUBMITTING, JobStatus.FAILED}),
    JobStatus.SUBMITTING: frozenset({
        JobStatus.POLLING,
        JobStatus.SUCCEEDED,
        JobStatus.FAILED,
        JobStatus.CANCELLED,
    }),
    JobStatus.POLLING: frozenset({
        JobStatus.SUCCEEDED,
        JobStatus.FAILED,
        JobStatus.TIMED_OUT,
        JobStatus.CANCELLED,
    }),
    JobStatus.SUCCEEDED: frozenset(),
    JobStatus.FAILED: frozenset(),
    JobStatus.TIMED_OUT: frozenset(),
    JobStatus.CANCELLED: frozenset(),
}

CANCELLABLE_STATUSES = frozenset({JobStatus.SUBMITTING, JobStatus.POLLING})


class Phase:
    """Human-readable progress labels."""
    VALIDATING = "validating"
    SUBMITTING = "submitting"
    GENERATING = "generating"
    WAITING = "waiting for remote processing"
    DOWNLOADING = "downloading result"
    SAVING = "saving result"
    DONE = "done"
    FAILED = "failed"
    TIMED_OUT = "timed out"
    CANCELLED = "cancelled"


class InvalidTransitionError(RuntimeError):
    """A job was moved along an edge the state machine does not allow."""
    pass


@dataclass
class JobHandle:
    id: str
    request: GenerationRequest
    started_at: float  # time.monotonic() at submission
    status: JobStatus = JobStatus.IDLE
    phase: str = Phase.VALIDATING
    result_ref: str | None = None  # remote operation name, only while Submitting/Polling
    attempts: int = 0  # poll cycles
    transitions: list[JobStatus] = field(default_factory=list)
    artifact: Artifact | None = None
    artifact_path: Path | None = None
    history_item: HistoryItem | None = None
    error: ClassifiedError | None = None
    cancel_event: asyncio.Event = field(default_factory=asyncio.Event, repr=False, compare=False)
    task: "asyncio.Task | None" = field(default=None, repr=False, compare=False)

    @property
    def is_terminal(self) -> bool:
        return self.status.is_terminal

    @property
    def cancel_requested(self) -> bool:
        return self.cancel_event.is_set()

    def move_to(self, status: JobStatus) -> None:
        """Advance along the state machine, recording the transition."""
        if status not in TRANSITIONS[self.status]:
            raise InvalidTransitionError(
                f"Job {self.id}: cannot move from {self.status.value} to {status.value}"
            )
        self.status = status
        self.transitions.append(status)
        if status not in CANCELLABLE_STATUSES:
            self.result_ref = None
