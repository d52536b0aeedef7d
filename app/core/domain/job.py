"""
Job Domain Models

Value Objects:
- JobId: Identity
- JobSpec: What to synthesize (immutable)

Aggregate Root:
- Job: owner, status machine and outcome of one conversion
"""

import uuid
from dataclasses import dataclass, field
from typing import Optional
from datetime import datetime, timezone
from enum import Enum

from ..exceptions import InvalidTransitionError, ValidationError


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class JobStatus(str, Enum):
    """
    Job status enum
    Defines valid job states and transitions
    """
    QUEUED = "queued"
    PROCESSING = "processing"
    COMPLETED = "completed"
    FAILED = "failed"

    def is_terminal(self) -> bool:
        """Check if status is terminal (cannot transition)"""
        return self in (JobStatus.COMPLETED, JobStatus.FAILED)

    def is_active(self) -> bool:
        """Check if status is active (job is waiting or running)"""
        return not self.is_terminal()

    def can_transition_to(self, target: "JobStatus") -> bool:
        return target in _TRANSITIONS[self]


_TRANSITIONS = {
    JobStatus.QUEUED: frozenset({JobStatus.PROCESSING, JobStatus.COMPLETED, JobStatus.FAILED}),
    JobStatus.PROCESSING: frozenset({JobStatus.COMPLETED, JobStatus.FAILED}),
    JobStatus.COMPLETED: frozenset(),
    JobStatus.FAILED: frozenset(),
}


@dataclass(frozen=True)
class JobId:
    """
    Value Object cho Job ID
    Opaque, unique for the lifetime of the process
    """
    value: str

    def __post_init__(self):
        if not self.value:
            raise ValueError("Job ID cannot be empty")

    @classmethod
    def new(cls) -> "JobId":
        return cls(uuid.uuid4().hex)

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class JobSpec:
    """
    Value Object cho Job Specification
    Immutable - once created, cannot be changed
    """
    text: str
    voice_id: str

    def __post_init__(self):
        if not self.text or not self.text.strip():
            raise ValidationError("Text cannot be empty")
        if not self.voice_id:
            raise ValidationError("voiceId is required")

    @property
    def char_count(self) -> int:
        return len(self.text)

    def snippet(self, length: int = 50) -> str:
        if len(self.text) <= length:
            return self.text
        return self.text[:length] + "..."


@dataclass
class Job:
    """
    Aggregate Root cho Job

    Status only ever moves forward:
    queued -> processing -> completed | failed
    (processing may be skipped)
    """
    id: JobId
    owner_id: str
    spec: JobSpec
    status: JobStatus = JobStatus.QUEUED
    result_reference: Optional[str] = None
    error: Optional[str] = None
    charged_credits: int = 0
    created_at: datetime = field(default_factory=utcnow)
    updated_at: datetime = field(default_factory=utcnow)
    finished_at: Optional[datetime] = None

    def __post_init__(self):
        if not self.owner_id:
            raise ValueError("Job must have an owner")

    def transition(self, target: JobStatus) -> None:
        """
        Move job to a new status

        Raises:
            InvalidTransitionError: If the move goes backwards or leaves a terminal state
        """
        if not self.status.can_transition_to(target):
            raise InvalidTransitionError(
                f"Job {self.id} cannot move from {self.status.value} to {target.value}"
            )
        self.status = target
        self.updated_at = utcnow()
        if target.is_terminal():
            self.finished_at = self.updated_at

    def mark_processing(self) -> None:
        self.transition(JobStatus.PROCESSING)

    def mark_completed(self, result_reference: str) -> None:
        if not result_reference:
            raise InvalidTransitionError(f"Job {self.id} cannot complete without a result reference")
        self.transition(JobStatus.COMPLETED)
        self.result_reference = result_reference

    def mark_failed(self, error: str) -> None:
        self.transition(JobStatus.FAILED)
        self.error = error or "Conversion failed"

    def is_visible_to(self, caller_id: str, caller_is_admin: bool) -> bool:
        return caller_is_admin or (bool(caller_id) and caller_id == self.owner_id)

    def __str__(self) -> str:
        return f"Job(id={self.id}, owner={self.owner_id}, status={self.status.value})"

    def __repr__(self) -> str:
        return self.__str__()
