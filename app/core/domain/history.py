"""
Generated file history

One record per successful conversion.
"""
from dataclasses import dataclass, field
from datetime import datetime

from .job import Job, utcnow


@dataclass(frozen=True)
class GeneratedFile:
    id: str
    user_id: str
    text_snippet: str
    voice: str
    char_count: int
    url: str
    created_at: datetime = field(default_factory=utcnow)

    @staticmethod
    def from_job(job: Job) -> "GeneratedFile":
        return GeneratedFile(
            id=f"file_{job.id}",
            user_id=job.owner_id,
            text_snippet=job.spec.snippet(),
            voice=job.spec.voice_id,
            char_count=job.spec.char_count,
            url=job.result_reference or "",
            created_at=job.finished_at or utcnow(),
        )
