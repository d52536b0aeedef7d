"""
Jobs Router
Implements: Single Responsibility Principle (SRP)

This router handles text-to-speech job endpoints:
- Submit a conversion (returns immediately)
- Poll a job's status
- List the caller's jobs
"""
from fastapi import APIRouter, Depends
from typing import List, Optional
from pydantic import AliasChoices, BaseModel, ConfigDict, Field
from datetime import datetime

from ...core.domain.job import Job
from ...core.domain.session import SessionClaims
from ...core.services.job_service import JobService
from ..dependencies import get_current_claims, get_job_service

import logging
logger = logging.getLogger(__name__)

router = APIRouter(prefix="/jobs", tags=["jobs"])


# ========== Schemas ==========
class JobCreate(BaseModel):
    """Schema for submitting a conversion"""
    model_config = ConfigDict(populate_by_name=True)

    text: str = ""
    voice_id: str = Field(
        default="",
        validation_alias=AliasChoices("voiceId", "voice_id", "voice")
    )


class JobAccepted(BaseModel):
    id: str
    status: str


class JobResponse(BaseModel):
    """Schema for job status"""
    id: str
    status: str
    result_reference: Optional[str] = None
    error: Optional[str] = None
    voice_id: str
    char_count: int
    created_at: datetime
    finished_at: Optional[datetime] = None

    @staticmethod
    def from_domain(job: Job) -> "JobResponse":
        """Convert domain Job to API response"""
        return JobResponse(
            id=job.id.value,
            status=job.status.value,
            result_reference=job.result_reference,
            error=job.error,
            voice_id=job.spec.voice_id,
            char_count=job.spec.char_count,
            created_at=job.created_at,
            finished_at=job.finished_at
        )


# ========== Endpoints ==========
@router.post("", response_model=JobAccepted, status_code=202)
async def submit_job(
    data: JobCreate,
    claims: SessionClaims = Depends(get_current_claims),
    service: JobService = Depends(get_job_service)
):
    """
    Queue a conversion

    Raises:
        400: Empty text or unknown voice
        401: No valid session
        402: Not enough credits
    """
    job = await service.submit(
        owner_id=claims.subject,
        text=data.text,
        voice_id=data.voice_id
    )
    return JobAccepted(id=job.id.value, status=job.status.value)


@router.get("", response_model=List[JobResponse])
async def list_jobs(
    claims: SessionClaims = Depends(get_current_claims),
    service: JobService = Depends(get_job_service)
):
    """Caller's jobs, newest first"""
    jobs = await service.list_jobs(claims.subject)
    return [JobResponse.from_domain(job) for job in jobs]


@router.get("/{job_id}", response_model=JobResponse)
async def get_job(
    job_id: str,
    claims: SessionClaims = Depends(get_current_claims),
    service: JobService = Depends(get_job_service)
):
    """
    Poll one job

    Raises:
        401: No valid session
        403: Caller is neither owner nor admin
        404: Unknown job id
    """
    job = await service.get_status(job_id, claims.subject, claims.is_admin)
    return JobResponse.from_domain(job)
