"""
Job Service - Business logic cho text-to-speech jobs
Implements: Single Responsibility Principle (SRP)

submit() only records the job and hands its id to the completion queue;
CompletionWorker later calls complete() after a randomized delay.
"""
import asyncio
import logging
from typing import List, Optional

from ..domain.history import GeneratedFile
from ..domain.job import Job, JobId, JobSpec
from ..domain.voice import find_voice
from ..exceptions import AuthorizationError, NotFoundError, SynthesisError, ValidationError
from ..repositories.file_repo import FileRepository
from ..repositories.job_repo import JobRepository
from .synthesizer import Synthesizer
from .user_service import UserService

logger = logging.getLogger(__name__)

GENERIC_FAILURE = "Unexpected error while converting text to speech"


class JobService:
    """Service xử lý job business logic"""

    def __init__(
        self,
        job_repo: JobRepository,
        synthesizer: Synthesizer,
        completion_queue: asyncio.Queue,
        credit_ledger: Optional[UserService] = None,
        file_repo: Optional[FileRepository] = None
    ):
        self.job_repo = job_repo
        self.synthesizer = synthesizer
        self.completion_queue = completion_queue
        self.credit_ledger = credit_ledger
        self.file_repo = file_repo

    async def submit(self, owner_id: str, text: str, voice_id: str) -> Job:
        """
        Queue a new conversion

        Business rules:
        - Text cannot be empty, voice must exist (checked before anything is allocated)
        - One credit per character when a ledger is wired
        - Identical texts are independent jobs
        - Returns immediately, completion happens in the background
        """
        if not owner_id:
            raise ValidationError("Job owner is required")

        spec = JobSpec(text=text or "", voice_id=voice_id or "")
        voice = find_voice(spec.voice_id)
        if voice is None:
            raise ValidationError(f"Unknown voice: {spec.voice_id}")
        spec = JobSpec(text=spec.text, voice_id=voice.id)

        charged = 0
        if self.credit_ledger is not None:
            charged = await self.credit_ledger.charge(owner_id, spec.char_count)

        job = Job(id=JobId.new(), owner_id=owner_id, spec=spec, charged_credits=charged)
        await self.job_repo.create(job)
        self.completion_queue.put_nowait(job.id.value)

        logger.info(f"[JOB] Job {job.id} queued for {owner_id} ({spec.char_count} chars, voice={voice.id})")
        return job

    async def get_status(self, job_id: str, caller_id: str, caller_is_admin: bool = False) -> Job:
        """
        Read one job

        Raises:
            NotFoundError: Unknown job id
            AuthorizationError: Caller is neither owner nor admin
        """
        job = await self.job_repo.get_by_id(job_id)
        if job is None:
            raise NotFoundError(f"Job {job_id} not found")
        if not job.is_visible_to(caller_id, caller_is_admin):
            logger.warning(f"[JOB] {caller_id} denied access to job {job_id}")
            raise AuthorizationError("You do not have access to this job")
        return job

    async def list_jobs(self, owner_id: str) -> List[Job]:
        return await self.job_repo.get_by_owner(owner_id)

    async def complete(self, job_id: str) -> Optional[Job]:
        """
        Run the conversion and settle the job in a terminal state

        Business rules:
        - No-op for evicted or already terminal jobs
        - Any failure ends in FAILED with a stored description, never stuck
        - Failed jobs get their credits back
        """
        job = await self.job_repo.get_by_id(job_id)
        if job is None:
            logger.warning(f"[JOB] Job {job_id} vanished before completion")
            return None
        if job.status.is_terminal():
            return job

        self.job_repo.mutate(job_id, lambda j: j.mark_processing())

        try:
            reference = await self.synthesizer.synthesize(job.spec)
        except SynthesisError as e:
            logger.warning(f"[JOB] Job {job_id} failed: {e.message}")
            return await self._fail(job_id, e.message)
        except Exception as e:
            logger.error(f"[JOB] Job {job_id} crashed: {e}", exc_info=True)
            return await self._fail(job_id, GENERIC_FAILURE)

        job = self.job_repo.mutate(job_id, lambda j: j.mark_completed(reference))
        if job is None:
            return None

        if self.file_repo is not None:
            await self.file_repo.create(GeneratedFile.from_job(job))

        logger.info(f"[JOB] Job {job_id} completed -> {reference}")
        return job

    async def _fail(self, job_id: str, error: str) -> Optional[Job]:
        job = self.job_repo.mutate(job_id, lambda j: j.mark_failed(error))
        if job is not None and job.charged_credits and self.credit_ledger is not None:
            await self.credit_ledger.refund(job.owner_id, job.charged_credits)
        return job

    async def history(self, owner_id: str) -> List[GeneratedFile]:
        if self.file_repo is None:
            return []
        return await self.file_repo.get_by_user(owner_id)
