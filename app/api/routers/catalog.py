"""
Catalog Router

Public storefront data plus the caller's conversion history:
- Voices
- Pricing plans
- Generated files
"""
from typing import List

from fastapi import APIRouter, Depends

from ...core.domain.session import SessionClaims
from ...core.domain.voice import list_voices
from ...core.services.billing_service import BillingService
from ...core.services.job_service import JobService
from ...schemas import GeneratedFileResponse, PlanResponse, VoiceResponse
from ..dependencies import get_billing_service, get_current_claims, get_job_service

router = APIRouter(tags=["catalog"])


@router.get("/voices", response_model=List[VoiceResponse])
async def get_voices():
    return [VoiceResponse.from_domain(voice) for voice in list_voices()]


@router.get("/pricing/plans", response_model=List[PlanResponse])
async def get_plans(service: BillingService = Depends(get_billing_service)):
    plans = await service.list_plans()
    return [PlanResponse.from_domain(plan) for plan in plans]


@router.get("/files", response_model=List[GeneratedFileResponse])
async def get_files(
    claims: SessionClaims = Depends(get_current_claims),
    service: JobService = Depends(get_job_service)
):
    """Completed conversions of the caller, newest first"""
    files = await service.history(claims.subject)
    return [GeneratedFileResponse.from_domain(item) for item in files]
