"""
Admin Router
Implements: Single Responsibility Principle (SRP)

Every endpoint here requires a verified session carrying is_admin:
- User list
- Pricing plan edits
- Discount code CRUD
- Transactions and revenue analytics
- Buffered server logs and worker status
"""
from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Response
from pydantic import BaseModel

from ...core.domain.session import SessionClaims
from ...core.logger import log_manager
from ...core.repositories.job_repo import JobRepository
from ...core.services.billing_service import BillingService
from ...core.services.user_service import UserService
from ...core.workers.manager import WorkerManager
from ...schemas import (
    DiscountCodeResponse,
    PlanResponse,
    TransactionResponse,
    UserListResponse,
    UserResponse,
)
from ..dependencies import (
    get_billing_service,
    get_job_repository,
    get_user_service,
    get_worker_manager,
    require_admin,
)

import logging
logger = logging.getLogger(__name__)

router = APIRouter(prefix="/admin", tags=["admin"])


# ========== Schemas ==========
class PlanUpdate(BaseModel):
    name: Optional[str] = None
    price: Optional[int] = None
    credits: Optional[int] = None
    features: Optional[List[str]] = None
    popular: Optional[bool] = None


class DiscountCodeCreate(BaseModel):
    code: str
    discount_percent: int
    expiry_date: date


class DiscountCodeUpdate(BaseModel):
    code: Optional[str] = None
    discount_percent: Optional[int] = None
    expiry_date: Optional[date] = None


class RevenueByPlan(BaseModel):
    name: str
    value: int


class RevenueResponse(BaseModel):
    total_revenue: int
    total_transactions: int
    average_transaction_value: float
    revenue_by_plan: List[RevenueByPlan]
    recent_transactions: List[TransactionResponse]


class LogEntry(BaseModel):
    message: str
    level: str


# ========== Users ==========
@router.get("/users", response_model=UserListResponse)
async def list_users(
    skip: int = 0,
    limit: int = 100,
    admin: SessionClaims = Depends(require_admin),
    service: UserService = Depends(get_user_service)
):
    users = await service.list_users(skip, limit)
    return UserListResponse(
        items=[UserResponse.from_domain(user) for user in users],
        total=await service.user_repo.count()
    )


# ========== Pricing ==========
@router.put("/pricing/plans/{plan_id}", response_model=PlanResponse)
async def update_plan(
    plan_id: str,
    data: PlanUpdate,
    admin: SessionClaims = Depends(require_admin),
    service: BillingService = Depends(get_billing_service)
):
    plan = await service.update_plan(plan_id, **data.model_dump(exclude_none=True))
    logger.info(f"[ADMIN] {admin.subject} edited plan {plan_id}")
    return PlanResponse.from_domain(plan)


# ========== Discount codes ==========
@router.get("/discount-codes", response_model=List[DiscountCodeResponse])
async def list_discount_codes(
    admin: SessionClaims = Depends(require_admin),
    service: BillingService = Depends(get_billing_service)
):
    codes = await service.list_codes()
    return [DiscountCodeResponse.from_domain(code) for code in codes]


@router.post("/discount-codes", response_model=DiscountCodeResponse, status_code=201)
async def create_discount_code(
    data: DiscountCodeCreate,
    admin: SessionClaims = Depends(require_admin),
    service: BillingService = Depends(get_billing_service)
):
    code = await service.create_code(data.code, data.discount_percent, data.expiry_date)
    return DiscountCodeResponse.from_domain(code)


@router.put("/discount-codes/{code_id}", response_model=DiscountCodeResponse)
async def update_discount_code(
    code_id: str,
    data: DiscountCodeUpdate,
    admin: SessionClaims = Depends(require_admin),
    service: BillingService = Depends(get_billing_service)
):
    code = await service.update_code(
        code_id,
        code=data.code,
        discount_percent=data.discount_percent,
        expiry_date=data.expiry_date
    )
    return DiscountCodeResponse.from_domain(code)


@router.delete("/discount-codes/{code_id}", status_code=204)
async def delete_discount_code(
    code_id: str,
    admin: SessionClaims = Depends(require_admin),
    service: BillingService = Depends(get_billing_service)
):
    await service.delete_code(code_id)
    return Response(status_code=204)


# ========== Revenue ==========
@router.get("/transactions", response_model=List[TransactionResponse])
async def list_transactions(
    admin: SessionClaims = Depends(require_admin),
    service: BillingService = Depends(get_billing_service)
):
    txns = await service.list_transactions()
    return [TransactionResponse.from_domain(txn) for txn in txns]


@router.get("/revenue", response_model=RevenueResponse)
async def get_revenue(
    admin: SessionClaims = Depends(require_admin),
    service: BillingService = Depends(get_billing_service)
):
    summary = await service.revenue_summary()
    return RevenueResponse(
        total_revenue=summary.total_revenue,
        total_transactions=summary.total_transactions,
        average_transaction_value=summary.average_transaction_value,
        revenue_by_plan=[RevenueByPlan(**item) for item in summary.revenue_by_plan],
        recent_transactions=[TransactionResponse.from_domain(txn) for txn in summary.recent_transactions]
    )


# ========== System ==========
@router.get("/logs", response_model=List[LogEntry])
async def get_logs(
    limit: int = Query(200, ge=1, le=2000),
    level: Optional[str] = None,
    admin: SessionClaims = Depends(require_admin)
):
    return [LogEntry(**entry) for entry in log_manager.tail(limit, level)]


@router.get("/system/status")
async def get_system_status(
    admin: SessionClaims = Depends(require_admin),
    manager: WorkerManager = Depends(get_worker_manager),
    job_repo: JobRepository = Depends(get_job_repository)
):
    """Worker state and job counts by status"""
    status = manager.get_status()
    status["jobs"] = await job_repo.count_by_status()
    return status
