"""
Billing Router

Simulated QR top-up flow and the caller's transaction history.
"""
from typing import List, Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from ...core.domain.session import SessionClaims
from ...core.services.billing_service import BillingService
from ...schemas import OrderResponse, TransactionResponse
from ..dependencies import get_billing_service, get_current_claims

router = APIRouter(tags=["billing"])


class OrderCreate(BaseModel):
    plan_id: str
    discount_code: Optional[str] = None


@router.post("/topup/orders", response_model=OrderResponse, status_code=201)
async def create_order(
    data: OrderCreate,
    claims: SessionClaims = Depends(get_current_claims),
    service: BillingService = Depends(get_billing_service)
):
    """
    Start a top-up; poll the order until its status is "paid"

    Raises:
        400: Unknown or expired discount code
        404: Unknown plan
    """
    order = await service.create_order(claims.subject, data.plan_id, data.discount_code)
    return OrderResponse.from_domain(order)


@router.get("/topup/orders/{order_id}", response_model=OrderResponse)
async def get_order(
    order_id: str,
    claims: SessionClaims = Depends(get_current_claims),
    service: BillingService = Depends(get_billing_service)
):
    order = await service.get_order(order_id, claims.subject, claims.is_admin)
    return OrderResponse.from_domain(order)


@router.get("/transactions", response_model=List[TransactionResponse])
async def get_transactions(
    claims: SessionClaims = Depends(get_current_claims),
    service: BillingService = Depends(get_billing_service)
):
    txns = await service.list_transactions(claims.subject)
    return [TransactionResponse.from_domain(txn) for txn in txns]
