"""
Billing Service - Pricing, discount codes, simulated top-ups and revenue
Implements: Single Responsibility Principle (SRP)

Top-ups never touch a payment gateway: an order is created with a QR
image URL and PaymentWorker confirms it after a fixed delay.
"""
import asyncio
import dataclasses
import logging
import uuid
from dataclasses import dataclass
from datetime import date
from typing import Dict, List, Optional

from ..domain.billing import DiscountCode, PricingPlan, TopUpOrder, Transaction
from ..exceptions import AuthorizationError, NotFoundError, ValidationError
from ..repositories.billing_repo import (
    DiscountCodeRepository,
    OrderRepository,
    PlanRepository,
    TransactionRepository,
)
from .user_service import UserService

logger = logging.getLogger(__name__)

PLAN_FIELDS = ("name", "price", "credits", "features", "popular")


@dataclass(frozen=True)
class RevenueSummary:
    total_revenue: int
    total_transactions: int
    average_transaction_value: float
    revenue_by_plan: List[Dict[str, int]]
    recent_transactions: List[Transaction]


class BillingService:
    """Service xử lý pricing và payment business logic"""

    def __init__(
        self,
        plan_repo: PlanRepository,
        code_repo: DiscountCodeRepository,
        order_repo: OrderRepository,
        txn_repo: TransactionRepository,
        user_service: UserService,
        payment_queue: asyncio.Queue
    ):
        self.plan_repo = plan_repo
        self.code_repo = code_repo
        self.order_repo = order_repo
        self.txn_repo = txn_repo
        self.user_service = user_service
        self.payment_queue = payment_queue

    # ========== Pricing plans ==========
    async def list_plans(self) -> List[PricingPlan]:
        return await self.plan_repo.get_all()

    async def get_plan(self, plan_id: str) -> PricingPlan:
        plan = await self.plan_repo.get_by_id(plan_id)
        if plan is None:
            raise NotFoundError(f"Plan {plan_id} not found")
        return plan

    async def update_plan(self, plan_id: str, **changes) -> PricingPlan:
        """
        Edit a plan

        Only name, price, credits, features and popular can change.
        Unset (None) values keep the current value.
        """
        plan = await self.get_plan(plan_id)
        updates = {k: v for k, v in changes.items() if k in PLAN_FIELDS and v is not None}
        try:
            updated = dataclasses.replace(plan, **updates)
        except ValueError as e:
            raise ValidationError(str(e)) from e

        await self.plan_repo.update(updated)
        logger.info(f"[BILLING] Plan {plan_id} updated: {sorted(updates)}")
        return updated

    # ========== Discount codes ==========
    async def list_codes(self) -> List[DiscountCode]:
        return await self.code_repo.get_all()

    async def create_code(self, code: str, discount_percent: int, expiry_date: date) -> DiscountCode:
        try:
            discount = DiscountCode(
                id=f"code_{uuid.uuid4().hex[:10]}",
                code=code,
                discount_percent=discount_percent,
                expiry_date=expiry_date,
            )
        except ValueError as e:
            raise ValidationError(str(e)) from e

        if await self.code_repo.get_by_code(discount.code) is not None:
            raise ValidationError(f"Discount code {discount.code} already exists")

        await self.code_repo.create(discount)
        logger.info(f"[BILLING] Discount code {discount.code} created ({discount.discount_percent}%)")
        return discount

    async def update_code(
        self,
        code_id: str,
        code: Optional[str] = None,
        discount_percent: Optional[int] = None,
        expiry_date: Optional[date] = None
    ) -> DiscountCode:
        current = await self.code_repo.get_by_id(code_id)
        if current is None:
            raise NotFoundError(f"Discount code {code_id} not found")

        try:
            updated = DiscountCode(
                id=current.id,
                code=code if code is not None else current.code,
                discount_percent=discount_percent if discount_percent is not None else current.discount_percent,
                expiry_date=expiry_date or current.expiry_date,
            )
        except ValueError as e:
            raise ValidationError(str(e)) from e

        clash = await self.code_repo.get_by_code(updated.code)
        if clash is not None and clash.id != code_id:
            raise ValidationError(f"Discount code {updated.code} already exists")

        await self.code_repo.update(updated)
        return updated

    async def delete_code(self, code_id: str) -> None:
        if not await self.code_repo.delete(code_id):
            raise NotFoundError(f"Discount code {code_id} not found")
        logger.info(f"[BILLING] Discount code {code_id} deleted")

    # ========== Top-up orders ==========
    async def create_order(self, email: str, plan_id: str, discount_code: Optional[str] = None) -> TopUpOrder:
        """
        Start a simulated QR payment

        Raises:
            NotFoundError: Unknown plan
            ValidationError: Unknown or expired discount code
        """
        plan = await self.get_plan(plan_id)
        amount = plan.price

        code = None
        if discount_code:
            discount = await self.code_repo.get_by_code(discount_code)
            if discount is None:
                raise ValidationError(f"Unknown discount code: {discount_code}")
            if not discount.is_active():
                raise ValidationError(f"Discount code {discount.code} has expired")
            amount = discount.apply(plan.price)
            code = discount.code

        user = await self.user_service.register(email)
        order = TopUpOrder(
            id=f"order_{uuid.uuid4().hex[:16]}",
            user_id=user.id,
            user_email=user.email,
            plan_id=plan.id,
            plan_name=plan.name,
            credits=plan.credits,
            amount=amount,
            discount_code=code,
        )
        await self.order_repo.create(order)
        self.payment_queue.put_nowait(order.id)

        logger.info(f"[BILLING] Order {order.id} created for {email}: {plan.name}, {amount} VND")
        return order

    async def get_order(self, order_id: str, caller_email: str, caller_is_admin: bool = False) -> TopUpOrder:
        order = await self.order_repo.get_by_id(order_id)
        if order is None:
            raise NotFoundError(f"Order {order_id} not found")
        if not caller_is_admin and order.user_email != (caller_email or "").lower():
            raise AuthorizationError("You do not have access to this order")
        return order

    async def confirm_order(self, order_id: str) -> Optional[TopUpOrder]:
        """
        Mark an order paid, grant its credits and record the transaction

        Runs once per order; repeated calls are no-ops.
        """
        order = await self.order_repo.get_by_id(order_id)
        if order is None:
            logger.warning(f"[BILLING] Order {order_id} vanished before confirmation")
            return None
        if order.status.is_terminal():
            return order

        self.order_repo.mutate(order_id, lambda o: o.mark_paid())
        user = await self.user_service.grant(order.user_email, order.credits)
        await self.txn_repo.create(Transaction(
            id=f"txn_{uuid.uuid4().hex[:12]}",
            user_id=user.id,
            user_name=user.name,
            plan_id=order.plan_id,
            plan_name=order.plan_name,
            amount=order.amount,
            date=date.today(),
        ))
        logger.info(f"[BILLING] Order {order_id} paid, {order.credits} credits added to {order.user_email}")
        return order

    # ========== Transactions & analytics ==========
    async def list_transactions(self, email: Optional[str] = None) -> List[Transaction]:
        if email is None:
            return await self.txn_repo.get_all(limit=10_000)
        user = await self.user_service.user_repo.get_by_email(email)
        if user is None:
            return []
        return await self.txn_repo.get_by_user(user.id)

    async def revenue_summary(self, recent: int = 5) -> RevenueSummary:
        txns = await self.txn_repo.get_all(limit=10_000)
        total = sum(txn.amount for txn in txns)
        count = len(txns)

        by_plan: Dict[str, int] = {}
        for txn in txns:
            by_plan[txn.plan_name] = by_plan.get(txn.plan_name, 0) + txn.amount

        return RevenueSummary(
            total_revenue=total,
            total_transactions=count,
            average_transaction_value=total / count if count else 0.0,
            revenue_by_plan=[
                {"name": name, "value": value}
                for name, value in sorted(by_plan.items(), key=lambda item: item[1], reverse=True)
            ],
            recent_transactions=txns[:recent],
        )
