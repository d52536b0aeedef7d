"""
Billing Repositories

In-memory stores for pricing plans, discount codes, top-up orders
and confirmed transactions.
"""

from typing import List, Optional
from .base import BaseRepository
from ..domain.billing import DiscountCode, PricingPlan, TopUpOrder, Transaction


class PlanRepository(BaseRepository[PricingPlan]):

    def key_of(self, entity: PricingPlan) -> str:
        return entity.id

    async def get_all(self, skip: int = 0, limit: int = 100) -> List[PricingPlan]:
        plans = self._filter(lambda plan: True)
        plans.sort(key=lambda plan: plan.price)
        return plans[skip:skip + limit]


class DiscountCodeRepository(BaseRepository[DiscountCode]):

    def key_of(self, entity: DiscountCode) -> str:
        return entity.id

    async def get_by_code(self, code: str) -> Optional[DiscountCode]:
        wanted = (code or "").strip().upper()
        matches = self._filter(lambda item: item.code == wanted)
        return matches[0] if matches else None

    async def get_all(self, skip: int = 0, limit: int = 100) -> List[DiscountCode]:
        codes = self._filter(lambda item: True)
        codes.sort(key=lambda item: item.expiry_date, reverse=True)
        return codes[skip:skip + limit]


class OrderRepository(BaseRepository[TopUpOrder]):

    def key_of(self, entity: TopUpOrder) -> str:
        return entity.id


class TransactionRepository(BaseRepository[Transaction]):

    def key_of(self, entity: Transaction) -> str:
        return entity.id

    async def get_all(self, skip: int = 0, limit: int = 100) -> List[Transaction]:
        """Newest first"""
        txns = self._filter(lambda txn: True)
        txns.sort(key=lambda txn: (txn.date, txn.id), reverse=True)
        return txns[skip:skip + limit]

    async def get_by_user(self, user_id: str) -> List[Transaction]:
        txns = self._filter(lambda txn: txn.user_id == user_id)
        txns.sort(key=lambda txn: (txn.date, txn.id), reverse=True)
        return txns
