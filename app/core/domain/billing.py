"""
Billing Domain Models

Value Objects / Entities:
- PricingPlan: Credit package for sale
- DiscountCode: Percentage off a top-up, valid until its expiry date
- TopUpOrder: Simulated QR payment for one plan
- Transaction: Confirmed payment
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import List, Optional

from .job import utcnow

QR_BASE_URL = "https://api.qrserver.com/v1/create-qr-code/"


@dataclass
class PricingPlan:
    id: str
    name: str
    price: int  # VND
    credits: int
    features: List[str] = field(default_factory=list)
    popular: bool = False

    def __post_init__(self):
        if not self.name or not self.name.strip():
            raise ValueError("Plan name cannot be empty")
        if self.price <= 0:
            raise ValueError("Plan price must be positive")
        if self.credits <= 0:
            raise ValueError("Plan credits must be positive")


class DiscountStatus(str, Enum):
    ACTIVE = "active"
    EXPIRED = "expired"


@dataclass
class DiscountCode:
    id: str
    code: str
    discount_percent: int
    expiry_date: date

    def __post_init__(self):
        if not self.code or not self.code.strip():
            raise ValueError("Discount code cannot be empty")
        self.code = self.code.strip().upper()
        if not (1 <= self.discount_percent <= 100):
            raise ValueError("discount_percent must be between 1 and 100")

    def status(self, today: Optional[date] = None) -> DiscountStatus:
        today = today or date.today()
        return DiscountStatus.ACTIVE if today <= self.expiry_date else DiscountStatus.EXPIRED

    def is_active(self, today: Optional[date] = None) -> bool:
        return self.status(today) == DiscountStatus.ACTIVE

    def apply(self, amount: int) -> int:
        """Price after discount, rounded down to whole VND"""
        return amount * (100 - self.discount_percent) // 100


class OrderStatus(str, Enum):
    PENDING = "pending"
    PAID = "paid"

    def is_terminal(self) -> bool:
        return self == OrderStatus.PAID


@dataclass
class TopUpOrder:
    id: str
    user_id: str
    user_email: str
    plan_id: str
    plan_name: str
    credits: int
    amount: int
    discount_code: Optional[str] = None
    status: OrderStatus = OrderStatus.PENDING
    created_at: datetime = field(default_factory=utcnow)
    paid_at: Optional[datetime] = None

    @property
    def qr_code_url(self) -> str:
        return f"{QR_BASE_URL}?size=200x200&data=payos-order-{self.id}"

    def mark_paid(self) -> None:
        if self.status.is_terminal():
            raise ValueError(f"Order {self.id} is already paid")
        self.status = OrderStatus.PAID
        self.paid_at = utcnow()


@dataclass(frozen=True)
class Transaction:
    id: str
    user_id: str
    user_name: str
    plan_id: str
    plan_name: str
    amount: int  # VND
    date: date
