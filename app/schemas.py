from pydantic import BaseModel
from typing import Optional, List
from datetime import date, datetime

from .core.domain.billing import DiscountCode, PricingPlan, TopUpOrder, Transaction
from .core.domain.history import GeneratedFile
from .core.domain.user import User
from .core.domain.voice import Voice


# --- Error Schema ---
class ErrorResponse(BaseModel):
    detail: str
    code: str


# --- User Schemas ---
class UserResponse(BaseModel):
    id: str
    name: str
    email: str
    avatar: Optional[str] = None
    credits: int
    role: str
    is_admin: bool
    join_date: date

    @staticmethod
    def from_domain(user: User) -> "UserResponse":
        return UserResponse(
            id=user.id,
            name=user.name,
            email=user.email,
            avatar=user.avatar,
            credits=user.credits,
            role=user.role,
            is_admin=user.is_admin,
            join_date=user.join_date,
        )


class UserListResponse(BaseModel):
    items: List[UserResponse]
    total: int


# --- Catalog Schemas ---
class VoiceResponse(BaseModel):
    id: str
    name: str
    language: str
    sample_url: str

    @staticmethod
    def from_domain(voice: Voice) -> "VoiceResponse":
        return VoiceResponse(id=voice.id, name=voice.name, language=voice.language, sample_url=voice.sample_url)


class PlanResponse(BaseModel):
    id: str
    name: str
    price: int
    credits: int
    features: List[str]
    popular: bool

    @staticmethod
    def from_domain(plan: PricingPlan) -> "PlanResponse":
        return PlanResponse(
            id=plan.id,
            name=plan.name,
            price=plan.price,
            credits=plan.credits,
            features=list(plan.features),
            popular=plan.popular,
        )


class GeneratedFileResponse(BaseModel):
    id: str
    text_snippet: str
    voice: str
    char_count: int
    url: str
    created_at: datetime

    @staticmethod
    def from_domain(item: GeneratedFile) -> "GeneratedFileResponse":
        return GeneratedFileResponse(
            id=item.id,
            text_snippet=item.text_snippet,
            voice=item.voice,
            char_count=item.char_count,
            url=item.url,
            created_at=item.created_at,
        )


# --- Billing Schemas ---
class DiscountCodeResponse(BaseModel):
    id: str
    code: str
    discount_percent: int
    expiry_date: date
    status: str

    @staticmethod
    def from_domain(code: DiscountCode) -> "DiscountCodeResponse":
        return DiscountCodeResponse(
            id=code.id,
            code=code.code,
            discount_percent=code.discount_percent,
            expiry_date=code.expiry_date,
            status=code.status().value,
        )


class OrderResponse(BaseModel):
    id: str
    plan_id: str
    plan_name: str
    credits: int
    amount: int
    discount_code: Optional[str] = None
    status: str
    qr_code_url: str
    created_at: datetime
    paid_at: Optional[datetime] = None

    @staticmethod
    def from_domain(order: TopUpOrder) -> "OrderResponse":
        return OrderResponse(
            id=order.id,
            plan_id=order.plan_id,
            plan_name=order.plan_name,
            credits=order.credits,
            amount=order.amount,
            discount_code=order.discount_code,
            status=order.status.value,
            qr_code_url=order.qr_code_url,
            created_at=order.created_at,
            paid_at=order.paid_at,
        )


class TransactionResponse(BaseModel):
    id: str
    user_id: str
    user_name: str
    plan_id: str
    plan_name: str
    amount: int
    date: date

    @staticmethod
    def from_domain(txn: Transaction) -> "TransactionResponse":
        return TransactionResponse(
            id=txn.id,
            user_id=txn.user_id,
            user_name=txn.user_name,
            plan_id=txn.plan_id,
            plan_name=txn.plan_name,
            amount=txn.amount,
            date=txn.date,
        )
