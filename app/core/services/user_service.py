"""
User Service - Registry and credit ledger
Implements: Single Responsibility Principle (SRP)
"""
import logging
import uuid
from typing import List, Optional

from ...config import Settings
from ..domain.user import User
from ..exceptions import InsufficientCreditsError, NotFoundError, ValidationError
from ..repositories.user_repo import UserRepository

logger = logging.getLogger(__name__)


class UserService:
    """Service xử lý user registration và credits"""

    def __init__(self, user_repo: UserRepository, settings: Settings):
        self.user_repo = user_repo
        self.settings = settings

    async def register(self, email: str, name: str = "", picture: Optional[str] = None) -> User:
        """
        Find or create the user behind a verified identity

        Business rules:
        - First sign-in grants the signup credits
        - Admin flag always comes from the allow-list, never from stored data
        - Profile (name, avatar) follows the identity provider
        """
        if not email:
            raise ValidationError("Email is required")

        is_admin = self.settings.is_admin_email(email)
        user = await self.user_repo.get_by_email(email)
        if user is None:
            user = User(
                id=f"user_{uuid.uuid4().hex[:12]}",
                email=email.lower(),
                name=name or email.split("@")[0],
                avatar=picture,
                credits=self.settings.signup_credits,
                is_admin=is_admin,
            )
            try:
                await self.user_repo.create(user)
                logger.info(f"[USER] Registered {user.email} (admin={is_admin})")
                return user
            except ValueError:
                # Lost a race with a concurrent sign-in, fall through to refresh
                pass

        def refresh(stored: User) -> None:
            stored.is_admin = is_admin
            if name:
                stored.name = name
            if picture:
                stored.avatar = picture

        return self.user_repo.mutate(email.lower(), refresh)

    async def get_user(self, email: str) -> User:
        user = await self.user_repo.get_by_email(email)
        if user is None:
            raise NotFoundError(f"User {email} not found")
        return user

    async def list_users(self, skip: int = 0, limit: int = 100) -> List[User]:
        return await self.user_repo.get_all(skip, limit)

    async def charge(self, email: str, amount: int) -> int:
        """
        Deduct credits for a conversion

        Unknown subjects (e.g. holding a token issued before a restart)
        are registered on first touch.

        Returns:
            Credits actually deducted

        Raises:
            InsufficientCreditsError: If the balance is too low
        """
        if await self.user_repo.get_by_email(email) is None:
            await self.register(email)

        charged = {"amount": 0}

        def debit(user: User) -> None:
            if not user.has_credits(amount):
                raise InsufficientCreditsError(
                    f"Not enough credits: {amount} needed, {user.credits} available"
                )
            charged["amount"] = user.charge(amount)

        self.user_repo.mutate(email.lower(), debit)
        if charged["amount"]:
            logger.info(f"[BILLING] Charged {charged['amount']} credits to {email}")
        return charged["amount"]

    async def refund(self, email: str, amount: int) -> None:
        if amount <= 0:
            return
        user = self.user_repo.mutate(email.lower(), lambda u: u.grant(amount))
        if user is None:
            logger.warning(f"[BILLING] Refund of {amount} credits skipped, {email} is unknown")
            return
        logger.info(f"[BILLING] Refunded {amount} credits to {email}")

    async def grant(self, email: str, amount: int) -> User:
        if await self.user_repo.get_by_email(email) is None:
            await self.register(email)
        user = self.user_repo.mutate(email.lower(), lambda u: u.grant(amount))
        logger.info(f"[BILLING] Granted {amount} credits to {email}")
        return user
