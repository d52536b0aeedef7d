"""
User Domain Model

Users are keyed by email, the subject of their session token.
"""
from dataclasses import dataclass, field
from datetime import date
from typing import Optional


@dataclass
class User:
    """
    Aggregate Root cho User
    Tracks profile and conversion credits
    """
    id: str
    email: str
    name: str
    avatar: Optional[str] = None
    credits: int = 0
    is_admin: bool = False
    join_date: date = field(default_factory=date.today)

    def __post_init__(self):
        if not self.email:
            raise ValueError("Email cannot be empty")
        if self.credits < 0:
            raise ValueError("credits cannot be negative")

    @property
    def role(self) -> str:
        return "admin" if self.is_admin else "user"

    def has_credits(self, amount: int) -> bool:
        """Admins convert without spending credits"""
        return self.is_admin or self.credits >= amount

    def charge(self, amount: int) -> int:
        """
        Deduct credits

        Returns:
            Amount actually deducted (0 for admins)
        """
        if amount < 0:
            raise ValueError("Charge amount cannot be negative")
        if self.is_admin:
            return 0
        if self.credits < amount:
            raise ValueError("Not enough credits")
        self.credits -= amount
        return amount

    def grant(self, amount: int) -> None:
        if amount < 0:
            raise ValueError("Grant amount cannot be negative")
        self.credits += amount

    def __str__(self) -> str:
        return f"User(email={self.email}, role={self.role}, credits={self.credits})"
