"""
User Repository

In-memory user registry keyed by email (case-insensitive).
"""

from typing import List, Optional
from .base import BaseRepository
from ..domain.user import User


class UserRepository(BaseRepository[User]):
    """Repository cho User aggregate"""

    def key_of(self, entity: User) -> str:
        return entity.email.lower()

    async def get_by_email(self, email: str) -> Optional[User]:
        if not email:
            return None
        return await self.get_by_id(email.lower())

    async def get_all(self, skip: int = 0, limit: int = 100) -> List[User]:
        users = self._filter(lambda user: True)
        users.sort(key=lambda user: user.join_date, reverse=True)
        return users[skip:skip + limit]
