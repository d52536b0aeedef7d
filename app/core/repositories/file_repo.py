"""
Generated File Repository
"""

from typing import List
from .base import BaseRepository
from ..domain.history import GeneratedFile


class FileRepository(BaseRepository[GeneratedFile]):

    def key_of(self, entity: GeneratedFile) -> str:
        return entity.id

    async def get_by_user(self, user_id: str) -> List[GeneratedFile]:
        files = self._filter(lambda item: item.user_id == user_id)
        files.sort(key=lambda item: item.created_at, reverse=True)
        return files
