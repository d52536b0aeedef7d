"""
Base Repository

Abstract base class for all repositories
Implements common CRUD operations over a process-local map

Implements:
- DIP: Abstract interface that high-level code depends on
- ISP: Minimal interface, specific repos can extend

Nothing survives a restart. Every access goes through one lock so the map
stays consistent if handlers ever run on worker threads.
"""

import threading
from abc import ABC, abstractmethod
from typing import Callable, Dict, Generic, List, Optional, TypeVar

T = TypeVar('T')


class BaseRepository(ABC, Generic[T]):
    """
    Abstract in-memory repository với CRUD operations cơ bản

    Generic[T]: T là domain model type (Job, User, etc.)

    Subclasses must implement:
    - key_of
    """

    def __init__(self):
        self._items: Dict[str, T] = {}
        self._lock = threading.Lock()

    @abstractmethod
    def key_of(self, entity: T) -> str:
        """
        Identity used as the map key

        Args:
            entity: Domain model

        Returns:
            String key
        """
        pass

    async def get_by_id(self, id: str) -> Optional[T]:
        with self._lock:
            return self._items.get(id)

    async def get_all(self, skip: int = 0, limit: int = 100) -> List[T]:
        with self._lock:
            items = list(self._items.values())
        return items[skip:skip + limit]

    async def create(self, entity: T) -> T:
        """
        Insert a new entity

        Raises:
            ValueError: If an entity with the same key already exists
        """
        key = self.key_of(entity)
        with self._lock:
            if key in self._items:
                raise ValueError(f"{type(entity).__name__} {key} already exists")
            self._items[key] = entity
        return entity

    async def update(self, entity: T) -> T:
        """
        Replace a stored entity

        Raises:
            ValueError: If the entity is unknown
        """
        key = self.key_of(entity)
        with self._lock:
            if key not in self._items:
                raise ValueError(f"{type(entity).__name__} {key} not found")
            self._items[key] = entity
        return entity

    async def delete(self, id: str) -> bool:
        with self._lock:
            return self._items.pop(id, None) is not None

    async def count(self) -> int:
        with self._lock:
            return len(self._items)

    def _filter(self, predicate: Callable[[T], bool]) -> List[T]:
        with self._lock:
            return [item for item in self._items.values() if predicate(item)]

    def mutate(self, id: str, fn: Callable[[T], None]) -> Optional[T]:
        """
        Apply fn to the stored entity while holding the lock

        Returns:
            The mutated entity, or None if it does not exist
        """
        with self._lock:
            entity = self._items.get(id)
            if entity is None:
                return None
            fn(entity)
            return entity
