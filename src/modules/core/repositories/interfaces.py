"""Generic repository interface (Dependency Inversion Principle).

Provides ``IRepository[T]``, the base abstract class that all
domain-specific repository interfaces extend.  Service-layer code
depends on this abstraction, never on Django ORM directly.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Dict, Generic, List, Optional, TypeVar

T = TypeVar("T")

Filters = Dict[str, Any]


class IRepository(ABC, Generic[T]):
    """Base generic repository contract.

    Type parameter ``T`` represents the entity managed by the repository
    (e.g. ``Product``).  ``filters`` are plain field look-ups such as
    ``{"available": True}``.
    """

    @abstractmethod
    def find_many(
        self,
        filters: Optional[Filters] = None,
        skip: int = 0,
        take: Optional[int] = None,
    ) -> List[T]:
        """Return a window of matching entities in a stable order."""

    @abstractmethod
    def find_first(self, filters: Filters) -> Optional[T]:
        """Return the first matching entity, or ``None``."""

    @abstractmethod
    def create(self, data: Dict[str, Any]) -> T:
        """Insert a new entity built from ``data``."""

    @abstractmethod
    def update(self, id: int, data: Dict[str, Any]) -> T:
        """Apply ``data`` to the entity with primary key ``id``."""

    @abstractmethod
    def count(self, filters: Optional[Filters] = None) -> int:
        """Count matching entities."""
