"""Product repository interface.

Extends ``IRepository[Product]``; the Product Service depends on this
contract only.
"""

from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING

from modules.core.repositories.interfaces import IRepository

if TYPE_CHECKING:
    from modules.products.models import Product


class IProductRepository(IRepository["Product"]):
    """Repository contract for the Product aggregate."""

    @abstractmethod
    def deactivate(self, id: int) -> Product:
        """Soft-delete the product with the given ``id`` and return it."""
