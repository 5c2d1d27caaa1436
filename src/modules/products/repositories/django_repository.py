"""Django ORM implementation of the Product repository.

Satisfies ``IProductRepository`` using Django's QuerySet API.
Look-ups follow the Null Object pattern: ``find_first`` returns ``None``
instead of raising; the Service Layer decides how to translate a
missing entity into an RPC error.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

import structlog

from modules.core.repositories.interfaces import Filters
from modules.products.models import Product
from modules.products.repositories.interfaces import IProductRepository

logger = structlog.get_logger(__name__)


class ProductDjangoRepository(IProductRepository):
    """Concrete Product repository backed by Django ORM."""

    def _queryset(self, filters: Optional[Filters] = None):
        queryset = Product.objects.all()
        if filters:
            queryset = queryset.filter(**filters)
        return queryset

    def find_many(
        self,
        filters: Optional[Filters] = None,
        skip: int = 0,
        take: Optional[int] = None,
    ) -> List[Product]:
        """List products ordered by ascending ``id``.

        Examples of valid filters::

            {"available": True}
            {"name__icontains": "widget"}
        """
        queryset = self._queryset(filters)
        end = None if take is None else skip + take
        return list(queryset[skip:end])

    def find_first(self, filters: Filters) -> Optional[Product]:
        return self._queryset(filters).first()

    def create(self, data: Dict[str, Any]) -> Product:
        """Insert a product; ``available`` defaults to ``True``."""
        product = Product(**data)
        product.save()
        return product

    def update(self, id: int, data: Dict[str, Any]) -> Product:
        """Apply ``data`` to the product and persist only the touched columns.

        Raises:
            Product.DoesNotExist: if no row has the given ``id``.
        """
        product = Product.objects.get(pk=id)
        for field, value in data.items():
            setattr(product, field, value)
        product.save(update_fields=list(data))
        logger.info("product.saved", product_id=id, fields=sorted(data))
        return product

    def count(self, filters: Optional[Filters] = None) -> int:
        return self._queryset(filters).count()

    def deactivate(self, id: int) -> Product:
        """Flip ``available`` to ``False``; the row itself is kept.

        Raises:
            Product.DoesNotExist: if no row has the given ``id``.
        """
        product = Product.objects.get(pk=id)
        product.deactivate()
        logger.info("product.deactivated", product_id=id)
        return product
