"""Product service layer (Use Cases).

Orchestrates business logic for the Product aggregate, delegating
persistence to the injected ``IProductRepository``.

Business rules enforced here:
- Only available products can be read, listed, updated or removed.
- ``id`` is never changed by an update.
- Removal is a soft delete (``available=False``) and is irreversible.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog
from django.db import transaction

from modules.core.dtos import PageMetaDTO
from modules.products.exceptions import ProductNotFound

if TYPE_CHECKING:
    from modules.core.dtos import PaginationDTO
    from modules.products.dtos import CreateProductDTO, UpdateProductDTO
    from modules.products.models import Product
    from modules.products.repositories.interfaces import IProductRepository

logger = structlog.get_logger(__name__)

AVAILABLE = {"available": True}


class ProductService:
    """Application service for Product use-cases.

    Receives an ``IProductRepository`` via constructor injection (DIP).
    Holds no state of its own, so one instance can serve concurrent
    requests.
    """

    def __init__(self, repository: IProductRepository) -> None:
        self._repo = repository

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    @transaction.atomic
    def create(self, dto: CreateProductDTO) -> Product:
        """Create a new, available product."""
        product = self._repo.create({"name": dto.name, "price": dto.price})
        logger.info("product.created", product_id=product.id)
        return product

    @transaction.atomic
    def update(self, id: int, dto: UpdateProductDTO) -> Product:
        """Apply the supplied fields to an available product.

        Any ``id`` carried by the DTO is ignored; ``id`` always comes from
        the first argument.

        Raises:
            ProductNotFound: if the product does not exist or was removed.
        """
        data = dto.changes()
        self.find_one(id)
        product = self._repo.update(id, data)
        logger.info("product.updated", product_id=id, fields=sorted(data))
        return product

    @transaction.atomic
    def remove(self, id: int) -> Product:
        """Soft-delete an available product and return it.

        Raises:
            ProductNotFound: if the product does not exist or was removed.
        """
        self.find_one(id)
        product = self._repo.deactivate(id)
        logger.info("product.soft_deleted", product_id=id)
        return product

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def find_all(self, pagination: PaginationDTO) -> dict:
        """Return one page of available products plus pagination metadata.

        Pages past the end yield an empty ``data`` list without querying;
        ``meta`` is still computed from the full count.
        """
        total = self._repo.count(AVAILABLE)
        skip = pagination.skip
        if skip >= total:
            products = []
        else:
            products = self._repo.find_many(
                AVAILABLE, skip=skip, take=min(pagination.limit, total - skip)
            )
        return {"data": products, "meta": PageMetaDTO.build(total, pagination)}

    def find_one(self, id: int) -> Product:
        """Retrieve a single available product by ID.

        Raises:
            ProductNotFound: if the product does not exist or was removed.
        """
        product = self._repo.find_first({"id": id, **AVAILABLE})
        if not product:
            logger.info("product.not_found", product_id=id)
            raise ProductNotFound(id)
        return product
