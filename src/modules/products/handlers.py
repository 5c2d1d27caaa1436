"""Product RPC handlers.

Exposes the ``ProductService`` over the RPC transport.  Payloads arrive
already validated by the dispatcher; domain exceptions propagate to the
dispatcher, which renders them as ``err`` objects.
"""

from __future__ import annotations

from typing import Any, Dict

from modules.core.dtos import PaginationDTO
from modules.products.dtos import (
    CreateProductDTO,
    PaginatedProductsDTO,
    ProductIdDTO,
    ProductOutputDTO,
    UpdateProductDTO,
)
from modules.products.repositories.django_repository import ProductDjangoRepository
from modules.products.services import ProductService


def get_service() -> ProductService:
    return ProductService(repository=ProductDjangoRepository())


def _render(product) -> Dict[str, Any]:
    return ProductOutputDTO.from_entity(product).model_dump(mode="json")


def create_product(payload: CreateProductDTO) -> Dict[str, Any]:
    """cmd: create_product"""
    return _render(get_service().create(payload))


def find_all_products(payload: PaginationDTO) -> Dict[str, Any]:
    """cmd: find_all_products"""
    result = get_service().find_all(payload)
    page = PaginatedProductsDTO(
        data=[ProductOutputDTO.from_entity(product) for product in result["data"]],
        meta=result["meta"],
    )
    return page.model_dump(mode="json", by_alias=True)


def find_one_product(payload: ProductIdDTO) -> Dict[str, Any]:
    """cmd: find_one_product"""
    return _render(get_service().find_one(payload.id))


def update_product(payload: UpdateProductDTO) -> Dict[str, Any]:
    """cmd: update_product"""
    return _render(get_service().update(payload.id, payload))


def delete_product(payload: ProductIdDTO) -> Dict[str, Any]:
    """cmd: delete_product"""
    return _render(get_service().remove(payload.id))
