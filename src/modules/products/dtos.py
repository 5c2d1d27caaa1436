"""Product DTOs for the Service Layer.

Framework-agnostic data transfer objects using Pydantic v2.
These are the contracts between the RPC layer (command handlers)
and the Service layer.  DTOs are immutable (``frozen=True``) and
input DTOs reject unknown fields (``extra="forbid"``).

- ``CreateProductDTO``: input for product creation.
- ``UpdateProductDTO``: input for partial product updates.
- ``ProductIdDTO``: input for commands addressing a single product.
- ``ProductOutputDTO``: output with all product fields.
- ``PaginatedProductsDTO``: output of the paginated listing.
"""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING, Annotated, Any, Dict, List, Optional

from pydantic import (
    AllowInfNan,
    BaseModel,
    ConfigDict,
    PositiveInt,
    Strict,
    field_validator,
)

from modules.core.dtos import PageMetaDTO

if TYPE_CHECKING:
    from modules.products.models import Product

PRICE_MAX_DECIMAL_PLACES = 4

# Finite JSON numbers only; numeric strings and booleans are rejected.
Price = Annotated[float, Strict(), AllowInfNan(False)]


def _validate_name(v: str) -> str:
    if not v or not v.strip():
        raise ValueError("Name must not be empty.")
    return v.strip()


def _validate_price(v: float) -> float:
    if v < 0:
        raise ValueError("Price cannot be negative.")
    if round(v, PRICE_MAX_DECIMAL_PLACES) != v:
        raise ValueError(
            f"Price must have at most {PRICE_MAX_DECIMAL_PLACES} decimal places."
        )
    return v


# ---------------------------------------------------------------------------
# Input DTOs
# ---------------------------------------------------------------------------


class CreateProductDTO(BaseModel):
    """Immutable DTO for product creation requests.

    Validates:
    - ``name`` is a non-empty string (surrounding whitespace stripped).
    - ``price`` is non-negative with at most four decimal places.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    name: str
    price: Price

    @field_validator("name")
    @classmethod
    def name_must_not_be_empty(cls, v: str) -> str:
        return _validate_name(v)

    @field_validator("price")
    @classmethod
    def price_must_be_valid(cls, v: float) -> float:
        return _validate_price(v)


class UpdateProductDTO(BaseModel):
    """Immutable DTO for product update requests.

    ``id`` addresses the product and is never written.  Every other
    field is optional; only the fields the caller actually sent are
    applied (see ``changes()``).
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    id: PositiveInt
    name: Optional[str] = None
    price: Optional[Price] = None

    @field_validator("name")
    @classmethod
    def name_must_not_be_empty(cls, v: Optional[str]) -> Optional[str]:
        return None if v is None else _validate_name(v)

    @field_validator("price")
    @classmethod
    def price_must_be_valid(cls, v: Optional[float]) -> Optional[float]:
        return None if v is None else _validate_price(v)

    def changes(self) -> Dict[str, Any]:
        """Explicitly supplied, non-null fields, without ``id``."""
        return {
            field: value
            for field, value in self.model_dump(exclude_unset=True, exclude={"id"}).items()
            if value is not None
        }


class ProductIdDTO(BaseModel):
    """Immutable DTO for ``{"id": <int>}`` payloads.

    Numeric strings such as ``"7"`` are coerced to integers.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    id: int


# ---------------------------------------------------------------------------
# Output DTOs
# ---------------------------------------------------------------------------


class ProductOutputDTO(BaseModel):
    """Immutable DTO for RPC responses."""

    model_config = ConfigDict(frozen=True)

    id: int
    name: str
    price: float
    available: bool
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_entity(cls, product: Product) -> ProductOutputDTO:
        """Build an output DTO from a Product model instance."""
        return cls(
            id=product.id,
            name=product.name,
            price=product.price,
            available=product.available,
            created_at=product.created_at,
            updated_at=product.updated_at,
        )


class PaginatedProductsDTO(BaseModel):
    model_config = ConfigDict(frozen=True)

    data: List[ProductOutputDTO]
    meta: PageMetaDTO
