"""Product domain exceptions.

Raised by the Service Layer when business rules are violated.
They derive from ``RpcException``, so the dispatcher sends them to the
caller as ``{"message": ..., "status": ...}``.
"""

from __future__ import annotations

from http import HTTPStatus

from modules.core.rpc.exceptions import RpcException


class ProductNotFound(RpcException):
    """The requested product does not exist or has been soft-deleted."""

    default_status = HTTPStatus.BAD_REQUEST

    def __init__(self, product_id: int) -> None:
        super().__init__(f"Product with id #{product_id} not found")
        self.product_id = product_id
