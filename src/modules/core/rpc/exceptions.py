"""RPC error types.

``RpcException`` is the base for every business error that should reach
the caller as a structured ``err`` object.  Anything else raised while
handling a command is reported as an opaque internal error.
"""

from __future__ import annotations

from http import HTTPStatus
from typing import Any, Dict, List, Union

INTERNAL_ERROR_MESSAGE = "Internal server error"
NO_HANDLER_MESSAGE = (
    "There is no matching message handler defined in the remote service."
)

ErrorMessage = Union[str, List[str]]


class RpcException(Exception):
    """Business error carrying a message and a coarse status classification."""

    default_status: Union[int, str] = HTTPStatus.BAD_REQUEST

    def __init__(
        self,
        message: ErrorMessage,
        status: Union[int, str, None] = None,
    ) -> None:
        super().__init__(message if isinstance(message, str) else "; ".join(message))
        self.message = message
        self.status = self.default_status if status is None else status

    def get_error(self) -> Dict[str, Any]:
        status = int(self.status) if isinstance(self.status, HTTPStatus) else self.status
        return {"status": status, "message": self.message}


class CommandNotFound(RpcException):
    """No handler is registered for the requested command."""

    default_status = "error"

    def __init__(self, command: str) -> None:
        super().__init__(NO_HANDLER_MESSAGE)
        self.command = command


class PayloadValidationError(RpcException):
    """The command payload does not match the declared payload model."""


class RpcError(Exception):
    """Raised by ``RpcClient`` when the remote service answers with ``err``."""

    def __init__(self, error: Any) -> None:
        self.error = error
        if isinstance(error, dict):
            self.message = error.get("message")
            self.status = error.get("status")
        else:
            self.message = error
            self.status = "error"
        super().__init__(str(self.message))
