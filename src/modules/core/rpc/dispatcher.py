"""Command dispatch for the RPC transport.

Commands are declared in explicit tables (``commandpatterns``) built with
``route()``.  Each entry binds a command name to a handler and to the
Pydantic model its payload must satisfy; the payload is validated before
the handler runs, so handlers only ever receive well-formed DTOs.

A request packet looks like::

    {"pattern": {"cmd": "find_one_product"}, "data": {"id": 1}, "id": "<uuid>"}

and is answered with either ``{"id", "response", "isDisposed"}`` or
``{"id", "err", "isDisposed"}``.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from importlib import import_module
from typing import Any, Callable, Dict, Iterable, List, Optional, Type

import structlog
from django.conf import settings
from django.core.exceptions import ImproperlyConfigured
from pydantic import BaseModel, ConfigDict
from pydantic import ValidationError as PydanticValidationError

from modules.core.rpc.exceptions import (
    INTERNAL_ERROR_MESSAGE,
    CommandNotFound,
    PayloadValidationError,
    RpcException,
)

logger = structlog.get_logger(__name__)


class EmptyPayload(BaseModel):
    """Payload model for commands that take no arguments."""

    model_config = ConfigDict(frozen=True, extra="forbid")


@dataclass(frozen=True)
class CommandRoute:
    cmd: str
    handler: Callable[[Any], Any]
    payload: Type[BaseModel]


def route(
    cmd: str,
    handler: Callable[[Any], Any],
    payload: Type[BaseModel] = EmptyPayload,
) -> CommandRoute:
    """Declare a single entry of a command table."""
    return CommandRoute(cmd=cmd, handler=handler, payload=payload)


def include(module: str) -> List[CommandRoute]:
    """Return the ``commandpatterns`` declared by ``module``."""
    try:
        return list(import_module(module).commandpatterns)
    except AttributeError as exc:
        raise ImproperlyConfigured(
            f"The command module '{module}' does not define 'commandpatterns'."
        ) from exc


def get_command_name(pattern: Any) -> str:
    """Extract the command name from a packet pattern.

    Accepts ``{"cmd": "..."}``, its JSON-encoded form, or a bare string.
    """
    if isinstance(pattern, str):
        try:
            decoded = json.loads(pattern)
        except ValueError:
            return pattern
        pattern = decoded if isinstance(decoded, dict) else pattern
        if isinstance(pattern, str):
            return pattern

    if isinstance(pattern, dict) and isinstance(pattern.get("cmd"), str):
        return pattern["cmd"]

    raise CommandNotFound(json.dumps(pattern, default=str))


def format_validation_errors(exc: PydanticValidationError) -> List[str]:
    messages = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error["loc"])
        messages.append(f"{location}: {error['msg']}" if location else error["msg"])
    return messages


class MessageDispatcher:
    """Routes request packets to the handler registered for their command."""

    def __init__(self, routes: Iterable[CommandRoute]) -> None:
        self._routes: Dict[str, CommandRoute] = {}
        for entry in routes:
            if entry.cmd in self._routes:
                raise ImproperlyConfigured(
                    f"Command '{entry.cmd}' is registered more than once."
                )
            self._routes[entry.cmd] = entry

    @classmethod
    def from_settings(cls) -> MessageDispatcher:
        return cls(include(settings.ROOT_COMMANDCONF))

    @property
    def commands(self) -> List[str]:
        return sorted(self._routes)

    def resolve(self, cmd: str) -> CommandRoute:
        try:
            return self._routes[cmd]
        except KeyError:
            raise CommandNotFound(cmd) from None

    def call(self, cmd: str, data: Any = None) -> Any:
        """Validate ``data`` against the command's payload model and run it."""
        entry = self.resolve(cmd)
        try:
            payload = entry.payload.model_validate({} if data is None else data)
        except PydanticValidationError as exc:
            raise PayloadValidationError(format_validation_errors(exc)) from exc
        return entry.handler(payload)

    def dispatch(self, packet: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        """Handle one decoded packet and build the response packet.

        Returns ``None`` for event packets (no ``id``), which expect no reply.
        """
        packet_id = packet.get("id")
        if packet_id is None:
            logger.warning("rpc.event_dropped", pattern=packet.get("pattern"))
            return None

        cmd = None
        try:
            cmd = get_command_name(packet.get("pattern"))
            result = self.call(cmd, packet.get("data"))
        except RpcException as exc:
            logger.warning(
                "rpc.request_rejected",
                cmd=cmd,
                error_type=type(exc).__name__,
                status=str(exc.status),
                detail=str(exc),
            )
            return {"id": packet_id, "err": exc.get_error(), "isDisposed": True}
        except Exception:
            logger.exception("rpc.request_failed", cmd=cmd)
            return {
                "id": packet_id,
                "err": {"status": "error", "message": INTERNAL_ERROR_MESSAGE},
                "isDisposed": True,
            }

        return {"id": packet_id, "response": result, "isDisposed": True}
