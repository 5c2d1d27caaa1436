import time
import uuid
from contextvars import ContextVar
from typing import Any, Callable, Dict, Optional

import structlog
from django.db import close_old_connections

correlation_id_var: ContextVar[str] = ContextVar("correlation_id", default="")

logger = structlog.get_logger()

Packet = Dict[str, Any]
GetResponse = Callable[[Packet], Optional[Packet]]


class CorrelationIdMiddleware:
    """Middleware that binds a correlation ID for each RPC request.

    Uses the packet ``id`` assigned by the caller. If absent (event
    packets), generates a new UUID4. The ID is stored in a ContextVar so
    structlog processors can inject it into every log line emitted while
    the request is handled.
    """

    def __init__(self, get_response: GetResponse) -> None:
        self.get_response = get_response

    def __call__(self, packet: Packet) -> Optional[Packet]:
        cid = str(packet.get("id") or uuid.uuid4())
        correlation_id_var.set(cid)

        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(correlation_id=cid)

        logger.info("rpc.request_started", pattern=packet.get("pattern"))
        start = time.monotonic()

        response = self.get_response(packet)

        logger.info(
            "rpc.request_finished",
            pattern=packet.get("pattern"),
            outcome="error" if response and "err" in response else "ok",
            duration_ms=round((time.monotonic() - start) * 1000, 2),
        )
        return response


class DatabaseConnectionMiddleware:
    """Discard unusable or expired DB connections around every request.

    Server threads live as long as their TCP connection, so Django's
    per-request connection housekeeping has to be triggered here.
    """

    def __init__(self, get_response: GetResponse) -> None:
        self.get_response = get_response

    def __call__(self, packet: Packet) -> Optional[Packet]:
        close_old_connections()
        try:
            return self.get_response(packet)
        finally:
            close_old_connections()
