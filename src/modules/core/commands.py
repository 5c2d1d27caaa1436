"""Core RPC commands."""

from __future__ import annotations

from modules.core.handlers import health_check
from modules.core.rpc.dispatcher import route

commandpatterns = [
    route("health_check", health_check),
]
