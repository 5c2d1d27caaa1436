"""Threaded TCP server for the RPC transport.

One thread serves each TCP connection; packets on a connection are
handled one after another, in arrival order.  Every thread owns its own
Django database connection, which is closed when the client goes away.
"""

from __future__ import annotations

import socketserver
from typing import Any, Callable, Dict, Iterable, Optional, Tuple

import structlog
from django.conf import settings
from django.db import connection
from django.utils.module_loading import import_string

from modules.core.rpc.dispatcher import MessageDispatcher
from modules.core.rpc.transport import (
    CorruptedPacketLength,
    FrameDecoder,
    InvalidJSONFormat,
    encode_message,
)

logger = structlog.get_logger(__name__)

RECV_BUFFER_SIZE = 64 * 1024

PacketHandler = Callable[[Dict[str, Any]], Optional[Dict[str, Any]]]


def load_middleware(
    get_response: PacketHandler, middleware: Optional[Iterable[str]] = None
) -> PacketHandler:
    """Wrap ``get_response`` with the configured middleware, outermost first."""
    paths = list(settings.RPC_MIDDLEWARE if middleware is None else middleware)
    for path in reversed(paths):
        get_response = import_string(path)(get_response)
    return get_response


class RpcRequestHandler(socketserver.BaseRequestHandler):
    """Reads frames from one connection and answers each request packet."""

    server: RpcServer

    def setup(self) -> None:
        self.peer = "%s:%s" % self.client_address[:2]
        self.decoder = FrameDecoder()
        logger.info("rpc.connection_opened", peer=self.peer)

    def handle(self) -> None:
        while True:
            try:
                data = self.request.recv(RECV_BUFFER_SIZE)
            except ConnectionResetError:
                break
            if not data:
                break

            try:
                packets = self.decoder.feed(data)
            except (CorruptedPacketLength, InvalidJSONFormat) as exc:
                logger.warning("rpc.corrupted_packet", peer=self.peer, error=str(exc))
                break

            for packet in packets:
                if not isinstance(packet, dict):
                    logger.warning("rpc.invalid_packet", peer=self.peer)
                    continue
                response = self.server.handle_packet(packet)
                if response is not None:
                    self.request.sendall(encode_message(response))

    def finish(self) -> None:
        connection.close()
        logger.info("rpc.connection_closed", peer=self.peer)


class RpcServer(socketserver.ThreadingTCPServer):
    """TCP server bound to a ``MessageDispatcher``."""

    allow_reuse_address = True
    daemon_threads = True

    def __init__(
        self,
        server_address: Tuple[str, int],
        dispatcher: Optional[MessageDispatcher] = None,
        middleware: Optional[Iterable[str]] = None,
    ) -> None:
        self.dispatcher = dispatcher or MessageDispatcher.from_settings()
        self.handle_packet = load_middleware(self.dispatcher.dispatch, middleware)
        super().__init__(server_address, RpcRequestHandler)

    @property
    def port(self) -> int:
        return self.server_address[1]

    def handle_error(self, request, client_address) -> None:
        logger.exception("rpc.connection_error", peer="%s:%s" % client_address[:2])
