"""Blocking client for the products RPC transport.

Used by callers that need to talk to the service (gateways, scripts,
tests).  A client owns a single TCP connection and is not thread-safe;
create one per thread.
"""

from __future__ import annotations

import socket
import uuid
from typing import Any, Dict, List, Optional

import structlog
from django.conf import settings

from modules.core.rpc.exceptions import RpcError
from modules.core.rpc.transport import FrameDecoder, encode_message

logger = structlog.get_logger(__name__)


class RpcClient:
    def __init__(
        self, host: str, port: int, timeout: Optional[float] = None
    ) -> None:
        self.host = host
        self.port = port
        self.timeout = settings.RPC_CLIENT_TIMEOUT if timeout is None else timeout
        self._sock: Optional[socket.socket] = None
        self._decoder = FrameDecoder()
        self._unclaimed: List[Dict[str, Any]] = []

    def connect(self) -> RpcClient:
        if self._sock is None:
            self._sock = socket.create_connection(
                (self.host, self.port), timeout=self.timeout
            )
            self._decoder = FrameDecoder()
            self._unclaimed = []
        return self

    def close(self) -> None:
        if self._sock is not None:
            self._sock.close()
            self._sock = None

    def __enter__(self) -> RpcClient:
        return self.connect()

    def __exit__(self, *exc_info) -> None:
        self.close()

    def send(self, cmd: str, data: Any = None) -> Any:
        """Send a command and wait for its response.

        Raises:
            RpcError: if the service answers with an ``err`` object.
        """
        packet_id = str(uuid.uuid4())
        self._write({"pattern": {"cmd": cmd}, "data": data, "id": packet_id})
        response = self._read_response(packet_id)
        if response.get("err") is not None:
            raise RpcError(response["err"])
        return response.get("response")

    def emit(self, cmd: str, data: Any = None) -> None:
        """Send a fire-and-forget event (no ``id``, no response)."""
        self._write({"pattern": {"cmd": cmd}, "data": data})

    def _write(self, packet: Dict[str, Any]) -> None:
        self.connect()
        self._sock.sendall(encode_message(packet))

    def _read_response(self, packet_id: str) -> Dict[str, Any]:
        while True:
            for index, message in enumerate(self._unclaimed):
                if message.get("id") == packet_id:
                    return self._unclaimed.pop(index)

            data = self._sock.recv(64 * 1024)
            if not data:
                self.close()
                raise ConnectionError(
                    f"Connection to {self.host}:{self.port} closed by the remote service"
                )
            for message in self._decoder.feed(data):
                if isinstance(message, dict):
                    self._unclaimed.append(message)
                else:
                    logger.warning("rpc.client_invalid_packet")
