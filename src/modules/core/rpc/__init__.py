"""RPC transport: framing, dispatch, server and client."""

from modules.core.rpc.dispatcher import MessageDispatcher, include, route
from modules.core.rpc.exceptions import RpcError, RpcException

__all__ = ["MessageDispatcher", "RpcError", "RpcException", "include", "route"]
