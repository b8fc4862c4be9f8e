"""JSON-RPC 2.0 protocol implementation for the bridge."""

from .errors import (
    InternalError,
    InvalidParams,
    InvalidRequest,
    MethodNotFound,
    ParseError,
    RPCException,
)
from .messages import (
    JSONRPC_VERSION,
    ErrorCode,
    RPCError,
    RPCMessage,
    RPCRequest,
    RPCResponse,
)

__all__ = [
    "JSONRPC_VERSION",
    "ErrorCode",
    "RPCError",
    "RPCMessage",
    "RPCRequest",
    "RPCResponse",
    "RPCException",
    "ParseError",
    "InvalidRequest",
    "MethodNotFound",
    "InvalidParams",
    "InternalError",
]
