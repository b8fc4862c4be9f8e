"""JSON-RPC 2.0 message types for the bridge."""

import math
from enum import IntEnum
from typing import Any, Dict, Optional
from pydantic import BaseModel, JsonValue, StrictStr, field_validator

JSONRPC_VERSION = "2.0"


class ErrorCode(IntEnum):
    """JSON-RPC 2.0 error codes."""
    PARSE_ERROR = -32700
    INVALID_REQUEST = -32600
    METHOD_NOT_FOUND = -32601
    INVALID_PARAMS = -32602
    INTERNAL_ERROR = -32603


class RPCError(BaseModel):
    """JSON-RPC 2.0 error object."""
    code: int
    message: str
    data: JsonValue = None


class RPCMessage(BaseModel):
    """Base JSON-RPC message."""
    jsonrpc: str = JSONRPC_VERSION


class RPCRequest(RPCMessage):
    """JSON-RPC 2.0 request envelope.

    Missing ``jsonrpc`` and ``method`` decode to empty strings so that they
    fail the version check and method lookup instead of the parse step.
    ``params`` and ``id`` accept any JSON value; ``id`` is only echoed back.
    Non-finite numbers (NaN, Infinity, overflowing literals) are rejected
    anywhere in them since they cannot be encoded back as JSON.
    """
    jsonrpc: Optional[StrictStr] = ""
    method: Optional[StrictStr] = ""
    params: JsonValue = None
    id: JsonValue = None

    @field_validator("params", "id")
    @classmethod
    def _finite_numbers(cls, value: JsonValue) -> JsonValue:
        if not _is_finite(value):
            raise ValueError("non-finite number is not valid JSON")
        return value


class RPCResponse(RPCMessage):
    """JSON-RPC 2.0 response envelope."""
    id: JsonValue = None
    result: JsonValue = None
    error: Optional[RPCError] = None

    def model_post_init(self, __context: Any) -> None:
        """Validate that result and error are not both present."""
        if self.result is not None and self.error is not None:
            raise ValueError("Both 'result' and 'error' cannot be present")

    @classmethod
    def success(cls, request_id: JsonValue, result: JsonValue) -> "RPCResponse":
        return cls(id=request_id, result=result)

    @classmethod
    def failure(cls, request_id: JsonValue, error: RPCError) -> "RPCResponse":
        return cls(id=request_id, error=error)

    def to_dict(self) -> Dict[str, Any]:
        """Wire form: exactly one of result or error, always with id."""
        message: Dict[str, Any] = {"jsonrpc": self.jsonrpc}
        if self.error is not None:
            message["error"] = self.error.model_dump(exclude_none=True)
        else:
            message["result"] = self.result
        message["id"] = self.id
        return message


def _is_finite(value: JsonValue) -> bool:
    if isinstance(value, float):
        return math.isfinite(value)
    if isinstance(value, dict):
        return all(_is_finite(item) for item in value.values())
    if isinstance(value, list):
        return all(_is_finite(item) for item in value)
    return True
