"""Exceptions mapped onto JSON-RPC error objects."""

from pydantic import JsonValue

from .messages import ErrorCode, RPCError


class RPCException(Exception):
    """Base exception for errors returned to the caller as JSON-RPC errors."""

    default_code = ErrorCode.INTERNAL_ERROR
    default_message = "Internal error"

    def __init__(self, message: str = "", code: int = 0, data: JsonValue = None):
        self.message = message or self.default_message
        self.code = code or self.default_code
        self.data = data
        super().__init__(self.message)

    def to_error(self) -> RPCError:
        return RPCError(code=int(self.code), message=self.message, data=self.data)


class ParseError(RPCException):
    default_code = ErrorCode.PARSE_ERROR
    default_message = "Parse error"


class InvalidRequest(RPCException):
    default_code = ErrorCode.INVALID_REQUEST
    default_message = "Invalid Request"


class MethodNotFound(RPCException):
    default_code = ErrorCode.METHOD_NOT_FOUND
    default_message = "Method not found"


class InvalidParams(RPCException):
    default_code = ErrorCode.INVALID_PARAMS
    default_message = "Invalid params"


class InternalError(RPCException):
    pass
