"""Request dispatcher: envelope validation and method routing."""

from typing import Optional, Union
import structlog
from prometheus_client import Counter, Histogram
from pydantic import ValidationError

from .errors import InternalError, InvalidRequest, MethodNotFound, ParseError, RPCException
from .messages import JSONRPC_VERSION, RPCRequest, RPCResponse
from ..methods import MethodRegistry, create_default_registry

logger = structlog.get_logger()

# Metrics
request_count = Counter(
    'rpc_bridge_requests_total', 'Total JSON-RPC requests', ['method', 'status']
)
request_duration = Histogram(
    'rpc_bridge_request_duration_seconds', 'Request duration', ['method']
)

UNKNOWN_METHOD_LABEL = "<unknown>"


class Dispatcher:
    """Routes decoded JSON-RPC requests to registered methods.

    Dispatch holds no per-request state, so one instance serves any number
    of concurrent requests.
    """

    def __init__(self, registry: Optional[MethodRegistry] = None):
        self.registry = registry if registry is not None else create_default_registry()

    def decode(self, body: Union[bytes, str]) -> RPCRequest:
        """Decode a request body, raising ParseError on malformed input."""
        try:
            return RPCRequest.model_validate_json(body)
        except ValidationError as e:
            logger.warning("Request parse failed", error_count=e.error_count())
            raise ParseError() from e

    async def dispatch(self, request: RPCRequest) -> RPCResponse:
        """Produce the response for a single request."""
        if request.jsonrpc != JSONRPC_VERSION:
            logger.debug("Unsupported protocol version", version=request.jsonrpc)
            request_count.labels(method=UNKNOWN_METHOD_LABEL, status='invalid').inc()
            return RPCResponse.failure(request.id, InvalidRequest().to_error())

        method = self.registry.get(request.method)
        if method is None:
            logger.debug("Method not found", method=request.method, request_id=request.id)
            request_count.labels(method=UNKNOWN_METHOD_LABEL, status='not_found').inc()
            return RPCResponse.failure(request.id, MethodNotFound().to_error())

        logger.debug("Request received", method=method.name, request_id=request.id)

        with request_duration.labels(method=method.name).time():
            try:
                result = await method.call(request.params)

            except RPCException as e:
                request_count.labels(method=method.name, status='error').inc()
                logger.info(
                    "Request failed",
                    method=method.name,
                    request_id=request.id,
                    code=int(e.code),
                    error=e.message
                )
                return RPCResponse.failure(request.id, e.to_error())

            except Exception as e:
                request_count.labels(method=method.name, status='error').inc()
                logger.error(
                    "Method handler failed",
                    method=method.name,
                    request_id=request.id,
                    error=str(e),
                    exc_info=True
                )
                return RPCResponse.failure(request.id, InternalError().to_error())

        request_count.labels(method=method.name, status='success').inc()
        return RPCResponse.success(request.id, result)
