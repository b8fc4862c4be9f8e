"""HTTP surface of the bridge: ``/jsonrpc`` and ``/health``."""

import structlog
from starlette.applications import Starlette
from starlette.requests import Request
from starlette.responses import JSONResponse, Response
from starlette.routing import Route
from starlette.types import Receive, Scope, Send

from ..protocol.dispatcher import Dispatcher
from ..protocol.errors import InvalidRequest, ParseError
from ..protocol.messages import RPCResponse

logger = structlog.get_logger()

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "POST, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type",
}


def _json_response(response: RPCResponse, status_code: int = 200) -> JSONResponse:
    return JSONResponse(response.to_dict(), status_code=status_code, headers=CORS_HEADERS)


class JsonRpcEndpoint:
    """ASGI endpoint for ``/jsonrpc``.

    Mounted as a plain ASGI app so the route matches every HTTP verb;
    anything other than POST and OPTIONS gets a JSON-RPC error body.
    """

    def __init__(self, dispatcher: Dispatcher):
        self.dispatcher = dispatcher

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        request = Request(scope, receive)
        response = await self.handle(request)
        await response(scope, receive, send)

    async def handle(self, request: Request) -> Response:
        if request.method == "OPTIONS":
            return Response(status_code=200, headers=CORS_HEADERS, media_type="application/json")

        if request.method != "POST":
            logger.debug("Rejected HTTP method", http_method=request.method)
            error = InvalidRequest().to_error()
            return _json_response(RPCResponse.failure(None, error), status_code=400)

        body = await request.body()
        try:
            rpc_request = self.dispatcher.decode(body)
        except ParseError as e:
            return _json_response(RPCResponse.failure(None, e.to_error()), status_code=400)

        rpc_response = await self.dispatcher.dispatch(rpc_request)
        return _json_response(rpc_response)


def create_app(dispatcher: Dispatcher, port: int) -> Starlette:
    """Build the ASGI app served on ``port``."""

    async def health(request: Request) -> Response:
        return JSONResponse({"status": "ok", "port": str(port)})

    return Starlette(
        routes=[
            Route("/jsonrpc", JsonRpcEndpoint(dispatcher)),
            Route("/health", health, methods=["GET"]),
        ],
    )
