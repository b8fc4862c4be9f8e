"""HTTP client for calling a running bridge."""

from typing import Any, Dict, Optional
import httpx
import structlog
from pydantic import JsonValue

from .protocol.messages import JSONRPC_VERSION

logger = structlog.get_logger()


class ClientError(Exception):
    """Raised when the bridge cannot be reached or answers with bad HTTP."""
    pass


class RPCCallError(ClientError):
    """Raised when the bridge answers with a JSON-RPC error object."""

    def __init__(self, code: int, message: str, data: JsonValue = None):
        super().__init__(f"JSON-RPC error: {message} (code: {code})")
        self.code = code
        self.message = message
        self.data = data


class BridgeClient:
    """JSON-RPC client for the bridge HTTP surface. Calls are never retried."""

    def __init__(self, base_url: str, timeout: float = 10.0):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._client: Optional[httpx.AsyncClient] = None
        self._request_id = 0

    @classmethod
    def for_port(cls, port: int, host: str = "127.0.0.1", **kwargs) -> "BridgeClient":
        return cls(f"http://{host}:{port}", **kwargs)

    @property
    def connected(self) -> bool:
        return self._client is not None

    async def connect(self) -> None:
        """Create the underlying HTTP client."""
        if self._client is not None:
            return
        self._client = httpx.AsyncClient(base_url=self.base_url, timeout=self.timeout)
        logger.debug("Bridge client connected", base_url=self.base_url)

    async def disconnect(self) -> None:
        if self._client is None:
            return
        await self._client.aclose()
        self._client = None
        logger.debug("Bridge client disconnected", base_url=self.base_url)

    def _next_request_id(self) -> int:
        self._request_id += 1
        return self._request_id

    async def call(self, method: str, params: JsonValue = None) -> JsonValue:
        """Invoke ``method`` and return its result."""
        if self._client is None:
            raise ClientError("Not connected")

        request: Dict[str, Any] = {
            "jsonrpc": JSONRPC_VERSION,
            "method": method,
            "id": self._next_request_id(),
        }
        if params is not None:
            request["params"] = params

        try:
            response = await self._client.post("/jsonrpc", json=request)
            response.raise_for_status()
            message = response.json()
        except httpx.HTTPError as e:
            logger.error("HTTP error calling bridge", method=method, error=str(e))
            raise ClientError(f"JSON-RPC call failed: {e}")
        except ValueError as e:
            raise ClientError(f"JSON-RPC call failed: invalid response body: {e}")

        error = message.get("error")
        if error:
            raise RPCCallError(error.get("code"), error.get("message"), error.get("data"))

        return message.get("result")

    async def get_greeting(self, name: str) -> str:
        return await self.call("getGreeting", {"name": name})

    async def get_current_time(self) -> str:
        return await self.call("getCurrentTime")

    async def calculate(self, a: float, b: float) -> int:
        return await self.call("calculate", {"a": a, "b": b})

    async def get_system_info(self) -> str:
        return await self.call("getSystemInfo")

    async def check_health(self) -> Dict[str, str]:
        """Fetch the liveness payload from ``/health``."""
        if self._client is None:
            raise ClientError("Not connected")
        try:
            response = await self._client.get("/health")
            response.raise_for_status()
        except httpx.HTTPError as e:
            raise ClientError(f"Health check failed: {e}")
        return response.json()

    async def __aenter__(self):
        await self.connect()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.disconnect()
