"""Tests for the JSON-RPC dispatcher."""

import pytest

from rpc_bridge.methods import Method, MethodRegistry, create_default_registry
from rpc_bridge.protocol.dispatcher import Dispatcher
from rpc_bridge.protocol.errors import ParseError
from rpc_bridge.protocol.messages import ErrorCode, RPCRequest, RPCResponse


class BrokenMethod(Method):
    """Method that fails with an unexpected exception."""

    @property
    def name(self) -> str:
        return "broken"

    @property
    def description(self) -> str:
        return "Always raises"

    async def execute(self, params):
        raise RuntimeError("boom")


@pytest.fixture
def dispatcher():
    return Dispatcher()


class TestDecode:
    """Test envelope decoding."""

    def test_decode_request(self, dispatcher):
        """Test a well-formed envelope."""
        request = dispatcher.decode(
            b'{"jsonrpc": "2.0", "method": "calculate", "params": {"a": 1, "b": 2}, "id": 7}'
        )

        assert request.jsonrpc == "2.0"
        assert request.method == "calculate"
        assert request.params == {"a": 1, "b": 2}
        assert request.id == 7

    def test_missing_fields_default_empty(self, dispatcher):
        """Test missing version and method decode to empty strings."""
        request = dispatcher.decode(b'{}')

        assert request.jsonrpc == ""
        assert request.method == ""
        assert request.params is None
        assert request.id is None

    @pytest.mark.parametrize("body", [
        b'',
        b'{not json',
        b'[{"jsonrpc": "2.0", "method": "getSystemInfo", "id": 1}]',
        b'"just a string"',
        b'{"jsonrpc": "2.0", "method": 12, "id": 1}',
        b'{"jsonrpc": 2.0, "method": "getSystemInfo", "id": 1}',
        b'{"jsonrpc": "2.0", "method": "getSystemInfo", "id": NaN}',
        b'{"jsonrpc": "2.0", "method": "calculate", "params": {"a": 1e400, "b": 1}, "id": 1}',
    ])
    def test_malformed_body(self, dispatcher, body):
        """Test bodies that are not a request envelope raise ParseError."""
        with pytest.raises(ParseError) as exc_info:
            dispatcher.decode(body)

        assert exc_info.value.code == ErrorCode.PARSE_ERROR


class TestDispatch:
    """Test request routing."""

    @pytest.mark.asyncio
    async def test_unknown_method(self, dispatcher):
        """Test unknown methods return method not found with id echoed."""
        response = await dispatcher.dispatch(
            RPCRequest(jsonrpc="2.0", method="doesNotExist", id="abc")
        )

        assert response.error.code == ErrorCode.METHOD_NOT_FOUND
        assert response.error.message == "Method not found"
        assert response.id == "abc"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("version", ["1.0", "", None, "2"])
    async def test_wrong_version(self, dispatcher, version):
        """Test any version other than 2.0 is an invalid request."""
        response = await dispatcher.dispatch(
            RPCRequest(jsonrpc=version, method="getSystemInfo", id=3)
        )

        assert response.error.code == ErrorCode.INVALID_REQUEST
        assert response.id == 3

    @pytest.mark.asyncio
    async def test_version_checked_before_method(self, dispatcher):
        """Test a bad version wins over an unknown method."""
        response = await dispatcher.dispatch(
            RPCRequest(jsonrpc="1.0", method="doesNotExist", id=1)
        )
        assert response.error.code == ErrorCode.INVALID_REQUEST

    @pytest.mark.asyncio
    async def test_calculate(self, dispatcher):
        """Test calculate routes and truncates."""
        response = await dispatcher.dispatch(
            RPCRequest(jsonrpc="2.0", method="calculate", params={"a": 2.7, "b": 3.2}, id=1)
        )

        assert response.error is None
        assert response.result == 5
        assert response.jsonrpc == "2.0"

    @pytest.mark.asyncio
    async def test_greeting(self, dispatcher):
        """Test getGreeting routes."""
        response = await dispatcher.dispatch(
            RPCRequest(jsonrpc="2.0", method="getGreeting", params={"name": "Ada"}, id=1)
        )
        assert "Ada" in response.result

    @pytest.mark.asyncio
    async def test_greeting_missing_name(self, dispatcher):
        """Test getGreeting without name is invalid params."""
        response = await dispatcher.dispatch(
            RPCRequest(jsonrpc="2.0", method="getGreeting", params={}, id=9)
        )

        assert response.error.code == ErrorCode.INVALID_PARAMS
        assert response.id == 9

    @pytest.mark.asyncio
    @pytest.mark.parametrize("request_id", [None, 0, 12, "req-1", 1.5, {"k": "v"}])
    async def test_id_echoed(self, dispatcher, request_id):
        """Test ids of any shape are echoed unchanged."""
        response = await dispatcher.dispatch(
            RPCRequest(jsonrpc="2.0", method="getSystemInfo", id=request_id)
        )
        assert response.id == request_id

    @pytest.mark.asyncio
    async def test_handler_exception_is_internal_error(self):
        """Test unexpected handler failures become internal errors."""
        registry = MethodRegistry()
        registry.register(BrokenMethod())
        dispatcher = Dispatcher(registry)

        response = await dispatcher.dispatch(
            RPCRequest(jsonrpc="2.0", method="broken", id=1)
        )

        assert response.error.code == ErrorCode.INTERNAL_ERROR
        assert response.id == 1

    @pytest.mark.asyncio
    async def test_custom_registry(self):
        """Test an empty registry knows no methods."""
        dispatcher = Dispatcher(MethodRegistry())

        response = await dispatcher.dispatch(
            RPCRequest(jsonrpc="2.0", method="getSystemInfo", id=1)
        )
        assert response.error.code == ErrorCode.METHOD_NOT_FOUND

    def test_default_registry_used(self):
        """Test the dispatcher defaults to the built-in methods."""
        assert set(Dispatcher().registry.names()) == set(create_default_registry().names())


class TestResponseWireForm:
    """Test response serialization."""

    def test_success_has_result_only(self):
        """Test a success carries result and no error."""
        message = RPCResponse.success(1, 0).to_dict()

        assert message == {"jsonrpc": "2.0", "result": 0, "id": 1}

    def test_error_has_error_only(self):
        """Test an error carries error and no result, and omits empty data."""
        message = RPCResponse.failure(
            None, ParseError().to_error()
        ).to_dict()

        assert message == {
            "jsonrpc": "2.0",
            "error": {"code": -32700, "message": "Parse error"},
            "id": None,
        }
