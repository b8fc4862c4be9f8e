"""Management surface consumed by the host application."""

from .server import BridgeServer


class MobileAPI:
    """Thin pass-through to a caller-owned BridgeServer."""

    def __init__(self, server: BridgeServer):
        self.server = server

    async def start_server(self) -> int:
        """Start the JSON-RPC server and return its port."""
        return await self.server.start()

    async def stop_server(self) -> None:
        """Stop the JSON-RPC server if it is running."""
        await self.server.stop()

    async def get_server_port(self) -> int:
        """Current JSON-RPC server port, or 0 when stopped."""
        return await self.server.get_port()
