"""Lifecycle management for the bridge HTTP server."""

import asyncio
import socket
from typing import Optional
import structlog
import uvicorn

from .config import BridgeConfig
from .protocol.dispatcher import Dispatcher
from .transport.http import create_app

logger = structlog.get_logger()


class LifecycleError(Exception):
    """Base exception for server lifecycle failures."""
    pass


class BindError(LifecycleError):
    """Raised when no listening socket could be bound."""
    pass


class StartupError(LifecycleError):
    """Raised when the server does not come up after binding."""
    pass


class ShutdownTimeoutError(LifecycleError):
    """Raised when in-flight requests outlive the shutdown grace period."""

    def __init__(self, timeout: float):
        super().__init__(f"Server shutdown timed out after {timeout}s")
        self.timeout = timeout


class BridgeServer:
    """One HTTP listener on an OS-assigned port, started and stopped on demand.

    ``start``, ``stop`` and ``get_port`` are serialized by a single lock;
    the lock is never held while requests are being served. Instances are
    independent, so several servers may run in one process.
    """

    def __init__(
        self,
        dispatcher: Optional[Dispatcher] = None,
        config: Optional[BridgeConfig] = None
    ):
        self.config = config or BridgeConfig()
        self.dispatcher = dispatcher or Dispatcher()
        self._lock = asyncio.Lock()
        self._server: Optional[uvicorn.Server] = None
        self._task: Optional[asyncio.Task] = None
        self._socket: Optional[socket.socket] = None
        self._port = 0

    @property
    def running(self) -> bool:
        return self._server is not None

    async def start(self) -> int:
        """Start serving if not already running and return the bound port."""
        async with self._lock:
            if self._server is not None:
                return self._port

            sock = self._bind()
            port = sock.getsockname()[1]

            app = create_app(self.dispatcher, port)
            server = uvicorn.Server(
                uvicorn.Config(
                    app,
                    lifespan="off",
                    log_config=None,
                )
            )
            task = asyncio.create_task(server.serve(sockets=[sock]))

            try:
                await self._wait_started(server, task)
            except Exception:
                sock.close()
                raise

            self._server = server
            self._task = task
            self._socket = sock
            self._port = port

            logger.info("Bridge server started", host=self.config.host, port=port)
            return port

    async def stop(self) -> None:
        """Shut down gracefully, waiting at most ``shutdown_timeout`` seconds."""
        await self._shutdown()

    async def _shutdown(self, only_task: Optional[asyncio.Task] = None) -> None:
        async with self._lock:
            if self._server is None:
                return
            # A different serving task means the server was restarted meanwhile
            if only_task is not None and self._task is not only_task:
                return

            server, task, port = self._server, self._task, self._port
            timeout = self.config.shutdown_timeout
            server.should_exit = True

            try:
                await asyncio.wait_for(task, timeout=timeout)
            except asyncio.TimeoutError:
                logger.warning("Bridge server shutdown timed out", port=port, timeout=timeout)
                raise ShutdownTimeoutError(timeout)
            except Exception as e:
                logger.error("Bridge server exited with error", port=port, error=str(e))
            finally:
                self._socket.close()
                self._server = None
                self._task = None
                self._socket = None
                self._port = 0

            logger.info("Bridge server stopped", port=port)

    async def get_port(self) -> int:
        """Return the active port, or 0 when not running."""
        async with self._lock:
            return self._port

    async def wait_closed(self) -> None:
        """Wait until the server stops on its own, then release it."""
        task = self._task
        if task is None:
            return
        await asyncio.wait({task})
        await self._shutdown(only_task=task)

    def _bind(self) -> socket.socket:
        sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        try:
            sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
            sock.bind((self.config.host, 0))
            sock.set_inheritable(True)
        except OSError as e:
            sock.close()
            logger.error("Failed to bind listener", host=self.config.host, error=str(e))
            raise BindError(f"Failed to find available port on {self.config.host}: {e}") from e
        return sock

    async def _wait_started(self, server: uvicorn.Server, task: asyncio.Task) -> None:
        loop = asyncio.get_running_loop()
        deadline = loop.time() + self.config.startup_timeout

        while not server.started:
            if task.done():
                error = None if task.cancelled() else task.exception()
                raise StartupError(f"Server exited during startup: {error}")
            if loop.time() > deadline:
                server.should_exit = True
                task.cancel()
                raise StartupError(
                    f"Server did not start within {self.config.startup_timeout}s"
                )
            await asyncio.sleep(0.01)

    async def __aenter__(self):
        await self.start()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.stop()
