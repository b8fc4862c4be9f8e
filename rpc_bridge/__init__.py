"""Local JSON-RPC over HTTP bridge."""

from .api import MobileAPI
from .client import BridgeClient, ClientError, RPCCallError
from .config import BridgeConfig, load_config
from .protocol.dispatcher import Dispatcher
from .server import (
    BindError,
    BridgeServer,
    LifecycleError,
    ShutdownTimeoutError,
    StartupError,
)

__version__ = "0.1.0"

__all__ = [
    "MobileAPI",
    "BridgeClient",
    "ClientError",
    "RPCCallError",
    "BridgeConfig",
    "load_config",
    "Dispatcher",
    "BridgeServer",
    "LifecycleError",
    "BindError",
    "StartupError",
    "ShutdownTimeoutError",
]
