"""Configuration management for the bridge server."""

import os
from typing import Any, Dict, Optional
import json
from pydantic import Field
from pydantic_settings import BaseSettings


class BridgeConfig(BaseSettings):
    """Main server configuration."""

    # Server settings
    server_name: str = "RPC Bridge"
    server_version: str = "0.1.0"
    debug: bool = False
    log_level: str = "info"

    # Listener
    host: str = "127.0.0.1"
    startup_timeout: float = Field(default=5.0, gt=0)
    shutdown_timeout: float = Field(default=5.0, gt=0)

    # Metrics
    metrics_port: Optional[int] = None

    class Config:
        env_prefix = "RPC_BRIDGE_"
        env_file = ".env"
        case_sensitive = False

    @classmethod
    def from_file(cls, config_file: str) -> "BridgeConfig":
        """Load configuration from JSON file."""
        with open(config_file, "r") as f:
            config_data = json.load(f)
        return cls(**config_data)

    @classmethod
    def from_env(cls) -> "BridgeConfig":
        """Load configuration from environment variables."""
        return cls()

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump()


def load_config(
    config_file: Optional[str] = None,
    use_env: bool = True
) -> BridgeConfig:
    """Load configuration from file or environment.

    Values passed from a file take precedence over the environment; a
    missing file falls back to the environment.
    """
    if config_file and os.path.exists(config_file):
        return BridgeConfig.from_file(config_file)
    if use_env:
        return BridgeConfig.from_env()
    # Defaults only, without reading the environment
    return BridgeConfig.model_construct()


def create_sample_config() -> Dict[str, Any]:
    """Create a sample configuration for reference."""
    return {
        "server_name": "RPC Bridge",
        "server_version": "0.1.0",
        "debug": False,
        "log_level": "info",
        "host": "127.0.0.1",
        "startup_timeout": 5.0,
        "shutdown_timeout": 5.0,
        "metrics_port": None
    }
