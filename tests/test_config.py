"""Tests for configuration loading."""

import json

import pytest
from pydantic import ValidationError

from rpc_bridge.config import BridgeConfig, create_sample_config, load_config


class TestConfig:
    """Test configuration sources."""

    def test_defaults(self, monkeypatch):
        """Test defaults without environment overrides."""
        monkeypatch.delenv("RPC_BRIDGE_HOST", raising=False)
        config = load_config(use_env=False)

        assert config.host == "127.0.0.1"
        assert config.shutdown_timeout == 5.0
        assert config.metrics_port is None

    def test_from_env(self, monkeypatch):
        """Test prefixed environment variables."""
        monkeypatch.setenv("RPC_BRIDGE_HOST", "0.0.0.0")
        monkeypatch.setenv("RPC_BRIDGE_SHUTDOWN_TIMEOUT", "2.5")
        monkeypatch.setenv("RPC_BRIDGE_METRICS_PORT", "9100")

        config = load_config()

        assert config.host == "0.0.0.0"
        assert config.shutdown_timeout == 2.5
        assert config.metrics_port == 9100

    def test_from_file(self, tmp_path):
        """Test loading a JSON config file."""
        config_file = tmp_path / "config.json"
        config_file.write_text(json.dumps({"host": "localhost", "log_level": "debug"}))

        config = load_config(str(config_file))

        assert config.host == "localhost"
        assert config.log_level == "debug"

    def test_missing_file_falls_back(self, tmp_path):
        """Test a missing file falls back to the environment."""
        config = load_config(str(tmp_path / "absent.json"))
        assert isinstance(config, BridgeConfig)

    def test_invalid_timeout(self):
        """Test non-positive timeouts are rejected."""
        with pytest.raises(ValidationError):
            BridgeConfig(shutdown_timeout=0)

    def test_sample_config_is_valid(self):
        """Test the sample config validates."""
        sample = create_sample_config()
        config = BridgeConfig(**sample)

        assert config.to_dict()["host"] == sample["host"]
