#!/usr/bin/env python3
"""Main entry point for the RPC bridge server."""

import asyncio
import argparse
import json
import logging
import os
import sys
from typing import Optional
import structlog
from prometheus_client import start_http_server
from structlog.contextvars import clear_contextvars

from .config import load_config, create_sample_config
from .server import BridgeServer


def setup_logging(level: str = "info", debug: bool = False) -> None:
    """Setup structured logging."""
    log_level = getattr(logging, level.upper(), logging.INFO)

    processors = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    if debug:
        processors.append(structlog.dev.ConsoleRenderer())
    else:
        processors.append(structlog.processors.JSONRenderer())

    structlog.configure(
        processors=processors,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(level=log_level, format="%(message)s")


async def run_server(config_file: Optional[str] = None) -> None:
    """Run the bridge until it is interrupted."""
    config = load_config(config_file)

    setup_logging(config.log_level, config.debug)
    logger = structlog.get_logger()

    logger.info(
        "Starting bridge server",
        server_name=config.server_name,
        version=config.server_version,
        host=config.host
    )

    if config.metrics_port:
        start_http_server(config.metrics_port)
        logger.info("Metrics server started", port=config.metrics_port)

    try:
        async with BridgeServer(config=config) as server:
            logger.info("Bridge server running", port=await server.get_port())
            await server.wait_closed()

    except Exception as e:
        logger.error("Server error", error=str(e), exc_info=True)
        sys.exit(1)
    finally:
        clear_contextvars()
        logger.info("Bridge server exited")


def main() -> None:
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Local JSON-RPC bridge server",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Run on an ephemeral port on 127.0.0.1
  rpc-bridge

  # Run with custom config file
  rpc-bridge --config config.json

  # Generate sample config
  rpc-bridge --sample-config

  # Listen on all interfaces with metrics exported on 9100
  RPC_BRIDGE_HOST=0.0.0.0 RPC_BRIDGE_METRICS_PORT=9100 rpc-bridge
"""
    )

    parser.add_argument(
        "--config",
        "-c",
        help="Configuration file path (JSON format)"
    )
    parser.add_argument(
        "--sample-config",
        action="store_true",
        help="Generate sample configuration and exit"
    )
    parser.add_argument(
        "--validate-config",
        action="store_true",
        help="Validate configuration and exit"
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging"
    )

    args = parser.parse_args()

    if args.sample_config:
        print(json.dumps(create_sample_config(), indent=2))
        return

    if args.validate_config:
        try:
            config = load_config(args.config)
            print("Configuration is valid")
            print(json.dumps(config.to_dict(), indent=2))
        except Exception as e:
            print(f"Configuration error: {e}", file=sys.stderr)
            sys.exit(1)
        return

    if args.debug:
        os.environ["RPC_BRIDGE_DEBUG"] = "true"
        os.environ["RPC_BRIDGE_LOG_LEVEL"] = "debug"

    try:
        asyncio.run(run_server(args.config))
    except KeyboardInterrupt:
        pass


if __name__ == "__main__":
    main()
