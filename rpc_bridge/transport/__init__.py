"""HTTP transport for the bridge."""

from .http import CORS_HEADERS, create_app

__all__ = ["CORS_HEADERS", "create_app"]
