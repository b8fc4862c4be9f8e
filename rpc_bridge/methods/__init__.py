"""Methods served by the bridge."""

from .base import Method, MethodRegistry
from .demo import (
    CalculateMethod,
    CurrentTimeMethod,
    GreetingMethod,
    SystemInfoMethod,
)

DEFAULT_METHODS = [
    GreetingMethod,
    CurrentTimeMethod,
    CalculateMethod,
    SystemInfoMethod,
]


def create_default_registry() -> MethodRegistry:
    """Registry holding the built-in demonstration methods."""
    registry = MethodRegistry()
    for method_class in DEFAULT_METHODS:
        registry.register_class(method_class)
    return registry


__all__ = [
    "Method",
    "MethodRegistry",
    "GreetingMethod",
    "CurrentTimeMethod",
    "CalculateMethod",
    "SystemInfoMethod",
    "create_default_registry",
]
