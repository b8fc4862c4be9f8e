"""Demonstration methods exposed to the host application."""

import math
import platform
from datetime import datetime
from typing import Optional, Union
import structlog
from pydantic import BaseModel, StrictFloat, StrictInt, StrictStr, field_validator

from .base import Method

logger = structlog.get_logger()

TIME_FORMAT = "%Y-%m-%d %H:%M:%S"


class GreetingParams(BaseModel):
    name: StrictStr


class CalculateParams(BaseModel):
    # Booleans are rejected by the strict types.
    a: Union[StrictInt, StrictFloat]
    b: Union[StrictInt, StrictFloat]

    @field_validator("a", "b")
    @classmethod
    def _finite(cls, value: Union[int, float]) -> Union[int, float]:
        if isinstance(value, float) and not math.isfinite(value):
            raise ValueError("operand must be finite")
        return value


class GreetingMethod(Method):
    """Greets the caller by name."""

    params_model = GreetingParams
    invalid_params_message = "Missing or invalid 'name' parameter"

    @property
    def name(self) -> str:
        return "getGreeting"

    @property
    def description(self) -> str:
        return "Return a greeting for the given name"

    async def execute(self, params: Optional[BaseModel]) -> str:
        return f"Hello {params.name} from Python!"


class CurrentTimeMethod(Method):
    """Current local wall-clock time."""

    @property
    def name(self) -> str:
        return "getCurrentTime"

    @property
    def description(self) -> str:
        return "Return the current local time as YYYY-MM-DD HH:MM:SS"

    async def execute(self, params: Optional[BaseModel]) -> str:
        return datetime.now().strftime(TIME_FORMAT)


class CalculateMethod(Method):
    """Integer addition of two numeric operands.

    Each operand is truncated toward zero before the addition, so
    ``a=2.7, b=3.2`` yields ``5`` rather than ``int(5.9)``.
    """

    params_model = CalculateParams
    invalid_params_message = "Missing or invalid 'a' or 'b' parameters"

    @property
    def name(self) -> str:
        return "calculate"

    @property
    def description(self) -> str:
        return "Add two numbers after truncating each to an integer"

    async def execute(self, params: Optional[BaseModel]) -> int:
        result = int(params.a) + int(params.b)
        logger.debug("Calculated sum", a=params.a, b=params.b, result=result)
        return result


class SystemInfoMethod(Method):
    @property
    def name(self) -> str:
        return "getSystemInfo"

    @property
    def description(self) -> str:
        return "Describe the runtime serving the bridge"

    async def execute(self, params: Optional[BaseModel]) -> str:
        return f"Python version: {platform.python_version()}"
