"""Base method interface and registry."""

from abc import ABC, abstractmethod
from typing import Dict, List, Optional, Type
import structlog
from pydantic import BaseModel, JsonValue, ValidationError

from ..protocol.errors import InvalidParams

logger = structlog.get_logger()


class Method(ABC):
    """Abstract base class for methods served over JSON-RPC.

    Subclasses declare ``params_model`` when they take arguments. The
    incoming ``params`` must then be a JSON object that validates against
    it; methods without a model ignore whatever ``params`` they receive.
    """

    params_model: Optional[Type[BaseModel]] = None
    invalid_params_message = "Invalid params"

    @property
    @abstractmethod
    def name(self) -> str:
        """Method name as it appears on the wire."""
        pass

    @property
    @abstractmethod
    def description(self) -> str:
        """Method description."""
        pass

    @abstractmethod
    async def execute(self, params: Optional[BaseModel]) -> JsonValue:
        """Execute the method with validated params."""
        pass

    async def call(self, params: JsonValue) -> JsonValue:
        """Validate raw params and execute."""
        validated = self._validate_params(params)
        return await self.execute(validated)

    def _validate_params(self, params: JsonValue) -> Optional[BaseModel]:
        if self.params_model is None:
            return None

        if not isinstance(params, dict):
            logger.debug("Params are not an object", method=self.name)
            raise InvalidParams("Invalid params")

        try:
            return self.params_model.model_validate(params)
        except ValidationError as e:
            logger.debug(
                "Params validation failed",
                method=self.name,
                error_count=e.error_count()
            )
            raise InvalidParams(self.invalid_params_message)


class MethodRegistry:
    """Registry mapping method names to handlers."""

    def __init__(self):
        self._methods: Dict[str, Method] = {}

    def register(self, method: Method) -> None:
        """Register a method instance under its name."""
        self._methods[method.name] = method
        logger.debug("Method registered", method=method.name)

    def register_class(self, method_class: Type[Method]) -> None:
        self.register(method_class())

    def get(self, name: Optional[str]) -> Optional[Method]:
        """Look up a method by exact, case-sensitive name."""
        if name is None:
            return None
        return self._methods.get(name)

    def names(self) -> List[str]:
        return list(self._methods)

    def __contains__(self, name: str) -> bool:
        return name in self._methods

    def __len__(self) -> int:
        return len(self._methods)
