"""Base use case and shared API models."""

from abc import ABC, abstractmethod
from typing import Any

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class ApiModel(BaseModel):
    """Request/response model serialized with camelCase keys.

    snake_case field names are accepted on input as well.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class BaseUseCase(ABC):
    """Base use case: translates an API-level request into domain service calls."""

    @abstractmethod
    async def execute(self, request: Any) -> Any:
        pass
