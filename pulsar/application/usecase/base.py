"""Base use case."""

from abc import ABC, abstractmethod
from typing import Any
from uuid import UUID

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from pulsar.domain.error import NotFoundError


class BaseUseCase(ABC):
    """Base use case for orchestrating domain services."""

    @abstractmethod
    async def execute(self, request: Any) -> Any:
        pass


class CamelModel(BaseModel):
    """Response model serialized with camelCase keys for the web client."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


def parse_id(raw: str, resource: str) -> UUID:
    """Parse an identifier, treating malformed ones as unknown.

    Raises:
        NotFoundError: If ``raw`` is not a UUID
    """
    try:
        return UUID(raw)
    except ValueError:
        raise NotFoundError(resource, raw)
