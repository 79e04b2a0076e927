"""
Entity Store contract.

Every entity type gets one repository exposing the same async CRUD surface.
Repositories hand out canonical pydantic models; records read from a backend
are validated through those models, which also accept the alternative field
spellings some backends use (``Id``, ``Name``, ``clientId`` ...).
"""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Any, Dict, Generic, List, Type, TypeVar

from pydantic import BaseModel

from billflow.settings.models import Settings

T = TypeVar("T", bound=BaseModel)


class Repository(ABC, Generic[T]):
    """CRUD operations for one entity type."""

    def __init__(self, model: Type[T], label: str):
        self.model = model
        self.label = label

    def not_found_message(self) -> str:
        return f"{self.label} not found"

    def stamp(self, data: Dict[str, Any]) -> Dict[str, Any]:
        """Fill in created_at for models that carry one."""
        payload = dict(data)
        if "created_at" in self.model.model_fields and payload.get("created_at") is None:
            payload["created_at"] = datetime.now()
        return payload

    @abstractmethod
    async def get_all(self) -> List[T]:
        ...

    @abstractmethod
    async def get_by_id(self, entity_id: int) -> T:
        """Return the entity or raise NotFoundError."""

    @abstractmethod
    async def get_by(self, field: str, value: Any) -> List[T]:
        """Return every entity whose ``field`` equals ``value``."""

    @abstractmethod
    async def create(self, data: Dict[str, Any]) -> T:
        """Assign an id (and created_at) and persist the entity."""

    @abstractmethod
    async def update(self, entity_id: int, data: Dict[str, Any]) -> T:
        """Merge ``data`` into the stored entity."""

    @abstractmethod
    async def delete(self, entity_id: int) -> bool:
        ...

    async def count(self) -> int:
        return len(await self.get_all())


class SettingsRepository(ABC):
    """Singleton settings record."""

    def __init__(self, defaults: Settings):
        self.defaults = defaults

    @abstractmethod
    async def get(self) -> Settings:
        ...

    @abstractmethod
    async def save(self, settings: Settings) -> Settings:
        ...

    async def reset(self) -> Settings:
        return await self.save(self.defaults.model_copy(deep=True))
