import logging
from typing import Any, Dict, Iterable, List

from billflow.errors import NotFoundError
from billflow.settings.models import Settings
from .base import Repository, SettingsRepository, T

logger = logging.getLogger(__name__)


class MemoryRepository(Repository[T]):
    """Dict-backed repository. Callers always receive copies."""

    def __init__(self, model, label: str, records: Iterable[Dict[str, Any]] = ()):
        super().__init__(model, label)
        self._rows: Dict[int, T] = {}
        for raw in records:
            row = model.model_validate(raw)
            self._rows[row.id] = row

    async def get_all(self) -> List[T]:
        return [row.model_copy(deep=True) for row in self._rows.values()]

    async def get_by_id(self, entity_id: int) -> T:
        row = self._rows.get(entity_id)
        if row is None:
            raise NotFoundError(self.not_found_message())
        return row.model_copy(deep=True)

    async def get_by(self, field: str, value: Any) -> List[T]:
        return [
            row.model_copy(deep=True)
            for row in self._rows.values()
            if getattr(row, field) == value
        ]

    async def create(self, data: Dict[str, Any]) -> T:
        new_id = max(self._rows, default=0) + 1
        payload = self.stamp(data)
        payload["id"] = new_id
        row = self.model.model_validate(payload)
        self._rows[new_id] = row
        return row.model_copy(deep=True)

    async def update(self, entity_id: int, data: Dict[str, Any]) -> T:
        current = self._rows.get(entity_id)
        if current is None:
            raise NotFoundError(self.not_found_message())
        merged = {**current.model_dump(), **data, "id": entity_id}
        row = self.model.model_validate(merged)
        self._rows[entity_id] = row
        return row.model_copy(deep=True)

    async def delete(self, entity_id: int) -> bool:
        if entity_id not in self._rows:
            raise NotFoundError(self.not_found_message())
        del self._rows[entity_id]
        return True

    async def count(self) -> int:
        return len(self._rows)


class MemorySettingsRepository(SettingsRepository):

    def __init__(self, defaults: Settings):
        super().__init__(defaults)
        self._settings = defaults.model_copy(deep=True)

    async def get(self) -> Settings:
        return self._settings.model_copy(deep=True)

    async def save(self, settings: Settings) -> Settings:
        self._settings = settings.model_copy(deep=True)
        return self._settings.model_copy(deep=True)
