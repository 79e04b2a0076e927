import logging
from contextlib import contextmanager
from enum import Enum
from typing import Any, Dict, List

from fastapi.concurrency import run_in_threadpool
from pydantic import BaseModel
from sqlalchemy.exc import SQLAlchemyError

from billflow.errors import BackendUnavailableError, NotFoundError
from billflow.models import SettingsRecord
from billflow.settings.models import Settings
from .base import Repository, SettingsRepository, T

logger = logging.getLogger(__name__)


# ============================================================
# SESSION HANDLING
# ============================================================

@contextmanager
def session_scope(session_factory, label: str):
    """
    Open a session, commit on success and roll back on failure.
    SQLAlchemy errors are reported as BackendUnavailableError.
    """
    session = session_factory()
    try:
        yield session
        session.commit()
    except SQLAlchemyError as e:
        session.rollback()
        logger.error(f"{label} store error: {e}")
        raise BackendUnavailableError(f"{label} store unavailable") from e
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


def column_values(record_cls, data: Dict[str, Any]) -> Dict[str, Any]:
    """Keep only table columns and turn enums/models into plain values."""
    columns = set(record_cls.__table__.columns.keys())
    values = {}
    for key, value in data.items():
        if key not in columns:
            continue
        if isinstance(value, Enum):
            value = value.value
        elif isinstance(value, BaseModel):
            value = value.model_dump(mode="json")
        elif isinstance(value, list):
            value = [
                v.model_dump(mode="json") if isinstance(v, BaseModel) else v
                for v in value
            ]
        values[key] = value
    return values


# ============================================================
# ENTITY REPOSITORY
# ============================================================

class SqlRepository(Repository[T]):
    """Repository over one ORM table. Blocking calls run in the thread pool."""

    def __init__(self, session_factory, record_cls, model, label: str):
        super().__init__(model, label)
        self.session_factory = session_factory
        self.record_cls = record_cls

    def _session(self):
        return session_scope(self.session_factory, self.label)

    def _load(self, session, entity_id: int):
        row = session.get(self.record_cls, entity_id)
        if row is None:
            raise NotFoundError(self.not_found_message())
        return row

    # --- blocking implementations ---

    def _get_all(self) -> List[T]:
        with self._session() as session:
            rows = session.query(self.record_cls).order_by(self.record_cls.id).all()
            return [self.model.model_validate(row) for row in rows]

    def _get_by_id(self, entity_id: int) -> T:
        with self._session() as session:
            return self.model.model_validate(self._load(session, entity_id))

    def _get_by(self, field: str, value: Any) -> List[T]:
        if isinstance(value, Enum):
            value = value.value
        with self._session() as session:
            rows = (
                session.query(self.record_cls)
                .filter(getattr(self.record_cls, field) == value)
                .order_by(self.record_cls.id)
                .all()
            )
            return [self.model.model_validate(row) for row in rows]

    def _create(self, data: Dict[str, Any]) -> T:
        with self._session() as session:
            row = self.record_cls(**column_values(self.record_cls, self.stamp(data)))
            session.add(row)
            session.flush()
            session.refresh(row)
            return self.model.model_validate(row)

    def _update(self, entity_id: int, data: Dict[str, Any]) -> T:
        with self._session() as session:
            row = self._load(session, entity_id)
            for key, value in column_values(self.record_cls, data).items():
                if key != "id":
                    setattr(row, key, value)
            session.flush()
            session.refresh(row)
            return self.model.model_validate(row)

    def _delete(self, entity_id: int) -> bool:
        with self._session() as session:
            session.delete(self._load(session, entity_id))
            return True

    def _count(self) -> int:
        with self._session() as session:
            return session.query(self.record_cls).count()

    # --- async surface ---

    async def get_all(self) -> List[T]:
        return await run_in_threadpool(self._get_all)

    async def get_by_id(self, entity_id: int) -> T:
        return await run_in_threadpool(self._get_by_id, entity_id)

    async def get_by(self, field: str, value: Any) -> List[T]:
        return await run_in_threadpool(self._get_by, field, value)

    async def create(self, data: Dict[str, Any]) -> T:
        return await run_in_threadpool(self._create, data)

    async def update(self, entity_id: int, data: Dict[str, Any]) -> T:
        return await run_in_threadpool(self._update, entity_id, data)

    async def delete(self, entity_id: int) -> bool:
        return await run_in_threadpool(self._delete, entity_id)

    async def count(self) -> int:
        return await run_in_threadpool(self._count)


# ============================================================
# SETTINGS (SINGLE ROW)
# ============================================================

class SqlSettingsRepository(SettingsRepository):

    ROW_ID = 1

    def __init__(self, session_factory, defaults: Settings):
        super().__init__(defaults)
        self.session_factory = session_factory

    def _write(self, session, settings: Settings):
        data = settings.model_dump(mode="json")
        row = session.get(SettingsRecord, self.ROW_ID)
        if row is None:
            row = SettingsRecord(id=self.ROW_ID)
            session.add(row)
        row.company = data["company"]
        row.preferences = data["preferences"]
        row.security = data["security"]
        return row

    def _get(self) -> Settings:
        with session_scope(self.session_factory, "Settings") as session:
            row = session.get(SettingsRecord, self.ROW_ID)
            if row is None:
                row = self._write(session, self.defaults)
            return Settings.model_validate({
                "company": row.company,
                "preferences": row.preferences,
                "security": row.security,
            })

    def _save(self, settings: Settings) -> Settings:
        with session_scope(self.session_factory, "Settings") as session:
            self._write(session, settings)
        return settings.model_copy(deep=True)

    async def get(self) -> Settings:
        return await run_in_threadpool(self._get)

    async def save(self, settings: Settings) -> Settings:
        return await run_in_threadpool(self._save, settings)
