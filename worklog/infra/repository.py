"""
Repository Pattern Implementation.

Architecture Decision: Why Repository Pattern?
Separates data access logic from business logic. The services only see typed
repositories per logical key; the key-value store below them is the single
place that talks to SQLAlchemy and JSON. Makes it easy to:
- Switch database implementations
- Mock data for testing
- Keep storage failures from crashing the tracker
"""

import json
import logging
from datetime import datetime
from typing import Any, List, Optional, Type

from pydantic import BaseModel, ValidationError as PydanticValidationError
from sqlalchemy import delete
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from worklog.domain.errors import PersistenceFailure
from worklog.domain.models import Project, Task, TimeEntry, ActiveTimerContext
from worklog.infra.db import KeyValueModel, get_engine

logger = logging.getLogger(__name__)

STORAGE_KEYS = {
    "projects": "ttrack_proj_registry",
    "tasks": "ttrack_task_registry",
    "entries": "ttrack_entries_log",
    "active_timer": "ttrack_active_state",
    "last_project": "ttrack_last_proj",
}


class KeyValueStore:
    """
    Durable get/set/delete of JSON documents.

    The strict methods (read, write, remove) raise PersistenceFailure. The
    public contract (get, set, delete) never raises: get returns None on any
    failure and set/delete report success as a bool.
    """

    def __init__(self, session: Optional[AsyncSession] = None):
        self.session = session

    async def _get_session(self) -> AsyncSession:
        """Get session - either injected or create new one"""
        if self.session:
            return self.session
        engine = get_engine()
        return engine.get_session()

    async def read(self, key: str) -> Optional[Any]:
        session = await self._get_session()
        try:
            async with session:
                model = await session.get(KeyValueModel, key)
                raw = model.value if model else None
        except SQLAlchemyError as e:
            raise PersistenceFailure(f"Could not read '{key}': {e}") from e

        if raw is None:
            return None
        try:
            return json.loads(raw)
        except json.JSONDecodeError as e:
            raise PersistenceFailure(f"Corrupt value stored under '{key}': {e}") from e

    async def write(self, key: str, value: Any) -> None:
        try:
            payload = json.dumps(value)
        except (TypeError, ValueError) as e:
            raise PersistenceFailure(f"Value for '{key}' is not serializable: {e}") from e

        session = await self._get_session()
        try:
            async with session:
                await session.merge(KeyValueModel(key=key, value=payload, updated_at=datetime.now()))
                await session.commit()
        except SQLAlchemyError as e:
            raise PersistenceFailure(f"Could not write '{key}': {e}") from e

    async def remove(self, key: str) -> None:
        session = await self._get_session()
        try:
            async with session:
                await session.execute(delete(KeyValueModel).where(KeyValueModel.key == key))
                await session.commit()
        except SQLAlchemyError as e:
            raise PersistenceFailure(f"Could not delete '{key}': {e}") from e

    async def get(self, key: str) -> Optional[Any]:
        """Return the stored value, or None if missing or unreadable"""
        try:
            return await self.read(key)
        except PersistenceFailure as e:
            logger.error(f"Storage retrieval error: {e}")
            return None

    async def set(self, key: str, value: Any) -> bool:
        """Store a value. Returns False (and logs) if the write failed"""
        try:
            await self.write(key, value)
            return True
        except PersistenceFailure as e:
            logger.error(f"Storage write error, continuing in memory: {e}")
            return False

    async def delete(self, key: str) -> bool:
        """Delete a key. Returns False (and logs) if the delete failed"""
        try:
            await self.remove(key)
            return True
        except PersistenceFailure as e:
            logger.error(f"Storage purge error: {e}")
            return False


class _CollectionRepository:
    """Persists a whole list of records under a single key"""

    key: str = ""
    model: Type[BaseModel] = BaseModel

    def __init__(self, store: KeyValueStore):
        self.store = store

    async def get_all(self) -> List[Any]:
        """Load all records, skipping any that fail validation"""
        data = await self.store.get(self.key)
        if data is None:
            return []
        if not isinstance(data, list):
            logger.warning(f"Ignoring malformed collection under '{self.key}'")
            return []

        records = []
        for raw in data:
            try:
                records.append(self.model.model_validate(raw))
            except PydanticValidationError as e:
                logger.warning(f"Skipping corrupt record in '{self.key}': {e}")
        return records

    async def save_all(self, records: List[Any]) -> bool:
        """Replace the stored collection"""
        return await self.store.set(self.key, [r.model_dump(mode="json") for r in records])


class ProjectRepository(_CollectionRepository):
    key = STORAGE_KEYS["projects"]
    model = Project


class TaskRepository(_CollectionRepository):
    key = STORAGE_KEYS["tasks"]
    model = Task


class TimeEntryRepository(_CollectionRepository):
    key = STORAGE_KEYS["entries"]
    model = TimeEntry


class ActiveTimerRepository:
    """
    Handles the persisted in-flight timer so it survives a restart.
    """

    key = STORAGE_KEYS["active_timer"]

    def __init__(self, store: KeyValueStore):
        self.store = store

    async def get(self) -> Optional[ActiveTimerContext]:
        """Load the persisted timer. Corrupt state is discarded and cleared."""
        data = await self.store.get(self.key)
        if data is None:
            return None
        try:
            return ActiveTimerContext.model_validate(data)
        except PydanticValidationError as e:
            logger.warning(f"Discarding corrupt active timer state: {e}")
            await self.clear()
            return None

    async def save(self, context: ActiveTimerContext) -> bool:
        return await self.store.set(self.key, context.model_dump(mode="json"))

    async def clear(self) -> bool:
        return await self.store.delete(self.key)


class UserRepository:
    """
    Handles user selections that are remembered between sessions.
    """

    key = STORAGE_KEYS["last_project"]

    def __init__(self, store: KeyValueStore):
        self.store = store

    async def get_last_selected_project(self) -> Optional[str]:
        value = await self.store.get(self.key)
        return value if isinstance(value, str) else None

    async def set_last_selected_project(self, project_id: str) -> bool:
        return await self.store.set(self.key, project_id)
