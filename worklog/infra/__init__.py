"""Infrastructure layer - Configuration, database and persistence"""

from .db import DatabaseEngine, get_engine, init_db
from .repository import KeyValueStore, STORAGE_KEYS

__all__ = ["DatabaseEngine", "get_engine", "init_db", "KeyValueStore", "STORAGE_KEYS"]
