"""Key-value persistence for the notification log and settings."""
import logging
import sqlite3
from contextlib import contextmanager

from database.db_manager import DatabaseManager
from utils.errors import StoreUnavailable

logger = logging.getLogger(__name__)


class DatabaseKeyValueStore:
    """Backed by the app_settings table."""

    def __init__(self, db: DatabaseManager):
        self._db = db

    @contextmanager
    def _guard(self, action: str, key: str):
        try:
            yield
        except sqlite3.Error as exc:
            logger.error("Error %s setting %s: %s", action, key, exc)
            raise StoreUnavailable(f"Error {action} setting {key}: {exc}") from exc

    def get(self, key: str, default: str | None = None) -> str | None:
        with self._guard("reading", key):
            return self._db.get_setting(key, default)

    def set(self, key: str, value: str) -> None:
        with self._guard("writing", key):
            self._db.set_setting(key, value)


class MemoryKeyValueStore:
    def __init__(self, initial: dict[str, str] | None = None):
        self.data: dict[str, str] = dict(initial or {})

    def get(self, key: str, default: str | None = None) -> str | None:
        return self.data.get(key, default)

    def set(self, key: str, value: str) -> None:
        self.data[key] = value
