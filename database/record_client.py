"""Generic table clients for the record store.

Every DAO talks to storage through the same five calls, so the durable
SQLite store and the in-memory store used by tests and demo mode are
interchangeable. Records are plain dicts keyed by column name: the system
columns ``Id``, ``Name``, ``Tags``, ``CreatedOn``, ``ModifiedOn`` plus the
``*_c`` data columns.
"""
import json
import logging
import sqlite3
import time
from contextlib import contextmanager
from datetime import datetime

from database.db_manager import DatabaseManager
from utils.errors import StoreUnavailable

logger = logging.getLogger(__name__)

RECORD_TABLES = ("budget_c", "transaction_c", "goal_c", "category_c", "bank_account_c")
SYSTEM_COLUMNS = ("Id", "CreatedOn", "ModifiedOn")


class RecordClient:
    def fetch_records(
        self,
        table: str,
        where: dict | None = None,
        order_by: str | None = None,
        descending: bool = False,
        limit: int | None = None,
    ) -> list[dict]:
        raise NotImplementedError

    def get_record_by_id(self, table: str, record_id: int) -> dict | None:
        raise NotImplementedError

    def create_record(self, table: str, record: dict) -> dict:
        raise NotImplementedError

    def update_record(self, table: str, record_id: int, fields: dict) -> dict | None:
        """Apply a partial update. Returns None when the id does not exist."""
        raise NotImplementedError

    def delete_record(self, table: str, record_id: int) -> bool:
        """Returns False when the id does not exist."""
        raise NotImplementedError


class SqliteRecordClient(RecordClient):
    def __init__(self, db: DatabaseManager):
        self._db = db
        self._columns: dict[str, set[str]] = {}

    @contextmanager
    def _guard(self, action: str, table: str):
        try:
            yield
        except sqlite3.Error as exc:
            logger.error("Error %s %s: %s", action, table, exc)
            raise StoreUnavailable(f"Error {action} {table}: {exc}") from exc

    def _table_columns(self, table: str) -> set[str]:
        if table not in RECORD_TABLES:
            raise ValueError(f"Unknown table '{table}'.")
        if table not in self._columns:
            rows = self._db.get_connection().execute(
                f"PRAGMA table_info({table})"
            ).fetchall()
            self._columns[table] = {row[1] for row in rows}
        return self._columns[table]

    def _check_columns(self, table: str, names) -> None:
        unknown = set(names) - self._table_columns(table)
        if unknown:
            raise ValueError(
                f"Unknown column(s) for {table}: {', '.join(sorted(unknown))}"
            )

    def fetch_records(self, table, where=None, order_by=None, descending=False, limit=None):
        where = where or {}
        self._check_columns(table, list(where) + ([order_by] if order_by else []))
        sql = f"SELECT * FROM {table}"
        params: list = []
        if where:
            clauses = []
            for column, value in where.items():
                if value is None:
                    clauses.append(f"{column} IS NULL")
                else:
                    clauses.append(f"{column} = ?")
                    params.append(value)
            sql += " WHERE " + " AND ".join(clauses)
        sql += f" ORDER BY {order_by or 'Id'} {'DESC' if descending else 'ASC'}"
        if limit is not None:
            sql += " LIMIT ?"
            params.append(int(limit))
        with self._guard("fetching", table):
            rows = self._db.get_connection().execute(sql, params).fetchall()
        return [dict(r) for r in rows]

    def get_record_by_id(self, table, record_id):
        self._table_columns(table)
        with self._guard("fetching", table):
            row = self._db.get_connection().execute(
                f"SELECT * FROM {table} WHERE Id = ?", (record_id,)
            ).fetchone()
        return dict(row) if row else None

    def create_record(self, table, record):
        fields = {k: v for k, v in record.items() if k not in SYSTEM_COLUMNS}
        self._check_columns(table, fields)
        columns = ", ".join(fields)
        placeholders = ", ".join("?" for _ in fields)
        with self._guard("creating", table):
            conn = self._db.get_connection()
            if fields:
                cursor = conn.execute(
                    f"INSERT INTO {table}({columns}) VALUES ({placeholders})",
                    list(fields.values()),
                )
            else:
                cursor = conn.execute(f"INSERT INTO {table} DEFAULT VALUES")
            conn.commit()
        return self.get_record_by_id(table, cursor.lastrowid)

    def update_record(self, table, record_id, fields):
        fields = {k: v for k, v in fields.items() if k not in SYSTEM_COLUMNS}
        self._check_columns(table, fields)
        assignments = [f"{column} = ?" for column in fields]
        assignments.append("ModifiedOn = datetime('now')")
        with self._guard("updating", table):
            conn = self._db.get_connection()
            cursor = conn.execute(
                f"UPDATE {table} SET {', '.join(assignments)} WHERE Id = ?",
                [*fields.values(), record_id],
            )
            conn.commit()
        if cursor.rowcount == 0:
            return None
        return self.get_record_by_id(table, record_id)

    def delete_record(self, table, record_id):
        self._table_columns(table)
        with self._guard("deleting", table):
            conn = self._db.get_connection()
            cursor = conn.execute(f"DELETE FROM {table} WHERE Id = ?", (record_id,))
            conn.commit()
        return cursor.rowcount > 0


class MemoryRecordClient(RecordClient):
    """Dict-backed store with an optional artificial delay per call."""

    def __init__(self, seed: dict[str, list[dict]] | None = None, delay: float = 0.0):
        self.delay = delay
        self._tables: dict[str, dict[int, dict]] = {t: {} for t in RECORD_TABLES}
        self._next_id: dict[str, int] = {t: 1 for t in RECORD_TABLES}
        for table, rows in (seed or {}).items():
            for row in rows:
                self._insert(table, dict(row))

    @classmethod
    def from_json(cls, path: str, delay: float = 0.0) -> "MemoryRecordClient":
        """Load seed rows from a JSON file shaped {table: [record, ...]}."""
        with open(path, "r", encoding="utf-8") as f:
            return cls(json.load(f), delay=delay)

    def _rows(self, table: str) -> dict[int, dict]:
        if table not in self._tables:
            raise ValueError(f"Unknown table '{table}'.")
        return self._tables[table]

    def _wait(self):
        if self.delay:
            time.sleep(self.delay)

    def _insert(self, table: str, record: dict) -> dict:
        rows = self._rows(table)
        record_id = record.get("Id") or self._next_id[table]
        stamp = datetime.now().isoformat(timespec="seconds")
        stored = {"Name": "", "Tags": "", **record, "Id": record_id}
        stored.setdefault("CreatedOn", stamp)
        stored.setdefault("ModifiedOn", stamp)
        rows[record_id] = stored
        self._next_id[table] = max(self._next_id[table], record_id + 1)
        return dict(stored)

    def fetch_records(self, table, where=None, order_by=None, descending=False, limit=None):
        self._wait()
        rows = [
            dict(r) for r in self._rows(table).values()
            if all(r.get(k) == v for k, v in (where or {}).items())
        ]
        key = order_by or "Id"
        # None sorts last ascending, first descending
        rows.sort(
            key=lambda r: (r.get(key) is None, r.get(key) if r.get(key) is not None else ""),
            reverse=descending,
        )
        return rows[:limit] if limit is not None else rows

    def get_record_by_id(self, table, record_id):
        self._wait()
        row = self._rows(table).get(record_id)
        return dict(row) if row else None

    def create_record(self, table, record):
        self._wait()
        fields = {k: v for k, v in record.items() if k not in SYSTEM_COLUMNS}
        return self._insert(table, fields)

    def update_record(self, table, record_id, fields):
        self._wait()
        row = self._rows(table).get(record_id)
        if row is None:
            return None
        row.update({k: v for k, v in fields.items() if k not in SYSTEM_COLUMNS})
        row["ModifiedOn"] = datetime.now().isoformat(timespec="seconds")
        return dict(row)

    def delete_record(self, table, record_id):
        self._wait()
        return self._rows(table).pop(record_id, None) is not None


def create_record_client(config: dict, db: DatabaseManager | None = None) -> RecordClient:
    """Pick the storage adapter named by config["backend"]."""
    backend = config.get("backend", "sqlite")
    if backend == "memory":
        seed_file = config.get("seed_file")
        if seed_file:
            logger.info("Using in-memory record store seeded from %s", seed_file)
            return MemoryRecordClient.from_json(seed_file)
        return MemoryRecordClient()
    if backend == "sqlite":
        if db is None:
            raise ValueError("The sqlite backend needs an open DatabaseManager.")
        return SqliteRecordClient(db)
    raise ValueError(f"Unknown backend '{backend}'. Must be 'sqlite' or 'memory'.")
