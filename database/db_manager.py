import logging
import os
import sqlite3

from utils.constants import DB_FILE

logger = logging.getLogger(__name__)


class DatabaseManager:
    def __init__(self, db_path: str | None = None):
        self.db_path = db_path or DB_FILE
        self._conn: sqlite3.Connection | None = None

    def get_connection(self) -> sqlite3.Connection:
        if self._conn is None:
            self._conn = sqlite3.connect(self.db_path, check_same_thread=False)
            self._conn.row_factory = sqlite3.Row
            if self.db_path != ":memory:":
                self._conn.execute("PRAGMA journal_mode = WAL")
        return self._conn

    def initialize(self):
        """Create schema and seed defaults."""
        conn = self.get_connection()
        self._create_schema(conn)
        self._migrate_schema(conn)
        self._seed_defaults(conn)
        conn.commit()

    def _migrate_schema(self, conn: sqlite3.Connection):
        """Idempotent ALTER TABLE for columns added after initial release."""
        cols = {row[1] for row in conn.execute("PRAGMA table_info(budget_c)").fetchall()}
        if "alert_threshold_c" not in cols:
            logger.info("Adding alert_threshold_c to budget_c")
            conn.execute("ALTER TABLE budget_c ADD COLUMN alert_threshold_c INTEGER")

    def _create_schema(self, conn: sqlite3.Connection):
        conn.executescript("""
            CREATE TABLE IF NOT EXISTS budget_c (
                Id               INTEGER PRIMARY KEY AUTOINCREMENT,
                Name             TEXT    NOT NULL DEFAULT '',
                Tags             TEXT    NOT NULL DEFAULT '',
                category_c       TEXT    NOT NULL,
                monthly_limit_c  REAL    NOT NULL DEFAULT 0.0,
                current_spent_c  REAL    NOT NULL DEFAULT 0.0,
                month_c          TEXT    NOT NULL,
                year_c           INTEGER NOT NULL,
                CreatedOn        TEXT    NOT NULL DEFAULT (datetime('now')),
                ModifiedOn       TEXT    NOT NULL DEFAULT (datetime('now'))
            );

            CREATE TABLE IF NOT EXISTS transaction_c (
                Id                      INTEGER PRIMARY KEY AUTOINCREMENT,
                Name                    TEXT    NOT NULL DEFAULT '',
                Tags                    TEXT    NOT NULL DEFAULT '',
                type_c                  TEXT    NOT NULL CHECK(type_c IN ('income','expense')),
                amount_c                REAL    NOT NULL,
                category_c              TEXT    NOT NULL DEFAULT '',
                description_c           TEXT    NOT NULL DEFAULT '',
                date_c                  TEXT    NOT NULL,
                is_recurring_c          INTEGER NOT NULL DEFAULT 0,
                frequency_c             TEXT,
                is_active_c             INTEGER NOT NULL DEFAULT 1,
                next_occurrence_date_c  TEXT,
                end_date_c              TEXT,
                CreatedOn               TEXT    NOT NULL DEFAULT (datetime('now')),
                ModifiedOn              TEXT    NOT NULL DEFAULT (datetime('now'))
            );

            CREATE TABLE IF NOT EXISTS goal_c (
                Id                INTEGER PRIMARY KEY AUTOINCREMENT,
                Name              TEXT    NOT NULL DEFAULT '',
                Tags              TEXT    NOT NULL DEFAULT '',
                name_c            TEXT    NOT NULL,
                target_amount_c   REAL    NOT NULL DEFAULT 0.0,
                current_amount_c  REAL    NOT NULL DEFAULT 0.0,
                deadline_c        TEXT,
                created_at_c      TEXT,
                CreatedOn         TEXT    NOT NULL DEFAULT (datetime('now')),
                ModifiedOn        TEXT    NOT NULL DEFAULT (datetime('now'))
            );

            CREATE TABLE IF NOT EXISTS category_c (
                Id            INTEGER PRIMARY KEY AUTOINCREMENT,
                Name          TEXT    NOT NULL DEFAULT '',
                Tags          TEXT    NOT NULL DEFAULT '',
                name_c        TEXT    NOT NULL,
                type_c        TEXT    NOT NULL CHECK(type_c IN ('income','expense')),
                color_c       TEXT    NOT NULL DEFAULT '#888888',
                is_default_c  INTEGER NOT NULL DEFAULT 0,
                CreatedOn     TEXT    NOT NULL DEFAULT (datetime('now')),
                ModifiedOn    TEXT    NOT NULL DEFAULT (datetime('now'))
            );

            CREATE TABLE IF NOT EXISTS bank_account_c (
                Id                INTEGER PRIMARY KEY AUTOINCREMENT,
                Name              TEXT    NOT NULL DEFAULT '',
                Tags              TEXT    NOT NULL DEFAULT '',
                account_number_c  TEXT    NOT NULL DEFAULT '',
                bank_name_c       TEXT    NOT NULL DEFAULT '',
                account_type_c    TEXT    NOT NULL DEFAULT 'Checking',
                routing_number_c  TEXT    NOT NULL DEFAULT '',
                currency_c        TEXT    NOT NULL DEFAULT 'USD',
                balance_c         REAL    NOT NULL DEFAULT 0.0,
                iban_c            TEXT    NOT NULL DEFAULT '',
                swift_code_c      TEXT    NOT NULL DEFAULT '',
                CreatedOn         TEXT    NOT NULL DEFAULT (datetime('now')),
                ModifiedOn        TEXT    NOT NULL DEFAULT (datetime('now'))
            );

            CREATE INDEX IF NOT EXISTS idx_budget_period      ON budget_c(year_c, month_c);
            CREATE INDEX IF NOT EXISTS idx_transaction_date   ON transaction_c(date_c);
            CREATE INDEX IF NOT EXISTS idx_transaction_cat    ON transaction_c(category_c);

            CREATE TABLE IF NOT EXISTS app_settings (
                key   TEXT PRIMARY KEY,
                value TEXT NOT NULL
            );
        """)

    def _seed_defaults(self, conn: sqlite3.Connection):
        defaults = [
            ("appearance_mode", "system"),
        ]
        for key, value in defaults:
            conn.execute(
                "INSERT OR IGNORE INTO app_settings(key, value) VALUES (?, ?)",
                (key, value),
            )

    def get_setting(self, key: str, default: str | None = "") -> str | None:
        conn = self.get_connection()
        row = conn.execute(
            "SELECT value FROM app_settings WHERE key = ?", (key,)
        ).fetchone()
        return row["value"] if row else default

    def set_setting(self, key: str, value: str):
        conn = self.get_connection()
        conn.execute(
            "INSERT OR REPLACE INTO app_settings(key, value) VALUES (?, ?)",
            (key, value),
        )
        conn.commit()

    @staticmethod
    def open(db_folder: str | None = None) -> "DatabaseManager":
        """Startup factory: opens (creating if needed) the FinTrack database."""
        path = os.path.join(db_folder, DB_FILE) if db_folder else DB_FILE
        if db_folder:
            os.makedirs(db_folder, exist_ok=True)
        db = DatabaseManager(path)
        db.initialize()
        logger.info("Opened database %s", path)
        return db

    def close(self):
        if self._conn:
            self._conn.close()
            self._conn = None
