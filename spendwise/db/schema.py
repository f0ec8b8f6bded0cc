"""Database schema DDL definitions and initialization utilities.

Tables:
  - expenses: individual expense records
  - metadata: key/value store (schema version)
"""

from __future__ import annotations
import sqlite3
from typing import Sequence
from pathlib import Path

BASIC_UTC_NOW = "strftime('%Y-%m-%dT%H:%M:%fZ','now')"

EXPENSES_DDL = f"""
CREATE TABLE IF NOT EXISTS expenses (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    item_name TEXT NOT NULL
        CHECK (length(trim(item_name)) > 0 AND length(item_name) <= 255),
    amount REAL NOT NULL CHECK (amount >= 0),
    category TEXT NOT NULL DEFAULT 'Other',
    created_at TEXT NOT NULL DEFAULT ({BASIC_UTC_NOW})
);
"""

METADATA_DDL = f"""
CREATE TABLE IF NOT EXISTS metadata (
    key TEXT PRIMARY KEY,
    value TEXT NOT NULL,
    updated_at TEXT NOT NULL DEFAULT ({BASIC_UTC_NOW})
);
"""

EXPENSES_CREATED_AT_INDEX_DDL = (
    "CREATE INDEX IF NOT EXISTS idx_expenses_created_at ON expenses(created_at DESC);"
)
EXPENSES_CATEGORY_INDEX_DDL = (
    "CREATE INDEX IF NOT EXISTS idx_expenses_category ON expenses(category);"
)

DDL_ORDER: Sequence[str] = (
    EXPENSES_DDL,
    METADATA_DDL,
    EXPENSES_CREATED_AT_INDEX_DDL,
    EXPENSES_CATEGORY_INDEX_DDL,
)


def init_db(path: Path) -> None:
    """Create all tables idempotently.

    Parameters
    ----------
    path: Path to SQLite database file.
    """
    conn = sqlite3.connect(path)
    try:
        cur = conn.cursor()
        for ddl in DDL_ORDER:
            cur.execute(ddl)
        conn.commit()
    finally:
        conn.close()
