"""Database migration utilities.

Schema evolution is keyed by an integer `schema_version` stored in the metadata
table. Version 1 is the baseline created by `init_db`; later versions add a
`_migrate_to_vN` step and bump `CURRENT_SCHEMA_VERSION`.
"""

from __future__ import annotations
from pathlib import Path
import logging
import sqlite3
from typing import Optional

from . import schema as schema_def
from .schema import init_db

CURRENT_SCHEMA_VERSION = 1
SCHEMA_VERSION_KEY = "schema_version"

logger = logging.getLogger("spendwise.db.migrate")


def _get_schema_version(conn: sqlite3.Connection) -> Optional[int]:
    try:
        cur = conn.cursor()
        cur.execute("SELECT value FROM metadata WHERE key=?", (SCHEMA_VERSION_KEY,))
        row = cur.fetchone()
        if row:
            return int(row[0])
    except sqlite3.OperationalError:
        # metadata table may not exist yet (first run before init_db)
        return None
    return None


def apply_migrations(db_path: Path) -> int:
    """Apply required migrations and return resulting schema version."""
    init_db(db_path)
    conn = sqlite3.connect(db_path)
    try:
        version = _get_schema_version(conn)
        if version is not None and version > CURRENT_SCHEMA_VERSION:
            raise RuntimeError(
                f"database schema version {version} is newer than supported "
                f"version {CURRENT_SCHEMA_VERSION}"
            )
        if version != CURRENT_SCHEMA_VERSION:
            logger.info(
                "stamping schema version %s (was %s)", CURRENT_SCHEMA_VERSION, version
            )
            _set_schema_version(conn, CURRENT_SCHEMA_VERSION)
            conn.commit()
        return CURRENT_SCHEMA_VERSION
    finally:
        conn.close()


def _set_schema_version(conn: sqlite3.Connection, version: int) -> None:
    cur = conn.cursor()
    cur.execute(
        "INSERT INTO metadata (key, value) VALUES (?, ?) "
        "ON CONFLICT(key) DO UPDATE SET value=excluded.value, "
        f"updated_at=({schema_def.BASIC_UTC_NOW})",
        (SCHEMA_VERSION_KEY, str(version)),
    )
