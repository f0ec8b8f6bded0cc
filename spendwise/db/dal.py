"""Data Access Layer for the expenses table.

Responsibilities
----------------
- Own every SQL statement that touches ``expenses``; reads are composed by
  ``spendwise.db.query`` so filters are always bound parameters.
- Open a fresh connection per call. No cache, no pooled state: every
  operation is a round trip to the engine.
- Surface ``sqlite3.Error`` unchanged; the service layer maps it to
  ``PersistenceError``.
"""

from __future__ import annotations

from contextlib import contextmanager
from pathlib import Path
import sqlite3
from typing import Any, Dict, Iterator, List, Optional

from spendwise.models.expense import ExpenseDraft

from .query import EXPENSE_COLUMNS, build_list_query, build_total_query

_RETURNING = ", ".join(EXPENSE_COLUMNS)


class Database:
    def __init__(self, db_path: Path):
        self.db_path = db_path

    # ------------------------------------------------------------------
    # Connection helpers
    @contextmanager
    def _connect(self) -> Iterator[sqlite3.Connection]:
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = sqlite3.Row
        try:
            with conn:  # commit on success, rollback on error
                yield conn
        finally:
            conn.close()

    # ------------------------------------------------------------------
    # Writes
    def insert_expense(self, draft: ExpenseDraft) -> Dict[str, Any]:
        """Insert one expense and return the stored row (id, created_at included)."""
        with self._connect() as conn:
            cur = conn.execute(
                f"""
                INSERT INTO expenses (item_name, amount, category)
                VALUES (?, ?, ?)
                RETURNING {_RETURNING}
                """,
                (draft.item_name, draft.amount, draft.category),
            )
            # Drain the RETURNING cursor before the transaction commits.
            rows = cur.fetchall()
            return dict(rows[0])

    def delete_expense(self, expense_id: int) -> int:
        """Delete by primary key and return the number of rows removed."""
        with self._connect() as conn:
            cur = conn.execute("DELETE FROM expenses WHERE id = ?", (expense_id,))
            return cur.rowcount

    # ------------------------------------------------------------------
    # Reads
    def get_expense(self, expense_id: int) -> Optional[Dict[str, Any]]:
        with self._connect() as conn:
            cur = conn.execute(
                f"SELECT {_RETURNING} FROM expenses WHERE id = ?", (expense_id,)
            )
            row = cur.fetchone()
            return dict(row) if row else None

    def list_expenses(self, category: Optional[str] = None) -> List[Dict[str, Any]]:
        sql, params = build_list_query(category)
        with self._connect() as conn:
            cur = conn.execute(sql, params)
            return [dict(r) for r in cur.fetchall()]

    def total_amount(self, category: Optional[str] = None) -> float:
        sql, params = build_total_query(category)
        with self._connect() as conn:
            row = conn.execute(sql, params).fetchone()
            return float(row[0] if row and row[0] is not None else 0.0)

    def count_expenses(self) -> int:
        with self._connect() as conn:
            row = conn.execute("SELECT COUNT(*) FROM expenses").fetchone()
            return int(row[0] if row and row[0] is not None else 0)
