"""Expense operations: create, list, total, delete.

Each call is one self-contained unit against the shared ``expenses`` table.
Storage failures are logged here with their traceback and re-raised as
``PersistenceError`` carrying a caller-safe message; nothing is retried.
"""

from __future__ import annotations

from contextlib import contextmanager
import logging
import sqlite3
from typing import Any, Dict, Iterator, List, Optional

from spendwise.core.errors import NotFoundError, PersistenceError
from spendwise.db.dal import Database
from spendwise.models.expense import ExpenseCreateIn
from spendwise.services.expense_validation import (
    validate_expense_create,
    validate_expense_id,
)

logger = logging.getLogger("spendwise.services.expenses")


@contextmanager
def _persistence(message: str) -> Iterator[None]:
    try:
        yield
    except sqlite3.Error as e:
        logger.exception(message)
        raise PersistenceError(message) from e


class ExpenseService:
    def __init__(self, db: Database):
        self.db = db

    def create_expense(self, payload: ExpenseCreateIn) -> Dict[str, Any]:
        draft = validate_expense_create(payload)
        with _persistence("failed to add expense to database"):
            row = self.db.insert_expense(draft)
        logger.info("expense %s created (%s)", row["id"], draft.category)
        return row

    def list_expenses(self, category: Optional[str] = None) -> List[Dict[str, Any]]:
        with _persistence("failed to fetch expenses from database"):
            return self.db.list_expenses(category)

    def total_spending(self, category: Optional[str] = None) -> float:
        with _persistence("failed to calculate total spending"):
            return self.db.total_amount(category)

    def delete_expense(self, raw_id: Any) -> int:
        """Check existence, then delete.

        The check and the delete are separate statements. If a concurrent
        caller removes the row in between, the delete affects zero rows and
        the call still succeeds.
        """
        expense_id = validate_expense_id(raw_id)
        with _persistence("failed to delete expense from database"):
            if self.db.get_expense(expense_id) is None:
                raise NotFoundError("expense not found")
            removed = self.db.delete_expense(expense_id)
        if removed == 0:
            logger.warning("expense %s vanished between check and delete", expense_id)
        else:
            logger.info("expense %s deleted", expense_id)
        return expense_id
