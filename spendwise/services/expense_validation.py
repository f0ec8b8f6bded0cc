"""Input validation for expense writes.

Create rules run in a fixed order and the first failure wins:

1. item name present and non-blank after trimming
2. amount present (not null)
3. amount numeric, finite and >= 0 (and within ``MAX_AMOUNT``)
4. category normalized: members of ``CATEGORIES`` are kept, everything else
   becomes ``DEFAULT_CATEGORY`` (never a rejection)

Usage: call `validate_expense_create(payload)` in the service layer before any
DAL call; a raised ``ValidationError`` guarantees storage was not touched.
"""

from __future__ import annotations

import re
from decimal import Decimal
from typing import Any, TYPE_CHECKING

from spendwise.core.errors import ValidationError
from spendwise.models.constants import CATEGORIES, DEFAULT_CATEGORY, MAX_AMOUNT
from spendwise.models.expense import ExpenseDraft
from spendwise.services.money import parse_amount, to_money

if TYPE_CHECKING:  # pragma: no cover
    from spendwise.models.expense import ExpenseCreateIn

_ID_PATTERN = re.compile(r"[+-]?[0-9]+")
_MAX_AMOUNT = Decimal(MAX_AMOUNT)
# Largest value an sqlite INTEGER primary key can hold.
MAX_ID = 2**63 - 1


def normalize_category(value: Any) -> str:
    if isinstance(value, str) and value in CATEGORIES:
        return value
    return DEFAULT_CATEGORY


def validate_expense_create(payload: "ExpenseCreateIn") -> ExpenseDraft:
    """Check a create payload and return the normalized draft to insert."""
    name = payload.item_name
    if not isinstance(name, str) or not name.strip():
        raise ValidationError("item name required")

    if payload.amount is None:
        raise ValidationError("amount required")

    amount = parse_amount(payload.amount)
    if amount is None or amount < 0:
        raise ValidationError("amount must be a non-negative number")
    if amount > _MAX_AMOUNT:
        raise ValidationError(f"amount must not exceed {MAX_AMOUNT}")

    return ExpenseDraft(
        item_name=name.strip(),
        amount=to_money(amount),
        category=normalize_category(payload.category),
    )


def validate_expense_id(raw: Any) -> int:
    """Parse a path identifier into a positive integer id."""
    if isinstance(raw, bool):
        raise ValidationError("invalid id")
    if isinstance(raw, int):
        expense_id = raw
    else:
        text = str(raw).strip()
        if not _ID_PATTERN.fullmatch(text):
            raise ValidationError("invalid id")
        expense_id = int(text)
    if expense_id <= 0 or expense_id > MAX_ID:
        raise ValidationError("invalid id")
    return expense_id
