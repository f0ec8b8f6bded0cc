from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, List

from pydantic import BaseModel, ConfigDict, Field


class ExpenseCreateIn(BaseModel):
    """Raw create payload.

    Every field is optional at the schema level; presence, ordering of checks
    and error messages are owned by ``validate_expense_create`` so the first
    failing rule decides the response. Unknown fields are dropped.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    item_name: Any = Field(None, alias="itemName")
    amount: Any = None
    category: Any = None


@dataclass(frozen=True)
class ExpenseDraft:
    """Validated, normalized values ready for insertion."""

    item_name: str
    amount: float
    category: str


class ExpenseOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    item_name: str
    amount: float
    category: str
    created_at: datetime


class ExpenseCreateResponse(BaseModel):
    message: str
    expense: ExpenseOut


class ExpenseListResponse(BaseModel):
    expenses: List[ExpenseOut]


class ExpenseTotalResponse(BaseModel):
    total: float


class ExpenseDeleteResponse(BaseModel):
    message: str
    id: int
