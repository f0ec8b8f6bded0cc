"""Pydantic domain models for the SpendWise expense API."""

from .constants import CATEGORIES, DEFAULT_CATEGORY  # re-export
from .expense import (
    ExpenseCreateIn,
    ExpenseDraft,
    ExpenseOut,
    ExpenseCreateResponse,
    ExpenseListResponse,
    ExpenseTotalResponse,
    ExpenseDeleteResponse,
)

__all__ = [
    "CATEGORIES",
    "DEFAULT_CATEGORY",
    "ExpenseCreateIn",
    "ExpenseDraft",
    "ExpenseOut",
    "ExpenseCreateResponse",
    "ExpenseListResponse",
    "ExpenseTotalResponse",
    "ExpenseDeleteResponse",
]
