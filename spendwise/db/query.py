"""Parameterized SELECT composition for expense reads.

Column names and SQL fragments only ever come from this module; caller values
travel exclusively as ``?`` bound parameters.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, List, Optional, Sequence, Tuple

EXPENSE_COLUMNS = ("id", "item_name", "amount", "category", "created_at")
FILTERABLE_COLUMNS = frozenset({"category"})


@dataclass
class SelectQuery:
    table: str
    columns: Sequence[str] = ("*",)
    clauses: List[str] = field(default_factory=list)
    params: List[Any] = field(default_factory=list)
    order: List[str] = field(default_factory=list)

    def where_equals(self, column: str, value: Any) -> "SelectQuery":
        if column not in FILTERABLE_COLUMNS:
            raise ValueError(f"column '{column}' is not filterable")
        self.clauses.append(f"{column} = ?")
        self.params.append(value)
        return self

    def order_by(self, *terms: str) -> "SelectQuery":
        self.order.extend(terms)
        return self

    def build(self) -> Tuple[str, Tuple[Any, ...]]:
        sql = f"SELECT {', '.join(self.columns)} FROM {self.table}"
        if self.clauses:
            sql += " WHERE " + " AND ".join(self.clauses)
        if self.order:
            sql += " ORDER BY " + ", ".join(self.order)
        return sql, tuple(self.params)


def _apply_category(query: SelectQuery, category: Optional[str]) -> SelectQuery:
    # Read path filters on the raw value; no normalization to the default category.
    if category:
        query.where_equals("category", category)
    return query


def build_list_query(category: Optional[str] = None) -> Tuple[str, Tuple[Any, ...]]:
    query = SelectQuery("expenses", columns=EXPENSE_COLUMNS)
    _apply_category(query, category)
    query.order_by("created_at DESC", "id DESC")
    return query.build()


def build_total_query(category: Optional[str] = None) -> Tuple[str, Tuple[Any, ...]]:
    # SUM over zero rows is NULL; COALESCE keeps the total numeric.
    query = SelectQuery("expenses", columns=("COALESCE(ROUND(SUM(amount), 2), 0) AS total",))
    _apply_category(query, category)
    return query.build()
