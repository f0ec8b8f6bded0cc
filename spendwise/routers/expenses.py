from typing import Optional

from fastapi import APIRouter, Depends, Query, Request

from spendwise.db.dal import Database
from spendwise.models.expense import (
    ExpenseCreateIn,
    ExpenseCreateResponse,
    ExpenseDeleteResponse,
    ExpenseListResponse,
    ExpenseOut,
    ExpenseTotalResponse,
)
from spendwise.services.expenses import ExpenseService

router = APIRouter(prefix="/expenses", tags=["expenses"])

# Dependencies -----------------------------------------------------


def get_db(request: Request) -> Database:
    return request.app.state.db


def get_expense_service(db: Database = Depends(get_db)) -> ExpenseService:
    return ExpenseService(db)


# Routes -----------------------------------------------------------
# Handlers are plain ``def`` so sqlite calls run in the worker thread pool.
@router.post(
    "",
    response_model=ExpenseCreateResponse,
    status_code=201,
    summary="Create an expense",
)
def create_expense(
    payload: ExpenseCreateIn,
    service: ExpenseService = Depends(get_expense_service),
):
    row = service.create_expense(payload)
    return ExpenseCreateResponse(
        message="expense added successfully", expense=ExpenseOut(**row)
    )


@router.get(
    "",
    response_model=ExpenseListResponse,
    summary="List expenses newest first, optionally filtered by category",
)
def list_expenses_endpoint(
    category: Optional[str] = Query(None, description="Filter by exact category"),
    service: ExpenseService = Depends(get_expense_service),
):
    rows = service.list_expenses(category)
    return ExpenseListResponse(expenses=[ExpenseOut(**r) for r in rows])


@router.get(
    "/total",
    response_model=ExpenseTotalResponse,
    summary="Sum of expense amounts, optionally filtered by category",
)
def total_spending_endpoint(
    category: Optional[str] = Query(None, description="Filter by exact category"),
    service: ExpenseService = Depends(get_expense_service),
):
    return ExpenseTotalResponse(total=service.total_spending(category))


@router.delete(
    "/{expense_id}",
    response_model=ExpenseDeleteResponse,
    summary="Delete an expense",
)
def delete_expense(
    expense_id: str,
    service: ExpenseService = Depends(get_expense_service),
):
    # expense_id stays a raw string so malformed ids get the 400 "invalid id" body
    deleted_id = service.delete_expense(expense_id)
    return ExpenseDeleteResponse(message="expense deleted successfully", id=deleted_id)
