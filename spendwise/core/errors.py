from fastapi import Request
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from starlette import status
import logging

logger = logging.getLogger("spendwise.errors")


class ExpenseError(Exception):
    """Base class for failures reported to the caller as ``{"error": message}``."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(ExpenseError):
    """Malformed or missing input; raised before storage is touched."""

    status_code = status.HTTP_400_BAD_REQUEST


class NotFoundError(ExpenseError):
    status_code = status.HTTP_404_NOT_FOUND


class PersistenceError(ExpenseError):
    """Storage engine failure. The message is generic; details go to the log only."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


def expense_error_handler(request: Request, exc: ExpenseError):  # type: ignore
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


def http_error_handler(request: Request, exc):  # type: ignore
    detail = exc.detail
    if exc.status_code == status.HTTP_404_NOT_FOUND and detail == "Not Found":
        detail = f"No route for {request.method} {request.url.path}"
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": detail},
        headers=getattr(exc, "headers", None),
    )


def validation_error_handler(request: Request, exc: RequestValidationError):  # type: ignore
    logger.debug("rejected request body: %s", exc.errors())
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": "invalid request body"},
    )


def server_error_handler(request: Request, exc: Exception):  # type: ignore
    logger.error("unhandled exception", exc_info=exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": "internal server error"},
    )
