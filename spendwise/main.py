import logging

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException
from .core.config import get_settings, Settings
from .core.logging import init_logging, build_request_context_middleware
from .db.dal import Database
from .db.migrate import apply_migrations
from .core import errors
from .routers import health, expenses


def create_app(settings_override: Settings | None = None) -> FastAPI:
    """Application factory.

    settings_override: pass an already constructed Settings instance for tests
    to isolate environment (e.g., temp DB). Falls back to cached get_settings().
    """
    settings = settings_override or get_settings()
    if settings.db_path is None:
        settings.init_post_load()
    # Initialize logging early
    init_logging(debug=settings.debug)

    # Ensure database schema (idempotent) so test-injected fresh DBs have tables
    try:
        apply_migrations(settings.db_path)  # type: ignore[arg-type]
    except Exception:
        # Failing to init DB is fatal; re-raise after logging
        logging.getLogger("spendwise").exception("failed to apply migrations on startup")
        raise

    app = FastAPI(
        title=settings.app_name, debug=settings.debug, version=settings.version
    )
    app.state.settings = settings
    app.state.db = Database(settings.db_path)  # type: ignore[arg-type]

    # Middleware (request id / access logging, CORS outermost)
    app.middleware("http")(
        build_request_context_middleware(
            log_requests=settings.log_requests,
            skip_paths=[f"{settings.api_prefix}/health"],
        )
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allow_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Error handlers
    app.add_exception_handler(errors.ExpenseError, errors.expense_error_handler)
    app.add_exception_handler(StarletteHTTPException, errors.http_error_handler)
    app.add_exception_handler(RequestValidationError, errors.validation_error_handler)
    app.add_exception_handler(Exception, errors.server_error_handler)

    # Routers
    app.include_router(health.router, prefix=settings.api_prefix)
    app.include_router(expenses.router, prefix=settings.api_prefix)

    @app.get("/")
    async def root():
        return {"message": settings.app_name, "version": settings.version}

    return app


def run() -> None:
    """Serve the API with uvicorn using host/port from settings."""
    import uvicorn

    settings = get_settings()
    uvicorn.run(create_app(settings), host=settings.host, port=settings.port)


app = create_app()
