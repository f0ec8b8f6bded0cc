import json
import logging
import sys
import time
import uuid
from contextvars import ContextVar
from typing import Any, Dict, Iterable

request_id_ctx: ContextVar[str | None] = ContextVar("request_id", default=None)

REQUEST_ID_HEADER = "X-Request-ID"


class RequestIdFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:  # noqa: D401
        rid = request_id_ctx.get()
        record.request_id = rid or "-"
        return True


class JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:  # noqa: D401
        base: Dict[str, Any] = {
            "level": record.levelname,
            "message": record.getMessage(),
            "logger": record.name,
            "time": time.strftime("%Y-%m-%dT%H:%M:%S", time.gmtime(record.created)),
            "request_id": getattr(record, "request_id", "-"),
        }
        if record.exc_info:
            base["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(base, ensure_ascii=False)


class _JsonStdoutHandler(logging.StreamHandler):
    pass


def init_logging(debug: bool = False) -> None:
    """Install the JSON stdout handler on the root logger.

    Safe to call once per app instance: a handler installed by an earlier call
    is replaced, handlers added by others (test capture, uvicorn) are kept.
    """
    root = logging.getLogger()
    for existing in list(root.handlers):
        if isinstance(existing, _JsonStdoutHandler):
            root.removeHandler(existing)
    level = logging.DEBUG if debug else logging.INFO
    root.setLevel(level)

    handler = _JsonStdoutHandler(sys.stdout)
    handler.setLevel(level)
    handler.addFilter(RequestIdFilter())
    handler.setFormatter(JsonFormatter())
    root.addHandler(handler)


def build_request_context_middleware(
    log_requests: bool = True, skip_paths: Iterable[str] = ()
):
    """Return an HTTP middleware binding a request id and writing access lines.

    Access lines look like ``GET /api/expenses 200 3.21ms``; requests whose
    path is in ``skip_paths`` (health probes) are not logged.
    """
    skipped = frozenset(skip_paths)
    access_logger = logging.getLogger("spendwise.access")

    async def request_context_middleware(request, call_next):  # type: ignore
        rid = str(uuid.uuid4())
        token = request_id_ctx.set(rid)
        logger = logging.getLogger("spendwise.request")
        logger.debug("request start")
        started = time.perf_counter()
        try:
            response = await call_next(request)
            response.headers[REQUEST_ID_HEADER] = rid
            if log_requests and request.url.path not in skipped:
                elapsed_ms = (time.perf_counter() - started) * 1000
                access_logger.info(
                    "%s %s %s %.2fms",
                    request.method,
                    request.url.path,
                    response.status_code,
                    elapsed_ms,
                )
            return response
        finally:
            logger.debug("request end")
            request_id_ctx.reset(token)

    return request_context_middleware
