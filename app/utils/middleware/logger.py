import logging
import time
import uuid
import contextvars
from typing import Optional

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

REQUEST_ID_HEADER = "X-Request-ID"
# probes hit these constantly; only failures are worth a line
QUIET_PATHS = {"/health"}

request_id_ctx: contextvars.ContextVar[Optional[str]] = contextvars.ContextVar("request_id", default=None)

logger = logging.getLogger("movie_api.access")


class RequestIdFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = request_id_ctx.get() or "-"
        return True


def setup_logging(level: str = "INFO") -> None:
    """Install one stderr handler on the root logger, tagging lines with the request id.

    Safe to call more than once (uvicorn --reload, test imports).
    """
    root = logging.getLogger()
    root.setLevel(logging.getLevelName(level) if isinstance(level, str) else level)
    if any(isinstance(f, RequestIdFilter) for h in root.handlers for f in h.filters):
        return

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(
        "%(asctime)s %(levelname)s [%(request_id)s] %(name)s: %(message)s"
    ))
    handler.addFilter(RequestIdFilter())
    root.addHandler(handler)


class LoggingMiddleware(BaseHTTPMiddleware):
    """Access log with a per-request id.

    The id comes from the caller's X-Request-ID when present, is available to
    any code through ``get_request_id`` and is echoed back on the response.
    """

    async def dispatch(self, request: Request, call_next):
        req_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex
        token = request_id_ctx.set(req_id)
        started = time.perf_counter()
        client = request.client.host if request.client else "-"
        try:
            response = await call_next(request)
        except Exception:
            logger.exception(
                "%s %s failed client=%s elapsed_ms=%d",
                request.method, request.url.path, client, _elapsed_ms(started),
            )
            raise
        finally:
            request_id_ctx.reset(token)

        if request.url.path not in QUIET_PATHS or response.status_code >= 400:
            level = logging.WARNING if response.status_code >= 500 else logging.INFO
            logger.log(
                level, "%s %s -> %d client=%s elapsed_ms=%d",
                request.method, request.url.path, response.status_code, client, _elapsed_ms(started),
            )
        response.headers[REQUEST_ID_HEADER] = req_id
        return response


def _elapsed_ms(started: float) -> int:
    return int((time.perf_counter() - started) * 1000)


def get_request_id() -> Optional[str]:
    return request_id_ctx.get()
