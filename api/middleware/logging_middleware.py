"""
Request logging middleware with correlation IDs for request tracing.
"""
import logging
import re
import time
import uuid
from contextvars import ContextVar
from typing import Callable, Optional

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

REQUEST_ID_HEADER = "X-Request-ID"

# Context variable to store request ID across async calls
request_id_var: ContextVar[str] = ContextVar("request_id", default="")

# Client-supplied IDs are reused only if they look like IDs
_VALID_REQUEST_ID = re.compile(r"^[A-Za-z0-9._-]{1,64}$")

# Polled by load balancers; logged at DEBUG
_QUIET_PATHS = {"/health"}

logger = logging.getLogger(__name__)


def get_request_id() -> str:
    """Get the current request ID from context."""
    return request_id_var.get()


def resolve_request_id(incoming: Optional[str]) -> str:
    if incoming and _VALID_REQUEST_ID.match(incoming):
        return incoming
    return str(uuid.uuid4())[:8]  # Short ID for readability


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Middleware that:
    1. Reuses the caller's X-Request-ID or assigns a short one
    2. Logs request start/end with timing
    3. Echoes the request ID in the X-Request-ID response header
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = resolve_request_id(request.headers.get(REQUEST_ID_HEADER))
        token = request_id_var.set(request_id)

        path = request.url.path
        level = logging.DEBUG if path in _QUIET_PATHS else logging.INFO
        start_time = time.time()
        logger.log(
            level,
            f"[{request_id}] → {request.method} {path}",
            extra={"request_id": request_id, "method": request.method, "path": path, "query": str(request.query_params)},
        )

        try:
            response = await call_next(request)
        except Exception as e:
            duration_ms = (time.time() - start_time) * 1000
            logger.error(
                f"[{request_id}] ✗ Error: {str(e)[:100]} ({duration_ms:.0f}ms)",
                extra={"request_id": request_id, "duration_ms": duration_ms},
                exc_info=True,
            )
            raise
        finally:
            request_id_var.reset(token)

        duration_ms = (time.time() - start_time) * 1000
        if response.status_code >= 400:
            level = logging.WARNING
        logger.log(
            level,
            f"[{request_id}] ← {response.status_code} ({duration_ms:.0f}ms)",
            extra={"request_id": request_id, "status_code": response.status_code, "duration_ms": duration_ms},
        )

        response.headers[REQUEST_ID_HEADER] = request_id
        return response


class ContextualLogger:
    """
    Logger wrapper that prefixes messages with the current request ID.
    """

    def __init__(self, name: str):
        self.logger = logging.getLogger(name)

    def _format_msg(self, msg: str) -> str:
        request_id = get_request_id()
        return f"[{request_id}] {msg}" if request_id else msg

    def debug(self, msg: str, *args, **kwargs):
        self.logger.debug(self._format_msg(msg), *args, **kwargs)

    def info(self, msg: str, *args, **kwargs):
        self.logger.info(self._format_msg(msg), *args, **kwargs)

    def warning(self, msg: str, *args, **kwargs):
        self.logger.warning(self._format_msg(msg), *args, **kwargs)

    def error(self, msg: str, *args, **kwargs):
        self.logger.error(self._format_msg(msg), *args, **kwargs)


def get_logger(name: str) -> ContextualLogger:
    """Get a contextual logger that includes the request ID."""
    return ContextualLogger(name)
