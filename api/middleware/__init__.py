"""
Request-scoped middleware for the search API.
"""
from middleware.logging_middleware import (
    REQUEST_ID_HEADER,
    RequestLoggingMiddleware,
    get_logger,
    get_request_id,
    request_id_var,
)

__all__ = [
    "REQUEST_ID_HEADER",
    "RequestLoggingMiddleware",
    "get_logger",
    "get_request_id",
    "request_id_var",
]
