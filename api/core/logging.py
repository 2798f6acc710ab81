"""
Logging configuration for the search API.

Two kinds of records share one stdout stream:

    # Operational logs: stdlib loggers (the search router wraps them to
    # prefix the request ID, see middleware.logging_middleware.get_logger)
    logger = logging.getLogger(__name__)
    logger.info("Search 'laptop': 12 of 40 matches")

    # Search analytics events: structured key/value records
    get_search_event_logger().info("search_event", query="laptop", result_count=12)
"""
import logging
import sys

import structlog

from core.config import settings
from middleware.logging_middleware import get_request_id

# Libraries that log every connection or request at INFO
NOISY_LOGGERS = ("uvicorn.access", "uvicorn.error", "httpx", "sqlalchemy.engine", "asyncpg", "aiosqlite", "google_genai")

SEARCH_EVENT_LOGGER = "search.events"


def add_request_id(logger, method_name, event_dict):
    """structlog processor: attach the current request ID if one is set"""
    request_id = get_request_id()
    if request_id and "request_id" not in event_dict:
        event_dict["request_id"] = request_id
    return event_dict


def _renderer():
    if settings.log_format == "json":
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(colors=True, exception_formatter=structlog.dev.plain_traceback)


def setup_logging():
    """Configure structlog and stdlib logging for the application."""
    log_level = getattr(logging, settings.log_level.upper(), logging.INFO)

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            add_request_id,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            _renderer(),
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    root_logger.handlers = []

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(log_level)
    if settings.log_format == "json":
        # structlog already rendered the event
        console_handler.setFormatter(logging.Formatter("%(message)s"))
    else:
        console_handler.setFormatter(logging.Formatter("%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"))
    root_logger.addHandler(console_handler)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    logging.getLogger(__name__).info(
        f"Logging configured: level={settings.log_level}, format={settings.log_format}, env={settings.environment}"
    )


def get_search_event_logger() -> structlog.stdlib.BoundLogger:
    """Structured logger for the search analytics side channel."""
    return structlog.get_logger(SEARCH_EVENT_LOGGER)
