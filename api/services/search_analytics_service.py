"""
Search Analytics Service

Fire-and-forget side channel for search events. Events are emitted as
structured log records only; failures here never reach the caller.
"""

import logging
from typing import Optional

from core.logging import get_search_event_logger

logger = logging.getLogger(__name__)


def record_search_event(
    query: str,
    result_count: int,
    ai_suggested: bool = False,
    clicked_suggestion: Optional[str] = None,
    source: str = "unknown",
    request_id: Optional[str] = None,
) -> None:
    """
    Emit a search event.

    Args:
        query: Query text as entered
        result_count: Number of results shown for the query
        ai_suggested: Whether an assisted-suggestion flow was used
        clicked_suggestion: Suggestion text the user picked, if any
        source: Where the search happened (popup, page, api, ...)
        request_id: Correlation ID of the originating request
    """
    try:
        get_search_event_logger().info(
            "search_event",
            query=(query or "")[:100],
            result_count=result_count,
            zero_results=result_count == 0,
            ai_suggested=ai_suggested,
            clicked_suggestion=clicked_suggestion,
            source=source,
            request_id=request_id,
        )
    except Exception as e:
        # Don't fail the main request if analytics fails
        logger.warning(f"Failed to record search event: {e}")
