"""
Analytics API routes for search event tracking.

Events are handed to a background task so tracking never delays or fails
the response.
"""
import logging

from fastapi import APIRouter, BackgroundTasks

from middleware.logging_middleware import get_request_id
from schemas.search import SearchEventRequest, SearchEventResponse
from services.search_analytics_service import record_search_event

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/analytics", tags=["analytics"])


@router.post("/search", response_model=SearchEventResponse)
async def track_search(request: SearchEventRequest, background_tasks: BackgroundTasks):
    """Track a client-side search event"""
    background_tasks.add_task(
        record_search_event,
        query=request.query,
        result_count=request.result_count,
        ai_suggested=request.ai_suggested,
        clicked_suggestion=request.clicked_suggestion,
        source=request.source,
        request_id=get_request_id() or None,
    )
    return SearchEventResponse(ok=True)
