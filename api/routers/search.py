"""
Search API routes
"""
from typing import Optional

from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException, Query

from core.database import AsyncSessionLocal
from engines.search import (
    CatalogStore,
    CatalogStoreError,
    SearchEngine,
    SqlCatalogStore,
    parse_search_request,
    parse_suggest_limit,
)
from middleware.logging_middleware import get_logger, get_request_id
from schemas.search import (
    SearchAssistRequest,
    SearchAssistResponse,
    SearchResponse,
    SuggestionSchema,
    SuggestResponse,
)
from services.search_analytics_service import record_search_event
from services.search_assist_service import SearchAssistError, SearchAssistService, search_assist_service

logger = get_logger(__name__)
router = APIRouter(prefix="/search", tags=["search"])


def get_catalog_store() -> CatalogStore:
    """FastAPI dependency for the catalog store"""
    return SqlCatalogStore(AsyncSessionLocal)


def get_search_assist_service() -> SearchAssistService:
    """FastAPI dependency for the search assistant"""
    return search_assist_service


@router.get("/query", response_model=SearchResponse)
async def search_products(
    background_tasks: BackgroundTasks,
    q: Optional[str] = Query(None),
    page: Optional[str] = Query(None),
    page_size: Optional[str] = Query(None, alias="pageSize"),
    category: Optional[str] = Query(None),
    min_price: Optional[str] = Query(None, alias="min"),
    max_price: Optional[str] = Query(None, alias="max"),
    in_stock: Optional[str] = Query(None, alias="inStock"),
    store: CatalogStore = Depends(get_catalog_store),
):
    """Ranked, paginated product search"""
    request = parse_search_request(
        q=q,
        page=page,
        page_size=page_size,
        category=category,
        min_price=min_price,
        max_price=max_price,
        in_stock=in_stock,
    )

    try:
        result = await SearchEngine(store).search(request)
    except CatalogStoreError as e:
        logger.error(f"Search failed for '{request.raw_query}': {e}", exc_info=True)
        raise HTTPException(status_code=503, detail="Search is temporarily unavailable")

    background_tasks.add_task(
        record_search_event,
        query=request.raw_query,
        result_count=len(result.items),
        source="api",
        request_id=get_request_id() or None,
    )
    return SearchResponse.from_page(result)


@router.get("/suggest", response_model=SuggestResponse)
async def suggest_products(
    q: Optional[str] = Query(None),
    limit: Optional[str] = Query(None),
    store: CatalogStore = Depends(get_catalog_store),
):
    """Type-ahead product suggestions"""
    try:
        suggestions = await SearchEngine(store).suggest(q, parse_suggest_limit(limit))
    except CatalogStoreError as e:
        logger.error(f"Suggest failed for '{q}': {e}", exc_info=True)
        raise HTTPException(status_code=503, detail="Search is temporarily unavailable")

    return SuggestResponse(suggestions=[SuggestionSchema.from_suggestion(s) for s in suggestions])


@router.post("/assist", response_model=SearchAssistResponse)
async def assist_search(
    request: Optional[SearchAssistRequest] = None,
    assistant: SearchAssistService = Depends(get_search_assist_service),
):
    """Alternative queries from the language model; empty when assist is not configured"""
    q = request.q if request else ""
    try:
        suggestions = await assistant.suggest_queries(q)
    except SearchAssistError as e:
        logger.error(f"Search assist failed for '{q}': {e}")
        raise HTTPException(status_code=503, detail="Search assist is temporarily unavailable")

    return SearchAssistResponse(suggestions=suggestions)
