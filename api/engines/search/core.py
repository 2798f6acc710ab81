"""
Search Engine Core

Main orchestration class for product search.
"""
import logging
from datetime import datetime
from typing import List, Optional

from core.config import settings

from .candidate_service import CandidateService, candidate_window_size
from .catalog_store import CatalogStore
from .filtering_service import FilteringService
from .projection import project_page, project_suggestion
from .query_service import QueryService
from .ranking_service import RankingService
from .request_parser import clamp_page_size
from .schemas import ResultPage, SearchRequest, Suggestion
from .vocabulary import DEFAULT_VOCABULARY, SearchVocabulary

logger = logging.getLogger(__name__)


class SearchEngine:
    """
    Main Search Engine

    Runs normalization, synonym expansion, predicate building, candidate
    fetching, scoring, ranking and projection for one request at a time.
    Holds no per-request state.
    """

    def __init__(self, store: CatalogStore, vocabulary: SearchVocabulary = DEFAULT_VOCABULARY):
        self.query_service = QueryService(vocabulary, min_query_length=settings.search_min_query_length)
        self.filtering_service = FilteringService()
        self.candidate_service = CandidateService(store)
        self.ranking_service = RankingService(vocabulary)

    async def search(self, request: SearchRequest) -> ResultPage:
        """
        Search the catalog and return one ranked page.

        Args:
            request: Parsed search request

        Returns:
            ResultPage; empty with total=0 when the query is too short

        Raises:
            CatalogStoreError: if either catalog read fails
        """
        start_time = datetime.now()
        page = max(request.page, 1)
        page_size = clamp_page_size(request.page_size)

        normalized = self.query_service.normalize(request.raw_query)
        if normalized is None:
            logger.debug(f"Query too short, skipping catalog: '{request.raw_query}'")
            return ResultPage(items=[], total=0, page=page, page_size=page_size)

        term_set = self.query_service.expand(normalized)
        predicate = self.filtering_service.build_predicate(term_set, request)

        total, candidates = await self.candidate_service.fetch(predicate, page_size)

        ranked = self.ranking_service.rank(candidates, term_set)
        page_items = self.ranking_service.paginate(ranked, page, page_size)
        result = project_page(page_items, total=total, page=page, page_size=page_size)

        processing_time = (datetime.now() - start_time).total_seconds()
        logger.info(
            f"Search '{normalized}': {len(result.items)} of {total} matches "
            f"(page={page}, window={candidate_window_size(page_size)}, {processing_time:.3f}s)"
        )
        return result

    async def suggest(self, raw_query: Optional[str], limit: Optional[int] = None) -> List[Suggestion]:
        """
        Type-ahead suggestions: recent matching products, unranked.

        Args:
            raw_query: Query text; an empty query returns no suggestions
            limit: Maximum suggestions (default and cap from settings)
        """
        normalized = (raw_query or "").strip().lower()
        if not normalized:
            return []

        if limit is None:
            limit = settings.suggest_default_limit
        limit = min(max(limit, 1), settings.suggest_max_limit)

        term_set = self.query_service.expand(normalized)
        predicate = self.filtering_service.build_term_predicate(term_set)
        candidates = await self.candidate_service.fetch_recent(predicate, limit)

        logger.info(f"Suggest '{normalized}': {len(candidates)} suggestions")
        return [project_suggestion(c) for c in candidates]
