"""
Candidate Service for Search

Reads the total match count and a bounded, recency-ordered candidate window
from the catalog store.
"""
import asyncio
import logging
from typing import List, Tuple

from core.config import settings

from .catalog_store import CatalogStore
from .schemas import CandidateRecord, FilterPredicate

logger = logging.getLogger(__name__)


def candidate_window_size(page_size: int) -> int:
    """Number of candidates fetched and ranked for a page size"""
    return min(page_size * settings.search_candidate_multiplier, settings.search_candidate_cap)


class CandidateService:
    """Fetches match counts and candidate windows"""

    def __init__(self, store: CatalogStore):
        self.store = store

    async def fetch(self, predicate: FilterPredicate, page_size: int) -> Tuple[int, List[CandidateRecord]]:
        """
        Run the count and candidate reads concurrently.

        Args:
            predicate: Filter predicate for both reads
            page_size: Requested page size (already clamped)

        Returns:
            (total match count, candidate window ordered by recency)

        Raises:
            CatalogStoreError: if either read fails; no partial result is returned
            and the other read is cancelled before the error propagates
        """
        window = candidate_window_size(page_size)
        reads = [
            asyncio.ensure_future(self.store.count(predicate)),
            asyncio.ensure_future(self.store.fetch_candidates(predicate, window)),
        ]
        try:
            total, candidates = await asyncio.gather(*reads)
        except Exception:
            for read in reads:
                read.cancel()
            # Wait for the cancelled read to release its connection
            await asyncio.gather(*reads, return_exceptions=True)
            raise
        logger.debug(f"Fetched {len(candidates)} candidates (window={window}) of {total} matches")
        return total, list(candidates)

    async def fetch_recent(self, predicate: FilterPredicate, limit: int) -> List[CandidateRecord]:
        """Candidate read only, used for type-ahead suggestions"""
        return list(await self.store.fetch_candidates(predicate, limit))
