"""
Query Service for Search

Normalizes raw query text and expands it into the term set used for matching.
"""
import logging
from typing import Optional

from .schemas import TermSet
from .vocabulary import DEFAULT_VOCABULARY, SearchVocabulary

logger = logging.getLogger(__name__)


class QueryService:
    """Query normalization and synonym expansion"""

    def __init__(self, vocabulary: SearchVocabulary = DEFAULT_VOCABULARY, min_query_length: int = 2):
        self.vocabulary = vocabulary
        self.min_query_length = min_query_length

    def normalize(self, raw_query: Optional[str]) -> Optional[str]:
        """
        Trim and lowercase a raw query.

        Args:
            raw_query: Query text as typed by the user

        Returns:
            The normalized query, or None when it is shorter than the minimum
            length (a short query, not an error: callers answer with an empty page)
        """
        normalized = (raw_query or "").strip().lower()
        if len(normalized) < self.min_query_length:
            return None
        return normalized

    def expand(self, normalized_query: str) -> TermSet:
        """
        Build the term set for an already-normalized query.

        The union of the full query, its whitespace tokens and any synonyms is
        deduplicated. Scoring works from ``normalized_query`` and ``tokens``,
        never from ``terms``.
        """
        tokens = tuple(tok for tok in normalized_query.split() if tok)
        synonyms = self.vocabulary.synonyms_for(normalized_query)
        terms = frozenset((normalized_query, *tokens, *synonyms))

        if synonyms:
            logger.debug(f"Expanded '{normalized_query}' with {len(synonyms)} synonyms")

        return TermSet(
            normalized_query=normalized_query,
            tokens=tokens,
            synonyms=synonyms,
            terms=terms,
        )
