"""
Search Engine

Query normalization, synonym expansion, catalog filtering and
relevance ranking for product search.
"""

from .core import SearchEngine
from .schemas import (
    CandidateRecord,
    FilterPredicate,
    PriceRange,
    ResultItem,
    ResultPage,
    ScoredCandidate,
    SearchRequest,
    Suggestion,
    TermSet
)
from .vocabulary import DEFAULT_VOCABULARY, SearchVocabulary
from .exceptions import CatalogStoreError, SearchEngineError
from .catalog_store import CatalogStore, SqlCatalogStore
from .request_parser import parse_search_request, parse_suggest_limit

__all__ = [
    "SearchEngine",
    "CandidateRecord",
    "FilterPredicate",
    "PriceRange",
    "ResultItem",
    "ResultPage",
    "ScoredCandidate",
    "SearchRequest",
    "Suggestion",
    "TermSet",
    "DEFAULT_VOCABULARY",
    "SearchVocabulary",
    "CatalogStoreError",
    "SearchEngineError",
    "CatalogStore",
    "SqlCatalogStore",
    "parse_search_request",
    "parse_suggest_limit"
]
