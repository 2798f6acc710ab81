"""
Value types for the Search Engine

Everything here is immutable and lives for a single request.
"""
from dataclasses import dataclass, field
from decimal import Decimal
from typing import FrozenSet, List, Optional, Tuple


@dataclass(frozen=True)
class SearchRequest:
    """Parsed search parameters. Construct via ``parse_search_request`` for raw input."""

    raw_query: str
    page: int = 1
    page_size: int = 12
    category: Optional[str] = None
    min_price: Optional[float] = None
    max_price: Optional[float] = None
    in_stock_only: bool = False


@dataclass(frozen=True)
class TermSet:
    """Normalized query, its tokens and synonyms"""

    normalized_query: str
    tokens: Tuple[str, ...]
    synonyms: Tuple[str, ...]
    terms: FrozenSet[str]


@dataclass(frozen=True)
class PriceRange:
    """Inclusive price bounds; ``None`` means unbounded on that side"""

    gte: Optional[float] = None
    lte: Optional[float] = None


@dataclass(frozen=True)
class FilterPredicate:
    """
    Declarative description of which catalog rows match a search.

    Visibility (active, not deleted, published) is always implied. A row
    matches when any of ``terms`` is contained (case-insensitive) in its
    name, slug, description, category name or one of its tag names, and it
    satisfies every optional clause that is set.
    """

    terms: Tuple[str, ...]
    category: Optional[str] = None
    price: Optional[PriceRange] = None
    in_stock_only: bool = False


@dataclass(frozen=True)
class CandidateRecord:
    """Minimal projection of one catalog row"""

    id: int
    name: str
    slug: str
    price: Decimal
    images: Tuple[str, ...] = ()
    category_name: Optional[str] = None
    short_description: Optional[str] = None
    description: Optional[str] = None
    tag_names: FrozenSet[str] = frozenset()
    review_ratings: Tuple[int, ...] = ()


@dataclass(frozen=True)
class ScoredCandidate:
    """A candidate with its relevance score"""

    candidate: CandidateRecord
    score: float


@dataclass(frozen=True)
class ResultItem:
    """One product as returned to the caller"""

    id: int
    name: str
    slug: str
    image: str
    price: float
    category: Optional[str]
    average_rating: float
    review_count: int
    short_description: Optional[str]


@dataclass(frozen=True)
class Suggestion:
    """Lightweight product suggestion for type-ahead"""

    id: int
    name: str
    slug: str
    image: str
    price: float
    category: Optional[str]
    average_rating: float
    review_count: int


@dataclass(frozen=True)
class ResultPage:
    """A page of ranked results; ``total`` is the full match count"""

    items: List[ResultItem] = field(default_factory=list)
    total: int = 0
    page: int = 1
    page_size: int = 12
