"""
Filtering Service for Search

Translates a term set and the structural search parameters into a
declarative FilterPredicate for the catalog store.
"""
import logging
import math
from typing import Optional, Union

from .schemas import FilterPredicate, PriceRange, SearchRequest, TermSet

logger = logging.getLogger(__name__)


def parse_price_bound(value: Union[str, float, int, None]) -> Optional[float]:
    """
    Parse a price bound from user input.

    Returns the bound as a float, or None when it is absent or is not a
    finite number. Malformed bounds are dropped, never treated as zero.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(number):
        return None
    return number


class FilteringService:
    """Builds catalog filter predicates"""

    def build_predicate(self, term_set: TermSet, request: SearchRequest) -> FilterPredicate:
        """
        Build the filter predicate for a search.

        Args:
            term_set: Expanded query terms
            request: Parsed search request supplying the optional filters

        Returns:
            FilterPredicate with the term disjunction and any supplied filters
        """
        category = (request.category or "").strip() or None
        price = self._price_range(request.min_price, request.max_price)

        predicate = FilterPredicate(
            terms=tuple(sorted(term_set.terms)),
            category=category,
            price=price,
            in_stock_only=bool(request.in_stock_only),
        )

        logger.debug(
            f"Built predicate: {len(predicate.terms)} terms, category={category}, "
            f"price={price}, in_stock_only={predicate.in_stock_only}"
        )
        return predicate

    def build_term_predicate(self, term_set: TermSet) -> FilterPredicate:
        """Predicate with only the visibility rules and the term disjunction"""
        return FilterPredicate(terms=tuple(sorted(term_set.terms)))

    def _price_range(self, min_price, max_price) -> Optional[PriceRange]:
        gte = parse_price_bound(min_price)
        lte = parse_price_bound(max_price)
        if gte is None and lte is None:
            return None
        return PriceRange(gte=gte, lte=lte)
