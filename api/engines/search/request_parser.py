"""
Turns raw transport parameters (query-string text) into a SearchRequest.
"""
import re
from typing import Optional

from core.config import settings

from .filtering_service import parse_price_bound
from .schemas import SearchRequest


_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def _parse_int(value: Optional[str], default: int) -> int:
    if value is None:
        return default
    try:
        return int(str(value).strip())
    except ValueError:
        return default


def _parse_leading_int(value: Optional[str], default: int) -> int:
    """Integer prefix of the text ("2.5" -> 2, "20abc" -> 20); default if there is none"""
    if value is None:
        return default
    match = _LEADING_INT.match(str(value))
    return int(match.group(1)) if match else default


def clamp_page_size(page_size: int) -> int:
    return min(max(page_size, 1), settings.search_max_page_size)


def parse_search_request(
    q: Optional[str] = None,
    page: Optional[str] = None,
    page_size: Optional[str] = None,
    category: Optional[str] = None,
    min_price: Optional[str] = None,
    max_price: Optional[str] = None,
    in_stock: Optional[str] = None,
) -> SearchRequest:
    """
    Parse raw query-string values.

    Page numbers use their leading integer ("2.5" is page 2) and fall back
    to their defaults when there is none. Page size is clamped to [1, max],
    unparsable price bounds are dropped and only "true" enables the stock
    filter.
    """
    return SearchRequest(
        raw_query=q or "",
        page=max(_parse_leading_int(page, 1), 1),
        page_size=clamp_page_size(_parse_leading_int(page_size, settings.search_default_page_size)),
        category=(category or "").strip() or None,
        min_price=parse_price_bound(min_price),
        max_price=parse_price_bound(max_price),
        in_stock_only=(in_stock or "").strip().lower() == "true",
    )


def parse_suggest_limit(limit: Optional[str] = None) -> int:
    """Suggestion limit: default from settings, clamped to [1, max]"""
    value = _parse_int(limit, settings.suggest_default_limit)
    return min(max(value, 1), settings.suggest_max_limit)
