"""
Projection of ranked candidates into response items.
"""
from typing import Sequence

from core.config import settings

from .schemas import CandidateRecord, ResultItem, ResultPage, ScoredCandidate, Suggestion


def average_rating(ratings: Sequence[int]) -> float:
    if not ratings:
        return 0.0
    return sum(ratings) / len(ratings)


def primary_image(candidate: CandidateRecord) -> str:
    return candidate.images[0] if candidate.images else settings.search_placeholder_image


def project_item(candidate: CandidateRecord) -> ResultItem:
    return ResultItem(
        id=candidate.id,
        name=candidate.name,
        slug=candidate.slug,
        image=primary_image(candidate),
        price=float(candidate.price),
        category=candidate.category_name,
        average_rating=average_rating(candidate.review_ratings),
        review_count=len(candidate.review_ratings),
        short_description=candidate.short_description or None,
    )


def project_suggestion(candidate: CandidateRecord) -> Suggestion:
    return Suggestion(
        id=candidate.id,
        name=candidate.name,
        slug=candidate.slug,
        image=primary_image(candidate),
        price=float(candidate.price),
        category=candidate.category_name,
        average_rating=average_rating(candidate.review_ratings),
        review_count=len(candidate.review_ratings),
    )


def project_page(ranked_page: Sequence[ScoredCandidate], total: int, page: int, page_size: int) -> ResultPage:
    """Wrap a page of ranked candidates; ``total`` is passed through from the count read"""
    return ResultPage(
        items=[project_item(scored.candidate) for scored in ranked_page],
        total=total,
        page=page,
        page_size=page_size,
    )
