"""
Pydantic schemas for search API endpoints
"""
from typing import List, Optional

from pydantic import BaseModel, Field

from engines.search import ResultItem, ResultPage, Suggestion


class SearchProductSchema(BaseModel):
    """Ranked product in a search response"""
    id: int
    name: str
    slug: str
    image: str
    price: float
    category: Optional[str] = None
    average_rating: float = Field(0.0, alias="averageRating")
    review_count: int = Field(0, alias="reviewCount")
    short_description: Optional[str] = Field(None, alias="shortDescription")

    class Config:
        populate_by_name = True

    @classmethod
    def from_item(cls, item: ResultItem) -> "SearchProductSchema":
        return cls(
            id=item.id,
            name=item.name,
            slug=item.slug,
            image=item.image,
            price=item.price,
            category=item.category,
            average_rating=item.average_rating,
            review_count=item.review_count,
            short_description=item.short_description,
        )


class SearchResponse(BaseModel):
    """Search query response"""
    products: List[SearchProductSchema]
    total: int
    page: int
    page_size: int = Field(alias="pageSize")

    class Config:
        populate_by_name = True

    @classmethod
    def from_page(cls, result: ResultPage) -> "SearchResponse":
        return cls(
            products=[SearchProductSchema.from_item(item) for item in result.items],
            total=result.total,
            page=result.page,
            page_size=result.page_size,
        )


class SuggestionSchema(BaseModel):
    """Type-ahead suggestion"""
    id: int
    name: str
    slug: str
    image: str
    price: float
    category: Optional[str] = None
    average_rating: float = Field(0.0, alias="averageRating")
    review_count: int = Field(0, alias="reviewCount")

    class Config:
        populate_by_name = True

    @classmethod
    def from_suggestion(cls, suggestion: Suggestion) -> "SuggestionSchema":
        return cls(
            id=suggestion.id,
            name=suggestion.name,
            slug=suggestion.slug,
            image=suggestion.image,
            price=suggestion.price,
            category=suggestion.category,
            average_rating=suggestion.average_rating,
            review_count=suggestion.review_count,
        )


class SuggestResponse(BaseModel):
    """Suggestion list response"""
    suggestions: List[SuggestionSchema]


class SearchEventRequest(BaseModel):
    """Client-reported search event for the analytics side channel"""
    query: str = Field("", max_length=500)
    result_count: int = Field(0, ge=0, alias="resultCount")
    ai_suggested: bool = Field(False, alias="aiSuggested")
    clicked_suggestion: Optional[str] = Field(None, max_length=500, alias="clickedSuggestion")
    source: str = Field("unknown", max_length=50)

    class Config:
        populate_by_name = True


class SearchEventResponse(BaseModel):
    """Acknowledgement for a search event"""
    ok: bool = True


class SearchAssistRequest(BaseModel):
    """Query to expand with the search assistant"""
    q: str = Field("", max_length=500)


class SearchAssistResponse(BaseModel):
    """Alternative queries suggested by the search assistant"""
    suggestions: List[str]
