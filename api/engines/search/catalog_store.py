"""
Catalog store boundary

The engine only talks to the catalog through the ``CatalogStore`` protocol.
``SqlCatalogStore`` implements it on top of the SQLAlchemy models.
"""
import logging
from typing import List, Protocol

from sqlalchemy import and_, false, func, or_, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import async_sessionmaker
from sqlalchemy.orm import selectinload

from database.models import Category, Product, Tag

from .exceptions import CatalogStoreError
from .schemas import CandidateRecord, FilterPredicate

logger = logging.getLogger(__name__)


class CatalogStore(Protocol):
    """Read-only access to catalog rows matching a predicate"""

    async def count(self, predicate: FilterPredicate) -> int:
        ...

    async def fetch_candidates(self, predicate: FilterPredicate, limit: int) -> List[CandidateRecord]:
        """Up to ``limit`` matching rows, most recently created first"""
        ...


def _contains(term: str) -> str:
    escaped = term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


def compile_predicate(predicate: FilterPredicate):
    """Compile a FilterPredicate into a SQLAlchemy boolean clause"""
    clauses = [
        Product.is_active.is_(True),
        Product.is_deleted.is_(False),
        Product.status == "active",
    ]

    term_conditions = []
    for term in predicate.terms:
        pattern = _contains(term)
        term_conditions.extend([
            Product.name.ilike(pattern, escape="\\"),
            Product.slug.ilike(pattern, escape="\\"),
            Product.description.ilike(pattern, escape="\\"),
            Product.category.has(Category.name.ilike(pattern, escape="\\")),
            Product.tags.any(Tag.name.ilike(pattern, escape="\\")),
        ])
    # An empty term list matches nothing
    clauses.append(or_(*term_conditions) if term_conditions else false())

    if predicate.category:
        pattern = _contains(predicate.category)
        clauses.append(
            Product.category.has(
                or_(
                    Category.name.ilike(pattern, escape="\\"),
                    Category.slug.ilike(pattern, escape="\\"),
                )
            )
        )

    if predicate.price is not None:
        if predicate.price.gte is not None:
            clauses.append(Product.price >= predicate.price.gte)
        if predicate.price.lte is not None:
            clauses.append(Product.price <= predicate.price.lte)

    if predicate.in_stock_only:
        clauses.append(Product.stock > 0)

    return and_(*clauses)


def to_candidate(product: Product) -> CandidateRecord:
    return CandidateRecord(
        id=product.id,
        name=product.name,
        slug=product.slug,
        price=product.price,
        images=tuple(image.url for image in product.images),
        category_name=product.category.name if product.category else None,
        short_description=product.short_description,
        description=product.description,
        tag_names=frozenset(tag.name for tag in product.tags),
        review_ratings=tuple(review.rating for review in product.reviews),
    )


class SqlCatalogStore:
    """
    CatalogStore backed by the SQLAlchemy catalog models.

    Every read opens its own session so the count and candidate reads can
    run concurrently.
    """

    def __init__(self, session_factory: async_sessionmaker):
        self.session_factory = session_factory

    async def count(self, predicate: FilterPredicate) -> int:
        query = select(func.count(Product.id)).where(compile_predicate(predicate))
        try:
            async with self.session_factory() as session:
                result = await session.execute(query)
                return result.scalar_one()
        except SQLAlchemyError as e:
            logger.error(f"Catalog count failed: {e}")
            raise CatalogStoreError("Catalog count failed") from e

    async def fetch_candidates(self, predicate: FilterPredicate, limit: int) -> List[CandidateRecord]:
        query = (
            select(Product)
            .where(compile_predicate(predicate))
            .options(
                selectinload(Product.category),
                selectinload(Product.images),
                selectinload(Product.tags),
                selectinload(Product.reviews),
            )
            .order_by(Product.created_at.desc(), Product.id.desc())
            .limit(limit)
        )
        try:
            async with self.session_factory() as session:
                result = await session.execute(query)
                products = result.scalars().all()
                return [to_candidate(p) for p in products]
        except SQLAlchemyError as e:
            logger.error(f"Catalog candidate fetch failed: {e}")
            raise CatalogStoreError("Catalog candidate fetch failed") from e
