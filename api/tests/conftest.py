"""
Pytest configuration and fixtures for catalog search API tests.
"""
import asyncio
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from decimal import Decimal
from typing import List, Optional

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

from database.models import Base, Category, Product, ProductImage, Review, Tag
from engines.search import CandidateRecord, FilterPredicate


def make_candidate(
    id: int = 1,
    name: str = "Test Product",
    slug: Optional[str] = None,
    price: str = "10.00",
    images=(),
    category_name: Optional[str] = None,
    short_description: Optional[str] = None,
    description: Optional[str] = None,
    tag_names=(),
    review_ratings=(),
) -> CandidateRecord:
    """Build a CandidateRecord with sensible defaults."""
    return CandidateRecord(
        id=id,
        name=name,
        slug=slug if slug is not None else f"product-{id}",
        price=Decimal(price),
        images=tuple(images),
        category_name=category_name,
        short_description=short_description,
        description=description,
        tag_names=frozenset(tag_names),
        review_ratings=tuple(review_ratings),
    )


@dataclass
class CatalogRow:
    """A candidate plus the fields only the store filters on"""
    record: CandidateRecord
    category_slug: Optional[str] = None
    stock: int = 10
    visible: bool = True


@dataclass
class FakeCatalogStore:
    """
    In-memory CatalogStore.

    Rows are kept most recent first. Both reads yield to the event loop once
    so tests can observe whether they overlap.
    """
    rows: List[CatalogRow] = field(default_factory=list)
    events: List[str] = field(default_factory=list)
    fetch_limits: List[int] = field(default_factory=list)
    predicates: List[FilterPredicate] = field(default_factory=list)

    def _matches(self, row: CatalogRow, predicate: FilterPredicate) -> bool:
        if not row.visible:
            return False
        rec = row.record
        fields = [rec.name, rec.slug, rec.description, rec.category_name, *rec.tag_names]
        haystacks = [f.lower() for f in fields if f]
        if not any(term in h for term in predicate.terms for h in haystacks):
            return False
        if predicate.category:
            wanted = predicate.category.lower()
            names = [(rec.category_name or "").lower(), (row.category_slug or "").lower()]
            if not any(wanted in n for n in names if n):
                return False
        if predicate.price is not None:
            if predicate.price.gte is not None and float(rec.price) < predicate.price.gte:
                return False
            if predicate.price.lte is not None and float(rec.price) > predicate.price.lte:
                return False
        if predicate.in_stock_only and row.stock <= 0:
            return False
        return True

    async def count(self, predicate: FilterPredicate) -> int:
        self.events.append("count:start")
        self.predicates.append(predicate)
        await asyncio.sleep(0)
        self.events.append("count:end")
        return sum(1 for row in self.rows if self._matches(row, predicate))

    async def fetch_candidates(self, predicate: FilterPredicate, limit: int) -> List[CandidateRecord]:
        self.events.append("fetch:start")
        self.fetch_limits.append(limit)
        await asyncio.sleep(0)
        self.events.append("fetch:end")
        return [row.record for row in self.rows if self._matches(row, predicate)][:limit]


@pytest.fixture
def fake_store():
    """Empty in-memory catalog store."""
    return FakeCatalogStore()


@pytest.fixture
def laptop_catalog():
    """Scenario catalog: one laptop, one jacket."""
    return FakeCatalogStore(rows=[
        CatalogRow(
            make_candidate(id=1, name="Dell XPS 13 Plus", slug="dell-xps-13-plus", price="1499.00",
                           category_name="Laptops", images=["/img/xps.jpg"], review_ratings=[5, 4]),
            category_slug="laptops",
        ),
        CatalogRow(
            make_candidate(id=2, name="Leather Jacket", slug="leather-jacket", price="249.00",
                           category_name="Fashion"),
            category_slug="fashion",
        ),
    ])


@pytest.fixture
def large_catalog():
    """100 visible items that all match 'widget', newest first."""
    return FakeCatalogStore(rows=[
        CatalogRow(make_candidate(id=i, name=f"Widget {i}", slug=f"widget-{i}",
                                  description="widget" if i % 3 == 0 else None))
        for i in range(100, 0, -1)
    ])


# ---------------------------------------------------------------------------
# SQLite-backed catalog for the SQLAlchemy store
# ---------------------------------------------------------------------------


@pytest_asyncio.fixture
async def sqlite_session_factory(tmp_path):
    """Session factory over a fresh file-backed SQLite catalog."""
    engine = create_async_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'catalog.db'}",
        poolclass=NullPool,
        echo=False,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    await engine.dispose()


@pytest_asyncio.fixture
async def seeded_catalog(sqlite_session_factory):
    """
    Catalog rows covering visibility, category, price, stock and tags.

    created_at decreases with list position, so the list order is the
    expected recency order.
    """
    now = datetime(2026, 1, 1, 12, 0, 0)

    async with sqlite_session_factory() as session:
        laptops = Category(name="Laptops", slug="laptops")
        fashion = Category(name="Fashion", slug="womens-fashion")
        ultrabook = Tag(name="ultrabook")
        summer = Tag(name="summer")

        rows = [
            Product(name="Dell XPS 13 Plus", slug="dell-xps-13-plus", price=Decimal("1499.00"), stock=5,
                    category=laptops, description="Compact 13 inch machine", tags=[ultrabook],
                    images=[ProductImage(url="/img/xps-front.jpg", display_order=0),
                            ProductImage(url="/img/xps-side.jpg", display_order=1)],
                    reviews=[Review(rating=5), Review(rating=4)]),
            Product(name="Travel Notebook Pro", slug="travel-notebook-pro", price=Decimal("899.00"), stock=0,
                    category=laptops, description="Light and portable"),
            Product(name="Leather Jacket", slug="leather-jacket", price=Decimal("249.00"), stock=3,
                    category=fashion, description="Classic biker jacket"),
            Product(name="Floral Dress", slug="floral-dress", price=Decimal("35.00"), stock=8,
                    category=fashion, short_description="Cotton", description="A floral dress", tags=[summer]),
            Product(name="Evening Dress", slug="evening-dress", price=Decimal("180.00"), stock=2,
                    category=fashion, description="Silk evening dress"),
            Product(name="Archived Dress", slug="archived-dress", price=Decimal("20.00"), stock=1,
                    category=fashion, status="archived"),
            Product(name="Deleted Dress", slug="deleted-dress", price=Decimal("20.00"), stock=1,
                    category=fashion, is_deleted=True),
            Product(name="Inactive Dress", slug="inactive-dress", price=Decimal("20.00"), stock=1,
                    category=fashion, is_active=False),
            Product(name="100% Cotton Tee", slug="cotton-tee", price=Decimal("15.00"), stock=4,
                    category=fashion),
        ]
        for offset, product in enumerate(rows):
            product.created_at = now - timedelta(hours=offset)
            session.add(product)
        await session.commit()

    return sqlite_session_factory
