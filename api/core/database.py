"""
Catalog database engine and session management

The search API only reads the catalog. The seed script is the only writer.
"""
import logging
from contextlib import asynccontextmanager

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from core.config import settings
from database.models import Base

logger = logging.getLogger(__name__)


def to_async_url(url: str) -> str:
    """Plain postgresql:// URLs are served through asyncpg"""
    if url.startswith("postgresql://"):
        return url.replace("postgresql://", "postgresql+asyncpg://", 1)
    return url


def engine_options(url: str) -> dict:
    # SQLite async pools take no sizing arguments
    if url.startswith("sqlite"):
        return {}
    return {
        "pool_size": settings.database_pool_size,
        "max_overflow": settings.database_max_overflow,
        "pool_pre_ping": True,
    }


DATABASE_URL = to_async_url(settings.database_url)

engine = create_async_engine(DATABASE_URL, echo=settings.database_echo, **engine_options(DATABASE_URL))

# Search reads open one session each, see SqlCatalogStore
AsyncSessionLocal = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


async def create_tables():
    """Create all catalog tables"""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def ping_database() -> bool:
    """True if the catalog database answers a trivial query"""
    try:
        async with AsyncSessionLocal() as session:
            await session.execute(text("SELECT 1"))
        return True
    except SQLAlchemyError as e:
        logger.warning(f"Database ping failed: {e}")
        return False


async def dispose_engine():
    """Close pooled connections on shutdown"""
    await engine.dispose()


@asynccontextmanager
async def get_db_session():
    """Read-write session that commits on success (maintenance scripts)"""
    async with AsyncSessionLocal() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
