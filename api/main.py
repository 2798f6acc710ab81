"""
FastAPI main application for the catalog search API
"""
import logging
import os
import re
import sys
import time
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware

# Add api directory to path for imports
api_dir = os.path.dirname(os.path.abspath(__file__))
if api_dir not in sys.path:
    sys.path.insert(0, api_dir)

from core.config import settings  # noqa: E402
from core.database import dispose_engine, ping_database  # noqa: E402
from core.logging import setup_logging  # noqa: E402
from middleware.logging_middleware import RequestLoggingMiddleware  # noqa: E402
from routers import analytics, search  # noqa: E402

setup_logging()
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager"""
    logger.info(f"Starting {settings.app_name}...")

    sanitized = re.sub(r":\/\/[^:]*:[^@]*@", "://***:***@", settings.database_url)
    logger.info(f"Database: {sanitized}")
    logger.info(
        f"Search config: min_query_length={settings.search_min_query_length}, "
        f"page_size={settings.search_default_page_size}/{settings.search_max_page_size}, "
        f"candidate_cap={settings.search_candidate_cap}"
    )

    yield

    logger.info(f"Shutting down {settings.app_name}...")
    await dispose_engine()


app = FastAPI(
    title=settings.app_name,
    description="Product search relevance API",
    version=settings.version,
    debug=settings.debug,
    lifespan=lifespan,
    docs_url="/docs" if settings.environment == "development" else None,
    redoc_url="/redoc" if settings.environment == "development" else None,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(GZipMiddleware, minimum_size=1000)
app.add_middleware(RequestLoggingMiddleware)


@app.get("/health")
async def health_check():
    """Health check endpoint for load balancers"""
    database_ok = await ping_database()
    return {
        "status": "healthy" if database_ok else "degraded",
        "database": "ok" if database_ok else "unavailable",
        "timestamp": time.time(),
        "version": settings.version,
    }


@app.get("/")
async def root():
    """Root endpoint with API information"""
    return {
        "name": settings.app_name,
        "version": settings.version,
        "docs": "/docs" if settings.environment == "development" else None,
        "endpoints": {
            "search": "/api/search/query",
            "suggest": "/api/search/suggest",
            "assist": "/api/search/assist",
            "analytics": "/api/analytics/search",
        },
    }


app.include_router(search.router, prefix="/api")
app.include_router(analytics.router, prefix="/api")


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.environment == "development",
        log_config=None,  # Use our custom logging
        access_log=False,  # We handle this in middleware
    )
