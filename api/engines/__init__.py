"""
Catalog Search Engines Package

This package contains the core engines for the catalog search API:
- search: Query expansion, catalog filtering and relevance ranking
"""

__version__ = "1.0.0"
