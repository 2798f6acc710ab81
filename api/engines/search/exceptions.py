"""
Search engine errors
"""


class SearchEngineError(Exception):
    """Base class for search engine failures"""


class CatalogStoreError(SearchEngineError):
    """A catalog store read failed; the request cannot be answered"""
