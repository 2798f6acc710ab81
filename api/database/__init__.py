"""
Database module for the catalog
"""
from .models import (
    Base,
    Category,
    Product,
    ProductImage,
    ProductTag,
    Review,
    Tag
)

__all__ = [
    "Base",
    "Category",
    "Product",
    "ProductImage",
    "ProductTag",
    "Review",
    "Tag"
]
