"""
Seed script for a small demo catalog.

Creates the catalog tables and inserts a handful of categories, tags and
products so the search endpoints have something to rank.

Usage:
    python -m scripts.seed_catalog
"""
import asyncio
import os
import sys
from datetime import datetime, timedelta
from decimal import Decimal

# Add parent directory to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from sqlalchemy import delete, select  # noqa: E402

from core.database import create_tables, get_db_session  # noqa: E402
from database.models import Category, Product, ProductImage, ProductTag, Review, Tag  # noqa: E402

CATEGORIES = [
    ("Laptops", "laptops"),
    ("Phones", "phones"),
    ("Fashion", "fashion"),
    ("Shoes", "shoes"),
]

# Format: (name, slug, category_slug, price, stock, tags, ratings, short_description)
PRODUCTS = [
    ("Dell XPS 13 Plus", "dell-xps-13-plus", "laptops", "1499.00", 12, ["ultrabook"], [5, 4, 5], "13-inch ultrabook"),
    ("Lenovo ThinkPad X1 Carbon", "lenovo-thinkpad-x1-carbon", "laptops", "1699.00", 4, ["business"], [5, 5], "Business notebook"),
    ("Budget Laptop 15", "budget-laptop-15", "laptops", "499.00", 0, [], [], "Everyday laptop"),
    ("Pixel Smartphone", "pixel-smartphone", "phones", "799.00", 20, ["android"], [4], "Android phone"),
    ("Leather Jacket", "leather-jacket", "fashion", "249.00", 7, ["outerwear"], [4, 3], "Classic biker jacket"),
    ("Summer Dress", "summer-dress", "fashion", "59.00", 15, ["dress"], [5], "Light cotton dress"),
    ("Trail Sneakers", "trail-sneakers", "shoes", "119.00", 9, ["running"], [], "Off-road trainers"),
]


async def seed_catalog():
    """Insert the demo catalog."""
    await create_tables()

    async with get_db_session() as session:
        existing = await session.execute(select(Product.id).limit(1))
        if existing.first():
            print("Catalog already seeded, skipping.")
            return

        categories = {}
        for name, slug in CATEGORIES:
            category = Category(name=name, slug=slug)
            session.add(category)
            categories[slug] = category

        tags = {}
        now = datetime.utcnow()
        for offset, (name, slug, category_slug, price, stock, tag_names, ratings, short) in enumerate(PRODUCTS):
            product = Product(
                name=name,
                slug=slug,
                short_description=short,
                description=f"{name}. {short}.",
                price=Decimal(price),
                stock=stock,
                category=categories[category_slug],
                created_at=now - timedelta(days=offset),
            )
            for tag_name in tag_names:
                if tag_name not in tags:
                    tags[tag_name] = Tag(name=tag_name)
                product.tags.append(tags[tag_name])
            product.images.append(ProductImage(url=f"/images/{slug}.jpg", display_order=0))
            for rating in ratings:
                product.reviews.append(Review(rating=rating))
            session.add(product)

    print(f"Seeded {len(PRODUCTS)} products in {len(CATEGORIES)} categories.")


async def clear_catalog():
    """Delete all catalog rows (for re-seeding)."""
    async with get_db_session() as session:
        for model in (ProductTag, Review, ProductImage, Product, Tag, Category):
            await session.execute(delete(model))
    print("Catalog cleared.")


if __name__ == "__main__":
    import argparse

    parser = argparse.ArgumentParser(description="Seed the demo catalog")
    parser.add_argument("--clear", action="store_true", help="Clear existing catalog before seeding")
    args = parser.parse_args()

    async def main():
        if args.clear:
            await clear_catalog()
        await seed_catalog()

    asyncio.run(main())
