"""Sample catalog inserted into an empty database by ``storefront db init``."""

from __future__ import annotations

import logging

from storefront.application.add_product import AddProductHandler
from storefront.application.dto import ProductSpec, SizeSpec
from storefront.application.manage_categories import AddCategoryHandler
from storefront.domain.repository.unit_of_work import UnitOfWork

logger = logging.getLogger(__name__)

SAMPLE_CATEGORIES = [("Tenis", "tenis")]

SAMPLE_PRODUCTS = [
    ProductSpec(
        id="prod-1",
        name="Air Jordan 1 Retro",
        brand="Nike",
        price="120",
        original_price="180",
        images=["https://images.unsplash.com/photo-1542291026-7eec264c27ff?w=800&q=80"],
        description="Classic retro basketball sneakers",
        sizes=[SizeSpec("36", 5), SizeSpec("37", 3), SizeSpec("38", 8), SizeSpec("39", 2)],
        category="tenis",
        featured=True,
    ),
    ProductSpec(
        id="prod-2",
        name="Adidas Superstar",
        brand="Adidas",
        price="90",
        original_price="110",
        images=["https://images.unsplash.com/photo-1587563871167-1ee9c731aefb?w=800&q=80"],
        description="The iconic Superstar with the classic three stripes",
        sizes=[SizeSpec("36", 4), SizeSpec("37", 6), SizeSpec("38", 5)],
        category="tenis",
        featured=True,
    ),
    ProductSpec(
        id="prod-3",
        name="Puma RS-X",
        brand="Puma",
        price="85",
        original_price="120",
        images=["https://images.unsplash.com/photo-1560769629-975ec94e6a86?w=800&q=80"],
        description="Modern and comfortable running sneakers",
        sizes=[SizeSpec("36", 3), SizeSpec("37", 5), SizeSpec("38", 7), SizeSpec("39", 4)],
        category="tenis",
        featured=False,
    ),
]


def seed_catalog(uow: UnitOfWork) -> int:
    """Insert sample data when the catalog is empty; return products added."""
    with uow:
        if uow.products.list_all():
            return 0
        existing = {c.slug for c in uow.categories.list_all()}

    for name, slug in SAMPLE_CATEGORIES:
        if slug not in existing:
            AddCategoryHandler(uow).handle(name=name, slug=slug)

    add_product = AddProductHandler(uow)
    for spec in SAMPLE_PRODUCTS:
        add_product.handle(spec)
    logger.info("Inserted %d sample products", len(SAMPLE_PRODUCTS))
    return len(SAMPLE_PRODUCTS)
