from __future__ import annotations

import logging
from typing import List

from inventory_service.dal.category_dal import CategoryDAL
from inventory_service.models import Category, CategoryCreate

log = logging.getLogger("inventory.seeds.categories")

CATEGORIES: List[CategoryCreate] = [
    CategoryCreate(name="Electronics", description="Electronic devices and gadgets"),
    CategoryCreate(name="Clothing", description="Apparel and fashion items"),
    CategoryCreate(name="Books", description="Books and reading materials"),
    CategoryCreate(name="Home & Garden", description="Home and garden products"),
    CategoryCreate(name="Sports", description="Sports equipment and accessories"),
    CategoryCreate(name="Toys", description="Toys and games"),
]


async def seed_categories() -> List[Category]:
    """
    Replace the whole categories collection with the fixed set above.
    Products referencing the previous category ids are left dangling.
    """
    log.info("[inventory.seeds.categories] Begin")
    inserted = await CategoryDAL().replace_all(CATEGORIES)
    for cat in inserted:
        log.info("[inventory.seeds.categories] - %s (ID: %s)", cat.name, cat.id)
    log.info("[inventory.seeds.categories] Done (seeded=%d)", len(inserted))
    return inserted
