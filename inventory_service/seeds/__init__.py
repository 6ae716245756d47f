from __future__ import annotations

import logging

from inventory_service.config import settings
from inventory_service.seeds.seed_categories import seed_categories

log = logging.getLogger("inventory.seeds")


async def run_all_seeds() -> None:
    """
    Run the startup seeders. Controlled by env flags:

      SEED_CATEGORIES=1   -> wipe and re-seed categories (default: 0)
    """
    if settings.seed_categories:
        await seed_categories()
    else:
        log.info("[inventory.seeds.categories] Skipped via env")
