# python -m inventory_service.seeds
from __future__ import annotations

import asyncio
import logging
import sys

from inventory_service.db.mongo import close_client, init_indexes
from inventory_service.logging_conf import setup_logging
from inventory_service.seeds.seed_categories import seed_categories

log = logging.getLogger("inventory.seeds")


async def _run() -> None:
    try:
        await init_indexes()
        await seed_categories()
    finally:
        close_client()


def main() -> None:
    setup_logging()
    try:
        asyncio.run(_run())
    except Exception as e:
        log.error("Error seeding categories: %s", e)
        sys.exit(1)


if __name__ == "__main__":
    main()
