from __future__ import annotations

from typing import Any, Optional

from bson import ObjectId
from bson.errors import InvalidId
from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase
from pymongo import ASCENDING, DESCENDING

from inventory_service.config import settings

_client: Optional[AsyncIOMotorClient] = None


def get_client() -> AsyncIOMotorClient:
    """
    Lazily create (and reuse) the Motor client.
    """
    global _client
    if _client is None:
        _client = AsyncIOMotorClient(settings.mongodb_uri, tz_aware=True)
    return _client


def get_db() -> AsyncIOMotorDatabase:
    """
    Return the database handle using configured DB name.
    """
    return get_client()[settings.mongo_db]


def close_client() -> None:
    global _client
    if _client is not None:
        _client.close()
        _client = None


def parse_object_id(value: Any) -> Optional[ObjectId]:
    """
    Coerce a path/body id into an ObjectId; None when it is not a valid id.
    """
    if isinstance(value, ObjectId):
        return value
    if not isinstance(value, str):
        return None
    try:
        return ObjectId(value)
    except (InvalidId, TypeError):
        return None


async def init_indexes() -> None:
    """
    Create indexes for the products and categories collections.
    Call this from FastAPI startup.
    """
    db = get_db()

    # products
    await db.products.create_index("name", unique=True)
    await db.products.create_index("categories")
    await db.products.create_index([("created_at", DESCENDING), ("_id", DESCENDING)])

    # categories
    await db.categories.create_index([("name", ASCENDING)])
