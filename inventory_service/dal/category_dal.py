from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List, Optional

from bson import ObjectId
from pymongo import ASCENDING

from inventory_service.db.mongo import get_db
from inventory_service.models import Category, CategoryCreate


def _utcnow() -> datetime:
    # BSON dates carry milliseconds only
    now = datetime.now(timezone.utc)
    return now.replace(microsecond=now.microsecond // 1000 * 1000)


class CategoryDAL:
    """
    Read access for Category, plus the destructive replace used by seeding.
    Collection: 'categories'
    """

    @property
    def col(self):
        return get_db().categories

    async def list_all(self) -> List[Category]:
        cursor = self.col.find({}).sort("name", ASCENDING)
        return [Category.model_validate(d) async for d in cursor]

    async def get(self, category_id: ObjectId) -> Optional[Category]:
        doc = await self.col.find_one({"_id": category_id})
        return Category.model_validate(doc) if doc else None

    async def get_many(self, ids: Iterable[ObjectId]) -> List[Category]:
        """
        Bulk fetch by ids, preserving request order and skipping missing ones.
        """
        ids = list(ids)
        if not ids:
            return []
        docs = [d async for d in self.col.find({"_id": {"$in": ids}})]
        by_id = {d["_id"]: d for d in docs}
        return [Category.model_validate(by_id[i]) for i in ids if i in by_id]

    async def replace_all(self, payloads: List[CategoryCreate]) -> List[Category]:
        await self.col.delete_many({})
        if not payloads:
            return []
        now = _utcnow()
        docs: List[Dict[str, Any]] = [
            {**p.model_dump(), "created_at": now, "updated_at": now} for p in payloads
        ]
        res = await self.col.insert_many(docs)
        return [
            Category.model_validate({**doc, "_id": _id})
            for doc, _id in zip(docs, res.inserted_ids)
        ]
