from __future__ import annotations

import re
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Tuple

from bson import ObjectId
from pymongo import DESCENDING, ReturnDocument

from inventory_service.db.mongo import get_db
from inventory_service.models import ProductDoc


def _utcnow() -> datetime:
    # BSON dates carry milliseconds only
    now = datetime.now(timezone.utc)
    return now.replace(microsecond=now.microsecond // 1000 * 1000)


class ProductDAL:
    """
    CRUD for Product. Categories are stored as ObjectId references.
    Collection: 'products'
    """

    @property
    def col(self):
        return get_db().products

    async def create(
        self,
        *,
        name: str,
        description: str,
        quantity: int,
        categories: List[ObjectId],
    ) -> ProductDoc:
        now = _utcnow()
        doc: Dict[str, Any] = {
            "name": name,
            "description": description,
            "quantity": quantity,
            "categories": list(categories),
            "created_at": now,
            "updated_at": now,
        }
        res = await self.col.insert_one(doc)
        doc["_id"] = res.inserted_id
        return ProductDoc.model_validate(doc)

    async def get(self, product_id: ObjectId) -> Optional[ProductDoc]:
        doc = await self.col.find_one({"_id": product_id})
        return ProductDoc.model_validate(doc) if doc else None

    async def get_by_name(self, name: str) -> Optional[ProductDoc]:
        # exact, case-sensitive
        doc = await self.col.find_one({"name": name})
        return ProductDoc.model_validate(doc) if doc else None

    async def update(self, product_id: ObjectId, fields: Dict[str, Any]) -> Optional[ProductDoc]:
        update_doc = {"$set": {**fields, "updated_at": _utcnow()}}
        doc = await self.col.find_one_and_update(
            {"_id": product_id},
            update_doc,
            return_document=ReturnDocument.AFTER,
        )
        return ProductDoc.model_validate(doc) if doc else None

    async def delete(self, product_id: ObjectId) -> Optional[ProductDoc]:
        doc = await self.col.find_one_and_delete({"_id": product_id})
        return ProductDoc.model_validate(doc) if doc else None

    async def search(
        self,
        *,
        q: Optional[str] = None,
        category_ids: Optional[List[ObjectId]] = None,
        limit: int = 10,
        offset: int = 0,
    ) -> Tuple[List[ProductDoc], int]:
        filt: Dict[str, Any] = {}
        if q:
            # plain substring match, case-insensitive
            filt["name"] = {"$regex": re.escape(q), "$options": "i"}
        if category_ids is not None:
            filt["categories"] = {"$in": category_ids}

        total = await self.col.count_documents(filt)
        if offset >= total:
            return [], total
        cursor = (
            self.col.find(filt)
            .sort([("created_at", DESCENDING), ("_id", DESCENDING)])
            .skip(max(offset, 0))
            .limit(max(limit, 1))
        )
        items = [ProductDoc.model_validate(d) async for d in cursor]
        return items, total
