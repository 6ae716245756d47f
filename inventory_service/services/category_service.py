from __future__ import annotations

from typing import List

from inventory_service.dal.category_dal import CategoryDAL
from inventory_service.db.mongo import parse_object_id
from inventory_service.models import Category
from inventory_service.services.exceptions import NotFoundError


class CategoryService:
    def __init__(self) -> None:
        self.dal = CategoryDAL()

    async def list_all(self) -> List[Category]:
        return await self.dal.list_all()

    async def get(self, category_id: str) -> Category:
        oid = parse_object_id(category_id)
        category = await self.dal.get(oid) if oid else None
        if not category:
            raise NotFoundError("Category not found")
        return category
