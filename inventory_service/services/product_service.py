from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Sequence

from bson import ObjectId
from pymongo.errors import DuplicateKeyError

from inventory_service.config import settings
from inventory_service.dal.category_dal import CategoryDAL
from inventory_service.dal.product_dal import ProductDAL
from inventory_service.db.mongo import parse_object_id
from inventory_service.models import (
    Pagination,
    Product,
    ProductCreate,
    ProductDoc,
    ProductPage,
    ProductUpdate,
)
from inventory_service.services.exceptions import ConflictError, NotFoundError
from inventory_service.services.validation import ensure_categories_exist, unique_in_order

log = logging.getLogger("inventory.products")

DUPLICATE_NAME = "A product with this name already exists"
# skip offsets travel as BSON int64
MAX_OFFSET = 2**63 - 1
PRODUCT_NOT_FOUND = "Product not found"


def _positive_int(value: Any, default: int) -> int:
    """Lenient query-string integer: anything unparsable or < 1 yields the default."""
    try:
        n = int(value)
    except (TypeError, ValueError):
        return default
    return n if n >= 1 else default


class ProductService:
    def __init__(self) -> None:
        self.dal = ProductDAL()
        self.categories = CategoryDAL()

    # ─────────────────────────────────────────────────────────────
    # Helpers
    # ─────────────────────────────────────────────────────────────
    async def _category_refs(self, raw_ids: Sequence[str]) -> List[ObjectId]:
        ids = unique_in_order(raw_ids)
        oids = [parse_object_id(i) for i in ids]
        found = await self.categories.get_many([o for o in oids if o is not None])
        ensure_categories_exist(oids, found)
        return [o for o in oids if o is not None]

    async def _project(self, docs: Sequence[ProductDoc]) -> List[Product]:
        """
        Replace category references by the category records, in stored order.
        One category lookup per call, whatever the number of products.
        """
        wanted = unique_in_order(cid for d in docs for cid in d.categories)
        resolved = await self.categories.get_many([ObjectId(c) for c in wanted])
        by_id = {c.id: c for c in resolved}
        return [
            Product.model_validate({
                **d.model_dump(exclude={"categories"}),
                "categories": [by_id[c] for c in d.categories if c in by_id],
            })
            for d in docs
        ]

    async def _get_doc(self, product_id: str) -> ProductDoc:
        oid = parse_object_id(product_id)
        doc = await self.dal.get(oid) if oid else None
        if not doc:
            raise NotFoundError(PRODUCT_NOT_FOUND)
        return doc

    # ─────────────────────────────────────────────────────────────
    # CRUD
    # ─────────────────────────────────────────────────────────────
    async def create(self, payload: ProductCreate) -> Product:
        if await self.dal.get_by_name(payload.name):
            raise ConflictError(DUPLICATE_NAME)
        refs = await self._category_refs(payload.categories)
        try:
            doc = await self.dal.create(
                name=payload.name,
                description=payload.description,
                quantity=payload.quantity,
                categories=refs,
            )
        except DuplicateKeyError:
            # lost the race against a concurrent create with the same name
            raise ConflictError(DUPLICATE_NAME) from None
        log.info("Product created: %s (%s)", doc.name, doc.id)
        return (await self._project([doc]))[0]

    async def search(
        self,
        *,
        page: Any = None,
        limit: Any = None,
        search: Optional[str] = None,
        category_ids: Optional[Sequence[str]] = None,
    ) -> ProductPage:
        page = _positive_int(page, 1)
        limit = min(_positive_int(limit, settings.default_page_size), settings.max_page_size)
        page = min(page, MAX_OFFSET // limit)
        q = (search or "").strip() or None

        refs: Optional[List[ObjectId]] = None
        wanted = [c.strip() for c in (category_ids or []) if c and c.strip()]
        if wanted:
            # malformed ids cannot match anything
            refs = [oid for oid in map(parse_object_id, wanted) if oid is not None]

        docs, total = await self.dal.search(
            q=q,
            category_ids=refs,
            limit=limit,
            offset=(page - 1) * limit,
        )
        return ProductPage(
            products=await self._project(docs),
            pagination=Pagination.build(page=page, limit=limit, total=total),
        )

    async def get(self, product_id: str) -> Product:
        doc = await self._get_doc(product_id)
        return (await self._project([doc]))[0]

    async def update(self, product_id: str, patch: ProductUpdate) -> Product:
        current = await self._get_doc(product_id)
        supplied = patch.model_dump(exclude_unset=True)

        fields: Dict[str, Any] = {}
        if "name" in supplied and supplied["name"] != current.name:
            if await self.dal.get_by_name(supplied["name"]):
                raise ConflictError(DUPLICATE_NAME)
            fields["name"] = supplied["name"]
        if "description" in supplied:
            fields["description"] = supplied["description"]
        if "quantity" in supplied:
            fields["quantity"] = supplied["quantity"]
        if "categories" in supplied:
            fields["categories"] = await self._category_refs(supplied["categories"])

        try:
            doc = await self.dal.update(ObjectId(current.id), fields)
        except DuplicateKeyError:
            raise ConflictError(DUPLICATE_NAME) from None
        if not doc:
            # deleted between the read and the write
            raise NotFoundError(PRODUCT_NOT_FOUND)
        log.info("Product updated: %s (%s) fields=%s", doc.name, doc.id, sorted(fields))
        return (await self._project([doc]))[0]

    async def delete(self, product_id: str) -> Product:
        oid = parse_object_id(product_id)
        doc = await self.dal.delete(oid) if oid else None
        if not doc:
            raise NotFoundError(PRODUCT_NOT_FOUND)
        log.info("Product deleted: %s (%s)", doc.name, doc.id)
        return (await self._project([doc]))[0]
