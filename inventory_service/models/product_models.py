from __future__ import annotations

import math
from datetime import datetime
from typing import Any, List, Optional

from pydantic import AliasChoices, BaseModel, Field, field_validator
from pydantic_core import PydanticCustomError

from .category_models import Category, ObjectIdStr, WireModel

NAME_MIN, NAME_MAX = 3, 100
DESCRIPTION_MIN, DESCRIPTION_MAX = 10, 1000
# stored as a BSON int64
QUANTITY_MAX = 2**63 - 1

NAME_REQUIRED = "Product name is required"
NAME_LENGTH = f"Product name must be between {NAME_MIN} and {NAME_MAX} characters"
DESCRIPTION_REQUIRED = "Description is required"
DESCRIPTION_LENGTH = f"Description must be between {DESCRIPTION_MIN} and {DESCRIPTION_MAX} characters"
QUANTITY_REQUIRED = "Quantity is required"
QUANTITY_NON_NEGATIVE = "Quantity must be a non-negative number"
QUANTITY_TOO_LARGE = "Quantity is too large"
CATEGORIES_REQUIRED = "At least one category is required"
CATEGORY_ID_TYPE = "Categories must be a list of category ids"

# Messages for fields that are absent from the payload altogether
REQUIRED_MESSAGES = {
    "name": NAME_REQUIRED,
    "description": DESCRIPTION_REQUIRED,
    "quantity": QUANTITY_REQUIRED,
    "categories": CATEGORIES_REQUIRED,
}


def _trimmed_text(value: Any, *, required: str, length: str, lo: int, hi: int) -> str:
    if value is None or (isinstance(value, str) and not value.strip()):
        raise PydanticCustomError("required", required)
    if not isinstance(value, str):
        raise PydanticCustomError("string_type", length)
    value = value.strip()
    if not lo <= len(value) <= hi:
        raise PydanticCustomError("length", length)
    return value


# ─────────────────────────────────────────────────────────────
# Field rules shared by create and update payloads
# ─────────────────────────────────────────────────────────────
class _ProductRules(BaseModel):
    @field_validator("name", mode="before", check_fields=False)
    @classmethod
    def _check_name(cls, v: Any) -> str:
        return _trimmed_text(v, required=NAME_REQUIRED, length=NAME_LENGTH, lo=NAME_MIN, hi=NAME_MAX)

    @field_validator("description", mode="before", check_fields=False)
    @classmethod
    def _check_description(cls, v: Any) -> str:
        return _trimmed_text(
            v,
            required=DESCRIPTION_REQUIRED,
            length=DESCRIPTION_LENGTH,
            lo=DESCRIPTION_MIN,
            hi=DESCRIPTION_MAX,
        )

    @field_validator("quantity", mode="before", check_fields=False)
    @classmethod
    def _check_quantity(cls, v: Any) -> int:
        if v is None or (isinstance(v, str) and not v.strip()):
            raise PydanticCustomError("required", QUANTITY_REQUIRED)
        if isinstance(v, bool):
            raise PydanticCustomError("int_type", QUANTITY_NON_NEGATIVE)
        if isinstance(v, float):
            if not v.is_integer():
                raise PydanticCustomError("int_type", QUANTITY_NON_NEGATIVE)
            v = int(v)
        elif isinstance(v, str):
            try:
                v = int(v.strip())
            except ValueError:
                raise PydanticCustomError("int_type", QUANTITY_NON_NEGATIVE) from None
        elif not isinstance(v, int):
            raise PydanticCustomError("int_type", QUANTITY_NON_NEGATIVE)
        if v < 0:
            raise PydanticCustomError("non_negative", QUANTITY_NON_NEGATIVE)
        if v > QUANTITY_MAX:
            raise PydanticCustomError("too_large", QUANTITY_TOO_LARGE)
        return v

    @field_validator("categories", mode="before", check_fields=False)
    @classmethod
    def _check_categories(cls, v: Any) -> List[str]:
        if not isinstance(v, (list, tuple)) or not v:
            raise PydanticCustomError("required", CATEGORIES_REQUIRED)
        if not all(isinstance(c, str) and c.strip() for c in v):
            raise PydanticCustomError("category_id_type", CATEGORY_ID_TYPE)
        return [c.strip() for c in v]


class ProductCreate(_ProductRules):
    name: str = Field(..., description="Unique product name, trimmed")
    description: str
    quantity: int = Field(..., description="Units in stock, never negative")
    categories: List[str] = Field(..., description="Ids of existing categories (at least one)")


class ProductUpdate(_ProductRules):
    """Partial update payload; only keys present in the body are applied."""
    name: Optional[str] = None
    description: Optional[str] = None
    quantity: Optional[int] = None
    categories: Optional[List[str]] = None


# ─────────────────────────────────────────────────────────────
# Stored shape (category references only)
# ─────────────────────────────────────────────────────────────
class ProductDoc(BaseModel):
    id: ObjectIdStr = Field(validation_alias=AliasChoices("_id", "id"))
    name: str
    description: str
    quantity: int
    categories: List[ObjectIdStr] = Field(default_factory=list)
    created_at: datetime
    updated_at: datetime


# ─────────────────────────────────────────────────────────────
# Read side
# ─────────────────────────────────────────────────────────────
class Product(WireModel):
    """Product as returned by the API, categories resolved to full records."""
    id: ObjectIdStr = Field(validation_alias=AliasChoices("_id", "id"))
    name: str
    description: str
    quantity: int
    categories: List[Category] = Field(default_factory=list)
    created_at: datetime
    updated_at: datetime


class Pagination(WireModel):
    current_page: int
    total_pages: int
    total_items: int
    items_per_page: int
    has_next_page: bool
    has_previous_page: bool

    @classmethod
    def build(cls, *, page: int, limit: int, total: int) -> "Pagination":
        total_pages = math.ceil(total / limit) if limit > 0 else 0
        return cls(
            current_page=page,
            total_pages=total_pages,
            total_items=total,
            items_per_page=limit,
            has_next_page=page < total_pages,
            has_previous_page=page > 1,
        )


class ProductPage(WireModel):
    products: List[Product]
    pagination: Pagination
