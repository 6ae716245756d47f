from __future__ import annotations

from datetime import datetime
from typing import Annotated, Optional

from pydantic import AliasChoices, BaseModel, BeforeValidator, ConfigDict, Field
from pydantic.alias_generators import to_camel

# Mongo ObjectIds are rendered as their 24-char hex form
ObjectIdStr = Annotated[str, BeforeValidator(str)]


class WireModel(BaseModel):
    """Read models: snake_case in Python and in Mongo, camelCase in JSON responses."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class CategoryCreate(BaseModel):
    """Seed payload for a category."""
    name: str = Field(..., min_length=1, max_length=80)
    description: Optional[str] = Field(default=None, max_length=2000)


class Category(WireModel):
    """Stored Category document."""
    id: ObjectIdStr = Field(validation_alias=AliasChoices("_id", "id"))
    name: str
    description: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
