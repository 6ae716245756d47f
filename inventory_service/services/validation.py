from __future__ import annotations

from typing import Any, Iterable, List, Mapping, Optional, Sequence

from bson import ObjectId

from inventory_service.models import REQUIRED_MESSAGES, Category, FieldError
from inventory_service.services.exceptions import ValidationError

INVALID_CATEGORIES = "One or more selected categories are invalid"


def _field_name(loc: Sequence[Any]) -> str:
    # ("body", "name") -> "name"; ("body",) -> "body"; ("query", "page") -> "page"
    parts = [str(p) for p in loc if p not in ("body", "query", "path")]
    return ".".join(parts) if parts else "body"


def field_errors_from_pydantic(errors: Iterable[Mapping[str, Any]]) -> List[FieldError]:
    """
    Flatten pydantic error dicts into [{field, message}], one entry per field.
    Absent fields get the same wording as an empty value would.
    """
    out: List[FieldError] = []
    seen = set()
    for err in errors:
        if err.get("type") == "json_invalid":
            field = "body"
        else:
            field = _field_name(err.get("loc", ()))
        if field in seen:
            continue
        seen.add(field)
        if err.get("type") == "missing":
            message = REQUIRED_MESSAGES.get(field, f"{field} is required")
        else:
            message = str(err.get("msg", "Invalid value"))
        out.append(FieldError(field=field, message=message))
    return out


def unique_in_order(values: Iterable[str]) -> List[str]:
    seen = set()
    out: List[str] = []
    for v in values:
        if v not in seen:
            seen.add(v)
            out.append(v)
    return out


def ensure_categories_exist(requested: Sequence[Optional[ObjectId]], existing: Sequence[Category]) -> None:
    """
    Every requested id must be well-formed and resolve to a stored category.
    """
    known = {c.id for c in existing}
    missing = [i for i in requested if i is None or str(i) not in known]
    if missing:
        raise ValidationError(
            INVALID_CATEGORIES,
            errors=[FieldError(field="categories", message=INVALID_CATEGORIES)],
        )
