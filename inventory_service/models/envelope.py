from __future__ import annotations

from typing import Any, Dict, Generic, List, Optional, TypeVar

from pydantic import BaseModel

T = TypeVar("T")


class FieldError(BaseModel):
    field: str
    message: str


class ApiResponse(BaseModel, Generic[T]):
    """
    Uniform response wrapper: {success, data?, message?, errors?}.
    Routes serialize it with exclude_none so absent parts are omitted.
    """
    success: bool = True
    data: Optional[T] = None
    message: Optional[str] = None
    errors: Optional[List[FieldError]] = None


def error_body(message: str, errors: Optional[List[FieldError]] = None) -> Dict[str, Any]:
    body: Dict[str, Any] = {"success": False, "message": message}
    if errors:
        body["errors"] = [e.model_dump() for e in errors]
    return body
