# inventory_service/services/exceptions.py
from __future__ import annotations

from typing import List, Optional

from inventory_service.models import FieldError


class ServiceError(Exception):
    """Base class for service-layer errors."""

    def __init__(self, detail: str):
        self.detail = detail
        super().__init__(detail)


class ValidationError(ServiceError):
    """Input rejected by a rule that needs the store (e.g. dangling category ids)."""

    def __init__(self, detail: str, errors: Optional[List[FieldError]] = None):
        super().__init__(detail)
        self.errors = errors or []


class ConflictError(ServiceError):
    """Write would break a uniqueness invariant."""
    pass


class NotFoundError(ServiceError):
    """Resource not found."""
    pass
