from __future__ import annotations

from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Any, Dict, FrozenSet, Mapping

from inventory_client.api import ApiError
from inventory_client.state import toggle

SUBMIT_FAILED = "Failed to add product. Please try again."


@dataclass(frozen=True)
class ProductForm:
    """State of the add-product form. Quantity is kept as typed text."""
    name: str = ""
    description: str = ""
    quantity: str = ""
    categories: FrozenSet[str] = frozenset()
    errors: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))

    def with_field(self, name: str, value: str) -> "ProductForm":
        if name not in ("name", "description", "quantity"):
            raise KeyError(name)
        return replace(self, **{name: value}, errors=self._without_error(name))

    def toggle_category(self, category_id: str) -> "ProductForm":
        return replace(
            self,
            categories=toggle(self.categories, category_id),
            errors=self._without_error("categories"),
        )

    def validate(self) -> Dict[str, str]:
        errors: Dict[str, str] = {}

        name = self.name.strip()
        if not name:
            errors["name"] = "Product name is required"
        elif len(name) < 3:
            errors["name"] = "Product name must be at least 3 characters"
        elif len(name) > 100:
            errors["name"] = "Product name must not exceed 100 characters"

        description = self.description.strip()
        if not description:
            errors["description"] = "Description is required"
        elif len(description) < 10:
            errors["description"] = "Description must be at least 10 characters"
        elif len(description) > 1000:
            errors["description"] = "Description must not exceed 1000 characters"

        quantity = self.quantity.strip()
        if not quantity:
            errors["quantity"] = "Quantity is required"
        else:
            try:
                if int(quantity) < 0:
                    errors["quantity"] = "Quantity cannot be negative"
            except ValueError:
                errors["quantity"] = "Quantity must be a whole number"

        if not self.categories:
            errors["categories"] = "At least one category is required"

        return errors

    def payload(self) -> Dict[str, Any]:
        return {
            "name": self.name.strip(),
            "description": self.description.strip(),
            "quantity": int(self.quantity.strip()),
            "categories": sorted(self.categories),
        }

    def with_errors(self, errors: Mapping[str, str]) -> "ProductForm":
        return replace(self, errors=MappingProxyType(dict(errors)))

    def with_api_error(self, exc: ApiError) -> "ProductForm":
        """Server field errors map onto fields; anything else becomes a submit error."""
        if exc.field_errors:
            return self.with_errors(exc.field_errors)
        return self.with_errors({"submit": exc.message or SUBMIT_FAILED})

    def _without_error(self, name: str) -> Mapping[str, str]:
        return MappingProxyType({k: v for k, v in self.errors.items() if k != name})
