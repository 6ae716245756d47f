"""
Client-side inventory view state.

The whole screen is described by one immutable `InventoryState`; every user
action or server response is an action object, and `reduce` returns the next
state. Side effects (HTTP calls, timers) live in the controller.
"""
from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Dict, FrozenSet, Iterable, Optional, Tuple

PRODUCT_ADDED = "Product added successfully!"
PRODUCT_DELETED = "Product deleted successfully!"
DELETE_FAILED = "Failed to delete product. Please try again."


@dataclass(frozen=True)
class InventoryState:
    products: Tuple[Dict[str, Any], ...] = ()
    categories: Tuple[Dict[str, Any], ...] = ()
    search_term: str = ""
    selected_categories: FrozenSet[str] = frozenset()
    current_page: int = 1
    total_pages: int = 1
    total_items: int = 0
    loading: bool = True
    notice: Optional[str] = None
    alert: Optional[str] = None

    @property
    def has_active_filters(self) -> bool:
        return bool(self.search_term or self.selected_categories)


# ─────────────────────────────────────────────────────────────
# Actions
# ─────────────────────────────────────────────────────────────
@dataclass(frozen=True)
class SearchChanged:
    term: str


@dataclass(frozen=True)
class FilterChanged:
    categories: FrozenSet[str]


@dataclass(frozen=True)
class CategoryToggled:
    category_id: str


@dataclass(frozen=True)
class FiltersCleared:
    pass


@dataclass(frozen=True)
class PageRequested:
    page: int


@dataclass(frozen=True)
class CategoriesLoaded:
    categories: Tuple[Dict[str, Any], ...]


@dataclass(frozen=True)
class FetchStarted:
    pass


@dataclass(frozen=True)
class FetchSucceeded:
    products: Tuple[Dict[str, Any], ...]
    pagination: Dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class FetchFailed:
    error: str


@dataclass(frozen=True)
class ProductAdded:
    product: Dict[str, Any]


@dataclass(frozen=True)
class ProductDeleted:
    product_id: str


@dataclass(frozen=True)
class DeleteFailed:
    error: str


@dataclass(frozen=True)
class NoticeCleared:
    pass


# Actions after which the product page has to be fetched again
REFETCH_ACTIONS = (
    SearchChanged,
    FilterChanged,
    CategoryToggled,
    FiltersCleared,
    PageRequested,
    ProductAdded,
    ProductDeleted,
)


def toggle(selection: Iterable[str], item: str) -> FrozenSet[str]:
    """Add `item` to the set if absent, remove it if present."""
    current = frozenset(selection)
    return current - {item} if item in current else current | {item}


def needs_refetch(action: object) -> bool:
    return isinstance(action, REFETCH_ACTIONS)


def reduce(state: InventoryState, action: object) -> InventoryState:
    if isinstance(action, SearchChanged):
        return replace(state, search_term=action.term, current_page=1)

    if isinstance(action, FilterChanged):
        return replace(state, selected_categories=frozenset(action.categories), current_page=1)

    if isinstance(action, CategoryToggled):
        return replace(
            state,
            selected_categories=toggle(state.selected_categories, action.category_id),
            current_page=1,
        )

    if isinstance(action, FiltersCleared):
        return replace(state, search_term="", selected_categories=frozenset(), current_page=1)

    if isinstance(action, PageRequested):
        return replace(state, current_page=max(action.page, 1))

    if isinstance(action, CategoriesLoaded):
        return replace(state, categories=tuple(action.categories))

    if isinstance(action, FetchStarted):
        return replace(state, loading=True)

    if isinstance(action, FetchSucceeded):
        pagination = action.pagination or {}
        return replace(
            state,
            products=tuple(action.products),
            current_page=pagination.get("currentPage", state.current_page),
            total_pages=pagination.get("totalPages", state.total_pages),
            total_items=pagination.get("totalItems", len(action.products)),
            loading=False,
        )

    if isinstance(action, FetchFailed):
        return replace(state, products=(), loading=False)

    if isinstance(action, ProductAdded):
        return replace(state, current_page=1, notice=PRODUCT_ADDED, alert=None)

    if isinstance(action, ProductDeleted):
        remaining = tuple(p for p in state.products if p.get("id") != action.product_id)
        page = state.current_page
        if not remaining and page > 1:
            # the page just emptied; step back instead of showing a blank page
            page -= 1
        return replace(state, products=remaining, current_page=page, notice=PRODUCT_DELETED, alert=None)

    if isinstance(action, DeleteFailed):
        return replace(state, alert=DELETE_FAILED)

    if isinstance(action, NoticeCleared):
        return replace(state, notice=None)

    return state
