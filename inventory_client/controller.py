from __future__ import annotations

import asyncio
import inspect
import logging
from typing import Awaitable, Callable, Iterable, Optional, Union

import httpx

from inventory_client.api import ApiError, InventoryApiClient
from inventory_client.config import settings
from inventory_client.form import SUBMIT_FAILED, ProductForm
from inventory_client.state import (
    CategoriesLoaded,
    CategoryToggled,
    DeleteFailed,
    FetchFailed,
    FetchStarted,
    FetchSucceeded,
    FilterChanged,
    FiltersCleared,
    InventoryState,
    NoticeCleared,
    PageRequested,
    ProductAdded,
    ProductDeleted,
    SearchChanged,
    needs_refetch,
    reduce,
)

log = logging.getLogger("inventory.client")

Confirm = Callable[[str], Union[bool, Awaitable[bool]]]


def confirm_message(product_name: str) -> str:
    return f'Are you sure you want to delete "{product_name}"?'


class InventoryController:
    """
    Drives InventoryState from user actions: every action goes through `reduce`,
    and the ones that change what is listed trigger a fetch of the current page.
    Requests are issued one at a time per action; there is no retry.
    """

    def __init__(
        self,
        api: InventoryApiClient,
        *,
        confirm: Optional[Confirm] = None,
        page_size: Optional[int] = None,
        notice_seconds: Optional[float] = None,
    ):
        self.api = api
        self.confirm = confirm
        self.page_size = page_size or settings.page_size
        self.notice_seconds = settings.notice_seconds if notice_seconds is None else notice_seconds
        self._state = InventoryState()
        self._notice_timer: Optional[asyncio.TimerHandle] = None

    @property
    def state(self) -> InventoryState:
        return self._state

    def dispatch(self, action: object) -> InventoryState:
        self._state = reduce(self._state, action)
        if isinstance(action, (ProductAdded, ProductDeleted)):
            self._schedule_notice_clear()
        return self._state

    def _schedule_notice_clear(self) -> None:
        if self._notice_timer is not None:
            self._notice_timer.cancel()
        loop = asyncio.get_running_loop()
        self._notice_timer = loop.call_later(self.notice_seconds, self.dispatch, NoticeCleared())

    # ─────────────────────────────────────────────────────────────
    # Loading
    # ─────────────────────────────────────────────────────────────
    async def start(self) -> InventoryState:
        await self.load_categories()
        return await self.refresh()

    async def load_categories(self) -> InventoryState:
        try:
            categories = await self.api.list_categories()
        except (ApiError, httpx.HTTPError) as e:
            log.error("Failed to load categories: %s", e)
            return self._state
        return self.dispatch(CategoriesLoaded(tuple(categories or ())))

    async def refresh(self) -> InventoryState:
        """Fetch the current page with the current filters."""
        s = self.dispatch(FetchStarted())
        try:
            result = await self.api.list_products(
                page=s.current_page,
                limit=self.page_size,
                search=s.search_term,
                categories=sorted(s.selected_categories),
            )
        except (ApiError, httpx.HTTPError) as e:
            log.error("Failed to load products: %s", e)
            return self.dispatch(FetchFailed(str(e)))
        return self.dispatch(
            FetchSucceeded(tuple(result.get("products", ())), result.get("pagination", {}))
        )

    async def send(self, action: object) -> InventoryState:
        """Dispatch, then refetch the page when the action changes what is listed."""
        state = self.dispatch(action)
        if needs_refetch(action):
            return await self.refresh()
        return state

    # ─────────────────────────────────────────────────────────────
    # Filters and paging
    # ─────────────────────────────────────────────────────────────
    async def search(self, term: str) -> InventoryState:
        return await self.send(SearchChanged(term))

    async def filter(self, category_ids: Iterable[str]) -> InventoryState:
        return await self.send(FilterChanged(frozenset(category_ids)))

    async def toggle_category(self, category_id: str) -> InventoryState:
        return await self.send(CategoryToggled(category_id))

    async def clear_filters(self) -> InventoryState:
        return await self.send(FiltersCleared())

    async def go_to_page(self, page: int) -> InventoryState:
        return await self.send(PageRequested(page))

    async def next_page(self) -> InventoryState:
        return await self.go_to_page(min(self._state.current_page + 1, max(self._state.total_pages, 1)))

    async def previous_page(self) -> InventoryState:
        return await self.go_to_page(self._state.current_page - 1)

    # ─────────────────────────────────────────────────────────────
    # Mutations
    # ─────────────────────────────────────────────────────────────
    async def submit_form(self, form: ProductForm) -> ProductForm:
        """
        Validate locally, then create. Returns the next form state: a blank form
        on success, the same form with errors otherwise.
        """
        errors = form.validate()
        if errors:
            return form.with_errors(errors)
        try:
            product = await self.api.create_product(form.payload())
        except ApiError as e:
            return form.with_api_error(e)
        except httpx.HTTPError as e:
            log.error("Failed to add product: %s", e)
            return form.with_errors({"submit": SUBMIT_FAILED})
        await self.send(ProductAdded(product))
        return ProductForm()

    async def delete_product(self, product_id: str, product_name: str) -> bool:
        """
        Ask for confirmation naming the product, then delete it.
        Returns False when the user declines or the request fails.
        """
        if self.confirm is not None:
            answer = self.confirm(confirm_message(product_name))
            if inspect.isawaitable(answer):
                answer = await answer
            if not answer:
                return False
        try:
            await self.api.delete_product(product_id)
        except (ApiError, httpx.HTTPError) as e:
            log.error("Failed to delete product: %s", e)
            self.dispatch(DeleteFailed(str(e)))
            return False
        await self.send(ProductDeleted(product_id))
        return True
