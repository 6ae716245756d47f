from __future__ import annotations

from typing import Any, Dict, Iterable, List, Optional

import httpx

from inventory_client.config import settings


class ApiError(RuntimeError):
    """
    Raised for every response with status >= 400.
    `errors` carries the server's field-level messages ({field, message}) when present.
    """

    def __init__(self, *, status: int, url: str, message: str, errors: Optional[List[Dict[str, str]]] = None):
        super().__init__(f"HTTP {status}: {url} :: {message}")
        self.status = status
        self.url = url
        self.message = message
        self.errors = errors or []

    @property
    def field_errors(self) -> Dict[str, str]:
        return {e["field"]: e["message"] for e in self.errors if "field" in e and "message" in e}


class InventoryApiClient:
    """
    Thin async client for the inventory REST API.

    Endpoints used:
      - POST   /products
      - GET    /products?page=&limit=&search=&categories=
      - GET    /products/{id}
      - PUT    /products/{id}
      - DELETE /products/{id}
      - GET    /categories
      - GET    /categories/{id}
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        *,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = (base_url or settings.api_base_url).rstrip("/")
        self.timeout = timeout if timeout is not None else settings.http_client_timeout_seconds
        self._client = httpx.AsyncClient(base_url=self.base_url, timeout=self.timeout, transport=transport)

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> "InventoryApiClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    # ─────────────────────────────────────────────────────────────
    # Low-level request helper
    # ─────────────────────────────────────────────────────────────
    async def _request(
        self,
        method: str,
        path: str,
        *,
        params: Optional[Dict[str, Any]] = None,
        json: Optional[Dict[str, Any]] = None,
    ) -> Any:
        resp = await self._client.request(method, path, params=params, json=json, headers={"Accept": "application/json"})
        try:
            body = resp.json()
        except ValueError:
            body = {}
        if resp.status_code >= 400:
            raise ApiError(
                status=resp.status_code,
                url=str(resp.request.url),
                message=(body or {}).get("message") or resp.text[:500],
                errors=(body or {}).get("errors"),
            )
        return body.get("data")

    # ─────────────────────────────────────────────────────────────
    # Products
    # ─────────────────────────────────────────────────────────────
    async def create_product(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        return await self._request("POST", "/products", json=payload)

    async def list_products(
        self,
        page: int = 1,
        limit: int = 10,
        search: str = "",
        categories: Iterable[str] = (),
    ) -> Dict[str, Any]:
        """
        Returns {"products": [...], "pagination": {...}}.
        """
        params: Dict[str, Any] = {"page": page, "limit": limit}
        if search:
            params["search"] = search
        categories = list(categories)
        if categories:
            params["categories"] = ",".join(categories)
        return await self._request("GET", "/products", params=params)

    async def get_product(self, product_id: str) -> Dict[str, Any]:
        return await self._request("GET", f"/products/{product_id}")

    async def update_product(self, product_id: str, payload: Dict[str, Any]) -> Dict[str, Any]:
        return await self._request("PUT", f"/products/{product_id}", json=payload)

    async def delete_product(self, product_id: str) -> Dict[str, Any]:
        return await self._request("DELETE", f"/products/{product_id}")

    # ─────────────────────────────────────────────────────────────
    # Categories
    # ─────────────────────────────────────────────────────────────
    async def list_categories(self) -> List[Dict[str, Any]]:
        return await self._request("GET", "/categories")

    async def get_category(self, category_id: str) -> Dict[str, Any]:
        return await self._request("GET", f"/categories/{category_id}")
