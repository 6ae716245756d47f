# tests/conftest.py
from typing import Any, Callable, Dict, Iterable

import httpx
import pytest
import pytest_asyncio
from mongomock_motor import AsyncMongoMockClient

from inventory_service.db import mongo
from inventory_service.main import app
from inventory_service.models import Category
from inventory_service.seeds.seed_categories import seed_categories


# ---------- Fixtures ----------
@pytest.fixture(autouse=True)
def mock_mongo(monkeypatch):
    """Every test gets a fresh in-memory Mongo behind the lazy client accessor."""
    client = AsyncMongoMockClient()
    monkeypatch.setattr(mongo, "_client", client)
    yield client


@pytest_asyncio.fixture
async def categories(mock_mongo) -> Dict[str, Category]:
    """Indexes plus the six seeded categories, keyed by name."""
    await mongo.init_indexes()
    seeded = await seed_categories()
    return {c.name: c for c in seeded}


@pytest_asyncio.fixture
async def client(categories):
    """AsyncClient bound to the app; lifespan is not run, fixtures do the setup."""
    transport = httpx.ASGITransport(app=app, raise_app_exceptions=False)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
def create_product(client, categories) -> Callable[..., Any]:
    """POST a product; categories are given by name."""

    async def _create(
        name: str,
        *,
        description: str = "A perfectly ordinary product",
        quantity: int = 1,
        category_names: Iterable[str] = ("Books",),
    ) -> Dict[str, Any]:
        resp = await client.post(
            "/api/products",
            json={
                "name": name,
                "description": description,
                "quantity": quantity,
                "categories": [categories[n].id for n in category_names],
            },
        )
        assert resp.status_code == 201, resp.text
        return resp.json()["data"]

    return _create
