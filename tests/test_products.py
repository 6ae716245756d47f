# tests/test_products.py
import pytest
from bson import ObjectId
from httpx import AsyncClient


@pytest.mark.asyncio
async def test_create_product_resolves_categories(client: AsyncClient, categories):
    resp = await client.post(
        "/api/products",
        json={
            "name": "  Atlas  ",
            "description": "A large reference map book",
            "quantity": 5,
            "categories": [categories["Books"].id],
        },
    )
    assert resp.status_code == 201, resp.text
    body = resp.json()
    assert body["success"] is True
    assert body["message"] == "Product created successfully"
    data = body["data"]
    assert data["name"] == "Atlas"
    assert data["quantity"] == 5
    assert [c["name"] for c in data["categories"]] == ["Books"]
    assert data["categories"][0]["id"] == categories["Books"].id
    assert "createdAt" in data and "updatedAt" in data
    assert "created_at" not in data
    assert "createdAt" in data["categories"][0]


@pytest.mark.asyncio
async def test_create_then_get_round_trip(client: AsyncClient, create_product):
    created = await create_product("Desk Lamp", quantity=3, category_names=("Electronics", "Home & Garden"))
    resp = await client.get(f"/api/products/{created['id']}")
    assert resp.status_code == 200
    fetched = resp.json()["data"]
    for key in ("id", "name", "description", "quantity"):
        assert fetched[key] == created[key]
    assert [c["name"] for c in fetched["categories"]] == ["Electronics", "Home & Garden"]


@pytest.mark.asyncio
async def test_duplicate_name_conflicts(client: AsyncClient, create_product, categories):
    await create_product("Atlas")
    resp = await client.post(
        "/api/products",
        json={
            "name": "Atlas ",
            "description": "Another map book entirely",
            "quantity": 1,
            "categories": [categories["Books"].id],
        },
    )
    assert resp.status_code == 400
    assert resp.json() == {"success": False, "message": "A product with this name already exists"}


@pytest.mark.asyncio
async def test_name_uniqueness_is_case_sensitive(create_product):
    await create_product("Atlas")
    other = await create_product("atlas")
    assert other["name"] == "atlas"


@pytest.mark.asyncio
async def test_create_with_unknown_category(client: AsyncClient, categories):
    resp = await client.post(
        "/api/products",
        json={
            "name": "Ghost",
            "description": "Belongs nowhere at all",
            "quantity": 1,
            "categories": [categories["Books"].id, str(ObjectId())],
        },
    )
    assert resp.status_code == 400
    body = resp.json()
    assert body["message"] == "One or more selected categories are invalid"
    assert body["errors"] == [{"field": "categories", "message": "One or more selected categories are invalid"}]


@pytest.mark.asyncio
async def test_create_with_malformed_category_id(client: AsyncClient):
    resp = await client.post(
        "/api/products",
        json={"name": "Ghost", "description": "Belongs nowhere at all", "quantity": 1, "categories": ["Books"]},
    )
    assert resp.status_code == 400
    assert resp.json()["errors"][0]["field"] == "categories"


@pytest.mark.asyncio
async def test_create_short_description_reports_field(client: AsyncClient, categories):
    resp = await client.post(
        "/api/products",
        json={"name": "Atlas", "description": "Short", "quantity": 5, "categories": [categories["Books"].id]},
    )
    assert resp.status_code == 400
    body = resp.json()
    assert body["success"] is False
    assert body["message"] == "Validation failed"
    assert body["errors"] == [
        {"field": "description", "message": "Description must be between 10 and 1000 characters"}
    ]


@pytest.mark.asyncio
async def test_create_aggregates_all_field_errors(client: AsyncClient):
    resp = await client.post("/api/products", json={"name": "ab", "quantity": -1, "categories": []})
    assert resp.status_code == 400
    errors = {e["field"]: e["message"] for e in resp.json()["errors"]}
    assert errors == {
        "name": "Product name must be between 3 and 100 characters",
        "description": "Description is required",
        "quantity": "Quantity must be a non-negative number",
        "categories": "At least one category is required",
    }


@pytest.mark.asyncio
async def test_create_rejects_malformed_json(client: AsyncClient):
    resp = await client.post(
        "/api/products", content=b"{not json", headers={"Content-Type": "application/json"}
    )
    assert resp.status_code == 400
    assert resp.json()["success"] is False


@pytest.mark.asyncio
async def test_create_accepts_numeric_string_quantity(client: AsyncClient, categories):
    resp = await client.post(
        "/api/products",
        json={"name": "Kite", "description": "Flies when windy", "quantity": "7", "categories": [categories["Toys"].id]},
    )
    assert resp.status_code == 201, resp.text
    assert resp.json()["data"]["quantity"] == 7


@pytest.mark.asyncio
async def test_get_missing_product(client: AsyncClient):
    for pid in (str(ObjectId()), "nope"):
        resp = await client.get(f"/api/products/{pid}")
        assert resp.status_code == 404
        assert resp.json() == {"success": False, "message": "Product not found"}


@pytest.mark.asyncio
async def test_search_is_case_insensitive_substring(client: AsyncClient, create_product):
    await create_product("Atlas", description="A large reference map book", quantity=5)
    await create_product("Novel")
    resp = await client.get("/api/products", params={"search": "atlas"})
    assert resp.status_code == 200
    data = resp.json()["data"]
    assert [p["name"] for p in data["products"]] == ["Atlas"]
    assert data["pagination"]["totalItems"] == 1


@pytest.mark.asyncio
async def test_search_text_is_not_a_regex(client: AsyncClient, create_product):
    await create_product("Cable (USB-C)", category_names=("Electronics",))
    await create_product("Cable USB")
    resp = await client.get("/api/products", params={"search": "(usb"})
    assert [p["name"] for p in resp.json()["data"]["products"]] == ["Cable (USB-C)"]


@pytest.mark.asyncio
async def test_category_filter_matches_any_listed_category(client: AsyncClient, create_product, categories):
    await create_product("Football", category_names=("Sports",))
    await create_product("Puzzle", category_names=("Toys",))
    await create_product("Cookbook", category_names=("Books", "Home & Garden"))
    ids = ",".join([categories["Sports"].id, categories["Home & Garden"].id])
    resp = await client.get("/api/products", params={"categories": ids})
    names = sorted(p["name"] for p in resp.json()["data"]["products"])
    assert names == ["Cookbook", "Football"]


@pytest.mark.asyncio
async def test_search_and_filter_compose(client: AsyncClient, create_product, categories):
    await create_product("Ball Game", category_names=("Toys",))
    await create_product("Ball Pump", category_names=("Sports",))
    await create_product("Board Game", category_names=("Toys",))
    resp = await client.get(
        "/api/products", params={"search": "ball", "categories": categories["Toys"].id}
    )
    assert [p["name"] for p in resp.json()["data"]["products"]] == ["Ball Game"]


@pytest.mark.asyncio
async def test_filter_with_only_malformed_ids_matches_nothing(client: AsyncClient, create_product):
    await create_product("Atlas")
    resp = await client.get("/api/products", params={"categories": "junk,more-junk"})
    assert resp.json()["data"]["products"] == []


@pytest.mark.asyncio
async def test_list_is_newest_first(client: AsyncClient, create_product):
    for name in ("First", "Second", "Third"):
        await create_product(name)
    resp = await client.get("/api/products")
    assert [p["name"] for p in resp.json()["data"]["products"]] == ["Third", "Second", "First"]


@pytest.mark.asyncio
async def test_pagination_remainder_on_last_page(client: AsyncClient, create_product):
    for i in range(23):
        await create_product(f"Item {i:02d}")

    resp = await client.get("/api/products", params={"page": 3, "limit": 10})
    data = resp.json()["data"]
    assert len(data["products"]) == 3
    assert data["pagination"] == {
        "currentPage": 3,
        "totalPages": 3,
        "totalItems": 23,
        "itemsPerPage": 10,
        "hasNextPage": False,
        "hasPreviousPage": True,
    }

    resp = await client.get("/api/products", params={"page": 2, "limit": 10})
    pagination = resp.json()["data"]["pagination"]
    assert pagination["hasNextPage"] is True
    assert pagination["hasPreviousPage"] is True


@pytest.mark.asyncio
async def test_pagination_exact_multiple(client: AsyncClient, create_product):
    for i in range(6):
        await create_product(f"Item {i}")
    resp = await client.get("/api/products", params={"page": 2, "limit": 3})
    data = resp.json()["data"]
    assert len(data["products"]) == 3
    assert data["pagination"]["totalPages"] == 2
    assert data["pagination"]["hasNextPage"] is False


@pytest.mark.asyncio
async def test_invalid_paging_falls_back_to_defaults(client: AsyncClient, create_product):
    await create_product("Atlas")
    resp = await client.get("/api/products", params={"page": "abc", "limit": "-4"})
    assert resp.status_code == 200
    pagination = resp.json()["data"]["pagination"]
    assert pagination["currentPage"] == 1
    assert pagination["itemsPerPage"] == 10


@pytest.mark.asyncio
async def test_empty_listing(client: AsyncClient):
    resp = await client.get("/api/products")
    data = resp.json()["data"]
    assert data["products"] == []
    assert data["pagination"]["totalPages"] == 0
    assert data["pagination"]["hasNextPage"] is False
    assert data["pagination"]["hasPreviousPage"] is False


@pytest.mark.asyncio
async def test_update_quantity_only_keeps_other_fields(client: AsyncClient, create_product):
    created = await create_product("Atlas", quantity=5, category_names=("Books", "Toys"))
    resp = await client.put(f"/api/products/{created['id']}", json={"quantity": 0})
    assert resp.status_code == 200, resp.text
    body = resp.json()
    assert body["message"] == "Product updated successfully"
    updated = body["data"]
    assert updated["quantity"] == 0
    assert updated["name"] == created["name"]
    assert updated["description"] == created["description"]
    assert [c["id"] for c in updated["categories"]] == [c["id"] for c in created["categories"]]


@pytest.mark.asyncio
async def test_update_name_to_existing_conflicts(client: AsyncClient, create_product):
    await create_product("Atlas")
    other = await create_product("Globe")
    resp = await client.put(f"/api/products/{other['id']}", json={"name": "Atlas"})
    assert resp.status_code == 400
    assert resp.json()["message"] == "A product with this name already exists"


@pytest.mark.asyncio
async def test_update_keeping_same_name_is_allowed(client: AsyncClient, create_product):
    created = await create_product("Atlas")
    resp = await client.put(
        f"/api/products/{created['id']}",
        json={"name": "Atlas", "description": "Now with extra maps inside"},
    )
    assert resp.status_code == 200
    assert resp.json()["data"]["description"] == "Now with extra maps inside"


@pytest.mark.asyncio
async def test_update_validates_supplied_fields(client: AsyncClient, create_product):
    created = await create_product("Atlas")
    resp = await client.put(f"/api/products/{created['id']}", json={"name": "x", "categories": []})
    assert resp.status_code == 400
    fields = {e["field"] for e in resp.json()["errors"]}
    assert fields == {"name", "categories"}


@pytest.mark.asyncio
async def test_update_with_unknown_category(client: AsyncClient, create_product):
    created = await create_product("Atlas")
    resp = await client.put(f"/api/products/{created['id']}", json={"categories": [str(ObjectId())]})
    assert resp.status_code == 400
    assert resp.json()["errors"][0]["field"] == "categories"


@pytest.mark.asyncio
async def test_update_replaces_categories(client: AsyncClient, create_product, categories):
    created = await create_product("Atlas", category_names=("Books",))
    resp = await client.put(
        f"/api/products/{created['id']}",
        json={"categories": [categories["Toys"].id, categories["Books"].id]},
    )
    assert [c["name"] for c in resp.json()["data"]["categories"]] == ["Toys", "Books"]


@pytest.mark.asyncio
async def test_update_missing_product(client: AsyncClient):
    resp = await client.put(f"/api/products/{ObjectId()}", json={"quantity": 2})
    assert resp.status_code == 404


@pytest.mark.asyncio
async def test_delete_then_get_is_not_found(client: AsyncClient, create_product):
    created = await create_product("Atlas")
    resp = await client.delete(f"/api/products/{created['id']}")
    assert resp.status_code == 200
    body = resp.json()
    assert body["message"] == "Product deleted successfully"
    assert body["data"]["id"] == created["id"]
    assert body["data"]["name"] == "Atlas"

    resp = await client.get(f"/api/products/{created['id']}")
    assert resp.status_code == 404


@pytest.mark.asyncio
async def test_delete_missing_product(client: AsyncClient):
    resp = await client.delete(f"/api/products/{ObjectId()}")
    assert resp.status_code == 404
    assert resp.json()["message"] == "Product not found"


@pytest.mark.asyncio
async def test_page_far_beyond_the_end_is_empty(client: AsyncClient, create_product):
    await create_product("Atlas")
    resp = await client.get("/api/products", params={"page": "99999999999999999999"})
    assert resp.status_code == 200, resp.text
    data = resp.json()["data"]
    assert data["products"] == []
    assert data["pagination"]["totalItems"] == 1
    assert data["pagination"]["totalPages"] == 1
    assert data["pagination"]["hasNextPage"] is False
    assert data["pagination"]["hasPreviousPage"] is True


@pytest.mark.asyncio
async def test_quantity_beyond_storable_range_is_a_field_error(client: AsyncClient, categories):
    resp = await client.post(
        "/api/products",
        json={
            "name": "Atlas",
            "description": "A large reference map book",
            "quantity": 10**20,
            "categories": [categories["Books"].id],
        },
    )
    assert resp.status_code == 400
    assert resp.json()["errors"] == [{"field": "quantity", "message": "Quantity is too large"}]


@pytest.mark.asyncio
async def test_unique_index_rejects_duplicate_names_that_slip_past_the_check(
    client: AsyncClient, create_product, monkeypatch
):
    from inventory_service.dal.product_dal import ProductDAL

    await create_product("Atlas")
    other = await create_product("Globe")

    async def never_found(self, name):
        return None

    # simulate a concurrent writer winning between the lookup and the insert
    monkeypatch.setattr(ProductDAL, "get_by_name", never_found)

    resp = await client.post(
        "/api/products",
        json={
            "name": "Atlas",
            "description": "A second atlas with the same name",
            "quantity": 1,
            "categories": [other["categories"][0]["id"]],
        },
    )
    assert resp.status_code == 400
    assert resp.json()["message"] == "A product with this name already exists"

    resp = await client.put(f"/api/products/{other['id']}", json={"name": "Atlas"})
    assert resp.status_code == 400
    assert resp.json()["message"] == "A product with this name already exists"

    resp = await client.get("/api/products", params={"search": "atlas"})
    assert resp.json()["data"]["pagination"]["totalItems"] == 1
