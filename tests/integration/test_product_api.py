"""End-to-end tests for the product endpoints."""

import pytest
from fastapi.testclient import TestClient


@pytest.fixture(params=["client", "sql_client"])
def api(request: pytest.FixtureRequest) -> TestClient:
    return request.getfixturevalue(request.param)


@pytest.fixture
def category_id(api: TestClient) -> int:
    response = api.post("/api/categories", json={"name": "Electronics", "description": ""})
    return response.json()["data"]["id"]


def _payload(category_id: int | None = None, /, **overrides) -> dict:
    payload = {"name": "Laptop", "price": 999.99, "stock": 5, "category_id": category_id}
    payload.update(overrides)
    return payload


class TestCreateProduct:
    def test_create_returns_201_with_nested_category(self, api: TestClient, category_id: int):
        response = api.post("/api/products", json=_payload(category_id))

        assert response.status_code == 201
        data = response.json()["data"]
        assert data["id"] > 0
        assert data["name"] == "Laptop"
        assert data["price"] == pytest.approx(999.99)
        assert data["stock"] == 5
        assert data["category"] == {"id": category_id, "name": "Electronics"}
        assert "created_at" in data and "updated_at" in data

    @pytest.mark.parametrize(
        "overrides",
        [
            {"name": ""},
            {"price": 0},
            {"price": -5},
            {"price": 0.001},
            {"price": 10000000000},
            {"stock": -1},
            {"stock": 2**31},
            {"category_id": 0},
            {"category_id": 2**63},
        ],
    )
    def test_create_invalid_data_returns_400(self, api: TestClient, category_id: int, overrides):
        response = api.post("/api/products", json=_payload(category_id, **overrides))

        assert response.status_code == 400
        assert response.json() == {"data": None, "errors": "Invalid product data"}

    def test_create_unknown_category_returns_400(self, api: TestClient):
        response = api.post("/api/products", json=_payload(category_id=999))

        assert response.status_code == 400
        assert response.json()["errors"] == "Category does not exist"

    def test_create_wrong_type_returns_400(self, api: TestClient, category_id: int):
        response = api.post("/api/products", json=_payload(category_id, stock="many"))

        assert response.status_code == 400
        assert response.json()["errors"] == "Invalid request body"


class TestReadProduct:
    def test_get_existing(self, api: TestClient, category_id: int):
        created = api.post("/api/products", json=_payload(category_id)).json()["data"]

        response = api.get(f"/api/products/{created['id']}")

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["id"] == created["id"]
        assert data["category"]["name"] == "Electronics"

    def test_get_missing_returns_404(self, api: TestClient):
        response = api.get("/api/products/999")

        assert response.status_code == 404
        assert response.json()["errors"] == "Product not found"

    @pytest.mark.parametrize("raw_id", ["abc", "99999999999999999999999"])
    def test_get_invalid_id_returns_400(self, api: TestClient, raw_id: str):
        response = api.get(f"/api/products/{raw_id}")

        assert response.status_code == 400
        assert response.json()["errors"] == "Invalid product ID"

    def test_list_in_id_order(self, api: TestClient, category_id: int):
        for name in ("first", "second"):
            api.post("/api/products", json=_payload(category_id, name=name))

        response = api.get("/api/products")

        assert response.status_code == 200
        assert [p["name"] for p in response.json()["data"]] == ["first", "second"]

    def test_list_reflects_category_rename(self, api: TestClient, category_id: int):
        api.post("/api/products", json=_payload(category_id))
        api.put(f"/api/categories/{category_id}", json={"name": "Gadgets"})

        data = api.get("/api/products").json()["data"]

        assert data[0]["category"]["name"] == "Gadgets"


class TestUpdateProduct:
    def test_update_existing(self, api: TestClient, category_id: int):
        created = api.post("/api/products", json=_payload(category_id)).json()["data"]

        response = api.put(
            f"/api/products/{created['id']}",
            json=_payload(category_id, name="Laptop Pro", price=1299.5, stock=3),
        )

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["name"] == "Laptop Pro"
        assert data["price"] == pytest.approx(1299.5)
        assert data["stock"] == 3

    def test_update_missing_returns_404(self, api: TestClient, category_id: int):
        response = api.put("/api/products/999", json=_payload(category_id))

        assert response.status_code == 404
        assert response.json()["errors"] == "Product not found"

    def test_update_unknown_category_returns_400(self, api: TestClient, category_id: int):
        created = api.post("/api/products", json=_payload(category_id)).json()["data"]

        response = api.put(f"/api/products/{created['id']}", json=_payload(category_id=999))

        assert response.status_code == 400
        assert response.json()["errors"] == "Category does not exist"


class TestDeleteProduct:
    def test_delete_then_get_returns_404(self, api: TestClient, category_id: int):
        created = api.post("/api/products", json=_payload(category_id)).json()["data"]

        response = api.delete(f"/api/products/{created['id']}")
        assert response.status_code == 200
        assert response.json() == {"data": True}

        assert api.get(f"/api/products/{created['id']}").status_code == 404

    def test_delete_missing_returns_404(self, api: TestClient):
        assert api.delete("/api/products/999").status_code == 404

    def test_delete_frees_category_for_deletion(self, api: TestClient, category_id: int):
        created = api.post("/api/products", json=_payload(category_id)).json()["data"]

        api.delete(f"/api/products/{created['id']}")

        assert api.delete(f"/api/categories/{category_id}").status_code == 200
