"""Category API test cases."""
import pytest
from httpx import AsyncClient
from sqlmodel.ext.asyncio.session import AsyncSession
from apps.catalog.api.deps import get_remove_strategy
from apps.catalog.models import Category, Product
from framework.repository.options import RemoveStrategy
from main import app


class TestCreateCategory:
    """Test POST /api/categories."""

    @pytest.mark.asyncio
    async def test_create_category_success(self, client: AsyncClient, async_session: AsyncSession):
        response = await client.post("/api/categories", json={"name": "Drinks", "image_uri": "drinks.jpeg"})

        assert response.status_code == 201
        data = response.json()
        assert data["id"] >= 1
        assert data["name"] == "Drinks"
        assert data["image_uri"] == "drinks.jpeg"
        assert data["created_at"] is not None
        assert data["updated_at"] is None
        assert "hidden" not in data
        assert response.headers["Location"].endswith(f"/api/categories/{data['id']}")

        stored = await async_session.get(Category, data["id"])
        assert stored is not None

    @pytest.mark.asyncio
    async def test_create_category_missing_name(self, client: AsyncClient):
        response = await client.post("/api/categories", json={"image_uri": "x.jpeg"})

        assert response.status_code == 400
        assert response.headers["content-type"].startswith("application/problem+json")
        data = response.json()
        assert data["status"] == 400
        assert "name" in data["errors"]
        assert data["instance"] == "POST /api/categories"
        assert data["traceId"]
        assert data["requestId"]

    @pytest.mark.asyncio
    async def test_create_category_name_too_long(self, client: AsyncClient):
        response = await client.post("/api/categories", json={"name": "x" * 81})
        assert response.status_code == 400
        assert "name" in response.json()["errors"]


class TestListCategories:
    """Test GET /api/categories."""

    @pytest.mark.asyncio
    async def test_list_categories(self, client: AsyncClient, sample_categories):
        response = await client.get("/api/categories")

        assert response.status_code == 200
        assert [c["name"] for c in response.json()] == ["Drinks", "Snacks", "Desserts"]
        assert response.headers["X-Total-Count"] == "3"

    @pytest.mark.asyncio
    async def test_list_categories_window(self, client: AsyncClient, sample_categories):
        response = await client.get("/api/categories", params={"limit": 1, "offset": 1})

        assert response.status_code == 200
        assert [c["name"] for c in response.json()] == ["Snacks"]
        assert response.headers["X-Total-Count"] == "3"

    @pytest.mark.asyncio
    async def test_list_categories_empty(self, client: AsyncClient):
        response = await client.get("/api/categories")
        assert response.status_code == 204
        assert response.content == b""

    @pytest.mark.asyncio
    async def test_list_categories_offset_beyond_rows(self, client: AsyncClient, sample_categories):
        response = await client.get("/api/categories", params={"offset": 50})
        assert response.status_code == 204

    @pytest.mark.asyncio
    @pytest.mark.parametrize("params,field", [
        ({"limit": 0}, "limit"),
        ({"limit": 101}, "limit"),
        ({"offset": -1}, "offset"),
        ({"offset": 2147483648}, "offset"),
    ])
    async def test_list_categories_invalid_query(self, client: AsyncClient, params, field):
        response = await client.get("/api/categories", params=params)

        assert response.status_code == 400
        assert field in response.json()["errors"]

    @pytest.mark.asyncio
    async def test_list_categories_excludes_hidden(
        self, client: AsyncClient, async_session: AsyncSession, sample_categories
    ):
        sample_categories[0].hidden = True
        async_session.add(sample_categories[0])
        await async_session.commit()

        response = await client.get("/api/categories")

        assert [c["name"] for c in response.json()] == ["Snacks", "Desserts"]
        assert response.headers["X-Total-Count"] == "2"


class TestGetCategory:
    """Test GET /api/categories/{id}."""

    @pytest.mark.asyncio
    async def test_get_category(self, client: AsyncClient, sample_category):
        response = await client.get(f"/api/categories/{sample_category.id}")

        assert response.status_code == 200
        assert response.json()["name"] == "Drinks"

    @pytest.mark.asyncio
    async def test_get_category_not_found(self, client: AsyncClient):
        response = await client.get("/api/categories/999")

        assert response.status_code == 404
        data = response.json()
        assert data["title"] == "Not Found"
        assert data["type"] == "https://datatracker.ietf.org/doc/html/rfc9110#section-15.5.5"
        assert data["instance"] == "GET /api/categories/999"

    @pytest.mark.asyncio
    async def test_get_category_invalid_id(self, client: AsyncClient):
        response = await client.get("/api/categories/abc")
        assert response.status_code == 400


class TestCategoryProducts:
    """Test GET /api/categories/{id}/products."""

    @pytest.mark.asyncio
    async def test_get_category_products(self, client: AsyncClient, sample_category, sample_products):
        response = await client.get(f"/api/categories/{sample_category.id}/products")

        assert response.status_code == 200
        data = response.json()
        assert [p["id"] for p in data] == [p.id for p in sample_products]
        assert data[0]["price"] == 7.5

    @pytest.mark.asyncio
    async def test_get_category_products_window(self, client: AsyncClient, sample_category, sample_products):
        response = await client.get(
            f"/api/categories/{sample_category.id}/products", params={"limit": 1, "offset": 1}
        )
        assert [p["name"] for p in response.json()] == ["Orange juice 1 L"]

    @pytest.mark.asyncio
    async def test_get_category_products_after_hide(self, client: AsyncClient, sample_category, sample_products):
        app.dependency_overrides[get_remove_strategy] = lambda: RemoveStrategy.HIDE
        response = await client.delete(f"/api/products/{sample_products[0].id}")
        assert response.status_code == 200

        response = await client.get(f"/api/categories/{sample_category.id}/products")
        assert [p["name"] for p in response.json()] == ["Orange juice 1 L"]

    @pytest.mark.asyncio
    async def test_get_category_products_empty(self, client: AsyncClient, sample_category):
        response = await client.get(f"/api/categories/{sample_category.id}/products")
        assert response.status_code == 204


class TestUpdateCategory:
    """Test PUT and PATCH /api/categories/{id}."""

    @pytest.mark.asyncio
    async def test_put_category(self, client: AsyncClient, sample_category):
        payload = {"id": sample_category.id, "name": "Beverages", "image_uri": "beverages.jpeg"}
        response = await client.put(f"/api/categories/{sample_category.id}", json=payload)

        assert response.status_code == 200
        data = response.json()
        assert data["name"] == "Beverages"
        assert data["image_uri"] == "beverages.jpeg"
        assert data["updated_at"] is not None

    @pytest.mark.asyncio
    async def test_put_category_key_mismatch(self, client: AsyncClient, sample_category):
        payload = {"id": sample_category.id + 1, "name": "Beverages", "image_uri": ""}
        response = await client.put(f"/api/categories/{sample_category.id}", json=payload)

        assert response.status_code == 400
        message = f"The specified key '{sample_category.id}' does not match the entity key '{sample_category.id + 1}'."
        assert response.json()["errors"] == {"id": [message]}

    @pytest.mark.asyncio
    async def test_put_category_not_found(self, client: AsyncClient):
        response = await client.put("/api/categories/999", json={"id": 999, "name": "Nope", "image_uri": ""})
        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_patch_category_keeps_unset_fields(self, client: AsyncClient, sample_category):
        response = await client.patch(f"/api/categories/{sample_category.id}", json={"name": "Beverages"})

        assert response.status_code == 200
        data = response.json()
        assert data["name"] == "Beverages"
        assert data["image_uri"] == "drinks.jpeg"

    @pytest.mark.asyncio
    async def test_patch_hidden_category(
        self, client: AsyncClient, async_session: AsyncSession, sample_category
    ):
        sample_category.hidden = True
        async_session.add(sample_category)
        await async_session.commit()

        response = await client.patch(f"/api/categories/{sample_category.id}", json={"name": "Beverages"})
        assert response.status_code == 404


class TestDeleteCategory:
    """Test DELETE /api/categories/{id}."""

    @pytest.mark.asyncio
    async def test_delete_category(
        self, client: AsyncClient, async_session: AsyncSession, sample_category, sample_products
    ):
        response = await client.delete(f"/api/categories/{sample_category.id}")

        assert response.status_code == 200
        assert response.json()["id"] == sample_category.id

        assert (await client.get(f"/api/categories/{sample_category.id}")).status_code == 404
        assert await async_session.get(Category, sample_category.id) is None
        assert await async_session.get(Product, sample_products[0].id) is None

    @pytest.mark.asyncio
    async def test_delete_category_twice(self, client: AsyncClient, sample_category):
        assert (await client.delete(f"/api/categories/{sample_category.id}")).status_code == 200
        assert (await client.delete(f"/api/categories/{sample_category.id}")).status_code == 404

    @pytest.mark.asyncio
    async def test_hide_category(self, client: AsyncClient, async_session: AsyncSession, sample_category):
        app.dependency_overrides[get_remove_strategy] = lambda: RemoveStrategy.HIDE

        response = await client.delete(f"/api/categories/{sample_category.id}")

        assert response.status_code == 200
        assert (await client.get(f"/api/categories/{sample_category.id}")).status_code == 404

        stored = await async_session.get(Category, sample_category.id)
        assert stored is not None
        assert stored.hidden is True

    @pytest.mark.asyncio
    async def test_hidden_category_can_still_be_deleted(self, client: AsyncClient, async_session, sample_category):
        app.dependency_overrides[get_remove_strategy] = lambda: RemoveStrategy.HIDE
        assert (await client.delete(f"/api/categories/{sample_category.id}")).status_code == 200

        app.dependency_overrides[get_remove_strategy] = lambda: RemoveStrategy.DELETE
        assert (await client.delete(f"/api/categories/{sample_category.id}")).status_code == 200

        assert await async_session.get(Category, sample_category.id) is None
