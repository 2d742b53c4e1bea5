"""Tests for the product-management workspace endpoints."""

from unittest.mock import AsyncMock, patch

from fastapi.testclient import TestClient

from src.storefront.api.http.app_data import ApplicationDependencies
from src.storefront.core.exceptions import ShopifyAPIError

BASE = "/api/admin/workspace"

STOREFRONT_PRODUCT = {
    "id": "gid://shopify/Product/1",
    "handle": "rose-toner",
    "title": "Rose Toner",
    "productType": "Toners",
    "availableForSale": True,
    "priceRange": {"minVariantPrice": {"amount": "8.0", "currencyCode": "USD"}},
}


class TestWorkspaceAccess:
    def test_requires_auth(self, client: TestClient):
        """Test the workspace is not public."""
        assert client.get(f"{BASE}/products").status_code == 401

    def test_viewer_can_list(self, client: TestClient, viewer_headers):
        """Test viewers can browse the workspace."""
        response = client.get(f"{BASE}/products", headers=viewer_headers)

        assert response.status_code == 200
        assert response.json()["count"] == 6
        assert response.json()["filters"]["source"] == "all"

    def test_viewer_cannot_create(self, client: TestClient, viewer_headers):
        """Test viewers cannot add products."""
        response = client.post(
            f"{BASE}/products", json={"title": "Toner", "price": "5.00"}, headers=viewer_headers
        )

        assert response.status_code == 403
        assert response.json()["error"] == "Missing required permission: products:create"


class TestWorkspaceProducts:
    def test_create(self, client: TestClient, admin_headers):
        """Test a created product gets an id and handle and is listed first."""
        response = client.post(
            f"{BASE}/products",
            json={"title": "Squalane Oil", "price": "7.50", "category": "Oils"},
            headers=admin_headers,
        )

        assert response.status_code == 201
        product = response.json()["data"]
        assert product["id"].startswith("product-")
        assert product["handle"] == "squalane-oil"
        listing = client.get(f"{BASE}/products", headers=admin_headers).json()
        assert listing["count"] == 7
        assert listing["data"][0]["id"] == product["id"]

    def test_create_invalid(self, client: TestClient, admin_headers):
        """Test a product without a price is rejected."""
        response = client.post(f"{BASE}/products", json={"title": "X"}, headers=admin_headers)

        assert response.status_code == 400
        assert response.json()["error"] == "Validation failed"

    def test_get_and_update(self, client: TestClient, admin_headers):
        """Test a partial update changes only the given fields."""
        response = client.patch(
            f"{BASE}/products/niacinamide", json={"price": "6.49"}, headers=admin_headers
        )

        assert response.status_code == 200
        assert float(response.json()["data"]["price"]) == 6.49
        fetched = client.get(f"{BASE}/products/niacinamide", headers=admin_headers).json()
        assert fetched["data"]["title"] == "Niacinamide"

    def test_update_missing(self, client: TestClient, admin_headers):
        """Test updating an unknown product is a 404."""
        response = client.patch(
            f"{BASE}/products/missing", json={"price": "6.49"}, headers=admin_headers
        )
        assert response.status_code == 404

    def test_delete(self, client: TestClient, admin_headers):
        """Test deleting removes the product; a second delete is a 404."""
        assert client.delete(f"{BASE}/products/niacinamide", headers=admin_headers).status_code == 200
        assert client.delete(f"{BASE}/products/niacinamide", headers=admin_headers).status_code == 404

    def test_stock(self, client: TestClient, admin_headers):
        """Test stock is set through the availability flag."""
        response = client.put(
            f"{BASE}/products/niacinamide/stock", json={"in_stock": True}, headers=admin_headers
        )

        assert response.status_code == 200
        assert response.json()["data"]["available"] is True

    def test_bulk_stock(self, client: TestClient, admin_headers):
        """Test bulk stock changes skip unknown ids."""
        response = client.post(
            f"{BASE}/products/bulk-stock",
            json={"ids": ["niacinamide", "retinol-eye-cream", "missing"], "in_stock": False},
            headers=admin_headers,
        )

        assert response.status_code == 200
        assert response.json()["count"] == 2
        assert all(p["available"] is False for p in response.json()["data"])

    def test_bulk_update(self, client: TestClient, admin_headers):
        """Test bulk edits apply the same change to every id."""
        response = client.post(
            f"{BASE}/products/bulk-update",
            json={"ids": ["niacinamide", "vitamin-c-serum"], "changes": {"featured": True}},
            headers=admin_headers,
        )

        assert response.json()["count"] == 2
        assert all(p["featured"] for p in response.json()["data"])

    def test_bulk_update_requires_ids(self, client: TestClient, admin_headers):
        """Test an empty id list is rejected."""
        response = client.post(
            f"{BASE}/products/bulk-update",
            json={"ids": [], "changes": {"featured": True}},
            headers=admin_headers,
        )
        assert response.status_code == 400


class TestWorkspaceFilters:
    def test_set_and_reset(self, client: TestClient, admin_headers):
        """Test filters narrow the listing until reset."""
        response = client.patch(f"{BASE}/filters", json={"category": "Serums"}, headers=admin_headers)
        assert response.json()["data"]["category"] == "Serums"

        listing = client.get(f"{BASE}/products", headers=admin_headers).json()
        assert listing["count"] == 3

        reset = client.delete(f"{BASE}/filters", headers=admin_headers)
        assert reset.json()["data"]["category"] == ""
        assert client.get(f"{BASE}/filters", headers=admin_headers).json()["data"]["category"] == ""

    def test_in_stock_filter(self, client: TestClient, admin_headers):
        """Test the stock filter uses availability."""
        client.patch(f"{BASE}/filters", json={"in_stock": False}, headers=admin_headers)

        listing = client.get(f"{BASE}/products", headers=admin_headers).json()
        assert [p["id"] for p in listing["data"]] == ["niacinamide"]


class TestWorkspaceLookups:
    def test_categories_and_concerns(self, client: TestClient, viewer_headers):
        """Test categories and concerns come from the products."""
        categories = client.get(f"{BASE}/categories", headers=viewer_headers).json()["data"]
        assert categories == ["Serums", "Eye Care", "Cleansers"]
        assert client.get(f"{BASE}/concerns", headers=viewer_headers).json()["data"]

    def test_add_category(self, client: TestClient, admin_headers):
        """Test adding a category is acknowledged."""
        response = client.post(f"{BASE}/categories", json={"name": "Oils"}, headers=admin_headers)

        assert response.status_code == 200
        assert response.json()["message"] == "Category 'Oils' noted"

    def test_stats(self, client: TestClient, viewer_headers):
        """Test the workspace summary counts."""
        data = client.get(f"{BASE}/stats", headers=viewer_headers).json()["data"]

        assert data["total"] == 6
        assert data["in_stock"] == 5
        assert data["out_of_stock"] == 1
        assert data["featured"] == 3


class TestShopifySync:
    def test_sync(self, client: TestClient, app_dependencies: ApplicationDependencies, admin_headers):
        """Test Shopify products join the workspace listing."""
        storefront = app_dependencies.shopify_storefront_client
        with patch.object(storefront, "get_products", AsyncMock(return_value=[STOREFRONT_PRODUCT])):
            response = client.post(f"{BASE}/shopify/sync", headers=admin_headers)

        assert response.status_code == 200
        assert response.json()["count"] == 1
        assert response.json()["source"] == "shopify"
        listing = client.get(f"{BASE}/products", headers=admin_headers).json()
        assert listing["count"] == 7

    def test_sync_failure(self, client: TestClient, app_dependencies: ApplicationDependencies, admin_headers):
        """Test an unreachable Shopify is a 502."""
        storefront = app_dependencies.shopify_storefront_client
        error = ShopifyAPIError("Shopify Storefront API error: 401")
        with patch.object(storefront, "get_products", AsyncMock(side_effect=error)):
            response = client.post(f"{BASE}/shopify/sync", headers=admin_headers)

        assert response.status_code == 502
        assert response.json()["error"] == "Failed to fetch Shopify products"
        assert response.json()["details"] == "Shopify Storefront API error: 401"


class TestWorkspaceNullUpdates:
    def test_null_price_rejected(self, client: TestClient, admin_headers):
        """Test an explicit null on a required field is a 400 and changes nothing."""
        response = client.patch(
            f"{BASE}/products/niacinamide", json={"price": None}, headers=admin_headers
        )

        assert response.status_code == 400
        assert response.json()["error"] == "Validation failed"
        assert response.json()["details"][0]["loc"] == ["price"]
        fetched = client.get(f"{BASE}/products/niacinamide", headers=admin_headers).json()
        assert float(fetched["data"]["price"]) == 5.99

    def test_null_compare_at_price_clears_it(self, client: TestClient, admin_headers):
        """Test null is accepted where the field is optional."""
        response = client.patch(
            f"{BASE}/products/vitamin-c-serum",
            json={"compare_at_price": None},
            headers=admin_headers,
        )

        assert response.status_code == 200
        assert response.json()["data"]["compare_at_price"] is None

    def test_bulk_null_title_rejected(self, client: TestClient, admin_headers):
        """Test a bulk edit that would blank a title leaves every product alone."""
        response = client.post(
            f"{BASE}/products/bulk-update",
            json={"ids": ["niacinamide", "retinol-eye-cream"], "changes": {"title": None}},
            headers=admin_headers,
        )

        assert response.status_code == 400
        assert response.json()["error"] == "Validation failed"
        titles = {
            p["id"]: p["title"]
            for p in client.get(f"{BASE}/products", headers=admin_headers).json()["data"]
        }
        assert titles["niacinamide"] == "Niacinamide"
        assert titles["retinol-eye-cream"] == "Retinol Eye Cream"
