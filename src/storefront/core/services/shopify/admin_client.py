"""Shopify Admin REST API client used for catalogue and inventory management."""

from typing import Any

import httpx
from loguru import logger

from src.storefront.core.exceptions import IntegrationNotConfiguredError, ShopifyAPIError
from src.storefront.runtime.config.config_data import ShopifyConfig
from src.storefront.runtime.context import get_config


def _clean_params(params: dict[str, Any]) -> dict[str, Any]:
    return {key: value for key, value in params.items() if value is not None}


class ShopifyAdminClient:
    def __init__(self, config: ShopifyConfig | None = None):
        self._config = config or get_config().shopify

    @property
    def config(self) -> ShopifyConfig:
        return self._config

    @property
    def is_configured(self) -> bool:
        return bool(self._config.store_domain and self._config.admin_access_token)

    async def _request(
        self,
        method: str,
        endpoint: str,
        *,
        params: dict[str, Any] | None = None,
        json: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        if not self.is_configured:
            raise IntegrationNotConfiguredError("Shopify Admin API")

        url = f"{self._config.admin_base_url}{endpoint}"
        headers = {
            "Content-Type": "application/json",
            "X-Shopify-Access-Token": self._config.admin_access_token or "",
        }
        try:
            async with httpx.AsyncClient(timeout=self._config.timeout_seconds) as client:
                response = await client.request(
                    method, url, headers=headers, params=params, json=json
                )
                response.raise_for_status()
                # DELETE answers with an empty body
                return response.json() if response.content else {}
        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            logger.bind(status_code=status, endpoint=endpoint).error(
                "Shopify Admin API error: {}", e.response.text
            )
            raise ShopifyAPIError(
                f"Shopify Admin API error: {status} {e.response.reason_phrase} - {e.response.text}",
                status_code=status,
            ) from e
        except httpx.RequestError as e:
            logger.bind(endpoint=endpoint).error("Shopify Admin request failed: {}", e)
            raise ShopifyAPIError(f"Shopify Admin request failed: {e}") from e

    async def test_connection(self) -> dict[str, Any]:
        """Fetch the shop record; raises when the credentials do not work."""
        return await self._request("GET", "/shop.json")

    # Products

    async def get_products(
        self,
        limit: int | None = None,
        since_id: str | None = None,
        status: str | None = None,
        vendor: str | None = None,
        product_type: str | None = None,
    ) -> list[dict[str, Any]]:
        params = _clean_params(
            {
                "limit": limit,
                "since_id": since_id,
                "status": status,
                "vendor": vendor,
                "product_type": product_type,
            }
        )
        data = await self._request("GET", "/products.json", params=params)
        return data.get("products", [])

    async def get_product(self, product_id: str) -> dict[str, Any]:
        data = await self._request("GET", f"/products/{product_id}.json")
        return data["product"]

    async def create_product(self, product: dict[str, Any]) -> dict[str, Any]:
        data = await self._request("POST", "/products.json", json={"product": product})
        return data["product"]

    async def update_product(self, product_id: str, product: dict[str, Any]) -> dict[str, Any]:
        data = await self._request(
            "PUT", f"/products/{product_id}.json", json={"product": product}
        )
        return data["product"]

    async def delete_product(self, product_id: str) -> None:
        await self._request("DELETE", f"/products/{product_id}.json")

    # Inventory and locations

    async def get_locations(self) -> list[dict[str, Any]]:
        data = await self._request("GET", "/locations.json")
        return data.get("locations", [])

    async def get_inventory_levels(
        self, inventory_item_id: str, location_id: str
    ) -> list[dict[str, Any]]:
        data = await self._request(
            "GET",
            "/inventory_levels.json",
            params={"inventory_item_ids": inventory_item_id, "location_ids": location_id},
        )
        return data.get("inventory_levels", [])

    async def set_inventory_level(
        self, inventory_item_id: str, location_id: str, available: int
    ) -> dict[str, Any]:
        data = await self._request(
            "POST",
            "/inventory_levels/set.json",
            json={
                "location_id": location_id,
                "inventory_item_id": inventory_item_id,
                "available": available,
            },
        )
        return data.get("inventory_level", {})

    # Orders are read-only here

    async def get_orders(
        self,
        limit: int | None = None,
        status: str | None = None,
        since_id: str | None = None,
        created_at_min: str | None = None,
        created_at_max: str | None = None,
    ) -> list[dict[str, Any]]:
        params = _clean_params(
            {
                "limit": limit,
                "status": status,
                "since_id": since_id,
                "created_at_min": created_at_min,
                "created_at_max": created_at_max,
            }
        )
        data = await self._request("GET", "/orders.json", params=params)
        return data.get("orders", [])
