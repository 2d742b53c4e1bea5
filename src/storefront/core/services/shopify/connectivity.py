"""Shopify connectivity checks shown on the dashboard's integration page."""

from datetime import UTC, datetime
from typing import Any, Literal

from loguru import logger
from pydantic import BaseModel, Field

from src.storefront.core.exceptions import ExternalServiceError
from src.storefront.core.services.shopify.admin_client import ShopifyAdminClient
from src.storefront.core.services.shopify.storefront_client import ShopifyStorefrontClient

OverallStatus = Literal["success", "partial", "failed"]

STATUS_CODES: dict[str, int] = {"success": 200, "partial": 206, "failed": 500}
# Operations test passes when at least this many of the three calls work
MIN_SUCCESSFUL_OPERATIONS = 2


def _now() -> str:
    return datetime.now(UTC).isoformat()


class CheckResult(BaseModel):
    status: Literal["success", "failed"]
    message: str
    error: str | None = None
    details: dict[str, Any] = Field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return self.status == "success"


class ConnectionReport(BaseModel):
    success: bool
    status: OverallStatus
    message: str
    admin_api: CheckResult
    storefront_api: CheckResult
    config: dict[str, Any]
    timestamp: str = Field(default_factory=_now)

    @property
    def http_status(self) -> int:
        return STATUS_CODES[self.status]


class OperationsReport(BaseModel):
    success: bool
    message: str
    operations: dict[str, CheckResult]
    timestamp: str = Field(default_factory=_now)

    @property
    def http_status(self) -> int:
        return 200 if self.success else 500


def _failed(message: str, error: Exception) -> CheckResult:
    text = error.message if isinstance(error, ExternalServiceError) else str(error)
    return CheckResult(status="failed", message=message, error=text)


class ShopifyConnectionTester:
    def __init__(
        self,
        admin: ShopifyAdminClient | None = None,
        storefront: ShopifyStorefrontClient | None = None,
    ):
        self._admin = admin or ShopifyAdminClient()
        self._storefront = storefront or ShopifyStorefrontClient(self._admin.config)

    async def _check_admin(self) -> CheckResult:
        try:
            shop = (await self._admin.test_connection()).get("shop", {})
        except ExternalServiceError as e:
            logger.warning("Admin API test failed: {}", e.message)
            return _failed("Admin API connection failed", e)
        return CheckResult(
            status="success",
            message="Admin API connection successful",
            details={
                "shop": {
                    "name": shop.get("name"),
                    "domain": shop.get("domain"),
                    "currency": shop.get("currency"),
                    "timezone": shop.get("timezone"),
                }
            },
        )

    async def _check_storefront(self) -> CheckResult:
        try:
            products = await self._storefront.get_products(first=5)
        except ExternalServiceError as e:
            logger.warning("Storefront API test failed: {}", e.message)
            return _failed("Storefront API connection failed", e)
        return CheckResult(
            status="success",
            message=f"Storefront API connection successful - {len(products)} products found",
            details={
                "product_count": len(products),
                "sample_products": [
                    {
                        "id": p.get("id"),
                        "title": p.get("title"),
                        "handle": p.get("handle"),
                        "available": p.get("availableForSale"),
                    }
                    for p in products[:3]
                ],
            },
        )

    def _config_summary(self) -> dict[str, Any]:
        config = self._admin.config
        return {
            "shop_domain": config.store_domain or None,
            "has_admin_token": bool(config.admin_access_token),
            "has_storefront_token": bool(config.storefront_access_token),
            "api_version": config.api_version,
        }

    async def test_connection(self) -> ConnectionReport:
        """Check both APIs; partial when only one of them answers."""
        admin = await self._check_admin()
        storefront = await self._check_storefront()

        if admin.ok and storefront.ok:
            overall: OverallStatus = "success"
        elif admin.ok or storefront.ok:
            overall = "partial"
        else:
            overall = "failed"

        logger.bind(status=overall).info("Shopify connection test finished")
        return ConnectionReport(
            success=overall != "failed",
            status=overall,
            message=f"Shopify integration test {overall}",
            admin_api=admin,
            storefront_api=storefront,
            config=self._config_summary(),
        )

    async def test_operations(self) -> OperationsReport:
        """Exercise products, orders and locations through the Admin API."""
        operations: dict[str, CheckResult] = {}

        try:
            products = await self._admin.get_products(limit=10)
            operations["get_products"] = CheckResult(
                status="success",
                message=f"Successfully retrieved {len(products)} products",
                details={"count": len(products)},
            )
        except ExternalServiceError as e:
            operations["get_products"] = _failed("Failed to retrieve products", e)

        try:
            orders = await self._admin.get_orders(limit=5)
            operations["get_orders"] = CheckResult(
                status="success",
                message=f"Successfully retrieved {len(orders)} orders",
                details={"count": len(orders)},
            )
        except ExternalServiceError as e:
            operations["get_orders"] = _failed("Failed to retrieve orders", e)

        try:
            locations = await self._admin.get_locations()
            primary = next((loc.get("name") for loc in locations if loc.get("primary")), None)
            operations["get_locations"] = CheckResult(
                status="success",
                message=f"Successfully retrieved {len(locations)} locations",
                details={"count": len(locations), "primary": primary or "None"},
            )
        except ExternalServiceError as e:
            operations["get_locations"] = _failed("Failed to retrieve locations", e)

        succeeded = sum(1 for result in operations.values() if result.ok)
        return OperationsReport(
            success=succeeded >= MIN_SUCCESSFUL_OPERATIONS,
            message=f"Shopify operations test - {succeeded}/{len(operations)} operations successful",
            operations=operations,
        )
