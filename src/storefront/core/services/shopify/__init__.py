"""Shopify Admin and Storefront integrations."""

from .admin_client import ShopifyAdminClient
from .connectivity import ConnectionReport, OperationsReport, ShopifyConnectionTester
from .storefront_client import (
    ShopifyStorefrontClient,
    format_shopify_price,
    get_discount_percentage,
    is_product_on_sale,
    to_workspace_summary,
)

__all__ = [
    "ConnectionReport",
    "OperationsReport",
    "ShopifyAdminClient",
    "ShopifyConnectionTester",
    "ShopifyStorefrontClient",
    "format_shopify_price",
    "get_discount_percentage",
    "is_product_on_sale",
    "to_workspace_summary",
]
