"""Shopify Storefront GraphQL client and price helpers for storefront products."""

import math
from decimal import Decimal
from typing import Any

import httpx
from loguru import logger

from src.storefront.core.exceptions import IntegrationNotConfiguredError, ShopifyAPIError
from src.storefront.core.models.workspace import ShopifyProductSummary
from src.storefront.runtime.config.config_data import ShopifyConfig
from src.storefront.runtime.context import get_config

_MONEY = "{ amount currencyCode }"

PRODUCT_FIELDS = f"""
  id
  handle
  title
  description
  featuredImage {{ url altText }}
  images(first: 10) {{ edges {{ node {{ url altText }} }} }}
  priceRange {{ minVariantPrice {_MONEY} maxVariantPrice {_MONEY} }}
  compareAtPriceRange {{ minVariantPrice {_MONEY} }}
  variants(first: 10) {{
    edges {{
      node {{
        id
        title
        price {_MONEY}
        compareAtPrice {_MONEY}
        availableForSale
        quantityAvailable
      }}
    }}
  }}
  tags
  productType
  vendor
  availableForSale
  seo {{ title description }}
"""

PRODUCTS_QUERY = f"""
query getProducts($first: Int!) {{
  products(first: $first) {{ edges {{ node {{ {PRODUCT_FIELDS} }} }} }}
}}
"""

PRODUCT_BY_HANDLE_QUERY = f"""
query getProduct($handle: String!) {{
  productByHandle(handle: $handle) {{ {PRODUCT_FIELDS} }}
}}
"""

COLLECTIONS_QUERY = """
query getCollections($first: Int!) {
  collections(first: $first) {
    edges { node { id handle title description image { url altText } } }
  }
}
"""

_CURRENCY_SYMBOLS = {"USD": "$", "GBP": "£", "EUR": "€", "CAD": "CA$", "AUD": "A$"}


class ShopifyStorefrontClient:
    def __init__(self, config: ShopifyConfig | None = None):
        self._config = config or get_config().shopify

    @property
    def is_configured(self) -> bool:
        return bool(self._config.store_domain and self._config.storefront_access_token)

    async def execute(self, query: str, variables: dict[str, Any] | None = None) -> dict[str, Any]:
        """POST a GraphQL document and return its ``data``; GraphQL errors raise."""
        if not self.is_configured:
            raise IntegrationNotConfiguredError("Shopify Storefront API")

        headers = {
            "Content-Type": "application/json",
            "X-Shopify-Storefront-Access-Token": self._config.storefront_access_token or "",
        }
        try:
            async with httpx.AsyncClient(timeout=self._config.timeout_seconds) as client:
                response = await client.post(
                    self._config.storefront_url,
                    headers=headers,
                    json={"query": query, "variables": variables or {}},
                )
                response.raise_for_status()
                payload = response.json()
        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            raise ShopifyAPIError(
                f"Shopify Storefront API error: {status} {e.response.reason_phrase}",
                status_code=status,
            ) from e
        except httpx.RequestError as e:
            raise ShopifyAPIError(f"Shopify Storefront request failed: {e}") from e

        if payload.get("errors"):
            message = payload["errors"][0].get("message", "Unknown error")
            logger.error("Shopify GraphQL error: {}", message)
            raise ShopifyAPIError(f"GraphQL error: {message}", details=payload["errors"])
        return payload.get("data") or {}

    async def get_products(self, first: int = 50) -> list[dict[str, Any]]:
        data = await self.execute(PRODUCTS_QUERY, {"first": first})
        return [edge["node"] for edge in data["products"]["edges"]]

    async def get_product(self, handle: str) -> dict[str, Any] | None:
        data = await self.execute(PRODUCT_BY_HANDLE_QUERY, {"handle": handle})
        return data.get("productByHandle")

    async def get_collections(self, first: int = 20) -> list[dict[str, Any]]:
        data = await self.execute(COLLECTIONS_QUERY, {"first": first})
        return [edge["node"] for edge in data["collections"]["edges"]]


def _variants(product: dict[str, Any]) -> list[dict[str, Any]]:
    return [edge["node"] for edge in (product.get("variants") or {}).get("edges", [])]


def format_shopify_price(price: dict[str, str]) -> str:
    """``{"amount": "12.5", "currencyCode": "USD"}`` -> ``"$12.50"``."""
    amount = Decimal(price["amount"])
    code = price.get("currencyCode", "USD")
    symbol = _CURRENCY_SYMBOLS.get(code)
    if symbol is None:
        return f"{amount:,.2f} {code}"
    return f"{symbol}{amount:,.2f}"


def is_product_on_sale(product: dict[str, Any]) -> bool:
    return any(
        variant.get("compareAtPrice")
        and Decimal(variant["compareAtPrice"]["amount"]) > Decimal(variant["price"]["amount"])
        for variant in _variants(product)
    )


def get_discount_percentage(product: dict[str, Any]) -> int:
    """Discount of the first variant against its compare-at price."""
    variants = _variants(product)
    if not variants or not variants[0].get("compareAtPrice"):
        return 0
    original = float(variants[0]["compareAtPrice"]["amount"])
    sale = float(variants[0]["price"]["amount"])
    if original <= 0:
        return 0
    return math.floor((1 - sale / original) * 100 + 0.5)


def to_workspace_summary(product: dict[str, Any]) -> ShopifyProductSummary:
    """Reduce a Storefront product to what the management workspace lists."""
    min_price = ((product.get("priceRange") or {}).get("minVariantPrice") or {}).get("amount")
    return ShopifyProductSummary(
        id=product["id"],
        title=product["title"],
        handle=product["handle"],
        product_type=product.get("productType") or None,
        price=Decimal(min_price) if min_price is not None else None,
        image=(product.get("featuredImage") or {}).get("url"),
        in_stock=bool(product.get("availableForSale")),
    )
