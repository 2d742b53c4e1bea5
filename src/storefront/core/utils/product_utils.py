"""Product formatting and list helpers for the admin dashboard."""

from __future__ import annotations

import math
import re
from collections.abc import Iterable, Sequence
from decimal import Decimal, InvalidOperation
from typing import Any, Literal
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

from src.storefront.core.models.workspace import ManagedProduct

Number = str | int | float | Decimal
ImageSize = Literal["small", "medium", "large"]
ProductStatus = Literal["in-stock", "out-of-stock", "low-stock"]

PLACEHOLDER_IMAGE = "/placeholder-product.jpg"
# Demo stock levels; there is no inventory feed for workspace products
LOW_STOCK_PRODUCT_IDS = frozenset({"niacinamide", "vitamin-c-serum"})
_IMAGE_SIZES: dict[str, int] = {"small": 200, "medium": 400, "large": 800}


def to_decimal(value: Number | None) -> Decimal | None:
    """Parse a price, returning None for blanks and unparseable strings."""
    if value is None or value == "":
        return None
    try:
        result = Decimal(str(value).strip())
    except InvalidOperation:
        return None
    return result if result.is_finite() else None


def format_price(price: Number) -> str:
    """Format a price in pounds with two decimals, e.g. ``£7.99``."""
    amount = to_decimal(price)
    if amount is None:
        return "£NaN"
    return f"£{amount.quantize(Decimal('0.01'))}"


def format_price_range(min_price: Number, max_price: Number) -> str:
    if to_decimal(min_price) == to_decimal(max_price):
        return format_price(min_price)
    return f"{format_price(min_price)} - {format_price(max_price)}"


def calculate_discount_percentage(original_price: Number, sale_price: Number) -> int:
    """Whole-number percentage saved; 0 when there is no saving."""
    original = to_decimal(original_price)
    sale = to_decimal(sale_price)
    if original is None or sale is None or original <= sale:
        return 0
    return _round_half_up((original - sale) / original * 100)


def _round_half_up(value: Decimal | float) -> int:
    return math.floor(float(value) + 0.5)


def get_product_status(product: ManagedProduct) -> ProductStatus:
    if not product.available:
        return "out-of-stock"
    if product.variants and not any(v.available for v in product.variants):
        return "out-of-stock"
    if product.id in LOW_STOCK_PRODUCT_IDS:
        return "low-stock"
    return "in-stock"


def filter_products_by_category(
    products: Iterable[ManagedProduct], category: str
) -> list[ManagedProduct]:
    """Case-insensitive category match; ``all`` keeps every product."""
    if category == "all":
        return list(products)
    wanted = category.lower()
    return [p for p in products if p.category.lower() == wanted]


def filter_products_by_availability(
    products: Iterable[ManagedProduct], available: bool
) -> list[ManagedProduct]:
    return [p for p in products if p.available is available]


def search_products(
    products: Iterable[ManagedProduct], query: str
) -> list[ManagedProduct]:
    """Substring search over title, description, category, tags and handle."""
    if not query.strip():
        return list(products)

    needle = query.lower()

    def matches(product: ManagedProduct) -> bool:
        return (
            needle in product.title.lower()
            or needle in product.description.lower()
            or needle in product.category.lower()
            or any(needle in tag.lower() for tag in product.tags)
            or needle in product.handle.lower()
        )

    return [p for p in products if matches(p)]


_SORT_KEYS = {
    "title-asc": (lambda p: p.title.casefold(), False),
    "title-desc": (lambda p: p.title.casefold(), True),
    "price-asc": (lambda p: p.price, False),
    "price-desc": (lambda p: p.price, True),
    "created-asc": (lambda p: p.created_at, False),
    "created-desc": (lambda p: p.created_at, True),
    "updated-desc": (lambda p: p.updated_at, True),
}


def sort_products(
    products: Iterable[ManagedProduct], sort_by: str
) -> list[ManagedProduct]:
    """Return a sorted copy; unknown sort keys keep the original order."""
    result = list(products)
    if sort_by in _SORT_KEYS:
        key, reverse = _SORT_KEYS[sort_by]
        result.sort(key=key, reverse=reverse)
    return result


def get_product_variant_price(product: ManagedProduct) -> dict[str, Decimal]:
    if not product.variants:
        return {"min": product.price, "max": product.price}
    prices = [variant.price for variant in product.variants]
    return {"min": min(prices), "max": max(prices)}


def is_product_on_sale(product: ManagedProduct) -> bool:
    return product.compare_at_price is not None and product.compare_at_price > product.price


def get_product_image_url(product: ManagedProduct, size: ImageSize = "medium") -> str:
    """Resize Unsplash images via query parameters; other URLs pass through."""
    if not product.image:
        return PLACEHOLDER_IMAGE
    if "unsplash.com" not in product.image:
        return product.image

    parts = urlsplit(product.image)
    params = dict(parse_qsl(parts.query, keep_blank_values=True))
    dimension = str(_IMAGE_SIZES[size])
    params.update({"w": dimension, "h": dimension, "fit": "crop"})
    return urlunsplit(parts._replace(query=urlencode(params)))


def generate_product_handle(title: str) -> str:
    """``"Vitamin C Serum!"`` -> ``"vitamin-c-serum"``."""
    return re.sub(r"[^a-z0-9]+", "-", title.lower()).strip("-")


def generate_handle(name: str) -> str:
    """Slug used for catalog records and CMS documents.

    Unlike ``generate_product_handle`` punctuation is dropped rather than
    turned into a separator: ``"Dr. Jart+ Serum"`` -> ``"dr-jart-serum"``.
    """
    handle = re.sub(r"[^a-z0-9\s-]", "", name.lower())
    handle = re.sub(r"\s+", "-", handle)
    return re.sub(r"-+", "-", handle).strip("-")


def validate_product(data: dict[str, Any]) -> tuple[bool, list[str]]:
    """Check the fields a workspace product needs before it can be saved."""
    errors: list[str] = []

    if not str(data.get("title") or "").strip():
        errors.append("Product title is required")
    if not str(data.get("description") or "").strip():
        errors.append("Product description is required")
    price = to_decimal(data.get("price"))
    if price is None or price <= 0:
        errors.append("Valid product price is required")
    if not str(data.get("category") or "").strip():
        errors.append("Product category is required")
    if not str(data.get("image") or "").strip():
        errors.append("Product image is required")

    return not errors, errors


def is_shopify_product(value: Any) -> bool:
    """Duck-type check for a product payload with string id, title and price."""
    if isinstance(value, dict):
        fields = value
    elif hasattr(value, "__dict__"):
        fields = vars(value)
    else:
        return False
    return all(isinstance(fields.get(key), str) for key in ("id", "title", "price"))


def get_product_analytics(products: Sequence[ManagedProduct]) -> dict[str, Any]:
    total = len(products)
    available = sum(1 for p in products if p.available)
    categories: dict[str, int] = {}
    for product in products:
        categories[product.category] = categories.get(product.category, 0) + 1

    avg_price = sum((p.price for p in products), Decimal(0)) / total if total else Decimal(0)

    return {
        "total": total,
        "available": available,
        "unavailable": total - available,
        "featured": sum(1 for p in products if p.featured),
        "on_sale": sum(1 for p in products if is_product_on_sale(p)),
        "categories": categories,
        "avg_price": float(avg_price),
    }
