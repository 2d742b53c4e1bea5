"""Models for the product-management workspace.

The workspace is the admin's scratch copy of the catalogue: the sample
products shipped with the dashboard plus whatever Shopify products have been
pulled in for side-by-side management.
"""

from __future__ import annotations

from datetime import UTC, datetime
from decimal import Decimal
from typing import Literal

from pydantic import BaseModel, Field


def _now() -> datetime:
    return datetime.now(UTC)


class ProductVariant(BaseModel):
    id: str
    title: str
    price: Decimal
    compare_at_price: Decimal | None = None
    available: bool = True
    sku: str | None = None
    weight: float | None = None
    weight_unit: str | None = None


class ManagedProduct(BaseModel):
    """A locally managed product as edited in the dashboard."""

    id: str
    title: str
    description: str = ""
    price: Decimal
    compare_at_price: Decimal | None = None
    image: str = ""
    images: list[str] = Field(default_factory=list)
    category: str = ""
    handle: str
    tags: list[str] = Field(default_factory=list)
    variants: list[ProductVariant] = Field(default_factory=list)
    available: bool = Field(default=True, description="Whether the product is in stock")
    featured: bool = False
    concerns: list[str] = Field(default_factory=list)
    created_at: datetime = Field(default_factory=_now)
    updated_at: datetime = Field(default_factory=_now)


class ManagedProductInput(BaseModel):
    """Payload for creating a workspace product; the id is always generated."""

    title: str = Field(min_length=1)
    description: str = ""
    price: Decimal = Field(gt=0)
    compare_at_price: Decimal | None = Field(default=None, gt=0)
    image: str = ""
    images: list[str] = Field(default_factory=list)
    category: str = ""
    handle: str | None = None
    tags: list[str] = Field(default_factory=list)
    variants: list[ProductVariant] = Field(default_factory=list)
    available: bool = True
    featured: bool = False
    concerns: list[str] = Field(default_factory=list)


class ManagedProductUpdate(BaseModel):
    """Partial update; only explicitly provided fields are applied."""

    title: str | None = Field(default=None, min_length=1)
    description: str | None = None
    price: Decimal | None = Field(default=None, gt=0)
    compare_at_price: Decimal | None = None
    image: str | None = None
    images: list[str] | None = None
    category: str | None = None
    handle: str | None = None
    tags: list[str] | None = None
    variants: list[ProductVariant] | None = None
    available: bool | None = None
    featured: bool | None = None
    concerns: list[str] | None = None


class ShopifyProductSummary(BaseModel):
    """A Shopify product as shown next to local products in the workspace."""

    id: str
    title: str
    handle: str
    product_type: str | None = None
    price: Decimal | None = None
    image: str | None = None
    in_stock: bool = True


ProductSource = Literal["all", "local", "shopify"]


class ProductFilters(BaseModel):
    search: str = ""
    category: str = ""
    in_stock: bool | None = None
    featured: bool | None = None
    source: ProductSource = "all"


class ProductFiltersUpdate(BaseModel):
    """Partial filter change; unset fields keep their current value."""

    search: str | None = None
    category: str | None = None
    in_stock: bool | None = None
    featured: bool | None = None
    source: ProductSource | None = None


class ProductStats(BaseModel):
    total: int
    in_stock: int
    out_of_stock: int
    featured: int
    by_category: dict[str, int]
    by_concern: dict[str, int]
