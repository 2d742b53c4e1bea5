"""Entity: catalog Product."""

from __future__ import annotations

from pydantic import BaseModel, Field

from src.storefront.entities._base import Entity


class Product(Entity):
    """A product in the local catalog.

    ``category`` holds the handle of the category the product belongs to.
    """

    handle: str = Field(min_length=1, description="URL-safe unique identifier")
    title: str = Field(min_length=1, description="Title is required")
    description: str = Field(min_length=1, description="Description is required")
    price: float = Field(gt=0, description="Price must be positive")
    compare_at_price: float | None = Field(default=None, gt=0)
    images: list[str] = Field(default_factory=list)
    category: str = Field(min_length=1, description="Category is required")
    skin_concerns: list[str] = Field(default_factory=list)
    ingredients: list[str] = Field(default_factory=list)
    benefits: list[str] = Field(default_factory=list)
    how_to_use: str | None = None
    in_stock: bool = True
    featured: bool = False


class ProductCreate(BaseModel):
    """Fields accepted when creating a catalog product."""

    handle: str | None = Field(default=None, description="Generated from the title when omitted")
    title: str = Field(min_length=1)
    description: str = Field(min_length=1)
    price: float = Field(gt=0)
    compare_at_price: float | None = Field(default=None, gt=0)
    images: list[str] = Field(default_factory=list)
    category: str = Field(min_length=1)
    skin_concerns: list[str] = Field(default_factory=list)
    ingredients: list[str] = Field(default_factory=list)
    benefits: list[str] = Field(default_factory=list)
    how_to_use: str | None = None
    in_stock: bool = True
    featured: bool = False


class ProductUpdate(BaseModel):
    """Partial update; only the fields present in the request are applied."""

    handle: str | None = Field(default=None, min_length=1)
    title: str | None = Field(default=None, min_length=1)
    description: str | None = Field(default=None, min_length=1)
    price: float | None = Field(default=None, gt=0)
    compare_at_price: float | None = Field(default=None, gt=0)
    images: list[str] | None = None
    category: str | None = Field(default=None, min_length=1)
    skin_concerns: list[str] | None = None
    ingredients: list[str] | None = None
    benefits: list[str] | None = None
    how_to_use: str | None = None
    in_stock: bool | None = None
    featured: bool | None = None


class ProductSearch(BaseModel):
    """Filters for catalog searches; unset filters match everything."""

    search: str | None = None
    category: str | None = None
    skin_concerns: list[str] | None = None
    in_stock: bool | None = None
    featured: bool | None = None
