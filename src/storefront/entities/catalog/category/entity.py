"""Entity: Category."""

from pydantic import BaseModel, Field

from src.storefront.entities._base import Entity


class Category(Entity):
    """A product category such as Serums or Eye Care."""

    name: str = Field(min_length=1)
    handle: str = Field(min_length=1)
    description: str = ""


class CategoryCreate(BaseModel):
    name: str | None = None
    handle: str | None = None
    description: str = ""
