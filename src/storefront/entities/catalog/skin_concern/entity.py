"""Entity: SkinConcern."""

from pydantic import BaseModel, Field

from src.storefront.entities._base import Entity


class SkinConcern(Entity):
    """A skin concern products can target, e.g. Hydration or Dark Spots."""

    name: str = Field(min_length=1)
    handle: str = Field(min_length=1)


class SkinConcernCreate(BaseModel):
    name: str | None = None
    handle: str | None = None
