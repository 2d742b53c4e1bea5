"""SkinConcern database table model."""

from sqlmodel import Field

from src.storefront.entities._base import EntityTable


class SkinConcernTable(EntityTable, table=True):
    __tablename__ = "skin_concerns"

    name: str
    handle: str = Field(index=True)
