"""Category database table model."""

from sqlmodel import Field

from src.storefront.entities._base import EntityTable


class CategoryTable(EntityTable, table=True):
    __tablename__ = "categories"

    name: str
    handle: str = Field(index=True)
    description: str = ""
