"""Product database table model."""

from sqlmodel import Field

from src.storefront.entities._base import EntityTable, json_list_column


class ProductTable(EntityTable, table=True):
    """Database persistence model for catalog products."""

    __tablename__ = "products"

    handle: str = Field(index=True, unique=True)
    title: str
    description: str
    price: float
    compare_at_price: float | None = None
    images: list[str] = Field(default_factory=list, sa_column=json_list_column())
    category: str = Field(index=True)
    skin_concerns: list[str] = Field(default_factory=list, sa_column=json_list_column())
    ingredients: list[str] = Field(default_factory=list, sa_column=json_list_column())
    benefits: list[str] = Field(default_factory=list, sa_column=json_list_column())
    how_to_use: str | None = None
    in_stock: bool = True
    featured: bool = False
