"""Category repository for data access operations."""

from sqlmodel import Session, col, select

from src.storefront.entities.catalog.category.entity import Category
from src.storefront.entities.catalog.category.table import CategoryTable


class CategoryRepository:
    """Data-access layer for categories."""

    def __init__(self, session: Session) -> None:
        self._session = session

    def list_all(self) -> list[Category]:
        statement = select(CategoryTable).order_by(col(CategoryTable.created_at))
        return [
            Category.model_validate(row, from_attributes=True)
            for row in self._session.exec(statement)
        ]

    def get_by_handle(self, handle: str) -> Category | None:
        statement = select(CategoryTable).where(CategoryTable.handle == handle)
        row = self._session.exec(statement).first()
        if row is None:
            return None
        return Category.model_validate(row, from_attributes=True)

    def create(self, category: Category) -> Category:
        row = CategoryTable.model_validate(category.model_dump())
        self._session.add(row)
        self._session.flush()
        self._session.refresh(row)
        return Category.model_validate(row, from_attributes=True)
