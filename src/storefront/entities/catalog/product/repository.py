"""Product repository for data access operations."""

from sqlmodel import Session, col, select

from src.storefront.entities._base import utcnow
from src.storefront.entities.catalog.product.entity import Product, ProductSearch
from src.storefront.entities.catalog.product.table import ProductTable


class ProductRepository:
    """Data-access layer for catalog products."""

    def __init__(self, session: Session) -> None:
        self._session = session

    @staticmethod
    def _to_entity(row: ProductTable) -> Product:
        return Product.model_validate(row, from_attributes=True)

    def get(self, product_id: str) -> Product | None:
        row = self._session.get(ProductTable, product_id)
        return self._to_entity(row) if row else None

    def get_by_handle(self, handle: str) -> Product | None:
        statement = select(ProductTable).where(ProductTable.handle == handle)
        row = self._session.exec(statement).first()
        return self._to_entity(row) if row else None

    def handle_exists(self, handle: str, exclude_id: str | None = None) -> bool:
        statement = select(ProductTable.id).where(ProductTable.handle == handle)
        if exclude_id is not None:
            statement = statement.where(ProductTable.id != exclude_id)
        return self._session.exec(statement).first() is not None

    def list_all(self) -> list[Product]:
        statement = select(ProductTable).order_by(col(ProductTable.created_at))
        return [self._to_entity(row) for row in self._session.exec(statement)]

    def search(self, filters: ProductSearch) -> list[Product]:
        """Filter products; text and concern matching happen in Python.

        Concern lists are stored as JSON, which SQLite cannot index, and the
        catalog is small enough that a scan is fine.
        """
        statement = select(ProductTable).order_by(col(ProductTable.created_at))
        if filters.category:
            statement = statement.where(ProductTable.category == filters.category)
        if filters.in_stock is not None:
            statement = statement.where(ProductTable.in_stock == filters.in_stock)
        if filters.featured is not None:
            statement = statement.where(ProductTable.featured == filters.featured)

        products = [self._to_entity(row) for row in self._session.exec(statement)]

        if filters.search:
            term = filters.search.lower()
            products = [
                p
                for p in products
                if term in p.title.lower() or term in p.description.lower()
            ]
        if filters.skin_concerns:
            wanted = set(filters.skin_concerns)
            products = [p for p in products if wanted.intersection(p.skin_concerns)]
        return products

    def recently_updated(self, limit: int = 5) -> list[Product]:
        statement = (
            select(ProductTable)
            .order_by(col(ProductTable.updated_at).desc())
            .limit(limit)
        )
        return [self._to_entity(row) for row in self._session.exec(statement)]

    def create(self, product: Product) -> Product:
        row = ProductTable.model_validate(product.model_dump())
        self._session.add(row)
        self._session.flush()
        self._session.refresh(row)
        return self._to_entity(row)

    def update(self, product_id: str, changes: dict) -> Product | None:
        row = self._session.get(ProductTable, product_id)
        if row is None:
            return None
        for field, value in changes.items():
            setattr(row, field, value)
        row.updated_at = utcnow()
        self._session.add(row)
        self._session.flush()
        self._session.refresh(row)
        return self._to_entity(row)

    def delete(self, product_id: str) -> bool:
        row = self._session.get(ProductTable, product_id)
        if row is None:
            return False
        self._session.delete(row)
        self._session.flush()
        return True

    def count(self) -> int:
        return len(self._session.exec(select(ProductTable.id)).all())
