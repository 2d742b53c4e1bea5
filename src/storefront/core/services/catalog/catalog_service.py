"""Local catalog operations backed by the SQL database."""

from __future__ import annotations

from typing import Any

from loguru import logger
from sqlmodel import Session

from src.storefront.core.exceptions import (
    DuplicateHandleError,
    InvalidRequestError,
    ProductNotFoundError,
)
from src.storefront.core.utils.product_utils import generate_handle
from src.storefront.entities import (
    Category,
    CategoryRepository,
    Product,
    ProductRepository,
    SkinConcern,
    SkinConcernRepository,
)
from src.storefront.entities.catalog.category import CategoryCreate
from src.storefront.entities.catalog.product import (
    ProductCreate,
    ProductSearch,
    ProductUpdate,
)
from src.storefront.entities.catalog.skin_concern import SkinConcernCreate

SHORT_DESCRIPTION_LENGTH = 150
RELATED_PRODUCTS_LIMIT = 4
RECENTLY_UPDATED_LIMIT = 5


def short_description(description: str) -> str:
    """First 150 characters, with an ellipsis when the text was cut."""
    if len(description) <= SHORT_DESCRIPTION_LENGTH:
        return description
    return description[:SHORT_DESCRIPTION_LENGTH] + "..."


def category_display_name(handle: str) -> str:
    """Best-effort name for a category handle with no category record.

    ``"eye-care"`` -> ``"Eye care"``.
    """
    if not handle:
        return handle
    return handle[0].upper() + handle[1:].replace("-", " ", 1)


class CatalogService:
    """Products, categories and skin concerns stored in the catalog database.

    One instance is created per request around that request's session; the
    session is committed by the caller.
    """

    def __init__(self, session: Session) -> None:
        self._session = session
        self.products = ProductRepository(session)
        self.categories = CategoryRepository(session)
        self.skin_concerns = SkinConcernRepository(session)

    # Products

    def list_products(self, filters: ProductSearch | None = None) -> list[Product]:
        if filters is None or not filters.model_dump(exclude_none=True):
            return self.products.list_all()
        return self.products.search(filters)

    def get_product(self, handle: str) -> Product:
        product = self.products.get_by_handle(handle)
        if product is None:
            raise ProductNotFoundError(handle)
        return product

    def create_product(self, data: ProductCreate) -> Product:
        handle = data.handle or generate_handle(data.title)
        if not handle:
            raise InvalidRequestError("Product handle could not be generated from the title")
        if self.products.handle_exists(handle):
            raise DuplicateHandleError("Product", handle)

        product = Product(**data.model_dump(exclude={"handle"}), handle=handle)
        created = self.products.create(product)
        logger.bind(product_id=created.id, handle=handle).info("catalog.product.created")
        return created

    def update_product(self, handle: str, changes: ProductUpdate) -> Product:
        """Apply only the fields present in ``changes``.

        Fields explicitly sent as null are ignored, except ``compare_at_price``
        and ``how_to_use`` which may be cleared.
        """
        existing = self.get_product(handle)
        updates = self._explicit_changes(changes)

        new_handle = updates.get("handle")
        if new_handle and new_handle != existing.handle:
            if self.products.handle_exists(new_handle, exclude_id=existing.id):
                raise DuplicateHandleError("Product", new_handle)

        # Re-validate the merged record so cross-field rules still hold
        Product.model_validate({**existing.model_dump(), **updates})

        updated = self.products.update(existing.id, updates)
        if updated is None:
            raise ProductNotFoundError(handle)
        logger.bind(product_id=existing.id, fields=sorted(updates)).info(
            "catalog.product.updated"
        )
        return updated

    @staticmethod
    def _explicit_changes(changes: ProductUpdate) -> dict[str, Any]:
        nullable = {"compare_at_price", "how_to_use"}
        return {
            field: value
            for field, value in changes.model_dump(exclude_unset=True).items()
            if value is not None or field in nullable
        }

    def delete_product(self, handle: str) -> None:
        existing = self.get_product(handle)
        self.products.delete(existing.id)
        logger.bind(product_id=existing.id, handle=handle).info("catalog.product.deleted")

    def bulk_update_products(self, ids: list[str], changes: ProductUpdate) -> list[Product]:
        """Update several products by id; unknown ids are skipped."""
        updates = self._explicit_changes(changes)
        updates.pop("handle", None)
        results = []
        for product_id in ids:
            existing = self.products.get(product_id)
            if existing is None:
                continue
            Product.model_validate({**existing.model_dump(), **updates})
            updated = self.products.update(product_id, updates)
            if updated is not None:
                results.append(updated)
        return results

    def related_products(self, product: Product, limit: int = RELATED_PRODUCTS_LIMIT) -> list[Product]:
        same_category = self.products.search(ProductSearch(category=product.category))
        return [p for p in same_category if p.id != product.id][:limit]

    # Categories and skin concerns

    def list_categories(self) -> list[Category]:
        return self.categories.list_all()

    def create_category(self, data: CategoryCreate) -> Category:
        name, handle = self._name_and_handle(data.name, data.handle)
        return self.categories.create(
            Category(name=name, handle=handle, description=data.description)
        )

    def list_skin_concerns(self) -> list[SkinConcern]:
        return self.skin_concerns.list_all()

    def create_skin_concern(self, data: SkinConcernCreate) -> SkinConcern:
        name, handle = self._name_and_handle(data.name, data.handle)
        return self.skin_concerns.create(SkinConcern(name=name, handle=handle))

    @staticmethod
    def _name_and_handle(name: str | None, handle: str | None) -> tuple[str, str]:
        if not name:
            raise InvalidRequestError("Missing required field: name")
        handle = handle or generate_handle(name)
        if not handle:
            raise InvalidRequestError("Handle could not be generated from the name")
        return name, handle

    # Reporting

    def get_analytics(self) -> dict[str, Any]:
        """Stock, featured and per-category counts plus the latest edits."""
        products = self.products.list_all()
        categories = self.categories.list_all()

        total = len(products)
        in_stock = sum(1 for p in products if p.in_stock)

        breakdown = {
            category.id: {
                "name": category.name,
                "handle": category.handle,
                "count": sum(
                    1 for p in products if p.category in (category.handle, category.id)
                ),
            }
            for category in categories
        }

        return {
            "total": total,
            "in_stock": in_stock,
            "out_of_stock": total - in_stock,
            "featured": sum(1 for p in products if p.featured),
            "categories": breakdown,
            "recently_updated": self.products.recently_updated(RECENTLY_UPDATED_LIMIT),
        }

    # Storefront representation

    def to_frontend(
        self, product: Product, categories: dict[str, Category] | None = None
    ) -> dict[str, Any]:
        """Shape a product for the public storefront."""
        category = (categories or {}).get(product.category)
        return {
            "id": product.id,
            "handle": product.handle,
            "title": product.title,
            "description": product.description,
            "short_description": short_description(product.description),
            "price": product.price,
            "compare_at_price": product.compare_at_price,
            "images": product.images,
            "category": {
                "id": category.id if category else product.category,
                "name": category.name if category else category_display_name(product.category),
                "handle": product.category,
            },
            "skin_concerns": product.skin_concerns,
            "ingredients": product.ingredients,
            "benefits": product.benefits,
            "how_to_use": product.how_to_use,
            "in_stock": product.in_stock,
            "featured": product.featured,
            "created_at": product.created_at,
            "updated_at": product.updated_at,
        }

    def categories_by_handle(self) -> dict[str, Category]:
        return {category.handle: category for category in self.categories.list_all()}
