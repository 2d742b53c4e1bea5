"""In-memory product-management workspace used by the admin dashboard."""

import random
import string
import time
from collections import Counter

from loguru import logger
from pydantic import ValidationError

from src.storefront.core.exceptions import InvalidRequestError, ProductNotFoundError
from src.storefront.core.models.workspace import (
    ManagedProduct,
    ManagedProductInput,
    ManagedProductUpdate,
    ProductFilters,
    ProductFiltersUpdate,
    ProductStats,
    ShopifyProductSummary,
)
from src.storefront.core.services.catalog.seed_data import sample_workspace_products
from src.storefront.core.utils.product_utils import generate_product_handle
from src.storefront.entities._base import utcnow

_ID_ALPHABET = string.ascii_lowercase + string.digits


def generate_product_id() -> str:
    """``product-<epoch ms>-<9 random base36 chars>``."""
    suffix = "".join(random.choices(_ID_ALPHABET, k=9))
    return f"product-{int(time.time() * 1000)}-{suffix}"


class ProductManagementService:
    """Local products plus pulled-in Shopify products, with the admin's filters.

    State lives for the lifetime of the process. Newly created products are
    placed first so they show at the top of the dashboard list.
    """

    def __init__(self, products: list[ManagedProduct] | None = None):
        self._products: list[ManagedProduct] = (
            list(products) if products is not None else sample_workspace_products()
        )
        self._shopify_products: list[ShopifyProductSummary] = []
        self._filters = ProductFilters()

    @property
    def local_products(self) -> list[ManagedProduct]:
        return list(self._products)

    @property
    def shopify_products(self) -> list[ShopifyProductSummary]:
        return list(self._shopify_products)

    def set_shopify_products(self, products: list[ShopifyProductSummary]) -> None:
        self._shopify_products = list(products)
        logger.info("Workspace now tracks {} Shopify products", len(products))

    # Filters

    @property
    def filters(self) -> ProductFilters:
        return self._filters

    def set_filters(self, changes: ProductFiltersUpdate) -> ProductFilters:
        """Merge the explicitly provided filter fields into the current filters."""
        merged = {**self._filters.model_dump(), **changes.model_dump(exclude_unset=True)}
        self._filters = ProductFilters.model_validate(merged)
        return self._filters

    def reset_filters(self) -> ProductFilters:
        self._filters = ProductFilters()
        return self._filters

    def filtered_products(self) -> list[ManagedProduct | ShopifyProductSummary]:
        f = self._filters
        local: list[ManagedProduct] = []
        shopify: list[ShopifyProductSummary] = []

        if f.source in ("all", "local"):
            local = [p for p in self._products if self._matches_local(p, f)]
        if f.source in ("all", "shopify"):
            shopify = [p for p in self._shopify_products if self._matches_shopify(p, f)]
        return [*local, *shopify]

    @staticmethod
    def _matches_local(product: ManagedProduct, f: ProductFilters) -> bool:
        if f.search:
            term = f.search.lower()
            haystack = [product.title, product.description, *product.tags]
            if not any(term in text.lower() for text in haystack):
                return False
        if f.category and product.category.lower() != f.category.lower():
            return False
        if f.in_stock is not None and product.available != f.in_stock:
            return False
        if f.featured is not None and product.featured != f.featured:
            return False
        return True

    @staticmethod
    def _matches_shopify(product: ShopifyProductSummary, f: ProductFilters) -> bool:
        if f.search and f.search.lower() not in product.title.lower():
            return False
        if f.category and (product.product_type or "").lower() != f.category.lower():
            return False
        if f.in_stock is not None and product.in_stock != f.in_stock:
            return False
        # Shopify products carry no featured flag
        if f.featured:
            return False
        return True

    # Product operations

    def get_product(self, product_id: str) -> ManagedProduct:
        for product in self._products:
            if product.id == product_id:
                return product
        raise ProductNotFoundError(product_id)

    def create_product(self, data: ManagedProductInput) -> ManagedProduct:
        fields = data.model_dump()
        fields["handle"] = data.handle or generate_product_handle(data.title)
        product = ManagedProduct(id=generate_product_id(), **fields)
        self._products.insert(0, product)
        logger.bind(product_id=product.id).info("workspace.product.created")
        return product

    def update_product(self, product_id: str, changes: ManagedProductUpdate) -> ManagedProduct:
        for index, product in enumerate(self._products):
            if product.id == product_id:
                updated = self._apply(product, changes)
                self._products[index] = updated
                return updated
        raise ProductNotFoundError(product_id)

    @staticmethod
    def _apply(product: ManagedProduct, changes: ManagedProductUpdate) -> ManagedProduct:
        updates = changes.model_dump(exclude_unset=True)
        merged = {**product.model_dump(), **updates, "updated_at": utcnow()}
        try:
            return ManagedProduct.model_validate(merged)
        except ValidationError as e:
            raise InvalidRequestError(
                "Validation failed",
                details=e.errors(include_url=False, include_context=False),
            ) from e

    def delete_product(self, product_id: str) -> bool:
        before = len(self._products)
        self._products = [p for p in self._products if p.id != product_id]
        return len(self._products) < before

    def bulk_update_products(
        self, ids: list[str], changes: ManagedProductUpdate
    ) -> list[ManagedProduct]:
        """Apply the same change to every listed product; unknown ids are ignored.

        Every product is validated before any is replaced.
        """
        wanted = set(ids)
        replacements = {
            index: self._apply(product, changes)
            for index, product in enumerate(self._products)
            if product.id in wanted
        }
        for index, product in replacements.items():
            self._products[index] = product
        return list(replacements.values())

    def update_stock(self, product_id: str, in_stock: bool) -> ManagedProduct:
        return self.update_product(product_id, ManagedProductUpdate(available=in_stock))

    def bulk_update_stock(self, ids: list[str], in_stock: bool) -> list[ManagedProduct]:
        return self.bulk_update_products(ids, ManagedProductUpdate(available=in_stock))

    # Categories and concerns

    @property
    def categories(self) -> list[str]:
        return list(dict.fromkeys(p.category for p in self._products))

    @property
    def concerns(self) -> list[str]:
        return list(dict.fromkeys(c for p in self._products for c in p.concerns))

    def add_category(self, category: str) -> None:
        # Categories are derived from products, nothing is stored here
        logger.info("Adding category: {}", category)

    def add_concern(self, concern: str) -> None:
        logger.info("Adding concern: {}", concern)

    # Analytics

    def get_product_stats(self) -> ProductStats:
        local_in_stock = sum(1 for p in self._products if p.available)
        shopify_in_stock = sum(1 for p in self._shopify_products if p.in_stock)
        total = len(self._products) + len(self._shopify_products)
        in_stock = local_in_stock + shopify_in_stock

        by_category: Counter[str] = Counter(p.category for p in self._products)
        by_category.update(p.product_type or "Other" for p in self._shopify_products)
        by_concern: Counter[str] = Counter(c for p in self._products for c in p.concerns)

        return ProductStats(
            total=total,
            in_stock=in_stock,
            out_of_stock=total - in_stock,
            featured=sum(1 for p in self._products if p.featured),
            by_category=dict(by_category),
            by_concern=dict(by_concern),
        )
