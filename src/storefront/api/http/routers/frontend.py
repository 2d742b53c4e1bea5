"""Read-only catalog endpoints consumed by the public storefront."""

from fastapi import APIRouter, Depends, Query

from src.storefront.api.http.deps import get_catalog_service
from src.storefront.api.http.responses import success_response
from src.storefront.core.services import CatalogService
from src.storefront.entities.catalog.product import ProductSearch

router = APIRouter(prefix="/api/frontend", tags=["frontend"])


def _parse_bool(value: str | None) -> bool | None:
    if not value:
        return None
    return value == "true"


@router.get("/products")
def list_products(
    search: str | None = None,
    category: str | None = None,
    skin_concerns: str | None = Query(default=None, alias="skinConcerns"),
    in_stock: str | None = Query(default=None, alias="inStock"),
    featured: str | None = None,
    catalog: CatalogService = Depends(get_catalog_service),
):
    """List products for the storefront; ``skinConcerns`` is comma-separated."""
    filters = ProductSearch(
        search=search or None,
        category=category or None,
        skin_concerns=[c for c in skin_concerns.split(",") if c] if skin_concerns else None,
        in_stock=_parse_bool(in_stock),
        featured=_parse_bool(featured),
    )
    categories = catalog.categories_by_handle()
    products = [catalog.to_frontend(p, categories) for p in catalog.list_products(filters)]
    return success_response(
        products,
        categories=list(categories.values()),
        skin_concerns=catalog.list_skin_concerns(),
        count=len(products),
    )


@router.get("/products/{handle}")
def get_product(handle: str, catalog: CatalogService = Depends(get_catalog_service)):
    """A single product with up to four others from the same category."""
    product = catalog.get_product(handle)
    categories = catalog.categories_by_handle()
    related = [catalog.to_frontend(p, categories) for p in catalog.related_products(product)]
    return success_response(
        {"product": catalog.to_frontend(product, categories), "related_products": related}
    )
