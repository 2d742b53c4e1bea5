"""Local catalog endpoints: products by handle, categories, skin concerns, analytics."""

from fastapi import APIRouter, Depends

from src.storefront.api.http.deps import get_catalog_service, require_permission
from src.storefront.api.http.responses import success_response
from src.storefront.core.services import CatalogService
from src.storefront.entities.catalog.category import CategoryCreate
from src.storefront.entities.catalog.product import ProductUpdate
from src.storefront.entities.catalog.skin_concern import SkinConcernCreate

router = APIRouter(prefix="/api", tags=["catalog"])


@router.get("/products/{handle}")
def get_product(handle: str, catalog: CatalogService = Depends(get_catalog_service)):
    return success_response(catalog.get_product(handle))


@router.put(
    "/products/{handle}",
    dependencies=[Depends(require_permission("products", "edit"))],
)
def update_product(
    handle: str,
    changes: ProductUpdate,
    catalog: CatalogService = Depends(get_catalog_service),
):
    product = catalog.update_product(handle, changes)
    return success_response(product, message="Product updated successfully")


@router.delete(
    "/products/{handle}",
    dependencies=[Depends(require_permission("products", "delete"))],
)
def delete_product(handle: str, catalog: CatalogService = Depends(get_catalog_service)):
    catalog.delete_product(handle)
    return success_response(message="Product deleted successfully")


@router.get("/categories")
def list_categories(catalog: CatalogService = Depends(get_catalog_service)):
    categories = catalog.list_categories()
    return success_response(categories, count=len(categories))


@router.post(
    "/categories",
    dependencies=[Depends(require_permission("products", "create"))],
)
def create_category(
    data: CategoryCreate, catalog: CatalogService = Depends(get_catalog_service)
):
    category = catalog.create_category(data)
    return success_response(category, status_code=201, message="Category created successfully")


@router.get("/skin-concerns")
def list_skin_concerns(catalog: CatalogService = Depends(get_catalog_service)):
    concerns = catalog.list_skin_concerns()
    return success_response(concerns, count=len(concerns))


@router.post(
    "/skin-concerns",
    dependencies=[Depends(require_permission("products", "create"))],
)
def create_skin_concern(
    data: SkinConcernCreate, catalog: CatalogService = Depends(get_catalog_service)
):
    concern = catalog.create_skin_concern(data)
    return success_response(
        concern, status_code=201, message="Skin concern created successfully"
    )


@router.get("/analytics")
def analytics(catalog: CatalogService = Depends(get_catalog_service)):
    return success_response(catalog.get_analytics())
