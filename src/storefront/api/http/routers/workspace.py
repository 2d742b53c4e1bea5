"""Product-management workspace used by the admin dashboard."""

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from src.storefront.api.http.deps import (
    get_product_management_service,
    get_shopify_storefront_client,
    require_permission,
)
from src.storefront.api.http.responses import error_response, success_response
from src.storefront.core.exceptions import ExternalServiceError, ProductNotFoundError
from src.storefront.core.models.workspace import (
    ManagedProductInput,
    ManagedProductUpdate,
    ProductFiltersUpdate,
)
from src.storefront.core.services import ProductManagementService, ShopifyStorefrontClient
from src.storefront.core.services.shopify import to_workspace_summary

router = APIRouter(prefix="/api/admin/workspace", tags=["workspace"])

_can_view = [Depends(require_permission("products", "view"))]
_can_create = [Depends(require_permission("products", "create"))]
_can_edit = [Depends(require_permission("products", "edit"))]
_can_delete = [Depends(require_permission("products", "delete"))]


class BulkUpdate(BaseModel):
    ids: list[str] = Field(min_length=1)
    changes: ManagedProductUpdate


class StockUpdate(BaseModel):
    in_stock: bool


class BulkStockUpdate(BaseModel):
    ids: list[str] = Field(min_length=1)
    in_stock: bool


class NamedEntry(BaseModel):
    name: str = Field(min_length=1)


# Products


@router.get("/products", dependencies=_can_view)
async def list_products(
    workspace: ProductManagementService = Depends(get_product_management_service),
):
    """Products matching the workspace's current filters."""
    products = workspace.filtered_products()
    return success_response(products, filters=workspace.filters, count=len(products))


@router.post("/products", dependencies=_can_create)
async def create_product(
    data: ManagedProductInput,
    workspace: ProductManagementService = Depends(get_product_management_service),
):
    product = workspace.create_product(data)
    return success_response(product, status_code=201, message="Product created successfully")


@router.post("/products/bulk-update", dependencies=_can_edit)
async def bulk_update_products(
    body: BulkUpdate,
    workspace: ProductManagementService = Depends(get_product_management_service),
):
    updated = workspace.bulk_update_products(body.ids, body.changes)
    return success_response(updated, count=len(updated))


@router.post("/products/bulk-stock", dependencies=_can_edit)
async def bulk_update_stock(
    body: BulkStockUpdate,
    workspace: ProductManagementService = Depends(get_product_management_service),
):
    updated = workspace.bulk_update_stock(body.ids, body.in_stock)
    return success_response(updated, count=len(updated))


@router.get("/products/{product_id}", dependencies=_can_view)
async def get_product(
    product_id: str,
    workspace: ProductManagementService = Depends(get_product_management_service),
):
    return success_response(workspace.get_product(product_id))


@router.patch("/products/{product_id}", dependencies=_can_edit)
async def update_product(
    product_id: str,
    changes: ManagedProductUpdate,
    workspace: ProductManagementService = Depends(get_product_management_service),
):
    product = workspace.update_product(product_id, changes)
    return success_response(product, message="Product updated successfully")


@router.delete("/products/{product_id}", dependencies=_can_delete)
async def delete_product(
    product_id: str,
    workspace: ProductManagementService = Depends(get_product_management_service),
):
    if not workspace.delete_product(product_id):
        raise ProductNotFoundError(product_id)
    return success_response(message="Product deleted successfully")


@router.put("/products/{product_id}/stock", dependencies=_can_edit)
async def update_stock(
    product_id: str,
    body: StockUpdate,
    workspace: ProductManagementService = Depends(get_product_management_service),
):
    return success_response(workspace.update_stock(product_id, body.in_stock))


# Filters


@router.get("/filters", dependencies=_can_view)
async def get_filters(
    workspace: ProductManagementService = Depends(get_product_management_service),
):
    return success_response(workspace.filters)


@router.patch("/filters", dependencies=_can_view)
async def set_filters(
    changes: ProductFiltersUpdate,
    workspace: ProductManagementService = Depends(get_product_management_service),
):
    return success_response(workspace.set_filters(changes))


@router.delete("/filters", dependencies=_can_view)
async def reset_filters(
    workspace: ProductManagementService = Depends(get_product_management_service),
):
    return success_response(workspace.reset_filters())


# Categories, concerns and stats


@router.get("/categories", dependencies=_can_view)
async def list_categories(
    workspace: ProductManagementService = Depends(get_product_management_service),
):
    return success_response(workspace.categories)


@router.post("/categories", dependencies=_can_create)
async def add_category(
    body: NamedEntry,
    workspace: ProductManagementService = Depends(get_product_management_service),
):
    workspace.add_category(body.name)
    return success_response(message=f"Category '{body.name}' noted")


@router.get("/concerns", dependencies=_can_view)
async def list_concerns(
    workspace: ProductManagementService = Depends(get_product_management_service),
):
    return success_response(workspace.concerns)


@router.post("/concerns", dependencies=_can_create)
async def add_concern(
    body: NamedEntry,
    workspace: ProductManagementService = Depends(get_product_management_service),
):
    workspace.add_concern(body.name)
    return success_response(message=f"Concern '{body.name}' noted")


@router.get("/stats", dependencies=_can_view)
async def product_stats(
    workspace: ProductManagementService = Depends(get_product_management_service),
):
    return success_response(workspace.get_product_stats())


@router.post("/shopify/sync", dependencies=_can_edit)
async def sync_shopify_products(
    workspace: ProductManagementService = Depends(get_product_management_service),
    storefront: ShopifyStorefrontClient = Depends(get_shopify_storefront_client),
):
    """Replace the workspace's Shopify products with the live Storefront list."""
    try:
        products = await storefront.get_products()
    except ExternalServiceError as e:
        return error_response(502, "Failed to fetch Shopify products", details=e.message)
    summaries = [to_workspace_summary(p) for p in products]
    workspace.set_shopify_products(summaries)
    return success_response(summaries, count=len(summaries), source="shopify")
