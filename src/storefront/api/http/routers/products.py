"""Admin product CRUD backed by Sanity documents."""

import json

from fastapi import APIRouter, Depends, Query, Request
from loguru import logger
from pydantic import ValidationError

from src.storefront.api.http.deps import get_sanity_product_service, require_permission
from src.storefront.api.http.responses import error_response, success_response
from src.storefront.core.exceptions import ExternalServiceError, InvalidRequestError
from src.storefront.core.services import SanityProductService
from src.storefront.core.services.sanity import SanityProductFilters, SanityProductInput

router = APIRouter(prefix="/api/products", tags=["products"])

SOURCE = "sanity"


def _parse_bool(value: str | None) -> bool | None:
    if not value:
        return None
    return value == "true"


def _upstream_failure(action: str, error: ExternalServiceError):
    logger.bind(error_type=type(error).__name__).error(
        "Sanity {} failed: {}", action, error.message
    )
    return error_response(
        500, f"Failed to {action} in Sanity", details=error.message, source=SOURCE
    )


async def _read_product_input(request: Request) -> SanityProductInput:
    """Parse the request body, raising ``InvalidRequestError`` on bad input."""
    try:
        body = await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise InvalidRequestError("Invalid JSON in request body") from e
    try:
        return SanityProductInput.model_validate(body)
    except ValidationError as e:
        raise InvalidRequestError(
            "Validation failed",
            details=e.errors(include_url=False, include_context=False),
        ) from e


@router.get("")
async def list_products(
    search: str | None = None,
    category: str | None = None,
    in_stock: str | None = Query(default=None, alias="inStock"),
    featured: str | None = None,
    service: SanityProductService = Depends(get_sanity_product_service),
):
    filters = SanityProductFilters(
        search=search or None,
        category=category or None,
        in_stock=_parse_bool(in_stock),
        featured=_parse_bool(featured),
    )
    try:
        products = await service.list_products(filters)
    except ExternalServiceError as e:
        return _upstream_failure("fetch products", e)
    return success_response(products, count=len(products), source=SOURCE)


@router.post("", dependencies=[Depends(require_permission("products", "create"))])
async def create_product(
    request: Request,
    service: SanityProductService = Depends(get_sanity_product_service),
):
    data = await _read_product_input(request)
    try:
        product = await service.create_product(data)
    except ExternalServiceError as e:
        return _upstream_failure("create product", e)
    return success_response(
        product,
        status_code=201,
        message="Product created successfully in Sanity",
        source=SOURCE,
    )


@router.put("", dependencies=[Depends(require_permission("products", "edit"))])
async def update_product(
    request: Request,
    id: str | None = None,
    service: SanityProductService = Depends(get_sanity_product_service),
):
    if not id:
        return error_response(400, "Product ID is required")
    data = await _read_product_input(request)
    try:
        product = await service.update_product(id, data)
    except ExternalServiceError as e:
        return _upstream_failure("update product", e)
    return success_response(
        product, message="Product updated successfully in Sanity", source=SOURCE
    )


@router.delete("", dependencies=[Depends(require_permission("products", "delete"))])
async def delete_product(
    id: str | None = None,
    service: SanityProductService = Depends(get_sanity_product_service),
):
    if not id:
        return error_response(400, "Product ID is required")
    try:
        await service.delete_product(id)
    except ExternalServiceError as e:
        return _upstream_failure("delete product", e)
    return success_response(message="Product deleted successfully from Sanity", source=SOURCE)
