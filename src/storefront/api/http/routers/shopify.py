"""Shopify integration diagnostics."""

from fastapi import APIRouter, Depends
from fastapi.encoders import jsonable_encoder
from starlette.responses import JSONResponse

from src.storefront.api.http.deps import get_shopify_connection_tester, require_permission
from src.storefront.core.services import ShopifyConnectionTester

router = APIRouter(
    prefix="/api/shopify",
    tags=["shopify"],
    dependencies=[Depends(require_permission("integrations", "view"))],
)


@router.get("/test")
async def test_connection(
    tester: ShopifyConnectionTester = Depends(get_shopify_connection_tester),
):
    """Check Admin and Storefront API access: 200 both, 206 one, 500 neither."""
    report = await tester.test_connection()
    return JSONResponse(
        status_code=report.http_status, content=jsonable_encoder(report.model_dump())
    )


@router.post("/test")
async def test_operations(
    tester: ShopifyConnectionTester = Depends(get_shopify_connection_tester),
):
    """Run product, order and location reads; passes when two of three work."""
    report = await tester.test_operations()
    return JSONResponse(
        status_code=report.http_status, content=jsonable_encoder(report.model_dump())
    )
