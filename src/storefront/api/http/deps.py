"""FastAPI dependency implementations."""

from __future__ import annotations

from collections.abc import Iterator

from fastapi import Depends, HTTPException, Request
from sqlmodel import Session

from src.storefront.api.http.app_data import ApplicationDependencies
from src.storefront.core.models.auth import Action, AuthSession, Resource
from src.storefront.core.services import (
    AuthService,
    CatalogService,
    ContentService,
    ProductManagementService,
    SanityProductService,
    ShopifyConnectionTester,
    ShopifyStorefrontClient,
)
from src.storefront.core.services.auth.permissions import has_permission
from src.storefront.runtime.context import get_config


def _app_deps(request: Request) -> ApplicationDependencies:
    return request.app.state.app_dependencies


def get_db_session(request: Request) -> Iterator[Session]:
    """Yield a session that is committed when the request succeeds."""
    session = _app_deps(request).database_service.get_session()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


def get_catalog_service(db: Session = Depends(get_db_session)) -> CatalogService:
    return CatalogService(db)


def get_auth_service(request: Request) -> AuthService:
    """Get the admin authentication service instance."""
    return _app_deps(request).auth_service


def get_product_management_service(request: Request) -> ProductManagementService:
    """Get the product-management workspace instance."""
    return _app_deps(request).product_management_service


def get_content_service(request: Request) -> ContentService:
    return _app_deps(request).content_service


def get_sanity_product_service(request: Request) -> SanityProductService:
    return _app_deps(request).sanity_product_service


def get_shopify_connection_tester(request: Request) -> ShopifyConnectionTester:
    return _app_deps(request).shopify_connection_tester


def get_shopify_storefront_client(request: Request) -> ShopifyStorefrontClient:
    return _app_deps(request).shopify_storefront_client


def _bearer_token(request: Request) -> str | None:
    header = request.headers.get("Authorization", "")
    scheme, _, token = header.partition(" ")
    if scheme.lower() == "bearer" and token:
        return token.strip()
    return None


async def get_optional_session(
    request: Request, auth_service: AuthService = Depends(get_auth_service)
) -> AuthSession | None:
    """Resolve the admin session from the session cookie or a Bearer token."""
    session_id = request.cookies.get(get_config().auth.cookie_name)
    if session_id:
        session = await auth_service.get_session(session_id)
        if session is not None:
            request.state.admin_session = session
            return session

    token = _bearer_token(request)
    if token:
        session = await auth_service.get_session_by_token(token)
        if session is not None:
            request.state.admin_session = session
            return session
    return None


async def get_current_session(
    session: AuthSession | None = Depends(get_optional_session),
) -> AuthSession:
    if session is None:
        raise HTTPException(status_code=401, detail="Authentication required")
    return session


def require_permission(resource: Resource, action: Action):
    """Create a dependency that requires ``action`` on ``resource``."""

    async def dep(session: AuthSession = Depends(get_current_session)) -> AuthSession:
        if not has_permission(session, resource, action):
            raise HTTPException(
                status_code=403,
                detail=f"Missing required permission: {resource}:{action}",
            )
        return session

    return dep
