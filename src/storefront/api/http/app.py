"""FastAPI application factory and setup."""

import time
import uuid
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from loguru import logger
from pydantic import ValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware

from src.storefront.api.http.app_data import ApplicationDependencies
from src.storefront.api.http.middleware.cors import StaticCORSMiddleware
from src.storefront.api.http.responses import error_response
from src.storefront.api.http.routers import (
    auth,
    catalog,
    content,
    draft,
    frontend,
    health,
    products,
    shopify,
    workspace,
)
from src.storefront.api.utils.app_startup import configure_logging
from src.storefront.core.exceptions import StorefrontError
from src.storefront.core.services import (
    AuthService,
    ContentService,
    DbSessionService,
    ProductManagementService,
    SanityProductService,
    ShopifyAdminClient,
    ShopifyConnectionTester,
    ShopifyStorefrontClient,
)
from src.storefront.core.services.catalog.seed_data import seed_catalog
from src.storefront.core.storage.session_storage import get_session_storage
from src.storefront.runtime.context import get_config

# Initialize logging
configure_logging()


# --- Security middleware ---
class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        response = await call_next(request)
        response.headers.setdefault("X-Content-Type-Options", "nosniff")
        response.headers.setdefault("X-Frame-Options", "DENY")
        response.headers.setdefault(
            "Referrer-Policy", "strict-origin-when-cross-origin"
        )
        # HSTS only in prod
        if get_config().app.environment == "production":
            response.headers.setdefault(
                "Strict-Transport-Security",
                "max-age=31536000; includeSubDomains",
            )
        return response


# --- FastAPI app setup ---
@asynccontextmanager
async def lifespan(app: FastAPI):
    await startup()
    try:
        yield
    finally:
        await shutdown()


app = FastAPI(
    title="Storefront Admin API",
    lifespan=lifespan,
    docs_url=None if get_config().app.environment == "production" else "/docs",
    redoc_url=None if get_config().app.environment == "production" else "/redoc",
)

# expose startup for tests
__all__ = ["app", "startup", "shutdown", "build_dependencies"]

app.add_middleware(SecurityHeadersMiddleware)
app.add_middleware(StaticCORSMiddleware)


# --- Request logging middleware ---
@app.middleware("http")
async def log_requests(request: Request, call_next):
    request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())

    xff = request.headers.get("x-forwarded-for")
    client_ip = (
        xff.split(",")[0].strip()
        if xff
        else request.client.host
        if request.client
        else "unknown"
    )

    # Query strings are left out; preview tokens travel there
    base_ctx = {
        "request_id": request_id,
        "method": request.method,
        "path": request.url.path,
        "client_ip": client_ip,
        "user_agent": request.headers.get("user-agent", "unknown"),
    }

    start = time.perf_counter()

    with logger.contextualize(**base_ctx):
        try:
            logger.info("request.start")
            response = await call_next(request)

            duration_ms = (time.perf_counter() - start) * 1000
            logger.bind(
                status_code=response.status_code,
                duration_ms=round(duration_ms, 1),
            ).info("request.end")

            response.headers.setdefault("X-Request-ID", request_id)
            return response

        except Exception as exc:
            duration_ms = (time.perf_counter() - start) * 1000
            logger.bind(
                status_code=500,
                duration_ms=round(duration_ms, 1),
                error_type=type(exc).__name__,
            ).exception("request.error")
            return error_response(
                500,
                "Internal Server Error",
                request_id=request_id,
                headers={"X-Request-ID": request_id},
            )


# --- Error envelopes ---
@app.exception_handler(StorefrontError)
async def storefront_error_handler(request: Request, exc: StorefrontError):
    if exc.status_code >= 500:
        logger.bind(error_type=type(exc).__name__).error("request.failed: {}", exc.message)
    return error_response(exc.status_code, exc.message, details=exc.details)


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    return error_response(exc.status_code, str(exc.detail), headers=exc.headers)


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    logger.bind(errors=len(exc.errors())).info("request.validation_error")
    return error_response(400, "Validation failed", details=jsonable_encoder(exc.errors()))


@app.exception_handler(ValidationError)
async def model_validation_error_handler(request: Request, exc: ValidationError):
    # Raised when a service builds a model from merged request data
    logger.bind(model=exc.title, errors=exc.error_count()).info("request.model_validation_error")
    return error_response(
        400,
        "Validation failed",
        details=jsonable_encoder(exc.errors(include_url=False, include_context=False)),
    )


# --- Router registration ---
app.include_router(health.router)
app.include_router(auth.router)
app.include_router(products.router)
app.include_router(catalog.router)
app.include_router(frontend.router)
app.include_router(content.router)
app.include_router(draft.router)
app.include_router(shopify.router)
app.include_router(workspace.router)


# --- Lifecycle hooks ---
async def build_dependencies(
    database_service: DbSessionService | None = None,
) -> ApplicationDependencies:
    """Create the application-wide services."""
    session_storage = await get_session_storage()
    shopify_admin = ShopifyAdminClient()
    shopify_storefront = ShopifyStorefrontClient()

    return ApplicationDependencies(
        session_storage=session_storage,
        auth_service=AuthService(session_storage),
        database_service=database_service or DbSessionService(),
        product_management_service=ProductManagementService(),
        content_service=ContentService.with_defaults(),
        sanity_product_service=SanityProductService(),
        shopify_connection_tester=ShopifyConnectionTester(shopify_admin, shopify_storefront),
        shopify_storefront_client=shopify_storefront,
    )


async def startup() -> None:
    config = get_config()
    logger.info("Starting up application in {} environment", config.app.environment)
    config.warn_on_missing_integrations()

    deps = await build_dependencies()
    deps.database_service.create_all()
    if config.database.seed_on_startup:
        with deps.database_service.session_scope() as session:
            seed_catalog(session)

    app.state.app_dependencies = deps


async def shutdown() -> None:
    logger.info("Shutting down application")
    app_dependencies: ApplicationDependencies = app.state.app_dependencies
    purged = await app_dependencies.auth_service.purge_expired()
    logger.info("Purged {} expired session entries", purged)
    app_dependencies.database_service.dispose()


if __name__ == "__main__":
    import uvicorn

    # Access logging is handled by the middleware
    uvicorn.run(
        app,
        host=get_config().app.host,
        port=get_config().app.port,
        access_log=False,
    )
