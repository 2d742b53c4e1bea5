"""Core services exports."""

# Session storage
from src.storefront.core.storage.session_storage import (
    InMemorySessionStorage,
    RedisSessionStorage,
)

# Auth
from .auth.auth_service import AuthService

# Catalog
from .catalog.catalog_service import CatalogService
from .catalog.product_management import ProductManagementService

# Content
from .content.content_service import ContentService

# Database
from .database.db_session import DbSessionService

# Integrations
from .sanity.product_service import SanityProductService
from .shopify.admin_client import ShopifyAdminClient
from .shopify.connectivity import ShopifyConnectionTester
from .shopify.storefront_client import ShopifyStorefrontClient

__all__ = [
    # Auth
    "AuthService",
    # Catalog
    "CatalogService",
    "ProductManagementService",
    # Content
    "ContentService",
    # Database
    "DbSessionService",
    # Integrations
    "SanityProductService",
    "ShopifyAdminClient",
    "ShopifyConnectionTester",
    "ShopifyStorefrontClient",
    # Session storage
    "InMemorySessionStorage",
    "RedisSessionStorage",
]
