from dataclasses import dataclass

from src.storefront.core.services import (
    AuthService,
    ContentService,
    DbSessionService,
    ProductManagementService,
    SanityProductService,
    ShopifyConnectionTester,
    ShopifyStorefrontClient,
)
from src.storefront.core.storage.session_storage import SessionStorage


@dataclass
class ApplicationDependencies:
    session_storage: SessionStorage
    auth_service: AuthService
    database_service: DbSessionService
    product_management_service: ProductManagementService
    content_service: ContentService
    sanity_product_service: SanityProductService
    shopify_connection_tester: ShopifyConnectionTester
    shopify_storefront_client: ShopifyStorefrontClient
