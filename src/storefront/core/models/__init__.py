"""Domain models shared by services and routers."""

from .auth import (
    AdminUser,
    AuthResult,
    AuthSession,
    LoginCredentials,
    Permission,
    TwoFactorSetup,
    UserPreferences,
)
from .content import Banner, GlobalContent, HomepageContent
from .workspace import (
    ManagedProduct,
    ManagedProductInput,
    ManagedProductUpdate,
    ProductFilters,
    ProductFiltersUpdate,
    ProductStats,
    ShopifyProductSummary,
)

__all__ = [
    "AdminUser",
    "AuthResult",
    "AuthSession",
    "LoginCredentials",
    "Permission",
    "TwoFactorSetup",
    "UserPreferences",
    "Banner",
    "GlobalContent",
    "HomepageContent",
    "ManagedProduct",
    "ManagedProductInput",
    "ManagedProductUpdate",
    "ProductFilters",
    "ProductFiltersUpdate",
    "ProductStats",
    "ShopifyProductSummary",
]
