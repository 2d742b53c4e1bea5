"""Admin authentication and role-based permissions."""

from .auth_service import AuthService
from .permissions import (
    ROLE_PERMISSIONS,
    can_access,
    get_user_permissions,
    has_permission,
    is_admin,
    is_super_admin,
)

__all__ = [
    "AuthService",
    "ROLE_PERMISSIONS",
    "can_access",
    "get_user_permissions",
    "has_permission",
    "is_admin",
    "is_super_admin",
]
