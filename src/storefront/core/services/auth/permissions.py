"""Role-based permission table and checks."""

from __future__ import annotations

from collections.abc import Iterable

from src.storefront.core.models.auth import (
    AdminUser,
    AuthSession,
    Permission,
    UserRole,
)


def _grant(resource, actions, scope=None) -> Permission:
    return Permission(resource=resource, actions=actions, scope=scope)


ROLE_PERMISSIONS: dict[UserRole, list[Permission]] = {
    "super_admin": [
        _grant("products", ["view", "create", "edit", "delete", "publish"]),
        _grant("orders", ["view", "create", "edit", "delete", "export"]),
        _grant("customers", ["view", "create", "edit", "delete", "export"]),
        _grant("analytics", ["view", "export"]),
        _grant("design", ["view", "create", "edit", "delete", "publish"]),
        _grant("settings", ["view", "edit", "manage"]),
        _grant("users", ["view", "create", "edit", "delete", "manage"]),
        _grant("integrations", ["view", "edit", "manage"]),
        _grant("assets", ["view", "create", "edit", "delete"]),
        _grant("reports", ["view", "export"]),
    ],
    "admin": [
        _grant("products", ["view", "create", "edit", "delete", "publish"]),
        _grant("orders", ["view", "edit", "export"]),
        _grant("customers", ["view", "edit", "export"]),
        _grant("analytics", ["view", "export"]),
        _grant("design", ["view", "create", "edit", "publish"]),
        _grant("settings", ["view", "edit"]),
        _grant("users", ["view"], scope="department"),
        _grant("integrations", ["view", "edit"]),
        _grant("assets", ["view", "create", "edit", "delete"]),
        _grant("reports", ["view", "export"]),
    ],
    "editor": [
        _grant("products", ["view", "create", "edit"]),
        _grant("orders", ["view"], scope="department"),
        _grant("customers", ["view"], scope="department"),
        _grant("analytics", ["view"]),
        _grant("design", ["view", "edit"]),
        _grant("assets", ["view", "create", "edit"]),
    ],
    "designer": [
        _grant("design", ["view", "create", "edit", "publish"]),
        _grant("assets", ["view", "create", "edit", "delete"]),
        _grant("products", ["view"]),
        _grant("analytics", ["view"]),
    ],
    "viewer": [
        _grant("products", ["view"]),
        _grant("orders", ["view"], scope="own"),
        _grant("customers", ["view"], scope="own"),
        _grant("analytics", ["view"]),
        _grant("design", ["view"]),
        _grant("assets", ["view"]),
    ],
}


def get_user_permissions(user: AdminUser) -> list[Permission]:
    """Role defaults followed by the user's individual grants."""
    role_permissions = ROLE_PERMISSIONS.get(user.role, [])
    return [*(p.model_copy(deep=True) for p in role_permissions), *user.permissions]


def permissions_allow(
    permissions: Iterable[Permission], resource: str, action: str
) -> bool:
    return any(permission.allows(resource, action) for permission in permissions)


def has_permission(session: AuthSession | None, resource: str, action: str) -> bool:
    if session is None:
        return False
    return permissions_allow(session.permissions, resource, action)


def can_access(session: AuthSession | None, resource: str) -> bool:
    """A resource is accessible when the session may view it."""
    return has_permission(session, resource, "view")


def is_super_admin(session: AuthSession | None) -> bool:
    return session is not None and session.user.role == "super_admin"


def is_admin(session: AuthSession | None) -> bool:
    return session is not None and session.user.role in ("super_admin", "admin")
