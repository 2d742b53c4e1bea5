"""Admin user, permission, and session models."""

from __future__ import annotations

import time
from datetime import UTC, datetime
from typing import Any, Literal

from pydantic import BaseModel, Field

UserRole = Literal["super_admin", "admin", "editor", "viewer", "designer"]

Resource = Literal[
    "products",
    "orders",
    "customers",
    "analytics",
    "design",
    "settings",
    "users",
    "integrations",
    "assets",
    "reports",
]

Action = Literal["view", "create", "edit", "delete", "publish", "export", "manage"]

PermissionScope = Literal["own", "department", "all"]


class Permission(BaseModel):
    """A set of actions granted on one resource."""

    resource: Resource
    actions: list[Action]
    scope: PermissionScope | None = None

    def allows(self, resource: str, action: str) -> bool:
        return self.resource == resource and action in self.actions


class NotificationPreferences(BaseModel):
    email: bool = True
    push: bool = True
    slack: bool = False


class DashboardPreferences(BaseModel):
    default_view: str = Field(default="overview", alias="defaultView")
    widgets: list[str] = Field(default_factory=list)

    model_config = {"populate_by_name": True}


class UserPreferences(BaseModel):
    """Per-user dashboard preferences."""

    theme: Literal["light", "dark", "system"] = "light"
    language: str = "en"
    timezone: str = "UTC"
    notifications: NotificationPreferences = Field(default_factory=NotificationPreferences)
    dashboard: DashboardPreferences = Field(default_factory=DashboardPreferences)

    def merged(self, changes: dict[str, Any]) -> UserPreferences:
        """Return a copy with the top-level keys of ``changes`` replaced.

        Nested sections are replaced as a whole, not merged field by field.
        """
        data = self.model_dump()
        data.update(changes)
        return UserPreferences.model_validate(data)


class AdminUser(BaseModel):
    """A dashboard user."""

    id: str
    email: str
    name: str
    first_name: str
    last_name: str
    avatar: str | None = None
    role: UserRole
    permissions: list[Permission] = Field(
        default_factory=list, description="Grants on top of the role's defaults"
    )
    department: str | None = None
    created_at: datetime
    last_login_at: datetime | None = None
    is_active: bool = True
    two_factor_enabled: bool = False
    preferences: UserPreferences = Field(default_factory=UserPreferences)


class AuthSession(BaseModel):
    """An authenticated admin session."""

    id: str = Field(description="Session identifier, also used as the cookie value")
    user: AdminUser
    token: str = Field(description="Bearer token")
    refresh_token: str
    created_at: int = Field(default_factory=lambda: int(time.time()))
    expires_at: int = Field(description="Expiration timestamp (seconds)")
    permissions: list[Permission] = Field(default_factory=list)

    def is_expired(self) -> bool:
        return time.time() >= self.expires_at

    def seconds_remaining(self) -> int:
        return max(0, int(self.expires_at - time.time()))

    @property
    def expires_at_datetime(self) -> datetime:
        return datetime.fromtimestamp(self.expires_at, tz=UTC)


class LoginCredentials(BaseModel):
    email: str
    password: str
    two_factor_code: str | None = Field(default=None, alias="twoFactorCode")
    remember_me: bool = Field(default=False, alias="rememberMe")

    model_config = {"populate_by_name": True}


class AuthResult(BaseModel):
    """Outcome of a login attempt."""

    success: bool
    message: str
    session: AuthSession | None = None
    requires_two_factor: bool = False


class TwoFactorSetup(BaseModel):
    success: bool = True
    qr_code: str
    backup_codes: list[str]
    message: str = "Two-factor authentication enabled"
