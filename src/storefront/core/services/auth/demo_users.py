"""Built-in dashboard accounts used until a real identity provider is wired in."""

from datetime import UTC, datetime

from src.storefront.core.models.auth import (
    AdminUser,
    DashboardPreferences,
    NotificationPreferences,
    UserPreferences,
)

_CREATED_AT = datetime(2024, 1, 1, tzinfo=UTC)


def _user(
    user_id: str,
    email: str,
    first_name: str,
    role: str,
    department: str,
    *,
    push: bool,
    default_view: str,
    widgets: list[str],
) -> AdminUser:
    return AdminUser(
        id=user_id,
        email=email,
        name=f"{first_name} User",
        first_name=first_name,
        last_name="User",
        role=role,
        department=department,
        created_at=_CREATED_AT,
        preferences=UserPreferences(
            notifications=NotificationPreferences(email=True, push=push, slack=False),
            dashboard=DashboardPreferences(default_view=default_view, widgets=widgets),
        ),
    )


def build_demo_users() -> dict[str, tuple[AdminUser, str]]:
    """Return ``{email: (user, password)}`` for the demo accounts.

    A fresh copy is built on every call so one service instance never sees
    another's preference or login changes.
    """
    users = [
        (
            _user(
                "admin-1",
                "admin@inkey.com",
                "Admin",
                "admin",
                "Administration",
                push=True,
                default_view="overview",
                widgets=["products", "analytics", "orders"],
            ),
            "admin123",
        ),
        (
            _user(
                "designer-1",
                "designer@inkey.com",
                "Design",
                "designer",
                "Design",
                push=True,
                default_view="design",
                widgets=["design", "assets", "themes"],
            ),
            "design123",
        ),
        (
            _user(
                "viewer-1",
                "viewer@inkey.com",
                "Viewer",
                "viewer",
                "General",
                push=False,
                default_view="overview",
                widgets=["products", "analytics"],
            ),
            "view123",
        ),
    ]
    return {user.email: (user, password) for user, password in users}
