"""Admin dashboard authentication endpoints.

The browser dashboard authenticates with an HttpOnly session cookie; scripts
and API clients can send the returned token as ``Authorization: Bearer``.
"""

from typing import Any

from fastapi import APIRouter, Body, Depends, Request, Response
from loguru import logger
from pydantic import BaseModel

from src.storefront.api.http.deps import (
    get_auth_service,
    get_current_session,
    get_optional_session,
)
from src.storefront.api.http.responses import error_response, success_response
from src.storefront.core.models.auth import Action, AuthSession, LoginCredentials, Resource
from src.storefront.core.services import AuthService
from src.storefront.core.services.auth.permissions import has_permission
from src.storefront.runtime.context import get_config

router = APIRouter(prefix="/api/auth", tags=["auth"])


class PermissionCheck(BaseModel):
    resource: Resource
    action: Action


class TwoFactorCode(BaseModel):
    code: str = ""


def _session_payload(session: AuthSession, auth_service: AuthService) -> dict[str, Any]:
    return {
        "user": session.user.model_dump(mode="json"),
        "permissions": [p.model_dump(mode="json") for p in session.permissions],
        "token": session.token,
        "refresh_token": session.refresh_token,
        "expires_at": session.expires_at,
        "needs_refresh": auth_service.needs_refresh(session),
    }


def _set_session_cookie(response: Response, session: AuthSession, remember: bool) -> None:
    auth_cfg = get_config().auth
    secure = auth_cfg.secure_cookies or get_config().app.environment == "production"
    response.set_cookie(
        key=auth_cfg.cookie_name,
        value=session.id,
        httponly=True,
        secure=secure,
        samesite=auth_cfg.cookie_samesite,
        max_age=session.seconds_remaining() if remember else None,
        path="/",
    )


@router.post("/login")
async def login(
    credentials: LoginCredentials,
    auth_service: AuthService = Depends(get_auth_service),
):
    """Log in with email and password (plus a 2FA code when enabled)."""
    result = await auth_service.login(credentials)
    if not result.success or result.session is None:
        return error_response(
            401, result.message, requires_two_factor=result.requires_two_factor
        )

    response = success_response(
        _session_payload(result.session, auth_service), message=result.message
    )
    _set_session_cookie(response, result.session, credentials.remember_me)
    return response


@router.post("/logout")
async def logout(
    session: AuthSession | None = Depends(get_optional_session),
    auth_service: AuthService = Depends(get_auth_service),
):
    if session is not None:
        await auth_service.logout(session.id)
    response = success_response(message="Logged out")
    response.delete_cookie(get_config().auth.cookie_name, path="/")
    return response


@router.post("/refresh")
async def refresh(
    request: Request,
    session: AuthSession = Depends(get_current_session),
    auth_service: AuthService = Depends(get_auth_service),
):
    refreshed = await auth_service.refresh_token(session.id)
    if refreshed is None:
        return error_response(401, "Session expired")
    response = success_response(_session_payload(refreshed, auth_service))
    if get_config().auth.cookie_name in request.cookies:
        _set_session_cookie(response, refreshed, remember=True)
    return response


@router.get("/me")
async def me(
    session: AuthSession = Depends(get_current_session),
    auth_service: AuthService = Depends(get_auth_service),
):
    return success_response(_session_payload(session, auth_service))


@router.post("/permissions/check")
async def check_permission(
    check: PermissionCheck,
    session: AuthSession | None = Depends(get_optional_session),
):
    """Report whether the caller may perform ``action`` on ``resource``.

    Anonymous callers are answered rather than rejected; they never have any
    permission.
    """
    allowed = has_permission(session, check.resource, check.action)
    return success_response({"resource": check.resource, "action": check.action, "allowed": allowed})


@router.put("/preferences")
async def update_preferences(
    changes: dict[str, Any] = Body(...),
    session: AuthSession = Depends(get_current_session),
    auth_service: AuthService = Depends(get_auth_service),
):
    ok, message = await auth_service.update_preferences(session.id, changes)
    if not ok:
        return error_response(400, message)
    refreshed = await auth_service.get_session(session.id)
    preferences = refreshed.user.preferences.model_dump(mode="json") if refreshed else None
    return success_response(preferences, message=message)


@router.post("/two-factor/enable")
async def enable_two_factor(
    session: AuthSession = Depends(get_current_session),
    auth_service: AuthService = Depends(get_auth_service),
):
    setup = await auth_service.enable_two_factor(session.id)
    if setup is None:
        return error_response(401, "Not authenticated")
    logger.bind(user_id=session.user.id).info("auth.two_factor.enabled")
    return success_response(setup.model_dump(mode="json"), message=setup.message)


@router.post("/two-factor/disable")
async def disable_two_factor(
    body: TwoFactorCode,
    session: AuthSession = Depends(get_current_session),
    auth_service: AuthService = Depends(get_auth_service),
):
    ok, message = await auth_service.disable_two_factor(session.id, body.code)
    if not ok:
        return error_response(400, message)
    logger.bind(user_id=session.user.id).info("auth.two_factor.disabled")
    return success_response(message=message)
