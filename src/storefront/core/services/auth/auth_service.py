import hmac
import secrets
import time
from datetime import UTC, datetime
from typing import Any

from loguru import logger
from pydantic import BaseModel, ValidationError

from src.storefront.core.models.auth import (
    AdminUser,
    AuthResult,
    AuthSession,
    LoginCredentials,
    TwoFactorSetup,
)
from src.storefront.core.services.auth.demo_users import build_demo_users
from src.storefront.core.services.auth.permissions import get_user_permissions
from src.storefront.core.storage.session_storage import SessionStorage
from src.storefront.runtime.context import get_config

INVALID_CREDENTIALS = (
    "Invalid email or password. Please check your credentials and try again."
)
DEMO_BACKUP_CODES = ["123456", "234567", "345678"]


class _TokenIndex(BaseModel):
    session_id: str


class AuthService:
    """Admin login, session lifecycle, and per-user settings.

    Sessions are kept in a ``SessionStorage`` under ``admin:<id>``; bearer
    tokens are indexed under ``token:<token>`` so API clients can
    authenticate without the session cookie.
    """

    def __init__(
        self,
        session_storage: SessionStorage,
        users: dict[str, tuple[AdminUser, str]] | None = None,
    ) -> None:
        self._storage = session_storage
        self._users = users if users is not None else build_demo_users()

    @staticmethod
    def _session_key(session_id: str) -> str:
        return f"admin:{session_id}"

    @staticmethod
    def _token_key(token: str) -> str:
        return f"token:{token}"

    async def _store(self, session: AuthSession) -> None:
        ttl = max(1, session.seconds_remaining())
        await self._storage.set(self._session_key(session.id), session, ttl)
        await self._storage.set(
            self._token_key(session.token), _TokenIndex(session_id=session.id), ttl
        )

    def get_user(self, email: str) -> AdminUser | None:
        entry = self._users.get(email.strip().lower())
        return entry[0] if entry else None

    async def login(self, credentials: LoginCredentials) -> AuthResult:
        """Authenticate a dashboard user and open a session."""
        entry = self._users.get(credentials.email.strip().lower())
        password_ok = entry is not None and hmac.compare_digest(
            credentials.password.encode("utf-8"), entry[1].encode("utf-8")
        )
        if not password_ok:
            logger.bind(email=credentials.email).info("auth.login.rejected")
            return AuthResult(success=False, message=INVALID_CREDENTIALS)

        user = entry[0]
        if credentials.two_factor_code and not user.two_factor_enabled:
            return AuthResult(
                success=False,
                message="Two-factor authentication code not required for this account.",
            )
        if user.two_factor_enabled and not credentials.two_factor_code:
            return AuthResult(
                success=False,
                requires_two_factor=True,
                message="Please enter your two-factor authentication code.",
            )

        user.last_login_at = datetime.now(UTC)
        session = AuthSession(
            id=secrets.token_urlsafe(32),
            user=user.model_copy(deep=True),
            token=secrets.token_urlsafe(32),
            refresh_token=secrets.token_urlsafe(32),
            expires_at=int(time.time()) + get_config().auth.session_max_age,
            permissions=get_user_permissions(user),
        )
        await self._store(session)

        logger.bind(user_id=user.id, role=user.role).info("auth.login.success")
        return AuthResult(success=True, message="Login successful!", session=session)

    async def get_session(self, session_id: str) -> AuthSession | None:
        """Return the live session, dropping it if it has expired."""
        session = await self._storage.get(self._session_key(session_id), AuthSession)
        if session is None:
            return None
        if session.is_expired():
            await self.logout(session_id)
            return None
        return session

    async def get_session_by_token(self, token: str) -> AuthSession | None:
        index = await self._storage.get(self._token_key(token), _TokenIndex)
        if index is None:
            return None
        return await self.get_session(index.session_id)

    async def logout(self, session_id: str) -> None:
        session = await self._storage.get(self._session_key(session_id), AuthSession)
        await self._storage.delete(self._session_key(session_id))
        if session is not None:
            await self._storage.delete(self._token_key(session.token))
            logger.bind(user_id=session.user.id).info("auth.logout")

    async def refresh_token(self, session_id: str) -> AuthSession | None:
        """Extend the session by a full session lifetime.

        Returns the refreshed session, or None when there is no live session.
        """
        session = await self.get_session(session_id)
        if session is None:
            return None
        session.expires_at = int(time.time()) + get_config().auth.session_max_age
        await self._store(session)
        return session

    def needs_refresh(self, session: AuthSession) -> bool:
        """True when the session expires within the configured refresh window."""
        return session.seconds_remaining() <= get_config().auth.refresh_window_seconds

    async def update_preferences(
        self, session_id: str, changes: dict[str, Any]
    ) -> tuple[bool, str]:
        session = await self.get_session(session_id)
        if session is None:
            return False, "Not authenticated"

        try:
            preferences = session.user.preferences.merged(changes)
        except ValidationError as e:
            return False, f"Invalid preferences: {e.errors()[0]['msg']}"

        session.user.preferences = preferences
        directory_user = self.get_user(session.user.email)
        if directory_user is not None:
            directory_user.preferences = preferences.model_copy(deep=True)
        await self._store(session)
        return True, "Preferences updated successfully"

    async def enable_two_factor(self, session_id: str) -> TwoFactorSetup | None:
        """Turn on 2FA for the session's user and return the enrolment material."""
        session = await self.get_session(session_id)
        if session is None:
            return None
        self._set_two_factor(session.user.email, True)
        return TwoFactorSetup(qr_code="demo-qr-code", backup_codes=list(DEMO_BACKUP_CODES))

    async def disable_two_factor(self, session_id: str, code: str) -> tuple[bool, str]:
        session = await self.get_session(session_id)
        if session is None:
            return False, "Not authenticated"
        if not code:
            return False, "Two-factor authentication code is required"
        self._set_two_factor(session.user.email, False)
        return True, "Two-factor authentication disabled"

    def _set_two_factor(self, email: str, enabled: bool) -> None:
        user = self.get_user(email)
        if user is not None:
            user.two_factor_enabled = enabled

    async def purge_expired(self) -> int:
        return await self._storage.cleanup_expired()
