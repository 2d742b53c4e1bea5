"""Storage backends for admin sessions.

Admin sessions are small pydantic models kept under ``admin:<session id>``
keys with a TTL matching the session lifetime. Redis is used when enabled in
config.yaml; otherwise sessions live in process memory.
"""

from __future__ import annotations

import fnmatch
import json
import time
from abc import ABC, abstractmethod
from typing import Any, TypeVar

from loguru import logger
from pydantic import BaseModel, ValidationError

T = TypeVar("T", bound=BaseModel)


class SessionStorage(ABC):
    """Abstract interface for session storage backends."""

    @abstractmethod
    async def set(self, key: str, value: BaseModel, ttl_seconds: int) -> None:
        """Store ``value`` under ``key`` for ``ttl_seconds``."""

    @abstractmethod
    async def get(self, key: str, model_class: type[T]) -> T | None:
        """Return the stored model, or None if missing or expired."""

    @abstractmethod
    async def delete(self, key: str) -> None:
        """Remove ``key``; missing keys are ignored."""

    @abstractmethod
    async def exists(self, key: str) -> bool:
        """Check whether ``key`` holds a live entry."""

    @abstractmethod
    async def cleanup_expired(self) -> int:
        """Drop expired entries and return how many were removed."""

    @abstractmethod
    async def list_keys(self, pattern: str) -> list[str]:
        """List live keys matching a glob pattern such as ``admin:*``."""

    @abstractmethod
    def is_available(self) -> bool:
        """Check if storage backend is available."""


class InMemorySessionStorage(SessionStorage):
    """In-memory session storage with TTL support."""

    def __init__(self):
        self._data: dict[str, dict[str, Any]] = {}

    def _live_entry(self, key: str) -> dict[str, Any] | None:
        entry = self._data.get(key)
        if entry is None:
            return None
        if time.time() > entry["expires_at"]:
            del self._data[key]
            return None
        return entry

    async def set(self, key: str, value: BaseModel, ttl_seconds: int) -> None:
        self._data[key] = {
            "data": json.loads(value.model_dump_json()),
            "expires_at": time.time() + ttl_seconds,
        }

    async def get(self, key: str, model_class: type[T]) -> T | None:
        entry = self._live_entry(key)
        if entry is None:
            return None

        try:
            return model_class.model_validate(entry["data"])
        except ValidationError:
            logger.warning("Discarding unreadable session entry {}", key)
            del self._data[key]
            return None

    async def delete(self, key: str) -> None:
        self._data.pop(key, None)

    async def exists(self, key: str) -> bool:
        return self._live_entry(key) is not None

    async def cleanup_expired(self) -> int:
        now = time.time()
        expired_keys = [
            key for key, entry in self._data.items() if now > entry["expires_at"]
        ]
        for key in expired_keys:
            del self._data[key]
        return len(expired_keys)

    async def list_keys(self, pattern: str) -> list[str]:
        return [
            key
            for key in list(self._data)
            if fnmatch.fnmatch(key, pattern) and self._live_entry(key) is not None
        ]

    def is_available(self) -> bool:
        """In-memory storage is always available."""
        return True


class RedisSessionStorage(SessionStorage):
    """Redis-based session storage; expiry is delegated to Redis TTLs."""

    def __init__(self, redis_client):
        self._redis = redis_client
        self._available = True

    async def set(self, key: str, value: BaseModel, ttl_seconds: int) -> None:
        try:
            await self._redis.setex(key, ttl_seconds, value.model_dump_json())
            self._available = True
        except Exception as e:
            self._available = False
            raise RuntimeError(f"Redis set failed: {e}") from e

    async def get(self, key: str, model_class: type[T]) -> T | None:
        try:
            data = await self._redis.get(key)
        except Exception as e:
            self._available = False
            raise RuntimeError(f"Redis get failed: {e}") from e

        if data is None:
            return None
        if isinstance(data, bytes):
            data = data.decode("utf-8")
        return model_class.model_validate_json(data)

    async def delete(self, key: str) -> None:
        try:
            await self._redis.delete(key)
        except Exception as e:
            self._available = False
            raise RuntimeError(f"Redis delete failed: {e}") from e

    async def exists(self, key: str) -> bool:
        try:
            return bool(await self._redis.exists(key))
        except Exception as e:
            self._available = False
            raise RuntimeError(f"Redis exists failed: {e}") from e

    async def cleanup_expired(self) -> int:
        return 0

    async def list_keys(self, pattern: str) -> list[str]:
        try:
            keys = []
            cursor = 0
            while True:
                cursor, batch = await self._redis.scan(cursor, match=pattern, count=100)
                keys.extend(k.decode("utf-8") if isinstance(k, bytes) else k for k in batch)
                if cursor == 0:
                    break
            return keys
        except Exception as e:
            self._available = False
            raise RuntimeError(f"Redis scan failed: {e}") from e

    def is_available(self) -> bool:
        return self._available

    async def ping(self) -> bool:
        try:
            await self._redis.ping()
            self._available = True
        except Exception:
            self._available = False
        return self._available


_storage: SessionStorage | None = None


async def _create_storage() -> SessionStorage:
    """Connect to Redis when enabled, otherwise use in-memory storage."""
    import redis.asyncio as redis

    from src.storefront.runtime.context import get_config

    config = get_config()
    if not config.redis.enabled or not config.redis.url:
        logger.info("Session storage: in-memory")
        return InMemorySessionStorage()

    client = redis.from_url(
        config.redis.connection_string,
        encoding="utf-8",
        decode_responses=config.redis.decode_responses,
        socket_connect_timeout=2,
        socket_timeout=2,
    )
    redis_storage = RedisSessionStorage(client)
    if await redis_storage.ping():
        logger.info("Session storage: Redis connected")
        return redis_storage

    if config.app.environment == "production":
        raise RuntimeError("Redis session storage is enabled but unreachable")
    logger.warning("Redis unavailable, using in-memory session storage")
    return InMemorySessionStorage()


async def get_session_storage() -> SessionStorage:
    """Get the configured session storage instance."""
    global _storage

    if _storage is None:
        _storage = await _create_storage()

    return _storage


def _reset_storage() -> None:
    """Reset storage instance (for testing)."""
    global _storage
    _storage = None
