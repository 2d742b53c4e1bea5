"""Tests for session storage implementations."""

import time
from unittest.mock import AsyncMock, patch

import pytest
from pydantic import BaseModel

from src.storefront.core.storage.session_storage import (
    InMemorySessionStorage,
    RedisSessionStorage,
    _reset_storage,
    get_session_storage,
)
from src.storefront.runtime.config.config_data import ConfigData, RedisConfig
from src.storefront.runtime.context import with_context


class StoredSession(BaseModel):
    """Session model for storage tests."""

    id: str
    data: str


class TestInMemorySessionStorage:
    """Test in-memory session storage implementation."""

    def setup_method(self):
        """Set up fresh storage for each test."""
        self.storage = InMemorySessionStorage()

    @pytest.mark.asyncio
    async def test_set_and_get_session(self):
        """Test storing and retrieving a session."""
        await self.storage.set("admin:1", StoredSession(id="1", data="x"), 60)

        retrieved = await self.storage.get("admin:1", StoredSession)

        assert retrieved == StoredSession(id="1", data="x")

    @pytest.mark.asyncio
    async def test_get_nonexistent_session(self):
        """Test getting a session that doesn't exist."""
        assert await self.storage.get("missing", StoredSession) is None

    @pytest.mark.asyncio
    async def test_session_expiration(self):
        """Test that sessions expire after their TTL."""
        await self.storage.set("admin:1", StoredSession(id="1", data="x"), 60)

        later = time.time() + 61
        with patch("src.storefront.core.storage.session_storage.time.time", return_value=later):
            assert await self.storage.get("admin:1", StoredSession) is None
            assert not await self.storage.exists("admin:1")

    @pytest.mark.asyncio
    async def test_stored_copy_is_independent(self):
        """Test later changes to the original model are not stored."""
        session = StoredSession(id="1", data="before")
        await self.storage.set("admin:1", session, 60)
        session.data = "after"

        stored = await self.storage.get("admin:1", StoredSession)
        assert stored.data == "before"

    @pytest.mark.asyncio
    async def test_delete_session(self):
        """Test deleting a session, including a missing one."""
        await self.storage.set("admin:1", StoredSession(id="1", data="x"), 60)
        await self.storage.delete("admin:1")
        await self.storage.delete("admin:never")
        assert not await self.storage.exists("admin:1")

    @pytest.mark.asyncio
    async def test_unreadable_entry_is_discarded(self):
        """Test an entry that no longer validates is dropped."""
        await self.storage.set("admin:1", StoredSession(id="1", data="x"), 60)

        class Other(BaseModel):
            required: int

        assert await self.storage.get("admin:1", Other) is None
        assert not await self.storage.exists("admin:1")

    @pytest.mark.asyncio
    async def test_cleanup_expired(self):
        """Test cleanup removes only expired entries."""
        await self.storage.set("admin:old", StoredSession(id="o", data="x"), 1)
        await self.storage.set("admin:new", StoredSession(id="n", data="x"), 600)

        later = time.time() + 5
        with patch("src.storefront.core.storage.session_storage.time.time", return_value=later):
            removed = await self.storage.cleanup_expired()

        assert removed == 1
        assert await self.storage.exists("admin:new")

    @pytest.mark.asyncio
    async def test_list_keys(self):
        """Test listing keys by glob pattern."""
        await self.storage.set("admin:1", StoredSession(id="1", data="x"), 60)
        await self.storage.set("token:abc", StoredSession(id="1", data="x"), 60)

        assert await self.storage.list_keys("admin:*") == ["admin:1"]

    def test_is_available(self):
        """Test in-memory storage is always available."""
        assert self.storage.is_available()


class TestRedisSessionStorage:
    """Test Redis session storage with a mocked client."""

    def setup_method(self):
        self.redis = AsyncMock()
        self.storage = RedisSessionStorage(self.redis)

    @pytest.mark.asyncio
    async def test_set_uses_ttl(self):
        """Test values are written with SETEX and serialized as JSON."""
        await self.storage.set("admin:1", StoredSession(id="1", data="x"), 120)

        self.redis.setex.assert_awaited_once_with(
            "admin:1", 120, '{"id":"1","data":"x"}'
        )

    @pytest.mark.asyncio
    async def test_get_decodes_bytes(self):
        """Test byte responses are decoded and validated."""
        self.redis.get.return_value = b'{"id":"1","data":"x"}'

        result = await self.storage.get("admin:1", StoredSession)

        assert result == StoredSession(id="1", data="x")

    @pytest.mark.asyncio
    async def test_get_missing(self):
        """Test a missing key returns None."""
        self.redis.get.return_value = None
        assert await self.storage.get("admin:1", StoredSession) is None

    @pytest.mark.asyncio
    async def test_failure_marks_unavailable(self):
        """Test Redis errors surface as RuntimeError and flip availability."""
        self.redis.get.side_effect = ConnectionError("down")

        with pytest.raises(RuntimeError, match="Redis get failed"):
            await self.storage.get("admin:1", StoredSession)
        assert not self.storage.is_available()

    @pytest.mark.asyncio
    async def test_list_keys_scans_until_cursor_zero(self):
        """Test key listing follows the SCAN cursor."""
        self.redis.scan.side_effect = [(5, [b"admin:1"]), (0, ["admin:2"])]

        assert await self.storage.list_keys("admin:*") == ["admin:1", "admin:2"]

    @pytest.mark.asyncio
    async def test_ping(self):
        """Test ping reflects the client's health."""
        assert await self.storage.ping()
        self.redis.ping.side_effect = ConnectionError("down")
        assert not await self.storage.ping()


class TestGetSessionStorage:
    """Backend selection."""

    def setup_method(self):
        _reset_storage()

    def teardown_method(self):
        _reset_storage()

    @pytest.mark.asyncio
    async def test_in_memory_when_redis_disabled(self):
        """Test memory storage is used when Redis is disabled."""
        with with_context(ConfigData(redis=RedisConfig(enabled=False))):
            storage = await get_session_storage()
        assert isinstance(storage, InMemorySessionStorage)

    @pytest.mark.asyncio
    async def test_instance_is_reused(self):
        """Test the storage is created once."""
        with with_context(ConfigData(redis=RedisConfig(enabled=False))):
            first = await get_session_storage()
            second = await get_session_storage()
        assert first is second

    @pytest.mark.asyncio
    async def test_falls_back_when_redis_unreachable(self):
        """Test an unreachable Redis falls back to memory outside production."""
        client = AsyncMock()
        client.ping.side_effect = ConnectionError("down")
        config = ConfigData(redis=RedisConfig(enabled=True, url="redis://localhost:6379/0"))

        with with_context(config), patch("redis.asyncio.from_url", return_value=client):
            storage = await get_session_storage()

        assert isinstance(storage, InMemorySessionStorage)

    @pytest.mark.asyncio
    async def test_uses_redis_when_reachable(self):
        """Test a reachable Redis is used."""
        client = AsyncMock()
        config = ConfigData(redis=RedisConfig(enabled=True, url="redis://localhost:6379/0"))

        with with_context(config), patch("redis.asyncio.from_url", return_value=client):
            storage = await get_session_storage()

        assert isinstance(storage, RedisSessionStorage)
