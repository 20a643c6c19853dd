"""Redis-based cache service.

Provides async Redis caching with TTL support for plan lookups. Every
operation degrades to a miss (or no-op) when Redis is unreachable; a single
reconnect is attempted on connection errors.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Awaitable, Callable
from typing import Any, TypeVar

import redis.asyncio as redis

from contentflow.core.config import Settings, get_settings

logger = logging.getLogger(__name__)

T = TypeVar("T")


class CacheService:
    """Async Redis cache service with TTL support.

    Call connect() at startup and disconnect() at shutdown (see lifespan).
    """

    def __init__(
        self,
        redis_client: redis.Redis | None = None,
        settings: Settings | None = None,
    ) -> None:
        """Initialize cache service.

        Args:
            redis_client: Optional Redis client for testing or DI.
            settings: Optional settings; defaults to get_settings().
        """
        self.redis = redis_client
        self.settings = settings or get_settings()
        self._connected = redis_client is not None

    async def connect(self) -> None:
        """Establish Redis connection. Call on app startup."""
        if self.redis is not None:
            return
        password = self.settings.redis_password
        try:
            self.redis = redis.Redis(
                host=self.settings.redis_host,
                port=self.settings.redis_port,
                db=self.settings.redis_db,
                password=password.get_secret_value() if password else None,
                decode_responses=True,
                socket_connect_timeout=5,
                socket_keepalive=True,
            )
            await self.redis.ping()
            self._connected = True
            logger.info(
                "Redis cache connected: %s:%s",
                self.settings.redis_host,
                self.settings.redis_port,
            )
        except (redis.ConnectionError, redis.TimeoutError) as e:
            logger.warning("Redis connection failed: %s. Cache disabled.", e)
            self._connected = False
            self.redis = None

    async def disconnect(self) -> None:
        """Close Redis connection. Call on app shutdown."""
        if self.redis:
            await self.redis.aclose()
            self.redis = None
            self._connected = False
            logger.info("Redis cache disconnected")

    async def _reconnect(self) -> bool:
        if self.redis is not None:
            try:
                await self.redis.aclose()
            except redis.RedisError:
                logger.debug("Ignoring error while closing stale Redis client")
        self.redis = None
        self._connected = False
        await self.connect()
        return self._connected

    def is_available(self) -> bool:
        """Return True if Redis is connected and usable."""
        return self._connected and self.redis is not None

    async def _run(
        self,
        op: str,
        key: str,
        call: Callable[[redis.Redis], Awaitable[T]],
        default: T,
    ) -> T:
        """Run call against Redis, retrying once after a reconnect; default on failure."""
        if not self.is_available() or self.redis is None:
            return default
        try:
            return await call(self.redis)
        except (redis.ConnectionError, redis.TimeoutError):
            if await self._reconnect() and self.redis is not None:
                try:
                    return await call(self.redis)
                except redis.RedisError:
                    logger.exception("Cache %s error for %s after reconnect", op, key)
                    return default
            logger.warning("Cache %s unavailable for %s (Redis disconnected)", op, key)
            return default
        except redis.RedisError:
            logger.exception("Cache %s error for %s", op, key)
            return default

    async def get(self, key: str) -> Any | None:
        """Return cached value (JSON-deserialized) or None if missing/unavailable."""

        async def _get(client: redis.Redis) -> Any | None:
            value = await client.get(key)
            if value is None:
                logger.debug("Cache MISS: %s", key)
                return None
            logger.debug("Cache HIT: %s", key)
            return json.loads(value)

        return await self._run("get", key, _get, None)

    async def set(self, key: str, value: Any, ttl: int = 300) -> bool:
        """Store JSON-serializable value with TTL in seconds. Returns True on success."""
        serialized = json.dumps(value)

        async def _set(client: redis.Redis) -> bool:
            await client.setex(key, ttl, serialized)
            logger.debug("Cache SET: %s (TTL: %ss)", key, ttl)
            return True

        return await self._run("set", key, _set, False)

    async def delete(self, key: str) -> bool:
        """Remove key from cache. Returns True if the command ran."""

        async def _delete(client: redis.Redis) -> bool:
            await client.delete(key)
            logger.debug("Cache DELETE: %s", key)
            return True

        return await self._run("delete", key, _delete, False)

    async def delete_pattern(self, pattern: str) -> int:
        """Delete all keys matching pattern using SCAN + batched UNLINK (non-blocking)."""
        chunk_size = 500

        async def _delete_pattern(client: redis.Redis) -> int:
            deleted = 0
            chunk: list[str] = []
            async for key in client.scan_iter(match=pattern):
                chunk.append(key)
                if len(chunk) >= chunk_size:
                    deleted += int(await client.unlink(*chunk) or 0)
                    chunk = []
            if chunk:
                deleted += int(await client.unlink(*chunk) or 0)
            if deleted > 0:
                logger.info("Cache INVALIDATE: %s (%s keys)", pattern, deleted)
            return deleted

        return await self._run("delete_pattern", pattern, _delete_pattern, 0)
