"""Redis store for caching and distributed locks.

Handles:
- Caching with TTL policies
- Distributed locks (serialize read-modify-write per cart)
- Atomic operations

TTL policies:
- Carts: settings.cart_cache_ttl_seconds (default 1 day), refreshed on every write
- Cart locks: settings.cart_lock_ttl_seconds (default 10 seconds)
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
import asyncio
import json
import logging
import time
from typing import Any
from uuid import uuid4

from pydantic import BaseModel, ValidationError
import redis.asyncio as redis
from redis.exceptions import RedisError

from storefront.errors import CartBusyError, StoreUnavailableError
from storefront.settings import get_settings
from storefront.stores.protocols import ModelT

# Key prefixes
PREFIX_CART = "cart:"
PREFIX_LOCK = "lock:"

# Delete the lock only if we still own it (compare token, then DEL).
_RELEASE_LOCK_SCRIPT = """
if redis.call("get", KEYS[1]) == ARGV[1] then
    return redis.call("del", KEYS[1])
end
return 0
"""

# Redis client (initialized on startup)
_redis: redis.Redis | None = None
logger = logging.getLogger("storefront")


async def init_redis(url: str | None = None) -> None:
    """Initialize Redis connection."""
    global _redis
    settings = get_settings()
    _redis = redis.from_url(
        url or settings.redis_url,
        encoding="utf-8",
        decode_responses=True,
        socket_connect_timeout=5,
        socket_timeout=5,
    )
    # Validate connectivity early (especially for `rediss://` in production).
    await _redis.ping()
    logger.info("Redis connected")


async def close_redis() -> None:
    """Close Redis connection."""
    global _redis
    if _redis:
        await _redis.aclose()
        _redis = None


def _get_redis() -> redis.Redis:
    """Get Redis client instance."""
    if _redis is None:
        raise RuntimeError("Redis not initialized. Call init_redis() first.")
    return _redis


# ============================================================
# Generic cache operations
# ============================================================


async def cache_get(key: str) -> str | None:
    """Get value from cache.

    Args:
        key: Cache key.

    Returns:
        Cached value or None if not found.
    """
    return await _get_redis().get(key)


async def cache_set(key: str, value: str, ttl: int) -> None:
    """Set value in cache with TTL.

    Args:
        key: Cache key.
        value: Value to cache.
        ttl: Time-to-live in seconds.
    """
    await _get_redis().setex(key, ttl, value)


async def cache_delete(key: str) -> None:
    """Delete value from cache.

    Args:
        key: Cache key.
    """
    await _get_redis().delete(key)


async def cache_get_json(key: str) -> dict[str, Any] | None:
    """Get JSON value from cache.

    Args:
        key: Cache key.

    Returns:
        Parsed JSON dict or None if not found.
    """
    value = await cache_get(key)
    if value:
        return json.loads(value)
    return None


async def cache_set_json(key: str, value: dict[str, Any], ttl: int) -> None:
    """Set JSON value in cache.

    Args:
        key: Cache key.
        value: Dict to cache as JSON.
        ttl: Time-to-live in seconds.
    """
    await cache_set(key, json.dumps(value), ttl)


# ============================================================
# Distributed locks
# ============================================================


async def acquire_lock(key: str, token: str, ttl: int) -> bool:
    """Acquire a distributed lock.

    Args:
        key: Lock key (e.g., cart id).
        token: Owner token, checked again on release.
        ttl: Lock timeout in seconds.

    Returns:
        True if lock acquired, False if already locked.
    """
    # SET NX (only if not exists) with TTL
    result = await _get_redis().set(f"{PREFIX_LOCK}{key}", token, nx=True, ex=ttl)
    return result is not None


async def release_lock(key: str, token: str) -> bool:
    """Release a distributed lock if `token` still owns it.

    Returns:
        True if the lock was deleted, False if it had expired or changed owner.
    """
    released = await _get_redis().eval(_RELEASE_LOCK_SCRIPT, 1, f"{PREFIX_LOCK}{key}", token)
    return bool(released)


# ============================================================
# Cache gateway
# ============================================================


class RedisCache:
    """Cache gateway storing pydantic models as JSON under a key prefix."""

    def __init__(
        self,
        prefix: str = PREFIX_CART,
        *,
        ttl: int | None = None,
        lock_ttl: int | None = None,
        lock_wait: float | None = None,
        lock_poll: float | None = None,
    ) -> None:
        settings = get_settings()
        self.prefix = prefix
        self.ttl = ttl or settings.cart_cache_ttl_seconds
        self.lock_ttl = lock_ttl or settings.cart_lock_ttl_seconds
        self.lock_wait = settings.cart_lock_wait_seconds if lock_wait is None else lock_wait
        self.lock_poll = lock_poll or settings.cart_lock_poll_seconds

    def _key(self, key: str) -> str:
        return f"{self.prefix}{key}"

    async def get_item(self, key: str, model: type[ModelT]) -> ModelT | None:
        try:
            payload = await cache_get_json(self._key(key))
        except RedisError as exc:
            raise StoreUnavailableError("Cache unavailable", detail={"key": key}) from exc
        if payload is None:
            logger.debug(f"Cache miss: {self._key(key)}")
            return None
        try:
            return model.model_validate(payload)
        except ValidationError:
            # Stale shape from an older deploy; treat as a miss.
            logger.warning(f"Discarding unreadable cache entry {self._key(key)}")
            return None

    async def set_item(self, key: str, value: BaseModel) -> None:
        try:
            await cache_set_json(self._key(key), value.model_dump(mode="json", by_alias=True), self.ttl)
        except RedisError as exc:
            raise StoreUnavailableError("Cache unavailable", detail={"key": key}) from exc

    async def delete_item(self, key: str) -> None:
        try:
            await cache_delete(self._key(key))
        except RedisError as exc:
            raise StoreUnavailableError("Cache unavailable", detail={"key": key}) from exc

    @asynccontextmanager
    async def lock(self, key: str) -> AsyncGenerator[None, None]:
        """Hold the lock for `key` for the duration of the block.

        Polls every `lock_poll` seconds for up to `lock_wait` seconds.

        Raises:
            CartBusyError: If the lock is still held by someone else after `lock_wait`.
        """
        lock_key = self._key(key)
        token = uuid4().hex
        deadline = time.monotonic() + self.lock_wait
        try:
            while not await acquire_lock(lock_key, token, self.lock_ttl):
                if time.monotonic() >= deadline:
                    logger.warning(f"Gave up waiting for lock {lock_key}")
                    raise CartBusyError(f"{key} is locked by another request", detail={"key": key})
                await asyncio.sleep(self.lock_poll)
        except RedisError as exc:
            raise StoreUnavailableError("Cache unavailable", detail={"key": key}) from exc

        try:
            yield
        finally:
            try:
                if not await release_lock(lock_key, token):
                    logger.warning(f"Lock {lock_key} expired before release")
            except RedisError as exc:
                # TTL clears it.
                logger.warning(f"Failed to release lock {lock_key}: {exc}")
