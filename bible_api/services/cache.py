"""
Redis Caching Service

Response caching for the public Bible routes.

Features:
- One CacheClient per process, built in the application lifespan
- JSON get/set/delete with TTL
- Deterministic cache key generation
- Graceful degradation: when Redis is disabled or unreachable every read is
  a miss and every write is a no-op

Cache Strategy:
- Successful public responses: Settings.cache_ttl_public (300s)
- Error responses are never cached
- The dataset only changes through seeding, which calls flush_public()
"""

import json
import logging
from collections.abc import Callable
from typing import Any, Optional

import redis
from fastapi import Request, Response
from redis.exceptions import RedisError

from bible_api.config import Settings

logger = logging.getLogger(__name__)

PUBLIC_CACHE_PREFIX = "bible"


# =============================================================================
# Cache Key Generation
# =============================================================================

def make_cache_key(prefix: str, *args, **kwargs) -> str:
    """
    Generate a consistent cache key from prefix and arguments.

    Examples:
        make_cache_key("bible:book", 1) -> "bible:book:1"
        make_cache_key("bible:books", page=1, limit=10) -> "bible:books:limit=10:page=1"

    None values are skipped so absent query parameters do not change the key.
    """
    parts = [prefix]

    for arg in args:
        if arg is not None:
            parts.append(str(arg))

    # Sorted for consistent key generation
    for key in sorted(kwargs.keys()):
        value = kwargs[key]
        if value is not None:
            parts.append(f"{key}={value}")

    return ":".join(parts)


# =============================================================================
# Cache Client
# =============================================================================

class CacheClient:
    """
    JSON cache on top of an optional Redis client.

    A CacheClient built with client=None is a valid, always-missing cache.
    """

    def __init__(self, client: Optional[redis.Redis], default_ttl: int = 300) -> None:
        self.client = client
        self.default_ttl = default_ttl

    @classmethod
    def from_settings(cls, settings: Settings) -> "CacheClient":
        """
        Connect to Redis if caching is enabled.

        Returns a disabled CacheClient when caching is turned off or the
        server does not answer a PING.
        """
        if not settings.cache_enabled:
            logger.info("Response caching disabled by configuration")
            return cls(None, settings.cache_ttl_public)

        try:
            client = redis.from_url(
                settings.redis_url,
                decode_responses=True,  # Return strings instead of bytes
                socket_connect_timeout=5,
                socket_timeout=5,
            )
            client.ping()
            logger.info("Successfully connected to Redis")
            return cls(client, settings.cache_ttl_public)
        except RedisError as e:
            logger.warning(f"Failed to connect to Redis: {e}. Caching disabled.")
            return cls(None, settings.cache_ttl_public)

    @property
    def enabled(self) -> bool:
        return self.client is not None

    def close(self) -> None:
        """Close the Redis connection on shutdown."""
        if self.client is not None:
            self.client.close()
            self.client = None
            logger.info("Redis connection closed")

    # -------------------------------------------------------------------------
    # Core Cache Operations
    # -------------------------------------------------------------------------
    def get(self, key: str) -> Optional[Any]:
        """
        Get a value from the cache.

        Returns:
            Cached value (deserialized from JSON) or None if not found/error
        """
        if self.client is None:
            return None

        try:
            value = self.client.get(key)
            if value is not None:
                logger.debug(f"Cache HIT: {key}")
                return json.loads(value)
            logger.debug(f"Cache MISS: {key}")
            return None
        except RedisError as e:
            logger.warning(f"Cache get error for {key}: {e}")
            return None
        except json.JSONDecodeError as e:
            logger.warning(f"Cache JSON decode error for {key}: {e}")
            return None

    def set(self, key: str, value: Any, ttl: Optional[int] = None) -> bool:
        """
        Set a value in the cache with optional TTL.

        Returns:
            True if successfully cached, False otherwise
        """
        if self.client is None:
            return False

        if ttl is None:
            ttl = self.default_ttl

        try:
            serialized = json.dumps(value, default=str)  # default=str handles UUIDs
            self.client.setex(key, ttl, serialized)
            logger.debug(f"Cache SET: {key} (TTL: {ttl}s)")
            return True
        except RedisError as e:
            logger.warning(f"Cache set error for {key}: {e}")
            return False
        except (TypeError, ValueError) as e:
            logger.warning(f"Cache serialization error for {key}: {e}")
            return False

    def delete(self, key: str) -> bool:
        """Delete a key from the cache."""
        if self.client is None:
            return False

        try:
            self.client.delete(key)
            logger.debug(f"Cache DELETE: {key}")
            return True
        except RedisError as e:
            logger.warning(f"Cache delete error for {key}: {e}")
            return False

    def delete_pattern(self, pattern: str) -> int:
        """
        Delete all keys matching a pattern (supports * wildcard).

        Returns:
            Number of keys deleted
        """
        if self.client is None:
            return 0

        try:
            deleted = 0
            keys = list(self.client.scan_iter(match=pattern))
            if keys:
                deleted = self.client.delete(*keys)
                logger.debug(f"Cache DELETE PATTERN: {pattern} ({deleted} keys)")
            return deleted
        except RedisError as e:
            logger.warning(f"Cache delete pattern error for {pattern}: {e}")
            return 0

    def flush_public(self) -> int:
        """Drop every cached public response (after reseeding)."""
        return self.delete_pattern(f"{PUBLIC_CACHE_PREFIX}:*")

    def stats(self) -> dict:
        """Cache statistics for the health endpoint."""
        if self.client is None:
            return {"status": "disconnected"}

        try:
            info = self.client.info("stats")
            return {
                "status": "connected",
                "hits": info.get("keyspace_hits", 0),
                "misses": info.get("keyspace_misses", 0),
                "keys": self.client.dbsize(),
            }
        except RedisError:
            return {"status": "error"}


def get_cache(request: Request) -> CacheClient:
    """FastAPI dependency returning the process-wide CacheClient."""
    return request.app.state.cache


def serve_cached(
    cache: CacheClient,
    key: str,
    response: Response,
    build: Callable[[], dict],
) -> dict:
    """
    Return the cached body for key, or build, cache and return it.

    Sets X-Cache: HIT or MISS. build() raising (validation, not found,
    storage) leaves the cache untouched.
    """
    cached = cache.get(key)
    if cached is not None:
        response.headers["X-Cache"] = "HIT"
        return cached

    body = build()
    cache.set(key, body)
    response.headers["X-Cache"] = "MISS"
    return body
