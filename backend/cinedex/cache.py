"""Redis-based cache for scraped IMDb records."""
import hashlib
import json
import logging
from typing import Any, Optional

import redis

from cinedex.config import settings
from cinedex.scraper.parsing import parse_title_id

logger = logging.getLogger(__name__)


class CacheManager:
    """Redis cache manager with automatic JSON serialization."""

    def __init__(self, url: Optional[str] = None):
        """Initialize Redis connection settings."""
        self._url = url or settings.redis_url
        self._redis = None
        self._enabled = True

    @property
    def redis(self) -> redis.Redis:
        """Get Redis client, creating connection if needed."""
        if self._redis is None:
            try:
                client = redis.from_url(
                    self._url,
                    decode_responses=True,
                    socket_connect_timeout=5,
                    socket_timeout=5
                )
                client.ping()
                self._redis = client
                logger.info("[Cache] Connected to Redis")
            except redis.RedisError as e:
                logger.warning(f"[Cache] Redis connection failed: {e}")
                self._enabled = False
                self._redis = DummyRedis()
        return self._redis

    def get(self, key: str) -> Optional[Any]:
        """Get value from cache.

        Args:
            key: Cache key

        Returns:
            Cached value or None if not found/expired
        """
        if not self._enabled:
            return None

        try:
            value = self.redis.get(key)
            if value:
                return json.loads(value)
            return None
        except (redis.RedisError, ValueError) as e:
            logger.error(f"[Cache] Error getting key {key}: {e}")
            return None

    def set(self, key: str, value: Any, ttl: int = 300) -> bool:
        """Set value in cache with TTL.

        Args:
            key: Cache key
            value: Value to cache (must be JSON serializable)
            ttl: Time to live in seconds

        Returns:
            True if successful, False otherwise
        """
        if not self._enabled:
            return False

        try:
            serialized = json.dumps(value)
            self.redis.setex(key, ttl, serialized)
            return True
        except (redis.RedisError, TypeError, ValueError) as e:
            logger.error(f"[Cache] Error setting key {key}: {e}")
            return False

    def delete(self, key: str) -> bool:
        """Delete key from cache.

        Returns:
            True if a key was removed
        """
        if not self._enabled:
            return False

        try:
            return bool(self.redis.delete(key))
        except redis.RedisError as e:
            logger.error(f"[Cache] Error deleting key {key}: {e}")
            return False

    def delete_pattern(self, pattern: str) -> int:
        """Delete all keys matching a pattern.

        Args:
            pattern: Key pattern (e.g., "title:*")

        Returns:
            Number of keys deleted
        """
        if not self._enabled:
            return 0

        try:
            keys = self.redis.keys(pattern)
            if keys:
                return self.redis.delete(*keys)
            return 0
        except redis.RedisError as e:
            logger.error(f"[Cache] Error deleting pattern {pattern}: {e}")
            return 0

    def get_stats(self) -> dict:
        """Get cache statistics."""
        if not self._enabled:
            return {"enabled": False}

        try:
            info = self.redis.info("stats")
            return {
                "enabled": True,
                "title_keys": len(self.redis.keys("title:*")),
                "trending_keys": len(self.redis.keys("trending:*")),
                "hits": info.get("keyspace_hits", 0),
                "misses": info.get("keyspace_misses", 0),
                "hit_rate": self._calculate_hit_rate(
                    info.get("keyspace_hits", 0),
                    info.get("keyspace_misses", 0)
                )
            }
        except redis.RedisError as e:
            logger.error(f"[Cache] Error getting stats: {e}")
            return {"enabled": False, "error": str(e)}

    @staticmethod
    def _calculate_hit_rate(hits: int, misses: int) -> float:
        """Hit rate as percentage (0-100)."""
        total = hits + misses
        if total == 0:
            return 0.0
        return (hits / total) * 100


class DummyRedis:
    """Dummy Redis client that does nothing (used when Redis is unavailable)."""

    def get(self, key):
        return None

    def setex(self, key, ttl, value):
        pass

    def delete(self, *keys):
        return 0

    def keys(self, pattern):
        return []

    def info(self, section):
        return {}

    def ping(self):
        return True


def _url_hash(url: str) -> str:
    return hashlib.md5(url.strip().encode()).hexdigest()


def title_cache_key(url_or_id: str) -> str:
    """Cache key for a title page, by ``tt`` id when one can be found."""
    value = url_or_id.strip()
    if value.startswith("tt") and value[2:].isdigit():
        return f"title:{value}"
    title_id = parse_title_id(value)
    return f"title:{title_id or _url_hash(value)}"


def trending_cache_key(url: str) -> str:
    return f"trending:{_url_hash(url)}"


# Global cache instance
cache = CacheManager()
