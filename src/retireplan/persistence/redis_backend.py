"""Redis cache for catalog lookups that are expensive to recompute.

The DynamoDB catalog keeps its year index (a full-table scan) here under
``limits:years``.
"""

from __future__ import annotations

import logging

import redis

from retireplan.core.config import RedisConfig
from retireplan.core.exceptions import CacheError

logger = logging.getLogger(__name__)


class RedisCacheBackend:
    """ICacheBackend over a Redis connection described by :class:`RedisConfig`."""

    def __init__(self, config: RedisConfig | None = None) -> None:
        config = config or RedisConfig()
        self._client = redis.Redis(
            host=config.host, port=config.port, db=config.db,
            decode_responses=config.decode_responses,
        )
        logger.debug("Redis cache at %s:%d/%d", config.host, config.port, config.db)

    def get(self, key: str) -> str | None:
        try:
            return self._client.get(key)
        except redis.RedisError as exc:
            raise CacheError(f"Redis GET failed for key={key!r}: {exc}") from exc

    def setex(self, key: str, ttl: int, value: str) -> None:
        try:
            self._client.setex(key, ttl, value)
        except redis.RedisError as exc:
            raise CacheError(f"Redis SETEX failed for key={key!r}: {exc}") from exc

    def delete(self, key: str) -> None:
        try:
            self._client.delete(key)
        except redis.RedisError as exc:
            raise CacheError(f"Redis DELETE failed for key={key!r}: {exc}") from exc
