"""Pluggable limit-catalog backends behind Protocol interfaces."""

from __future__ import annotations

import logging

from retireplan.core.config import AppSettings
from retireplan.persistence.dynamodb_backend import DynamoDBLimitCatalog
from retireplan.persistence.memory_backend import MemoryLimitCatalog
from retireplan.persistence.redis_backend import RedisCacheBackend
from retireplan.persistence.seed import load_seed_file

logger = logging.getLogger(__name__)


def create_persistence(settings: AppSettings | None = None):
    """Create wired-up persistence backends from application settings.

    Returns:
        Tuple of (catalog, cache). ``cache`` is None unless Redis is enabled.
    """
    if settings is None:
        settings = AppSettings()

    cache = None
    if settings.redis.enabled:
        cache = RedisCacheBackend(settings.redis)

    if settings.catalog_backend == "dynamodb":
        catalog = DynamoDBLimitCatalog(
            table_suffix=settings.dynamodb.table_suffix,
            region=settings.dynamodb.region,
            endpoint_url=settings.dynamodb.endpoint_url,
            cache=cache,
            cache_ttl=settings.redis.cache_ttl,
        )
    else:
        catalog = MemoryLimitCatalog()
        if settings.seed_path:
            load_seed_file(catalog, settings.seed_path)

    logger.info("Using %s limit catalog (cache %s)",
                settings.catalog_backend, "on" if cache is not None else "off")
    return catalog, cache
