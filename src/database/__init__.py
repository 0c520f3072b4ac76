"""
Rate store backends.

Use the real Redis store when a Redis URL is configured, else the in-memory
stub. The selection happens here so the API and the scripts agree.
"""

from __future__ import annotations

import logging

from src.database.interfaces import RateStoreClient
from src.utils.config_loader import StoreConfig

logger = logging.getLogger(__name__)


def create_rate_store(cfg: StoreConfig) -> RateStoreClient:
    url = cfg.url
    if url:
        from src.database.redis_real import RedisRateStore

        logger.info("Using Redis rate store at %s", cfg.redacted_url)
        return RedisRateStore(url=url, socket_timeout=cfg.socket_timeout)

    from src.database.redis import RedisRateStore

    logger.info("No Redis configured, using in-memory rate store")
    return RedisRateStore()


__all__ = ["RateStoreClient", "create_rate_store"]
