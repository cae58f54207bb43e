"""
Redis Client - Upstash

Provides a singleton sync Upstash Redis client used by ``RedisStore``.
"""

from typing import Optional

from upstash_redis import Redis

from cartkit import config
from cartkit.errors import EnvironmentUnavailable, ERROR_REDIS_CREDENTIALS


_sync_redis_client: Optional[Redis] = None


def get_redis_sync() -> Redis:
    """
    Get sync Upstash Redis client (singleton).

    Uses standard Upstash env var names:
    - UPSTASH_REDIS_REST_URL
    - UPSTASH_REDIS_REST_TOKEN
    """
    global _sync_redis_client

    if _sync_redis_client is None:
        if not config.UPSTASH_REDIS_REST_URL or not config.UPSTASH_REDIS_REST_TOKEN:
            raise EnvironmentUnavailable(ERROR_REDIS_CREDENTIALS)
        _sync_redis_client = Redis(
            url=config.UPSTASH_REDIS_REST_URL,
            token=config.UPSTASH_REDIS_REST_TOKEN,
        )

    return _sync_redis_client


class RedisKeys:
    """Redis key prefixes."""

    CART = "cart:"  # cart:{storage_key}

    @staticmethod
    def cart_key(storage_key: str) -> str:
        return f"{RedisKeys.CART}{storage_key}"
