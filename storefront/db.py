"""
External clients - Supabase and Upstash Redis

Provides lazy singleton instances of:
- Async Supabase client for session checks (Supabase Auth)
- Sync Upstash Redis client for the durable cart slot
"""

from typing import Optional

from supabase import acreate_client, AsyncClient
from upstash_redis import Redis

from storefront import config

_async_supabase_client: Optional[AsyncClient] = None
_sync_redis_client: Optional[Redis] = None


async def get_supabase() -> AsyncClient:
    """
    Get async Supabase client (singleton).

    Raises:
        ValueError: if SUPABASE_URL / SUPABASE_ANON_KEY are not set
    """
    global _async_supabase_client

    if _async_supabase_client is None:
        if not config.SUPABASE_URL or not config.SUPABASE_ANON_KEY:
            raise ValueError("SUPABASE_URL and SUPABASE_ANON_KEY must be set")
        _async_supabase_client = await acreate_client(config.SUPABASE_URL, config.SUPABASE_ANON_KEY)

    return _async_supabase_client


def get_redis_sync() -> Redis:
    """
    Get sync Upstash Redis client (singleton).

    The cart engine persists synchronously, so only the sync client is used.

    Raises:
        ValueError: if UPSTASH_REDIS_REST_URL / UPSTASH_REDIS_REST_TOKEN are not set
    """
    global _sync_redis_client

    if _sync_redis_client is None:
        if not config.UPSTASH_REDIS_REST_URL or not config.UPSTASH_REDIS_REST_TOKEN:
            raise ValueError("UPSTASH_REDIS_REST_URL and UPSTASH_REDIS_REST_TOKEN must be set")
        _sync_redis_client = Redis(url=config.UPSTASH_REDIS_REST_URL, token=config.UPSTASH_REDIS_REST_TOKEN)

    return _sync_redis_client


class RedisKeys:
    """Redis key prefixes for different data types."""

    CART = "cart:"  # cart:{storage_key}

    @staticmethod
    def cart_key(storage_key: str) -> str:
        return f"{RedisKeys.CART}{storage_key}"
