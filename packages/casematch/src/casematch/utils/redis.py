"""Process-wide Redis client for interest event publishing and streaming."""

from typing import Optional
import redis.asyncio as redis

_client: Optional[redis.Redis] = None


async def get_redis_client(url: Optional[str] = None) -> redis.Redis:
    """Return the shared Redis client, creating it on first use.

    ``url`` only matters for that first call; afterwards the existing
    connection pool is reused. Falls back to ``settings.REDIS_URL``.
    """
    global _client

    if _client is None:
        from ..config import settings
        _client = redis.from_url(url or settings.REDIS_URL, decode_responses=True)

    return _client


async def close_redis():
    """Release the shared client's connection pool."""
    global _client

    if _client is not None:
        await _client.aclose()
        _client = None


__all__ = ["get_redis_client", "close_redis"]
