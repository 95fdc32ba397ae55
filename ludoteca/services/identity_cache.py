# ludoteca/services/identity_cache.py
import json
import logging
import time
from typing import Any, Dict, Optional, Tuple

import redis.asyncio as redis
from redis.exceptions import RedisError

from ludoteca.config import settings

logger = logging.getLogger(__name__)


class InMemoryIdentityCache:
    def __init__(self) -> None:
        self._values: Dict[str, Tuple[Dict[str, Any], float]] = {}

    async def get(self, token: str) -> Optional[Dict[str, Any]]:
        entry = self._values.get(token)
        if entry is None:
            return None
        value, expires_at = entry
        if time.time() >= expires_at:
            del self._values[token]
            return None
        return value

    async def set(self, token: str, value: Dict[str, Any], ttl_seconds: int) -> None:
        self._values[token] = (value, time.time() + ttl_seconds)

    async def delete(self, token: str) -> None:
        self._values.pop(token, None)


class RedisIdentityCache:
    def __init__(self, redis_client: Any, prefix: str = "ludoteca:identity") -> None:
        self._redis = redis_client
        self._prefix = prefix.rstrip(":")

    def _key(self, token: str) -> str:
        return f"{self._prefix}:{token}"

    async def get(self, token: str) -> Optional[Dict[str, Any]]:
        raw = await self._redis.get(self._key(token))
        if not raw:
            return None
        try:
            return json.loads(raw)
        except ValueError:
            logger.warning("Dropping unreadable identity cache entry for %s...", token[:8])
            await self.delete(token)
            return None

    async def set(self, token: str, value: Dict[str, Any], ttl_seconds: int) -> None:
        await self._redis.set(self._key(token), json.dumps(value), ex=ttl_seconds)

    async def delete(self, token: str) -> None:
        await self._redis.delete(self._key(token))


async def build_identity_cache(redis_url: Optional[str] = None):
    """
    Redis when REDIS_URL is set and answers a ping, in-memory otherwise.

    Logs which backend is used and why.
    """
    redis_url = redis_url if redis_url is not None else settings.REDIS_URL

    if not redis_url:
        logger.info("Identity cache backend: In-memory (REDIS_URL not set)")
        return InMemoryIdentityCache()

    client = redis.from_url(redis_url, decode_responses=True)
    try:
        await client.ping()
    except (RedisError, OSError) as e:
        logger.warning(
            "Redis configured (REDIS_URL set) but ping failed; falling back to in-memory (%s)",
            e.__class__.__name__,
        )
        return InMemoryIdentityCache()

    logger.info("Identity cache backend: Redis")
    return RedisIdentityCache(client)
