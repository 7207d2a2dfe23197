"""
Key-value storage for per-browser state.

``MemoryStore`` keeps everything in the process and is what tests and local
runs use. ``RedisStore`` is for deployments with more than one worker.
"""
import time
from functools import lru_cache
from typing import Dict, Optional, Tuple

from redis.asyncio import Redis

from app.platform.config import settings


class MemoryStore:
    def __init__(self):
        self._data: Dict[str, Tuple[str, Optional[float]]] = {}

    async def get(self, key: str) -> Optional[str]:
        entry = self._data.get(key)
        if entry is None:
            return None

        value, expiry = entry
        if expiry is not None and time.time() > expiry:
            self._data.pop(key, None)
            return None
        return value

    async def set(self, key: str, value: str, ex: Optional[int] = None) -> None:
        expiry = time.time() + ex if ex else None
        self._data[key] = (value, expiry)

    async def delete(self, key: str) -> None:
        self._data.pop(key, None)

    def clear(self) -> None:
        self._data.clear()


class RedisStore:
    def __init__(self, url: str):
        self.redis = Redis.from_url(
            url,
            encoding="utf-8",
            decode_responses=True
        )

    async def get(self, key: str) -> Optional[str]:
        return await self.redis.get(key)

    async def set(self, key: str, value: str, ex: Optional[int] = None) -> None:
        await self.redis.set(key, value, ex=ex)

    async def delete(self, key: str) -> None:
        await self.redis.delete(key)


@lru_cache
def get_store():
    if settings.SESSION_BACKEND == "redis":
        return RedisStore(settings.REDIS_URL)
    return MemoryStore()
