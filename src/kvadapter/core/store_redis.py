"""Redis-backed store using SETNX / GETSET semantics."""

from __future__ import annotations

from typing import Any, Optional

from redis.asyncio import Redis

from .store import KeyValueStore


class RedisStore(KeyValueStore):
    def __init__(self, redis: Redis) -> None:
        self._redis = redis

    async def set_if_absent(self, key: str, value: str) -> bool:
        return bool(await self._redis.setnx(key, value))

    async def get_and_set(self, key: str, value: str) -> Optional[Any]:
        return await self._redis.getset(key, value)

    async def get(self, key: str) -> Optional[Any]:
        return await self._redis.get(key)

    async def delete(self, key: str) -> None:
        await self._redis.delete(key)

    async def close(self) -> None:
        await self._redis.aclose()
