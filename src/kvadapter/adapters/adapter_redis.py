"""Adapter over ``redis.asyncio.Redis`` storing JSON-encoded values."""

from __future__ import annotations

import json
from typing import Any, Dict, Optional

from redis.asyncio import Redis

from kvadapter.core.settings import Settings
from kvadapter.core.store import KeyValueStore
from kvadapter.core.store_redis import RedisStore

from .base import Adapter


class RedisAdapter(Adapter):
    name = "redis"

    def __init__(
        self,
        client: Redis,
        *,
        options: Optional[Dict[str, Any]] = None,
        settings: Optional[Settings] = None,
    ) -> None:
        super().__init__(client, options=options, settings=settings)
        self._store = RedisStore(client)

    @classmethod
    def from_settings(cls, settings: Settings) -> "RedisAdapter":
        return cls(Redis.from_url(settings.store.redis_url), settings=settings)

    @property
    def store(self) -> KeyValueStore:
        return self._store

    async def read(self, key: str) -> Any:
        """Return the JSON-decoded value, or the raw bytes when the key holds non-JSON data."""
        raw = await self.client.get(key)
        if raw is None:
            return None
        try:
            return json.loads(raw)
        except ValueError:
            return raw

    async def write(self, key: str, value: Any) -> None:
        await self.client.set(key, json.dumps(value))

    async def delete(self, key: str) -> None:
        await self.client.delete(key)

    async def clear(self) -> None:
        await self.client.flushdb()

    async def close(self) -> None:
        await self.client.aclose()
