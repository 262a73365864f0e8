"""Adapter over a plain in-process dict."""

from __future__ import annotations

from typing import Any, Dict, Optional

from kvadapter.core.settings import Settings
from kvadapter.core.store import KeyValueStore
from kvadapter.core.store_memory import MemoryStore

from .base import Adapter


class MemoryAdapter(Adapter):
    name = "memory"

    def __init__(
        self,
        client: Optional[Dict[str, Any]] = None,
        *,
        options: Optional[Dict[str, Any]] = None,
        settings: Optional[Settings] = None,
    ) -> None:
        client = {} if client is None else client
        super().__init__(client, options=options, settings=settings)
        self._store = MemoryStore(client)

    @property
    def store(self) -> KeyValueStore:
        return self._store

    async def read(self, key: str) -> Any:
        return self.client.get(key)

    async def write(self, key: str, value: Any) -> None:
        self.client[key] = value

    async def delete(self, key: str) -> None:
        self.client.pop(key, None)

    async def clear(self) -> None:
        self.client.clear()
