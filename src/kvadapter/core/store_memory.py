"""In-process key-value store backed by a plain dict."""

from __future__ import annotations

import asyncio
from typing import Any, Dict, Optional

from .store import KeyValueStore


class MemoryStore(KeyValueStore):
    """Dict-backed store; each operation is atomic with respect to other coroutines."""

    def __init__(self, data: Optional[Dict[str, Any]] = None) -> None:
        self.data: Dict[str, Any] = {} if data is None else data
        self._lock = asyncio.Lock()

    async def set_if_absent(self, key: str, value: str) -> bool:
        async with self._lock:
            if key in self.data:
                return False
            self.data[key] = value
            return True

    async def get_and_set(self, key: str, value: str) -> Optional[Any]:
        async with self._lock:
            previous = self.data.get(key)
            self.data[key] = value
            return previous

    async def get(self, key: str) -> Optional[Any]:
        async with self._lock:
            return self.data.get(key)

    async def delete(self, key: str) -> None:
        async with self._lock:
            self.data.pop(key, None)
