"""Abstract key-value store capability used by the lock manager."""

from __future__ import annotations

import abc
from typing import Any, Optional


class KeyValueStore(abc.ABC):
    """Atomic primitives a backend must offer to host a lock."""

    @abc.abstractmethod
    async def set_if_absent(self, key: str, value: str) -> bool:  # pragma: no cover - interface
        """Set ``key`` only when it does not exist. Return True when set."""
        raise NotImplementedError

    @abc.abstractmethod
    async def get_and_set(self, key: str, value: str) -> Optional[Any]:  # pragma: no cover - interface
        """Atomically replace ``key`` and return the previous value, if any."""
        raise NotImplementedError

    @abc.abstractmethod
    async def get(self, key: str) -> Optional[Any]:  # pragma: no cover - interface
        raise NotImplementedError

    @abc.abstractmethod
    async def delete(self, key: str) -> None:  # pragma: no cover - interface
        raise NotImplementedError


def parse_expiration(raw: Any) -> float:
    """Parse a stored expiration timestamp; missing or garbage values count as 0."""
    if raw is None:
        return 0.0
    try:
        return float(raw)
    except (TypeError, ValueError):
        return 0.0
