"""Adapter interface over a pluggable key-value client.

Each backend is a concrete subclass implementing ``read``, ``write``,
``delete`` and ``clear`` plus a ``store`` exposing the atomic primitives the
lock manager needs. Conveniences such as ``fetch`` and locking are shared.
"""

from __future__ import annotations

import abc
import inspect
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Callable, Dict, Optional

from kvadapter.core.errors import IncompleteAPI
from kvadapter.core.locks import Action, LockManager, T
from kvadapter.core.settings import Settings
from kvadapter.core.store import KeyValueStore


REQUIRED_METHODS = ("read", "write", "delete", "clear")


class Adapter(abc.ABC):
    """Base adapter; equal to another adapter with the same name and client."""

    name: str = "adapter"

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        missing = []
        for method in REQUIRED_METHODS:
            impl = getattr(cls, method, None)
            if impl is None or getattr(impl, "__isabstractmethod__", False):
                missing.append(method)
        if missing:
            raise IncompleteAPI(missing)

    def __init__(
        self,
        client: Any,
        *,
        options: Optional[Dict[str, Any]] = None,
        settings: Optional[Settings] = None,
    ) -> None:
        self.client = client
        self.options: Dict[str, Any] = dict(options or {})
        self._settings = settings
        self._locks: Optional[LockManager] = None

    @abc.abstractmethod
    async def read(self, key: str) -> Any: ...

    @abc.abstractmethod
    async def write(self, key: str, value: Any) -> None: ...

    @abc.abstractmethod
    async def delete(self, key: str) -> None: ...

    @abc.abstractmethod
    async def clear(self) -> None: ...

    @property
    @abc.abstractmethod
    def store(self) -> KeyValueStore:
        """Store used to host locks for this adapter's client."""

    @property
    def locks(self) -> LockManager:
        if self._locks is None:
            if self._settings is not None:
                self._locks = LockManager.from_settings(self.store, self._settings)
            else:
                self._locks = LockManager(self.store)
        return self._locks

    async def fetch(
        self,
        key: str,
        default: Any = None,
        factory: Optional[Callable[[str], Any]] = None,
    ) -> Any:
        """Return the stored value, else ``factory(key)`` when given, else ``default``."""
        value = await self.read(key)
        if value is not None:
            return value
        if factory is None:
            return default
        result = factory(key)
        if inspect.isawaitable(result):
            result = await result
        return result

    async def key_exists(self, key: str) -> bool:
        return await self.read(key) is not None

    async def read_multiple(self, *keys: str) -> Dict[str, Any]:
        return {key: await self.read(key) for key in keys}

    @asynccontextmanager
    async def lock(
        self,
        name: str,
        *,
        expiration: Optional[float] = None,
        timeout: Optional[float] = None,
    ) -> AsyncIterator[float]:
        async with self.locks.lock(name, expiration=expiration, timeout=timeout) as expires_at:
            yield expires_at

    async def run_locked(
        self,
        name: str,
        action: Action[T],
        *,
        expiration: Optional[float] = None,
        timeout: Optional[float] = None,
    ) -> T:
        return await self.locks.run(name, action, expiration=expiration, timeout=timeout)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Adapter):
            return NotImplemented
        return self.name == other.name and self.client == other.client

    def __hash__(self) -> int:
        return hash(self.name)

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} name={self.name!r} client={self.client!r}>"
