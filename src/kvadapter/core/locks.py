"""Expiring distributed lock built on a shared key-value store.

The stored value for a lock name is the absolute wall-clock time (seconds since
the epoch) at which the current holder's claim lapses. A stored timestamp in
the past marks a stale lock which the next contender may reclaim with an
atomic swap, without deleting the key first.
"""

from __future__ import annotations

import asyncio
import inspect
import time
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING, Any, AsyncIterator, Awaitable, Callable, Optional, TypeVar, Union

from kvadapter.core.errors import LockTimeout
from kvadapter.core.store import KeyValueStore, parse_expiration
from kvadapter.utils.logging import get_logger

if TYPE_CHECKING:
    from kvadapter.core.settings import Settings


DEFAULT_EXPIRATION = 1.0
DEFAULT_TIMEOUT = 5.0
POLL_INTERVAL = 0.1

T = TypeVar("T")
Action = Callable[[], Union[T, Awaitable[T]]]


def generate_expiration(expires_in: Optional[float]) -> float:
    """Return ``now + expires_in`` seconds; missing, zero or negative values mean 1."""
    if not expires_in or expires_in <= 0:
        expires_in = DEFAULT_EXPIRATION
    return time.time() + float(expires_in)


class LockManager:
    """Polling lock manager. Holds no state between calls besides its defaults."""

    def __init__(
        self,
        store: KeyValueStore,
        *,
        expiration: float = DEFAULT_EXPIRATION,
        timeout: float = DEFAULT_TIMEOUT,
        poll_interval: float = POLL_INTERVAL,
        key_prefix: str = "",
    ) -> None:
        self.store = store
        self.expiration = expiration
        self.timeout = timeout
        self.poll_interval = poll_interval
        self.key_prefix = key_prefix
        self.logger = get_logger("LockManager")

    @classmethod
    def from_settings(cls, store: KeyValueStore, settings: "Settings") -> "LockManager":
        return cls(
            store,
            expiration=settings.lock.expiration_seconds,
            timeout=settings.lock.timeout_seconds,
            poll_interval=settings.lock.poll_interval_seconds,
            key_prefix=settings.store.key_prefix,
        )

    def key_for(self, name: str) -> str:
        return f"{self.key_prefix}{name}"

    async def acquire(
        self,
        name: str,
        *,
        expiration: Optional[float] = None,
        timeout: Optional[float] = None,
    ) -> float:
        """Poll until the lock is ours and return the expiration we stored.

        Raises LockTimeout when ``timeout`` seconds pass without acquiring.
        """
        key = self.key_for(name)
        expires_in = self.expiration if expiration is None else expiration
        timeout = self.timeout if timeout is None else timeout
        start = time.monotonic()

        while time.monotonic() - start < timeout:
            expires_at = generate_expiration(expires_in)
            if await self.store.set_if_absent(key, str(expires_at)):
                self.logger.debug("Acquired lock %s until %.3f", key, expires_at)
                return expires_at

            current = parse_expiration(await self.store.get(key))
            if current < time.time():
                expires_at = generate_expiration(expires_in)
                previous = parse_expiration(await self.store.get_and_set(key, str(expires_at)))
                # Another contender may have swapped in between our read and the swap.
                if previous < time.time():
                    self.logger.debug("Reclaimed stale lock %s until %.3f", key, expires_at)
                    return expires_at

            await asyncio.sleep(self.poll_interval)

        raise LockTimeout(name, timeout)

    async def release(self, name: str, expires_at: float) -> bool:
        """Delete the lock key unless our claim has already lapsed."""
        key = self.key_for(name)
        if expires_at > time.time():
            await self.store.delete(key)
            self.logger.debug("Released lock %s", key)
            return True
        self.logger.debug("Lock %s expired before release; leaving key in place", key)
        return False

    @asynccontextmanager
    async def lock(
        self,
        name: str,
        *,
        expiration: Optional[float] = None,
        timeout: Optional[float] = None,
    ) -> AsyncIterator[float]:
        expires_at = await self.acquire(name, expiration=expiration, timeout=timeout)
        try:
            yield expires_at
        finally:
            await self.release(name, expires_at)

    async def run(
        self,
        name: str,
        action: Action[T],
        *,
        expiration: Optional[float] = None,
        timeout: Optional[float] = None,
    ) -> T:
        """Run ``action`` once while holding ``name`` and return its result."""
        async with self.lock(name, expiration=expiration, timeout=timeout):
            result: Any = action()
            if inspect.isawaitable(result):
                result = await result
            return result
