"""Core primitives: store capability, lock manager and settings."""

from .errors import IncompleteAPI, KVAdapterError, LockTimeout
from .locks import LockManager, generate_expiration
from .settings import LockSettings, Settings, StoreSettings
from .store import KeyValueStore, parse_expiration
from .store_memory import MemoryStore
from .store_redis import RedisStore

__all__ = [
    "IncompleteAPI",
    "KVAdapterError",
    "LockTimeout",
    "LockManager",
    "generate_expiration",
    "LockSettings",
    "Settings",
    "StoreSettings",
    "KeyValueStore",
    "parse_expiration",
    "MemoryStore",
    "RedisStore",
]
