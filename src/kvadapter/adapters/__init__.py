"""Backend adapters."""

from .base import Adapter
from .adapter_memory import MemoryAdapter
from .adapter_redis import RedisAdapter

__all__ = ["Adapter", "MemoryAdapter", "RedisAdapter"]
