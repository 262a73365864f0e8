"""Pluggable key-value adapters with an expiring distributed lock."""

from .core.errors import IncompleteAPI, KVAdapterError, LockTimeout
from .core.locks import LockManager

__all__ = [
    "IncompleteAPI",
    "KVAdapterError",
    "LockManager",
    "LockTimeout",
    "__version__",
]

__version__ = "0.1.0"
