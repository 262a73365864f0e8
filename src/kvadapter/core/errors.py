"""Exceptions raised by kvadapter."""

from __future__ import annotations

from typing import Iterable


class KVAdapterError(Exception):
    """Base class for package errors."""


class LockTimeout(KVAdapterError):
    """A lock could not be acquired within the allotted time."""

    def __init__(self, name: str, timeout: float) -> None:
        self.name = name
        self.timeout = timeout
        super().__init__(f"Timeout on lock {name} exceeded {timeout} sec")


class IncompleteAPI(KVAdapterError):
    """An adapter does not implement every required method."""

    def __init__(self, methods: Iterable[str]) -> None:
        self.methods = sorted(methods)
        super().__init__(f"Missing methods needed to complete API ({', '.join(self.methods)})")
