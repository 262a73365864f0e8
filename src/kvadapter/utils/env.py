"""Environment helper utilities."""

from __future__ import annotations

import os
from typing import Optional


def get_env(name: str, *, default: Optional[str] = None) -> Optional[str]:
    """Return a stripped environment value, treating blanks as unset."""
    raw = os.getenv(name)
    if raw is None:
        return default
    value = raw.strip()
    return value or default


def get_float_env(name: str, *, default: Optional[float] = None) -> Optional[float]:
    """Read a float from the environment."""
    raw = get_env(name)
    if raw is None:
        return default
    try:
        return float(raw)
    except ValueError as exc:
        raise ValueError(f"{name} must be a number, got={raw!r}") from exc
