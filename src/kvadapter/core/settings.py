"""Runtime settings loader."""

from __future__ import annotations

from pathlib import Path

import yaml
from pydantic import BaseModel, Field, ValidationError

from kvadapter.utils.env import get_env, get_float_env


class LockSettings(BaseModel):
    """Defaults applied by a LockManager when a call does not override them."""

    expiration_seconds: float = Field(default=1.0, gt=0)
    timeout_seconds: float = Field(default=5.0, gt=0)
    poll_interval_seconds: float = Field(default=0.1, gt=0)


class StoreSettings(BaseModel):
    redis_url: str = "redis://localhost:6379/0"
    key_prefix: str = ""  # prepended to every lock name


class Settings(BaseModel):
    store: StoreSettings = Field(default_factory=StoreSettings)
    lock: LockSettings = Field(default_factory=LockSettings)

    @classmethod
    def from_file(cls, path: Path) -> "Settings":
        data = yaml.safe_load(path.read_text()) or {}
        try:
            return cls.model_validate(data)
        except ValidationError as exc:
            raise ValueError(f"Invalid kvadapter settings: {exc}") from exc

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings from ``KVADAPTER_*`` variables, falling back to defaults."""
        store: dict = {}
        lock: dict = {}
        if (url := get_env("KVADAPTER_REDIS_URL")) is not None:
            store["redis_url"] = url
        if (prefix := get_env("KVADAPTER_KEY_PREFIX")) is not None:
            store["key_prefix"] = prefix
        for field, env_name in (
            ("expiration_seconds", "KVADAPTER_LOCK_EXPIRATION"),
            ("timeout_seconds", "KVADAPTER_LOCK_TIMEOUT"),
            ("poll_interval_seconds", "KVADAPTER_LOCK_POLL_INTERVAL"),
        ):
            value = get_float_env(env_name)
            if value is not None:
                lock[field] = value
        try:
            return cls.model_validate({"store": store, "lock": lock})
        except ValidationError as exc:
            raise ValueError(f"Invalid kvadapter settings: {exc}") from exc
