"""Lock settings loader."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Optional

import yaml
from pydantic import BaseModel, Field, ValidationError

from brokerlock.utils.env import get_float_env


DEFAULT_REDIS_URL = "redis://localhost:6379/0"


class LockSettings(BaseModel):
    redis_url: str = DEFAULT_REDIS_URL
    key_prefix: str = ""
    default_ttl_seconds: float = Field(default=30.0, gt=0)
    operation_timeout_seconds: Optional[float] = Field(default=None, gt=0)
    socket_timeout_seconds: Optional[float] = Field(default=None, gt=0)

    @classmethod
    def _validate(cls, data: dict) -> "LockSettings":
        try:
            return cls.model_validate(data)
        except ValidationError as exc:
            raise ValueError(f"Invalid lock settings: {exc}") from exc

    @classmethod
    def from_file(cls, path: Path) -> "LockSettings":
        data = yaml.safe_load(path.read_text()) or {}
        # allow the settings to live under a "brokerlock:" section of a larger file
        if isinstance(data, dict) and isinstance(data.get("brokerlock"), dict):
            data = data["brokerlock"]
        return cls._validate(data)

    @classmethod
    def from_env(cls) -> "LockSettings":
        data: dict = {}
        if os.getenv("REDIS_URL"):
            data["redis_url"] = os.environ["REDIS_URL"]
        if os.getenv("BROKERLOCK_KEY_PREFIX") is not None:
            data["key_prefix"] = os.environ["BROKERLOCK_KEY_PREFIX"]
        for field_name, env_name in (
            ("default_ttl_seconds", "BROKERLOCK_DEFAULT_TTL"),
            ("operation_timeout_seconds", "BROKERLOCK_TIMEOUT"),
            ("socket_timeout_seconds", "BROKERLOCK_SOCKET_TIMEOUT"),
        ):
            value = get_float_env(env_name)
            if value is not None:
                data[field_name] = value
        return cls._validate(data)
