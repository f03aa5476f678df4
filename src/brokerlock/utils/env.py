"""Environment helper utilities."""

from __future__ import annotations

import logging
import os
from typing import Optional


_FALSE_VALUES = {"0", "false", "no", "off"}


def get_bool_env(name: str, *, default: bool = False) -> bool:
    """Return True/False for an environment flag."""
    raw = os.getenv(name)
    if raw is None:
        return default
    value = raw.strip().lower()
    if not value:
        return default
    return value not in _FALSE_VALUES


def get_float_env(name: str, *, default: Optional[float] = None) -> Optional[float]:
    """Read a number from the environment; blank means unset."""
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw)
    except ValueError as exc:
        raise ValueError(f"{name} must be a number, got {raw!r}") from exc


def get_log_level_env(name: str, *, default: int = logging.INFO) -> int:
    """Resolve a level name ("DEBUG") or number ("10") from the environment."""
    raw = (os.getenv(name) or "").strip()
    if not raw:
        return default
    if raw.isdigit():
        return int(raw)
    level = logging.getLevelName(raw.upper())
    return level if isinstance(level, int) else default
