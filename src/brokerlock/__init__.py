"""Single-store distributed locks brokered through a shared key-value store."""

import logging

from .core import (
    Lock,
    LockClient,
    LockContended,
    LockError,
    LockNotHeld,
    LockSettings,
    LockStore,
    MemoryLockStore,
    RedisLockStore,
    StoreUnavailable,
)

__all__ = [
    "__version__",
    "Lock",
    "LockClient",
    "LockContended",
    "LockError",
    "LockNotHeld",
    "LockSettings",
    "LockStore",
    "MemoryLockStore",
    "RedisLockStore",
    "StoreUnavailable",
]

__version__ = "0.1.0"

logging.getLogger(__name__).addHandler(logging.NullHandler())
