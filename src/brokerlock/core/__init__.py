"""Lock protocol primitives: client, handle, stores and outcomes."""

from .client import Lock, LockClient
from .exceptions import LockContended, LockError, LockNotHeld, StoreUnavailable
from .settings import LockSettings
from .store import LockStore
from .store_memory import MemoryLockStore
from .store_redis import RedisLockStore

__all__ = [
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
