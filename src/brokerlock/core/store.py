"""Abstract interface for lock stores."""

from __future__ import annotations

import datetime as dt
from typing import Optional, Protocol


class LockStore(Protocol):
    """Atomic operations a backing store must offer to broker locks.

    Implementations translate transport failures into ``StoreUnavailable``.
    """

    async def conditional_create(self, key: str, value: str, ttl: dt.timedelta) -> bool:
        """Set ``key`` to ``value`` with expiration ``ttl`` only if ``key`` is absent."""
        ...

    async def compare_and_delete(self, key: str, expected: str) -> int:
        """Delete ``key`` only if it holds ``expected``; return the deleted count (0 or 1)."""
        ...

    async def get(self, key: str) -> Optional[str]:
        """Return the current value of ``key`` (diagnostics only)."""
        ...


def ttl_to_millis(ttl: dt.timedelta) -> int:
    """Whole milliseconds for a positive TTL, rounded up so it never collapses to zero."""
    micros = ttl // dt.timedelta(microseconds=1)
    return max(1, -(-micros // 1000))
