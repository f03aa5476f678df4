"""In-process lock store with the same atomic operations as the Redis store."""

from __future__ import annotations

import datetime as dt
import threading
import time
from dataclasses import dataclass
from typing import Callable, Dict, Optional


Clock = Callable[[], float]


@dataclass(slots=True)
class _Record:
    value: str
    expires_at: float


class MemoryLockStore:
    """Dictionary-backed store honouring TTLs against an injectable monotonic clock.

    None of the operations await, so each one is atomic on its event loop; the
    threading lock keeps them atomic across threads as well.
    """

    def __init__(self, *, clock: Clock = time.monotonic) -> None:
        self._clock = clock
        self._records: Dict[str, _Record] = {}
        self._guard = threading.Lock()

    def _live(self, key: str, now: float) -> Optional[_Record]:
        record = self._records.get(key)
        if record is not None and now >= record.expires_at:
            del self._records[key]
            return None
        return record

    async def conditional_create(self, key: str, value: str, ttl: dt.timedelta) -> bool:
        with self._guard:
            now = self._clock()
            if self._live(key, now) is not None:
                return False
            self._records[key] = _Record(value=value, expires_at=now + ttl.total_seconds())
            return True

    async def compare_and_delete(self, key: str, expected: str) -> int:
        with self._guard:
            record = self._live(key, self._clock())
            if record is None or record.value != expected:
                return 0
            del self._records[key]
            return 1

    async def get(self, key: str) -> Optional[str]:
        with self._guard:
            record = self._live(key, self._clock())
            return record.value if record else None

    def expires_in(self, key: str) -> Optional[dt.timedelta]:
        """Remaining lifetime of the record at ``key``, or None when absent."""
        with self._guard:
            now = self._clock()
            record = self._live(key, now)
            if record is None:
                return None
            return dt.timedelta(seconds=record.expires_at - now)

    def __len__(self) -> int:
        with self._guard:
            now = self._clock()
            return sum(1 for key in list(self._records) if self._live(key, now) is not None)
