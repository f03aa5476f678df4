"""Redis-backed lock store using SET NX PX and a Lua compare-and-delete."""

from __future__ import annotations

import datetime as dt
from typing import Optional

from redis.asyncio import Redis
from redis.exceptions import RedisError

from .exceptions import StoreUnavailable
from .store import ttl_to_millis


# Executed server-side as one unit. A client-side GET then DEL is not equivalent.
UNLOCK_SCRIPT = """
if redis.call("get", KEYS[1]) == ARGV[1] then
    return redis.call("del", KEYS[1])
else
    return 0
end
"""


class RedisLockStore:
    def __init__(self, redis: Redis, *, key_prefix: str = "") -> None:
        self._redis = redis
        self._key_prefix = key_prefix
        self._unlock = redis.register_script(UNLOCK_SCRIPT)

    @classmethod
    def from_url(
        cls,
        url: str,
        *,
        key_prefix: str = "",
        socket_timeout: Optional[float] = None,
    ) -> "RedisLockStore":
        redis = Redis.from_url(
            url,
            decode_responses=True,
            socket_timeout=socket_timeout,
            socket_connect_timeout=socket_timeout,
        )
        return cls(redis, key_prefix=key_prefix)

    def _key(self, key: str) -> str:
        return f"{self._key_prefix}{key}"

    async def conditional_create(self, key: str, value: str, ttl: dt.timedelta) -> bool:
        try:
            created = await self._redis.set(self._key(key), value, px=ttl_to_millis(ttl), nx=True)
        except (RedisError, OSError) as exc:
            raise StoreUnavailable(f"SET NX failed for '{key}': {exc}", key=key) from exc
        return bool(created)

    async def compare_and_delete(self, key: str, expected: str) -> int:
        try:
            deleted = await self._unlock(keys=[self._key(key)], args=[expected])
        except (RedisError, OSError) as exc:
            raise StoreUnavailable(f"unlock script failed for '{key}': {exc}", key=key) from exc
        # nil reply means the key is gone
        if deleted is None:
            return 0
        return int(deleted)

    async def get(self, key: str) -> Optional[str]:
        try:
            value = await self._redis.get(self._key(key))
        except (RedisError, OSError) as exc:
            raise StoreUnavailable(f"GET failed for '{key}': {exc}", key=key) from exc
        if isinstance(value, bytes):
            return value.decode("utf-8")
        return value

    async def close(self) -> None:
        await self._redis.aclose()
