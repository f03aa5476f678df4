"""Lock broker client and lock handles."""

from __future__ import annotations

import asyncio
import contextlib
import datetime as dt
import logging
import uuid
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, AsyncIterator, Awaitable, Optional, TypeVar, Union

from brokerlock.core.exceptions import LockContended, LockNotHeld, StoreUnavailable
from brokerlock.core.store import LockStore

if TYPE_CHECKING:
    from brokerlock.core.settings import LockSettings


TTL = Union[dt.timedelta, int, float]
T = TypeVar("T")

# no handlers here; applications opt in with brokerlock.utils.logging.get_logger
logger = logging.getLogger(__name__)


def _coerce_ttl(ttl: TTL) -> dt.timedelta:
    if isinstance(ttl, dt.timedelta):
        value = ttl
    elif isinstance(ttl, (int, float)) and not isinstance(ttl, bool):
        try:
            value = dt.timedelta(seconds=ttl)
        except OverflowError as exc:
            raise ValueError(f"TTL out of range: {ttl!r}") from exc
    else:
        raise ValueError(f"TTL must be a timedelta or a number of seconds, got {ttl!r}")
    if value <= dt.timedelta(0):
        raise ValueError(f"TTL must be positive, got {value}")
    return value


async def _call(key: str, operation: Awaitable[T], timeout: Optional[float]) -> T:
    """Await a store operation under an optional deadline."""
    try:
        if timeout is None:
            return await operation
        return await asyncio.wait_for(operation, timeout)
    except StoreUnavailable:
        raise
    except asyncio.TimeoutError as exc:
        raise StoreUnavailable(f"store call for '{key}' exceeded {timeout}s", key=key) from exc
    except OSError as exc:
        raise StoreUnavailable(f"store call for '{key}' failed: {exc}", key=key) from exc


@dataclass(frozen=True, slots=True)
class Lock:
    """Proof of one successful acquisition.

    The handle keeps no local notion of validity: every ``release`` asks the
    store whether ``token`` still owns ``key``.
    """

    store: LockStore = field(repr=False, compare=False)
    key: str
    token: str
    timeout: Optional[float] = field(default=None, repr=False, compare=False)

    async def release(self) -> None:
        """Delete the store record if this handle's token still owns it.

        Raises:
            LockNotHeld: the record expired, was already released, or belongs to another holder.
            StoreUnavailable: the store could not complete the script.
        """
        try:
            deleted = await _call(self.key, self.store.compare_and_delete(self.key, self.token), self.timeout)
        except StoreUnavailable as exc:
            logger.warning("Release of %s failed: %s", self.key, exc)
            raise
        if deleted != 1:
            logger.info("Lock %s no longer held by %s", self.key, self.token[:8])
            raise LockNotHeld(self.key)
        logger.debug("Released %s (%s)", self.key, self.token[:8])

    async def is_held(self) -> bool:
        """Whether the store currently maps ``key`` to this token. Informational only."""
        current = await _call(self.key, self.store.get(self.key), self.timeout)
        return current == self.token


class LockClient:
    """Stateless facade that acquires locks against a single store."""

    def __init__(
        self,
        store: LockStore,
        *,
        default_ttl: TTL = 30,
        timeout: Optional[float] = None,
    ) -> None:
        if timeout is not None and timeout <= 0:
            raise ValueError(f"timeout must be positive, got {timeout}")
        self.store = store
        self.default_ttl = _coerce_ttl(default_ttl)
        self.timeout = timeout

    @classmethod
    def from_settings(cls, settings: "LockSettings") -> "LockClient":
        from brokerlock.core.store_redis import RedisLockStore

        store = RedisLockStore.from_url(
            settings.redis_url,
            key_prefix=settings.key_prefix,
            socket_timeout=settings.socket_timeout_seconds,
        )
        return cls(
            store,
            default_ttl=settings.default_ttl_seconds,
            timeout=settings.operation_timeout_seconds,
        )

    async def try_acquire(self, key: str, ttl: Optional[TTL] = None) -> Lock:
        """Make one non-blocking attempt to acquire ``key`` for ``ttl``.

        Raises:
            ValueError: empty key or non-positive TTL.
            LockContended: the key is currently held.
            StoreUnavailable: the store could not be reached or failed.
        """
        if not key:
            raise ValueError("Lock key must be a non-empty string")
        lifetime = self.default_ttl if ttl is None else _coerce_ttl(ttl)
        token = str(uuid.uuid4())

        try:
            created = await _call(key, self.store.conditional_create(key, token, lifetime), self.timeout)
        except StoreUnavailable as exc:
            logger.warning("Acquire of %s failed: %s", key, exc)
            raise
        if not created:
            logger.info("Lock %s is contended", key)
            raise LockContended(key)

        logger.debug("Acquired %s (%s) for %s", key, token[:8], lifetime)
        return Lock(store=self.store, key=key, token=token, timeout=self.timeout)

    @contextlib.asynccontextmanager
    async def lock(self, key: str, ttl: Optional[TTL] = None) -> AsyncIterator[Lock]:
        """Hold ``key`` for the body of an ``async with`` block."""
        handle = await self.try_acquire(key, ttl)
        try:
            yield handle
        except BaseException:
            # the body's exception wins over a failed release
            try:
                await handle.release()
            except LockNotHeld:
                logger.warning("Lock %s expired before the block finished", key)
            except StoreUnavailable as exc:
                logger.warning("Could not release %s while unwinding: %s", key, exc)
            raise
        else:
            try:
                await handle.release()
            except LockNotHeld:
                logger.warning("Lock %s expired before the block finished", key)

    async def aclose(self) -> None:
        """Close the underlying store connection, if the store holds one."""
        close = getattr(self.store, "close", None)
        if close is not None:
            await close()

    async def __aenter__(self) -> "LockClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()
