"""Lock outcome exceptions."""

from __future__ import annotations

from typing import Optional


class LockError(Exception):
    """Base exception for all lock outcomes."""

    def __init__(self, message: str, *, key: Optional[str] = None) -> None:
        super().__init__(message)
        self.key = key


class LockContended(LockError):
    """Raised when another holder already owns the key (or its record has not expired yet)."""

    def __init__(self, key: str) -> None:
        super().__init__(f"Lock '{key}' is already held", key=key)


class LockNotHeld(LockError):
    """Raised when releasing a lock whose record expired, was released, or now belongs to someone else."""

    def __init__(self, key: str) -> None:
        super().__init__(f"Lock '{key}' is not held by this handle", key=key)


class StoreUnavailable(LockError):
    """Raised when the lock store could not be reached or answered with an error.

    The underlying failure is chained as ``__cause__``.
    """
