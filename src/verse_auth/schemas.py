"""Data classes shared by the guard, the stores and the application layer."""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime, timedelta
from enum import Enum


def is_locked(lock_until: datetime | None, now: datetime) -> bool:
    """Return True if a lock window is set and still in the future."""
    return lock_until is not None and lock_until > now


@dataclass(frozen=True)
class Account:
    """Immutable account credential data returned by a repository.

    Only the fields the lockout guard needs: the identifier, the stored
    password hash and the failure-tracking state.
    """

    account_id: str
    password_hash: str
    login_attempts: int = 0
    lock_until: datetime | None = None

    def __post_init__(self) -> None:
        if self.login_attempts < 0:
            msg = f"login_attempts cannot be negative: {self.login_attempts}"
            raise ValueError(msg)

    def is_locked(self, now: datetime) -> bool:
        return is_locked(self.lock_until, now)


class MutationKind(str, Enum):
    """Failure-tracking updates a store must apply atomically."""

    INCREMENT_ATTEMPTS = "increment_attempts"
    SET_LOCK = "set_lock"
    RESTART_ATTEMPTS = "restart_attempts"
    RESET_ATTEMPTS = "reset_attempts"


@dataclass(frozen=True)
class AccountMutation:
    """A single change to an account's attempt counter or lock window.

    Use the constructors rather than building instances by hand:

    >>> AccountMutation.increment_attempts()
    >>> AccountMutation.set_lock(now + timedelta(hours=1))
    >>> AccountMutation.restart_attempts()  # attempts=1, lock cleared
    >>> AccountMutation.reset_attempts()  # attempts=0, lock cleared
    """

    kind: MutationKind
    lock_until: datetime | None = None

    def __post_init__(self) -> None:
        if self.kind is MutationKind.SET_LOCK and self.lock_until is None:
            msg = "SET_LOCK requires a lock_until timestamp"
            raise ValueError(msg)
        if self.kind is not MutationKind.SET_LOCK and self.lock_until is not None:
            msg = f"{self.kind.value} does not take a lock_until timestamp"
            raise ValueError(msg)

    @classmethod
    def increment_attempts(cls) -> AccountMutation:
        return cls(MutationKind.INCREMENT_ATTEMPTS)

    @classmethod
    def set_lock(cls, until: datetime) -> AccountMutation:
        return cls(MutationKind.SET_LOCK, lock_until=until)

    @classmethod
    def restart_attempts(cls) -> AccountMutation:
        return cls(MutationKind.RESTART_ATTEMPTS)

    @classmethod
    def reset_attempts(cls) -> AccountMutation:
        return cls(MutationKind.RESET_ATTEMPTS)

    def apply(self, account: Account) -> Account:
        """Return a copy of ``account`` with this mutation applied."""
        if self.kind is MutationKind.INCREMENT_ATTEMPTS:
            return replace(account, login_attempts=account.login_attempts + 1)
        if self.kind is MutationKind.SET_LOCK:
            return replace(account, lock_until=self.lock_until)
        if self.kind is MutationKind.RESTART_ATTEMPTS:
            return replace(account, login_attempts=1, lock_until=None)
        return replace(account, login_attempts=0, lock_until=None)


@dataclass(frozen=True)
class LockoutPolicy:
    """How many consecutive failures lock an account, and for how long."""

    max_attempts: int
    lock_duration: timedelta

    def __post_init__(self) -> None:
        if self.max_attempts < 1:
            msg = f"max_attempts must be at least 1, got {self.max_attempts}"
            raise ValueError(msg)
        if self.lock_duration <= timedelta(0):
            msg = f"lock_duration must be positive, got {self.lock_duration}"
            raise ValueError(msg)


class RejectionReason(str, Enum):
    NOT_FOUND = "not_found"
    PASSWORD_INCORRECT = "password_incorrect"
    MAX_ATTEMPTS_LOCKED = "max_attempts_locked"


@dataclass(frozen=True)
class Authenticated:
    account: Account


@dataclass(frozen=True)
class Rejected:
    reason: RejectionReason


AuthResult = Authenticated | Rejected
