"""Account lockout guard.

Decides the outcome of a login attempt and keeps the account's
failure-tracking state up to date. After ``max_attempts`` consecutive
failures the account is locked for ``lock_duration``; while locked every
attempt is rejected, whether or not the password is right, and is still
counted. The lock window is fixed once set: further attempts never extend
it.
"""

from __future__ import annotations

import inspect
import logging
from collections.abc import Awaitable
from typing import TYPE_CHECKING, Protocol

from verse_auth.schemas import (
    Account,
    AccountMutation,
    Authenticated,
    AuthResult,
    LockoutPolicy,
    Rejected,
    RejectionReason,
)
from verse_auth.time import Clock, utc_now

if TYPE_CHECKING:
    from datetime import datetime

    from verse_auth.repositories import AccountRepository

logger = logging.getLogger(__name__)


class PasswordVerifier(Protocol):
    """Anything that can check a plaintext password against a stored hash.

    ``verify`` may be sync or async. It returns False on a mismatch and
    raises when the hash cannot be evaluated at all.
    """

    def verify(self, password: str, password_hash: str) -> bool | Awaitable[bool]: ...


class AccountLockoutGuard:
    """
    Evaluates login attempts against a bounded-attempts lockout policy.

    The guard reads through and writes to the repository only; it keeps
    no state of its own. Repository and hasher errors propagate to the
    caller unchanged.

    Examples
    --------
    >>> guard = AccountLockoutGuard(
    ...     repository,
    ...     PasswordHashingService(),
    ...     LockoutPolicy(max_attempts=5, lock_duration=timedelta(hours=1)),
    ... )
    >>> result = await guard.authenticate("alice", "correct horse")
    >>> isinstance(result, Authenticated)
    True
    """

    def __init__(
        self,
        repository: AccountRepository,
        hasher: PasswordVerifier,
        policy: LockoutPolicy,
        clock: Clock = utc_now,
    ):
        self._repository = repository
        self._hasher = hasher
        self._policy = policy
        self._clock = clock

    async def authenticate(self, account_id: str, password: str) -> AuthResult:
        """Check a login attempt and record its outcome.

        Parameters
        ----------
        account_id
            The account identifier (username)
        password
            The plaintext password supplied by the user

        Returns
        -------
        Authenticated with the current account, or Rejected with the
        precise reason

        Raises
        ------
        StoreError
            If the repository cannot read or persist the account
        HasherError
            If the stored hash cannot be evaluated
        """
        account = await self._repository.find_by_account_id(account_id)
        if account is None:
            logger.info("Login rejected for %s: unknown account", account_id)
            return Rejected(RejectionReason.NOT_FOUND)

        now = self._clock()

        # Lock before password: a locked account is rejected even when the
        # password is right.
        if account.is_locked(now):
            updated = await self._repository.apply_update(
                account_id,
                AccountMutation.increment_attempts(),
            )
            logger.warning(
                "Login rejected for %s: locked until %s (attempts=%d)",
                account_id,
                updated.lock_until.isoformat() if updated.lock_until else "unknown",
                updated.login_attempts,
            )
            return Rejected(RejectionReason.MAX_ATTEMPTS_LOCKED)

        if not await self._verify(password, account.password_hash):
            return await self._record_failure(account, now)

        if account.login_attempts == 0 and account.lock_until is None:
            return Authenticated(account)

        account = await self._repository.apply_update(
            account_id,
            AccountMutation.reset_attempts(),
        )
        logger.debug("Cleared failed attempts for %s", account_id)
        return Authenticated(account)

    async def _verify(self, password: str, password_hash: str) -> bool:
        result = self._hasher.verify(password, password_hash)
        if inspect.isawaitable(result):
            result = await result
        return bool(result)

    async def _record_failure(self, account: Account, now: datetime) -> Rejected:
        account_id = account.account_id

        # Expired lock: start a fresh counting window instead of continuing
        if account.lock_until is not None and account.lock_until <= now:
            await self._repository.apply_update(
                account_id,
                AccountMutation.restart_attempts(),
            )
            logger.info("Login rejected for %s: wrong password (attempts=1)", account_id)
            return Rejected(RejectionReason.PASSWORD_INCORRECT)

        updated = await self._repository.apply_update(
            account_id,
            AccountMutation.increment_attempts(),
        )
        if updated.login_attempts < self._policy.max_attempts:
            logger.info(
                "Login rejected for %s: wrong password (attempts=%d)",
                account_id,
                updated.login_attempts,
            )
            return Rejected(RejectionReason.PASSWORD_INCORRECT)

        # A concurrent attempt may already have locked the account
        if not updated.is_locked(now):
            lock_until = now + self._policy.lock_duration
            await self._repository.apply_update(
                account_id,
                AccountMutation.set_lock(lock_until),
            )
            logger.warning(
                "Account %s locked until %s after %d failed attempts",
                account_id,
                lock_until.isoformat(),
                updated.login_attempts,
            )
        return Rejected(RejectionReason.MAX_ATTEMPTS_LOCKED)
