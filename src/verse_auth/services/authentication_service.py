"""Authentication service for account registration and login."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from verse_auth.exceptions import AccountAlreadyExistsError, InvalidCredentialsError
from verse_auth.schemas import Account, Authenticated, AuthResult

if TYPE_CHECKING:
    from verse_auth.repositories import AccountRepository
    from verse_auth.services.lockout_guard import AccountLockoutGuard
    from verse_auth.services.password_service import PasswordHashingService

logger = logging.getLogger(__name__)


class AuthenticationService:
    """
    Application service for account authentication.

    Orchestrates the password service and the lockout guard:
    - Registration with username and password
    - Login, with every rejection collapsed into one generic error

    Callers that show errors to end users should use ``login``: it does
    not tell an unknown username, a wrong password and a locked account
    apart. ``authenticate`` keeps the precise reason for internal use.
    """

    def __init__(
        self,
        repository: AccountRepository,
        guard: AccountLockoutGuard,
        password_service: PasswordHashingService,
    ):
        self._repository = repository
        self._guard = guard
        self._password_service = password_service

    async def register(self, username: str, password: str) -> Account:
        username = username.strip()
        if not username:
            msg = "Username cannot be empty"
            raise ValueError(msg)

        if await self._repository.find_by_account_id(username) is not None:
            raise AccountAlreadyExistsError(username)

        password_hash = self._password_service.hash(password)
        account = await self._repository.save(username, password_hash)

        logger.info("Account registered: %s", username)
        return account

    async def authenticate(self, username: str, password: str) -> AuthResult:
        return await self._guard.authenticate(username.strip(), password)

    async def login(self, username: str, password: str) -> Account:
        result = await self.authenticate(username, password)
        if isinstance(result, Authenticated):
            logger.info("Account logged in: %s", result.account.account_id)
            return result.account

        logger.info("Login failed for %s (%s)", username, result.reason.value)
        raise InvalidCredentialsError
