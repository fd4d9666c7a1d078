"""Unit tests for AuthenticationService."""

from unittest.mock import AsyncMock, Mock

import pytest

from verse_auth.exceptions import (
    AccountAlreadyExistsError,
    InvalidCredentialsError,
    WeakPasswordError,
)
from verse_auth.persistence import InMemoryAccountRepository
from verse_auth.schemas import Account, Authenticated, Rejected, RejectionReason
from verse_auth.services import AuthenticationService, PasswordHashingService

TEST_USERNAME = "alice"
TEST_PASSWORD = "secure_password_123"
TEST_ACCOUNT = Account(account_id=TEST_USERNAME, password_hash="hashed_password")


class AuthenticationServiceTestBase:
    def setup_method(self):
        """Set up test fixtures."""
        self.repository = AsyncMock()
        self.guard = AsyncMock()
        self.password_service = Mock(spec=PasswordHashingService)

        self.service = AuthenticationService(
            repository=self.repository,
            guard=self.guard,
            password_service=self.password_service,
        )


class TestAuthenticationServiceRegister(AuthenticationServiceTestBase):
    """Tests for account registration."""

    @pytest.mark.asyncio
    async def test_register_hashes_and_saves(self):
        """Test that register hashes the password and stores the account."""
        # Arrange
        self.repository.find_by_account_id.return_value = None
        self.repository.save.return_value = TEST_ACCOUNT
        self.password_service.hash.return_value = "hashed_password"

        # Act
        account = await self.service.register(TEST_USERNAME, TEST_PASSWORD)

        # Assert
        assert account == TEST_ACCOUNT
        self.password_service.hash.assert_called_once_with(TEST_PASSWORD)
        self.repository.save.assert_called_once_with(TEST_USERNAME, "hashed_password")

    @pytest.mark.asyncio
    async def test_register_trims_username(self):
        """Surrounding whitespace is not part of the username."""
        self.repository.find_by_account_id.return_value = None
        self.password_service.hash.return_value = "hashed_password"

        await self.service.register("  alice ", TEST_PASSWORD)

        self.repository.find_by_account_id.assert_called_once_with(TEST_USERNAME)
        self.repository.save.assert_called_once_with(TEST_USERNAME, "hashed_password")

    @pytest.mark.asyncio
    async def test_register_raises_when_username_taken(self):
        """Test that register raises AccountAlreadyExistsError for a taken name."""
        self.repository.find_by_account_id.return_value = TEST_ACCOUNT

        with pytest.raises(AccountAlreadyExistsError):
            await self.service.register(TEST_USERNAME, TEST_PASSWORD)

        self.password_service.hash.assert_not_called()
        self.repository.save.assert_not_called()

    @pytest.mark.asyncio
    async def test_register_rejects_blank_username(self):
        with pytest.raises(ValueError, match="cannot be empty"):
            await self.service.register("   ", TEST_PASSWORD)

        self.repository.save.assert_not_called()

    @pytest.mark.asyncio
    async def test_register_raises_for_weak_password(self):
        """Test that register raises WeakPasswordError for weak password."""
        self.repository.find_by_account_id.return_value = None
        self.password_service.hash.side_effect = WeakPasswordError("Too short")

        with pytest.raises(WeakPasswordError):
            await self.service.register(TEST_USERNAME, "short")

        self.repository.save.assert_not_called()


class TestAuthenticationServiceLogin(AuthenticationServiceTestBase):
    """Tests for login."""

    @pytest.mark.asyncio
    async def test_login_returns_account(self):
        """Test that login returns the account for valid credentials."""
        self.guard.authenticate.return_value = Authenticated(TEST_ACCOUNT)

        account = await self.service.login(TEST_USERNAME, TEST_PASSWORD)

        assert account == TEST_ACCOUNT
        self.guard.authenticate.assert_called_once_with(TEST_USERNAME, TEST_PASSWORD)

    @pytest.mark.asyncio
    @pytest.mark.parametrize("reason", list(RejectionReason))
    async def test_every_rejection_gives_the_same_error(self, reason):
        """Unknown, wrong and locked all look identical to the caller."""
        self.guard.authenticate.return_value = Rejected(reason)

        with pytest.raises(InvalidCredentialsError) as exc_info:
            await self.service.login(TEST_USERNAME, TEST_PASSWORD)

        assert exc_info.value.message == "Invalid username or password"

    @pytest.mark.asyncio
    async def test_authenticate_keeps_precise_reason(self):
        """authenticate exposes the guard's result unchanged."""
        rejected = Rejected(RejectionReason.MAX_ATTEMPTS_LOCKED)
        self.guard.authenticate.return_value = rejected

        result = await self.service.authenticate(" alice", TEST_PASSWORD)

        assert result == rejected
        self.guard.authenticate.assert_called_once_with(TEST_USERNAME, TEST_PASSWORD)


class TestRegisterWithBcrypt:
    """Registration through the real hasher and the memory store."""

    def setup_method(self):
        """Set up test fixtures."""
        self.repository = InMemoryAccountRepository()
        self.service = AuthenticationService(
            repository=self.repository,
            guard=AsyncMock(),
            password_service=PasswordHashingService(rounds=4),
        )

    @pytest.mark.asyncio
    @pytest.mark.parametrize("password", ["y" * 100, "ü" * 50])
    async def test_password_too_long_for_bcrypt_is_weak(self, password):
        """Over 72 encoded bytes is a WeakPasswordError, never a bcrypt error."""
        with pytest.raises(WeakPasswordError, match="72 bytes"):
            await self.service.register("bob", password)

        assert await self.repository.find_by_account_id("bob") is None

    @pytest.mark.asyncio
    async def test_registered_account_starts_clean(self):
        account = await self.service.register("bob", TEST_PASSWORD)

        assert account.password_hash.startswith("$2b$04$")
        assert account.login_attempts == 0
