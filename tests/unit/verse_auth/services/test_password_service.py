"""Unit tests for PasswordHashingService."""

import pytest

from verse_auth.exceptions import HasherError, WeakPasswordError
from verse_auth.services import PasswordHashingService
from verse_auth.services.password_service import BCRYPT_MAX_BYTES

PASSWORD = "correct horse battery"


class TestVerify:
    """verify separates a wrong password from an unusable hash."""

    def setup_method(self):
        """Set up test fixtures."""
        self.service = PasswordHashingService(rounds=4)
        self.stored = self.service.hash(PASSWORD)

    def test_hash_uses_configured_rounds(self):
        assert self.stored.startswith("$2b$04$")
        assert len(self.stored) == 60

    def test_right_password_matches(self):
        assert self.service.verify(PASSWORD, self.stored) is True

    def test_wrong_password_is_a_mismatch(self):
        assert self.service.verify("wrong horse battery", self.stored) is False

    def test_salts_differ_between_hashes(self):
        other = self.service.hash(PASSWORD)

        assert other != self.stored
        assert self.service.verify(PASSWORD, other) is True

    @pytest.mark.parametrize(
        "candidate",
        ["x" * (BCRYPT_MAX_BYTES + 1), "x" * 500, "é" * 40],
        ids=["one-byte-over", "far-over", "multibyte-over"],
    )
    def test_over_long_candidate_is_a_mismatch(self, candidate):
        """bcrypt cannot take it, but it is still just a wrong password."""
        assert self.service.verify(candidate, self.stored) is False

    def test_candidate_at_byte_limit_is_checked(self):
        longest = "p" * BCRYPT_MAX_BYTES
        stored = self.service.hash(longest)

        assert self.service.verify(longest, stored) is True
        assert self.service.verify("q" * BCRYPT_MAX_BYTES, stored) is False

    @pytest.mark.parametrize(
        "bad_hash",
        [
            "",
            "not_a_valid_hash",
            "hashed:correct horse battery",
            "$2b$04$tooshort",
        ],
    )
    def test_unusable_hash_raises(self, bad_hash):
        with pytest.raises(HasherError):
            self.service.verify(PASSWORD, bad_hash)

    def test_unusable_hash_raises_even_for_over_long_candidate(self):
        """The hash is checked before the candidate's length."""
        with pytest.raises(HasherError):
            self.service.verify("x" * 100, "garbage")


class TestValidateStrength:
    def setup_method(self):
        """Set up test fixtures."""
        self.service = PasswordHashingService(rounds=4)

    def test_empty_password_rejected(self):
        with pytest.raises(WeakPasswordError, match="cannot be empty"):
            self.service.validate_strength("")

    def test_short_password_rejected(self):
        with pytest.raises(WeakPasswordError, match="at least 8 characters"):
            self.service.validate_strength("short")

    def test_password_over_byte_limit_rejected(self):
        with pytest.raises(WeakPasswordError, match="cannot exceed 72 bytes"):
            self.service.validate_strength("y" * 100)

    def test_multibyte_password_measured_in_bytes(self):
        """Forty two-byte characters are 80 bytes, over the limit."""
        with pytest.raises(WeakPasswordError, match="72 bytes"):
            self.service.validate_strength("é" * 40)

    def test_password_at_byte_limit_accepted(self):
        self.service.validate_strength("é" * 36)

    def test_hash_refuses_weak_password(self):
        """hash never hands an invalid password to bcrypt."""
        with pytest.raises(WeakPasswordError):
            self.service.hash("short")
        with pytest.raises(WeakPasswordError):
            self.service.hash("y" * 100)
