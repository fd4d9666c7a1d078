"""bcrypt hashing for account passwords.

bcrypt only looks at the first 72 bytes of its input, and current releases
refuse anything longer. Registration therefore caps passwords by encoded
length, and verification treats an over-long candidate as a plain mismatch:
no stored hash can have been produced from it.
"""

import logging
import re

import bcrypt

from verse_auth.exceptions import HasherError, WeakPasswordError

logger = logging.getLogger(__name__)

BCRYPT_MAX_BYTES = 72

# $2b$10$ followed by 22 salt and 31 digest characters
_BCRYPT_HASH = re.compile(r"^\$2[abxy]\$\d{2}\$[./A-Za-z0-9]{53}$")


def _encode(password: str) -> bytes:
    return password.encode("utf-8")


class PasswordHashingService:
    """Hashes new passwords and checks login attempts against stored hashes.

    ``verify`` is the hasher the lockout guard calls: ``False`` means the
    password is wrong and counts as a failed attempt, ``HasherError`` means
    the stored hash itself is unusable and nothing is counted.

    Examples
    --------
    >>> service = PasswordHashingService(rounds=4)
    >>> stored = service.hash("correct horse")
    >>> service.verify("correct horse", stored)
    True
    >>> service.verify("x" * 100, stored)
    False
    """

    MIN_LENGTH = 8

    def __init__(self, rounds: int = 10):
        """
        Parameters
        ----------
        rounds
            bcrypt work factor (log2 of the iteration count)
        """
        self._rounds = rounds

    def hash(self, password: str) -> str:
        """Validate a new password and return its bcrypt hash.

        Raises
        ------
        WeakPasswordError
            If the password is empty, too short or too long for bcrypt
        """
        self.validate_strength(password)
        salt = bcrypt.gensalt(rounds=self._rounds)
        return bcrypt.hashpw(_encode(password), salt).decode("ascii")

    def verify(self, password: str, password_hash: str) -> bool:
        """Check a candidate password against a stored hash.

        Raises
        ------
        HasherError
            If ``password_hash`` is not a bcrypt hash
        """
        if not _BCRYPT_HASH.match(password_hash or ""):
            msg = "Stored password hash is not a bcrypt hash"
            raise HasherError(msg)

        candidate = _encode(password)
        if len(candidate) > BCRYPT_MAX_BYTES:
            logger.debug("Candidate password exceeds %d bytes", BCRYPT_MAX_BYTES)
            return False

        try:
            return bcrypt.checkpw(candidate, password_hash.encode("ascii"))
        except ValueError as e:
            msg = f"Cannot verify against stored hash: {e}"
            raise HasherError(msg) from e

    def validate_strength(self, password: str) -> None:
        """Reject passwords that are empty, shorter than ``MIN_LENGTH``
        characters or longer than ``BCRYPT_MAX_BYTES`` once UTF-8 encoded.
        """
        if not password:
            msg = "Password cannot be empty"
            raise WeakPasswordError(msg)

        if len(password) < self.MIN_LENGTH:
            msg = f"Password must be at least {self.MIN_LENGTH} characters"
            raise WeakPasswordError(msg)

        if len(_encode(password)) > BCRYPT_MAX_BYTES:
            msg = f"Password cannot exceed {BCRYPT_MAX_BYTES} bytes"
            raise WeakPasswordError(msg)
