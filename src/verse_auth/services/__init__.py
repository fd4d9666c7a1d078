"""Authentication services.

Provides password hashing, the account lockout guard and the
registration/login application service.
"""

from verse_auth.services.authentication_service import AuthenticationService
from verse_auth.services.lockout_guard import AccountLockoutGuard, PasswordVerifier
from verse_auth.services.password_service import PasswordHashingService

__all__ = [
    "AccountLockoutGuard",
    "AuthenticationService",
    "PasswordHashingService",
    "PasswordVerifier",
]
