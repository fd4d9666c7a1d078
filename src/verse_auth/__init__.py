"""verse_auth - Account credentials and login lockout for the verse site.

This package handles:
- Password hashing (bcrypt)
- The account lockout guard (bounded failed attempts, timed lock)
- Account credential storage (with pluggable persistence)

Architecture:
    verse_auth/
    ├── services/           # Password hashing, lockout guard, login/registration
    ├── repositories/       # Abstract interfaces
    ├── persistence/        # Implementations by technology
    │   ├── memory.py       # In-memory implementation
    │   └── sqlalchemy/     # SQLAlchemy implementation
    ├── schemas.py          # Data classes and results
    ├── exceptions.py       # Auth exceptions
    └── cli.py              # `verse-auth` command

Usage:
    from verse_auth import AccountLockoutGuard, LockoutPolicy, PasswordHashingService
    from verse_auth.persistence.sqlalchemy import AccountRepositorySQLAlchemy
"""

from verse_auth.exceptions import (
    AccountAlreadyExistsError,
    AuthError,
    HasherError,
    InvalidCredentialsError,
    StoreError,
    WeakPasswordError,
)
from verse_auth.repositories import AccountRepository
from verse_auth.schemas import (
    Account,
    AccountMutation,
    Authenticated,
    AuthResult,
    LockoutPolicy,
    MutationKind,
    Rejected,
    RejectionReason,
    is_locked,
)
from verse_auth.services import (
    AccountLockoutGuard,
    AuthenticationService,
    PasswordHashingService,
    PasswordVerifier,
)

__all__ = [
    # Services
    "AccountLockoutGuard",
    "AuthenticationService",
    "PasswordHashingService",
    "PasswordVerifier",
    # Repositories (interfaces)
    "AccountRepository",
    # Schemas
    "Account",
    "AccountMutation",
    "AuthResult",
    "Authenticated",
    "LockoutPolicy",
    "MutationKind",
    "Rejected",
    "RejectionReason",
    "is_locked",
    # Exceptions
    "AccountAlreadyExistsError",
    "AuthError",
    "HasherError",
    "InvalidCredentialsError",
    "StoreError",
    "WeakPasswordError",
]
