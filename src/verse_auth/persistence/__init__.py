"""Persistence implementations for verse_auth.

This package contains storage-specific implementations of the
repository interfaces defined in verse_auth.repositories.

Structure:
    persistence/
    ├── memory.py       # dict-backed store (tests, demos)
    └── sqlalchemy/     # SQLAlchemy/SQL database implementation

Usage:
    from verse_auth.persistence.sqlalchemy import (
        AccountRepositorySQLAlchemy,
        AccountModel,
        AuthBase,
    )
"""

from verse_auth.persistence.memory import InMemoryAccountRepository

__all__ = ["InMemoryAccountRepository"]
