"""SQLAlchemy implementation for verse_auth persistence.

Provides:
- AuthBase: Declarative base for auth models
- AccountModel: SQLAlchemy model for account credentials
- AccountRepositorySQLAlchemy: Repository implementation
- Engine/session helpers and create_tables
"""

from verse_auth.persistence.sqlalchemy.base import AuthBase
from verse_auth.persistence.sqlalchemy.database import (
    create_engine,
    create_session_factory,
    create_tables,
)
from verse_auth.persistence.sqlalchemy.models import AccountModel
from verse_auth.persistence.sqlalchemy.repositories import (
    AccountRepositorySQLAlchemy,
)

__all__ = [
    "AccountModel",
    "AccountRepositorySQLAlchemy",
    "AuthBase",
    "create_engine",
    "create_session_factory",
    "create_tables",
]
