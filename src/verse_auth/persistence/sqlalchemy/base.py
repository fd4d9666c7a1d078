"""SQLAlchemy declarative base for verse_auth models.

Applications that keep other tables in the same database should include
AuthBase.metadata in their migration configuration.

Examples
--------
# In Alembic env.py:
from verse_auth.persistence.sqlalchemy import AuthBase

target_metadata = [YourBase.metadata, AuthBase.metadata]
"""

from sqlalchemy.orm import DeclarativeBase


class AuthBase(DeclarativeBase):
    """Declarative base for verse_auth models."""
