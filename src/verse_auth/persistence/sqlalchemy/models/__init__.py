"""SQLAlchemy models for account credentials."""

from verse_auth.persistence.sqlalchemy.models.account_model import AccountModel

__all__ = ["AccountModel"]
