from verse_auth.persistence.sqlalchemy.repositories.account_repository import (
    AccountRepositorySQLAlchemy,
)

__all__ = ["AccountRepositorySQLAlchemy"]
