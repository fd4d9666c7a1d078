"""Repository interfaces for verse_auth.

Implementations live in verse_auth.persistence, one subpackage or module
per storage technology.
"""

from verse_auth.repositories.account_repository import AccountRepository

__all__ = ["AccountRepository"]
