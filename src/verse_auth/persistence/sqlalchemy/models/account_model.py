"""SQLAlchemy model for account credentials.

This model stores password hashes and login-attempt tracking.
"""

from datetime import datetime
from uuid import uuid4

from sqlalchemy import DateTime, Integer, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from verse_auth.persistence.sqlalchemy.base import AuthBase
from verse_auth.time import utc_now


class AccountModel(AuthBase):
    """
    SQLAlchemy model for account credentials.

    Security features:
    - login_attempts: Consecutive failed logins (keeps counting while locked)
    - lock_until: End of the current lock window, NULL when not locked

    Table: accounts
    """

    __tablename__ = "accounts"

    id: Mapped[str] = mapped_column(
        Uuid(as_uuid=False),
        primary_key=True,
        default=lambda: str(uuid4()),
    )

    # Username, trimmed by the application before it gets here
    account_id: Mapped[str] = mapped_column(
        String(64),
        unique=True,
        nullable=False,
        index=True,
    )

    # Password hash (bcrypt format, ~60 chars)
    password_hash: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )

    # Security metadata
    login_attempts: Mapped[int] = mapped_column(
        Integer,
        default=0,
        nullable=False,
    )
    lock_until: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
    )

    # Audit timestamps
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utc_now,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utc_now,
        onupdate=utc_now,
    )

    def __repr__(self) -> str:
        return f"<AccountModel(id={self.id}, account_id={self.account_id})>"
