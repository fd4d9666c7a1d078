"""SQLAlchemy implementation of AccountRepository.

Every failure-tracking mutation is issued as a single UPDATE statement so
the database applies it atomically; the counter is never read into Python,
changed, and written back.
"""

import logging
from datetime import timezone
from typing import Any

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from verse_auth.exceptions import AccountAlreadyExistsError, StoreError
from verse_auth.persistence.sqlalchemy.models import AccountModel
from verse_auth.repositories import AccountRepository
from verse_auth.schemas import Account, AccountMutation, MutationKind
from verse_auth.time import ensure_tz_aware

logger = logging.getLogger(__name__)


class AccountRepositorySQLAlchemy(AccountRepository):
    """
    SQLAlchemy implementation of AccountRepository.

    The repository only flushes; committing is left to whoever owns the
    session, e.g. ``async with session_factory() as s, s.begin(): ...``.
    Driver errors surface as StoreError with the original chained.
    """

    def __init__(self, session: AsyncSession):
        """Initialize repository with database session.

        Parameters
        ----------
        session
            SQLAlchemy async session
        """
        self._session = session

    def _to_data(self, model: AccountModel) -> Account:
        """Map SQLAlchemy model to the Account data class."""
        lock_until = model.lock_until
        return Account(
            account_id=model.account_id,
            password_hash=model.password_hash,
            login_attempts=model.login_attempts,
            lock_until=ensure_tz_aware(lock_until) if lock_until else None,
        )

    async def _find_model(
        self,
        account_id: str,
        refresh: bool = False,
    ) -> AccountModel | None:
        stmt = select(AccountModel).where(AccountModel.account_id == account_id)
        if refresh:
            stmt = stmt.execution_options(populate_existing=True)
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    @staticmethod
    def _values_for(mutation: AccountMutation) -> dict[str, Any]:
        if mutation.kind is MutationKind.INCREMENT_ATTEMPTS:
            return {"login_attempts": AccountModel.login_attempts + 1}
        if mutation.kind is MutationKind.SET_LOCK:
            until = ensure_tz_aware(mutation.lock_until)
            return {"lock_until": until.astimezone(timezone.utc)}
        if mutation.kind is MutationKind.RESTART_ATTEMPTS:
            return {"login_attempts": 1, "lock_until": None}
        return {"login_attempts": 0, "lock_until": None}

    async def save(self, account_id: str, password_hash: str) -> Account:
        try:
            if await self._find_model(account_id) is not None:
                raise AccountAlreadyExistsError(account_id)

            model = AccountModel(
                account_id=account_id,
                password_hash=password_hash,
                login_attempts=0,
            )
            self._session.add(model)
            await self._session.flush()
        except IntegrityError as e:
            # Lost a race against a concurrent registration
            raise AccountAlreadyExistsError(account_id) from e
        except SQLAlchemyError as e:
            msg = f"Could not create account {account_id}: {e}"
            raise StoreError(msg) from e

        logger.info("Created account: %s", account_id)
        return self._to_data(model)

    async def find_by_account_id(self, account_id: str) -> Account | None:
        try:
            model = await self._find_model(account_id)
        except SQLAlchemyError as e:
            msg = f"Could not load account {account_id}: {e}"
            raise StoreError(msg) from e
        return self._to_data(model) if model else None

    async def apply_update(self, account_id: str, mutation: AccountMutation) -> Account:
        stmt = (
            update(AccountModel)
            .where(AccountModel.account_id == account_id)
            .values(**self._values_for(mutation))
            .execution_options(synchronize_session=False)
        )
        try:
            result = await self._session.execute(stmt)
            if result.rowcount == 0:
                msg = f"Cannot update missing account: {account_id}"
                raise StoreError(msg)
            model = await self._find_model(account_id, refresh=True)
        except SQLAlchemyError as e:
            msg = f"Could not apply {mutation.kind.value} to {account_id}: {e}"
            raise StoreError(msg) from e

        if model is None:
            msg = f"Account vanished during update: {account_id}"
            raise StoreError(msg)

        logger.debug(
            "Applied %s to %s (attempts=%d)",
            mutation.kind.value,
            account_id,
            model.login_attempts,
        )
        return self._to_data(model)

    async def delete(self, account_id: str) -> bool:
        try:
            model = await self._find_model(account_id)
            if model is None:
                return False
            await self._session.delete(model)
            await self._session.flush()
        except SQLAlchemyError as e:
            msg = f"Could not delete account {account_id}: {e}"
            raise StoreError(msg) from e

        logger.info("Deleted account: %s", account_id)
        return True
