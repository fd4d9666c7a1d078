"""In-memory AccountRepository for tests and single-process use."""

import asyncio
import logging

from verse_auth.exceptions import AccountAlreadyExistsError, StoreError
from verse_auth.repositories import AccountRepository
from verse_auth.schemas import Account, AccountMutation

logger = logging.getLogger(__name__)


class InMemoryAccountRepository(AccountRepository):
    """Dict-backed repository. Mutations are serialised by an asyncio lock."""

    def __init__(self, accounts: list[Account] | None = None):
        self._accounts: dict[str, Account] = {
            account.account_id: account for account in accounts or []
        }
        self._lock = asyncio.Lock()
        self.update_count = 0

    async def save(self, account_id: str, password_hash: str) -> Account:
        async with self._lock:
            if account_id in self._accounts:
                raise AccountAlreadyExistsError(account_id)
            account = Account(account_id=account_id, password_hash=password_hash)
            self._accounts[account_id] = account
            logger.debug("Created account: %s", account_id)
            return account

    async def find_by_account_id(self, account_id: str) -> Account | None:
        return self._accounts.get(account_id)

    async def apply_update(self, account_id: str, mutation: AccountMutation) -> Account:
        async with self._lock:
            account = self._accounts.get(account_id)
            if account is None:
                msg = f"Cannot update missing account: {account_id}"
                raise StoreError(msg)
            updated = mutation.apply(account)
            self._accounts[account_id] = updated
            self.update_count += 1
            return updated

    async def delete(self, account_id: str) -> bool:
        async with self._lock:
            return self._accounts.pop(account_id, None) is not None
