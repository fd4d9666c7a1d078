"""Abstract repository interface for account credentials.

This interface defines the contract for credential persistence.
Implementations can use SQLAlchemy, an in-memory dict, or any other
storage.
"""

from abc import ABC, abstractmethod

from verse_auth.schemas import Account, AccountMutation


class AccountRepository(ABC):
    """
    Abstract repository interface for account credentials.

    Implementations must provide methods for:
    - Creating accounts at registration time
    - Finding accounts by their identifier
    - Applying failure-tracking mutations atomically

    ``apply_update`` is the only path that changes ``login_attempts`` or
    ``lock_until``. Each mutation must take effect as a whole or not at
    all, and must not be implemented as an unguarded read-modify-write of
    the counter: two concurrent failed logins have to produce two
    increments.
    """

    @abstractmethod
    async def save(self, account_id: str, password_hash: str) -> Account:
        """
        Create a new account with no failed attempts and no lock.

        Parameters
        ----------
        account_id
            The account's unique identifier (username)
        password_hash
            The bcrypt password hash

        Returns
        -------
        The created account

        Raises
        ------
        AccountAlreadyExistsError
            If an account with this identifier already exists
        StoreError
            If the backend fails
        """

    @abstractmethod
    async def find_by_account_id(self, account_id: str) -> Account | None:
        """
        Find an account by its identifier.

        Parameters
        ----------
        account_id
            The account's unique identifier

        Returns
        -------
        The account if found, None otherwise
        """

    @abstractmethod
    async def apply_update(self, account_id: str, mutation: AccountMutation) -> Account:
        """
        Atomically apply a failure-tracking mutation.

        Parameters
        ----------
        account_id
            The account's unique identifier
        mutation
            The change to apply

        Returns
        -------
        The account as stored after the mutation

        Raises
        ------
        StoreError
            If the account no longer exists or the backend fails
        """

    @abstractmethod
    async def delete(self, account_id: str) -> bool:
        """
        Delete an account.

        Parameters
        ----------
        account_id
            The account's unique identifier

        Returns
        -------
        True if deleted, False if not found
        """
