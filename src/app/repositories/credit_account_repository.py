"""Credit Account Repository Interface

Defines the contract for the account store. Every balance mutation is a
single conditional statement executed by the store, never a read followed
by a separate write.
"""

from abc import ABC, abstractmethod
from typing import Optional
from src.domain.credit_account import CreditAccount


class CreditAccountRepository(ABC):
    """
    Repository interface for CreditAccount persistence

    Mutations are atomic at the storage layer so concurrent callers, even on
    different service instances, cannot overdraw an account or create two
    starting grants.
    """

    @abstractmethod
    async def get_by_account_id(self, account_id: str) -> Optional[CreditAccount]:
        """
        Retrieve account by its external identity

        Args:
            account_id: Account identifier

        Returns:
            CreditAccount if found, None otherwise
        """
        pass

    @abstractmethod
    async def get_or_create(self, account_id: str, starting_credits: int) -> CreditAccount:
        """
        Return the account, creating it with a starting grant if absent

        Uses an insert-if-absent primitive so two concurrent first accesses
        create exactly one row.

        Args:
            account_id: Account identifier
            starting_credits: current_credits of a newly created account

        Returns:
            Existing or newly created CreditAccount
        """
        pass

    @abstractmethod
    async def credit(self, account_id: str, amount: int) -> Optional[CreditAccount]:
        """
        Atomically add credits to current_credits

        Args:
            account_id: Account identifier
            amount: Credits to add (must be > 0)

        Returns:
            Updated CreditAccount, None if the account does not exist

        Raises:
            ValueError: If amount <= 0
        """
        pass

    @abstractmethod
    async def debit(self, account_id: str, amount: int) -> Optional[CreditAccount]:
        """
        Atomically move credits from current_credits to used_credits

        The sufficiency check is part of the update predicate, so the
        statement only applies when current_credits >= amount.

        Args:
            account_id: Account identifier
            amount: Credits to consume (must be > 0)

        Returns:
            Updated CreditAccount, None if the balance was insufficient
            (or the account does not exist). Nothing changes in that case.

        Raises:
            ValueError: If amount <= 0
        """
        pass

    @abstractmethod
    async def get_all(self) -> list[CreditAccount]:
        """
        Retrieve all accounts (used by reconciliation)

        Returns:
            List of all CreditAccount rows
        """
        pass
