"""Credit Transaction Repository Interface

Defines the contract for purchase transaction persistence operations.
"""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional
from src.domain.credit_transaction import CreditTransaction, TransactionStatus


class CreditTransactionRepository(ABC):
    """
    Repository interface for CreditTransaction persistence

    Transactions are never deleted. Status changes go through
    transition_status, which only applies when the stored status is a legal
    source state for the requested target.
    """

    @abstractmethod
    async def create(self, transaction: CreditTransaction) -> CreditTransaction:
        """
        Create a new credit transaction

        Args:
            transaction: CreditTransaction entity to persist

        Returns:
            Created CreditTransaction with generated ID

        Raises:
            IntegrityError: If a free claim already exists for the same
                account, package and month
        """
        pass

    @abstractmethod
    async def get_by_id(self, transaction_id: int) -> Optional[CreditTransaction]:
        """
        Retrieve transaction by ID

        Args:
            transaction_id: Transaction ID

        Returns:
            CreditTransaction if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_free_claim(
        self, account_id: str, package_id: int, since: datetime
    ) -> Optional[CreditTransaction]:
        """
        Find a completed claim of a package by an account since a point in time

        Args:
            account_id: Account identifier
            package_id: Package ID
            since: Inclusive lower bound on created_at

        Returns:
            The earliest matching CreditTransaction, None if there is none
        """
        pass

    @abstractmethod
    async def transition_status(
        self,
        transaction_id: int,
        target: TransactionStatus,
        notes: Optional[str] = None,
    ) -> Optional[CreditTransaction]:
        """
        Conditionally move a transaction into `target`

        Args:
            transaction_id: Transaction ID
            target: Requested status
            notes: Approver annotation to store

        Returns:
            Updated CreditTransaction, None if the transaction does not exist
            or its current status cannot move to `target`
        """
        pass

    @abstractmethod
    async def get_by_account_id(
        self, account_id: str, limit: int = 20, offset: int = 0
    ) -> tuple[list[CreditTransaction], int]:
        """
        Retrieve an account's transactions, newest first

        Args:
            account_id: Account identifier
            limit: Maximum number of transactions to return
            offset: Number of transactions to skip

        Returns:
            Tuple of (list of CreditTransaction, total count)
        """
        pass

    @abstractmethod
    async def get_by_status(self, status: TransactionStatus) -> list[CreditTransaction]:
        """
        Retrieve all transactions in a status, newest first

        Args:
            status: Transaction status

        Returns:
            List of CreditTransaction
        """
        pass

    @abstractmethod
    async def get_completed_credit_sum(self, account_id: str) -> int:
        """
        Sum of credits over an account's completed transactions

        Args:
            account_id: Account identifier

        Returns:
            Total purchased credits (0 if none)
        """
        pass
