"""Usage Log Repository Interface

Defines the contract for usage log persistence operations.
"""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional
from src.domain.usage_log import UsageLog


class UsageLogRepository(ABC):
    """
    Repository interface for UsageLog persistence

    Usage logs are immutable and append-only.
    """

    @abstractmethod
    async def create(self, usage_log: UsageLog) -> UsageLog:
        """
        Create a new usage log

        Args:
            usage_log: UsageLog entity to persist

        Returns:
            Created UsageLog with generated ID

        Raises:
            IntegrityError: If the account already used idempotency_key
        """
        pass

    @abstractmethod
    async def get_by_idempotency_key(
        self, account_id: str, idempotency_key: str
    ) -> Optional[UsageLog]:
        """
        Retrieve an account's usage log by idempotency key

        Keys are scoped to the account; the same key used by another
        account is a different log.

        Args:
            account_id: Account identifier
            idempotency_key: Caller supplied key

        Returns:
            UsageLog if found, None otherwise
        """
        pass

    @abstractmethod
    async def get_by_account_id(
        self, account_id: str, limit: int = 50, offset: int = 0
    ) -> tuple[list[UsageLog], int]:
        """
        Retrieve an account's usage logs, newest first

        Args:
            account_id: Account identifier
            limit: Maximum number of logs to return
            offset: Number of logs to skip

        Returns:
            Tuple of (list of UsageLog, total count)
        """
        pass

    @abstractmethod
    async def get_credit_sum(self, account_id: str, since: Optional[datetime] = None) -> int:
        """
        Sum of consumed credits for an account

        Args:
            account_id: Account identifier
            since: Optional inclusive lower bound on created_at

        Returns:
            Total consumed credits (0 if none)
        """
        pass
