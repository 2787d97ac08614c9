"""
List Transactions Use Case

Retrieves purchase transaction history for an account with pagination.
"""
import logging
from libs.result import Result, Return
from src.app.repositories.credit_transaction_repository import CreditTransactionRepository
from .dtos import ListTransactionsResponseDTO, to_transaction_dto
from .errors import STORE_UNAVAILABLE_ERRORS, store_unavailable

logger = logging.getLogger(__name__)


class ListTransactions:
    """
    Use case: View Credit Transactions

    Retrieves paginated purchase history for an account.
    Transactions are ordered by created_at DESC (most recent first).
    """

    def __init__(self, transaction_repo: CreditTransactionRepository):
        """
        Initialize with transaction repository.

        Args:
            transaction_repo: CreditTransactionRepository instance
        """
        self.transaction_repo = transaction_repo

    async def execute(
        self, account_id: str, limit: int = 20, offset: int = 0
    ) -> Result[ListTransactionsResponseDTO]:
        """
        List transactions for an account with pagination.

        Args:
            account_id: Account identifier
            limit: Maximum number of transactions to return (default 20)
            offset: Number of transactions to skip (default 0)

        Returns:
            Result[ListTransactionsResponseDTO]: Paginated transaction list
        """
        try:
            transactions, total = await self.transaction_repo.get_by_account_id(
                account_id=account_id,
                limit=limit,
                offset=offset,
            )
        except STORE_UNAVAILABLE_ERRORS as e:
            logger.error(f"Store unavailable while listing transactions for {account_id}: {e}")
            return Return.err(store_unavailable(e))

        return Return.ok(
            ListTransactionsResponseDTO(
                transactions=[to_transaction_dto(txn) for txn in transactions],
                total=total,
                limit=limit,
                offset=offset,
            )
        )
