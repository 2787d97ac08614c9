"""ApproveTransaction Use Case

Completes a pending purchase and credits the owning account exactly once.
"""

from typing import Optional
from libs.result import Error
from src.app.services.unit_of_work import UnitOfWork
from src.app.repositories.credit_account_repository import CreditAccountRepository
from src.app.repositories.credit_transaction_repository import CreditTransactionRepository
from src.domain.credit_transaction import CreditTransaction, TransactionStatus
from .errors import ErrorCode
from .resolve_transaction import ResolveTransaction


class ApproveTransaction(ResolveTransaction):
    """
    Use Case: Approve a pending purchase

    PENDING -> COMPLETED, then credit(account_id, transaction.credits) in the
    same database transaction.
    """

    target_status = TransactionStatus.COMPLETED
    default_note = "Approved by administrator"
    failure_code = "APPROVE_TRANSACTION_FAILED"

    def __init__(
        self,
        uow: UnitOfWork,
        transaction_repo: CreditTransactionRepository,
        account_repo: CreditAccountRepository,
    ):
        super().__init__(uow, transaction_repo)
        self.account_repo = account_repo

    async def _apply(self, transaction: CreditTransaction) -> Optional[Error]:
        if transaction.credits <= 0:
            return Error(
                code=ErrorCode.INVALID_AMOUNT,
                message="Credits to add must be greater than 0",
                reason=f"transaction_id={transaction.id}, credits={transaction.credits}",
            )

        account = await self.account_repo.credit(transaction.account_id, transaction.credits)
        if account is None:
            return Error(
                code=ErrorCode.ACCOUNT_NOT_FOUND,
                message=f"Credit account {transaction.account_id} not found",
            )
        return None
