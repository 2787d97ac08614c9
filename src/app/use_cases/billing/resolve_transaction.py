"""Shared flow for administrative resolution of pending purchases

ApproveTransaction and RejectTransaction differ only in the target status,
the default note and the side effect applied after the status change.
"""

import logging
from typing import Optional
from libs.result import Result, Return, Error
from src.app.services.unit_of_work import UnitOfWork
from src.app.repositories.credit_transaction_repository import CreditTransactionRepository
from src.domain.credit_transaction import CreditTransaction, TransactionStatus
from .dtos import TransactionDTO, to_transaction_dto
from .errors import ErrorCode, STORE_UNAVAILABLE_ERRORS, store_unavailable

logger = logging.getLogger(__name__)


class ResolveTransaction:
    """
    Base use case: move a PENDING transaction into a terminal status

    Business Rules:
    1. Transaction must exist (TRANSACTION_NOT_FOUND)
    2. Only legal transitions apply; the status change is a conditional
       update, so a second resolution fails with INVALID_STATE even when
       two administrators act at the same time
    3. Status change and side effect are committed together
    """

    target_status: TransactionStatus
    default_note: str
    failure_code: str

    def __init__(self, uow: UnitOfWork, transaction_repo: CreditTransactionRepository):
        self.uow = uow
        self.transaction_repo = transaction_repo

    async def execute(self, transaction_id: int, notes: Optional[str] = None) -> Result[TransactionDTO]:
        """
        Resolve a pending transaction

        Args:
            transaction_id: Transaction to resolve
            notes: Optional approver note (defaults to default_note)

        Returns:
            Result[TransactionDTO]: The resolved transaction or error
        """
        try:
            transaction = await self.transaction_repo.transition_status(
                transaction_id, self.target_status, notes or self.default_note
            )

            if transaction is None:
                await self.uow.rollback()
                return Return.err(await self._explain_no_transition(transaction_id))

            error = await self._apply(transaction)
            if error:
                await self.uow.rollback()
                return Return.err(error)

            await self.uow.commit()

        except STORE_UNAVAILABLE_ERRORS as e:
            await self.uow.rollback()
            logger.error(f"Store unavailable while resolving transaction {transaction_id}: {e}")
            return Return.err(store_unavailable(e))
        except Exception as e:
            await self.uow.rollback()
            logger.exception(f"Failed to resolve transaction {transaction_id}")
            return Return.err(
                Error(
                    code=self.failure_code,
                    message=f"Failed to resolve transaction {transaction_id}",
                    reason=str(e),
                )
            )

        logger.info(
            f"Transaction {transaction.id} of {transaction.account_id} "
            f"moved to {self.target_status.value}"
        )
        return Return.ok(to_transaction_dto(transaction))

    async def _apply(self, transaction: CreditTransaction) -> Optional[Error]:
        """Side effect of entering target_status; returns an Error to abort"""
        return None

    async def _explain_no_transition(self, transaction_id: int) -> Error:
        existing = await self.transaction_repo.get_by_id(transaction_id)
        if existing is None:
            return Error(
                code=ErrorCode.TRANSACTION_NOT_FOUND,
                message=f"Transaction {transaction_id} not found",
            )

        current = TransactionStatus(existing.status)
        return Error(
            code=ErrorCode.INVALID_STATE,
            message=f"Transaction {transaction_id} is already {current.value}",
            reason=f"status={current.value}, requested={self.target_status.value}",
        )
