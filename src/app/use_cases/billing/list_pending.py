"""List Pending Use Case

Read-only projection of purchases awaiting administrator review, with the
package name the reviewer checks the payment against.
"""

import logging
from typing import Dict, Optional
from libs.result import Result, Return
from src.app.repositories.credit_transaction_repository import CreditTransactionRepository
from src.app.repositories.credit_package_repository import CreditPackageRepository
from src.domain.credit_transaction import TransactionStatus
from .dtos import PendingTransactionDTO, to_transaction_dto
from .errors import STORE_UNAVAILABLE_ERRORS, store_unavailable

logger = logging.getLogger(__name__)


class ListPending:
    """Use case: list PENDING transactions, newest first"""

    def __init__(
        self,
        transaction_repo: CreditTransactionRepository,
        package_repo: CreditPackageRepository,
    ):
        self.transaction_repo = transaction_repo
        self.package_repo = package_repo

    async def execute(self) -> Result[list[PendingTransactionDTO]]:
        try:
            transactions = await self.transaction_repo.get_by_status(TransactionStatus.PENDING)

            package_names: Dict[int, Optional[str]] = {}
            for txn in transactions:
                if txn.package_id not in package_names:
                    package = await self.package_repo.get_by_id(txn.package_id)
                    package_names[txn.package_id] = package.name if package else None
        except STORE_UNAVAILABLE_ERRORS as e:
            logger.error(f"Store unavailable while listing pending transactions: {e}")
            return Return.err(store_unavailable(e))

        return Return.ok(
            [
                PendingTransactionDTO(
                    **to_transaction_dto(txn).model_dump(),
                    package_name=package_names[txn.package_id],
                )
                for txn in transactions
            ]
        )
