"""Ledger Service

Single entry point over the credit ledger use cases. One service instance is
bound to one unit of work, so every call runs in the caller's session.
"""

from typing import Any, Dict, Optional
from libs.result import Result
from src.app.services.unit_of_work import UnitOfWork
from src.app.repositories.credit_account_repository import CreditAccountRepository
from src.app.repositories.credit_transaction_repository import CreditTransactionRepository
from src.app.repositories.credit_package_repository import CreditPackageRepository
from src.app.repositories.usage_log_repository import UsageLogRepository
from src.app.use_cases.billing import (
    GetBalance,
    InitiatePurchase,
    ConsumeCredit,
    ApproveTransaction,
    RejectTransaction,
    ListPending,
    ListTransactions,
    ListUsage,
    ListPackages,
    GetCreditStats,
    PurchaseCommandDTO,
    ConsumeCommandDTO,
    BalanceResponseDTO,
    PurchaseResponseDTO,
    ConsumeResponseDTO,
    TransactionDTO,
    PendingTransactionDTO,
    ListTransactionsResponseDTO,
    ListUsageResponseDTO,
    PackageDTO,
    CreditStatsResponseDTO,
)
from src.domain.credit_account import DEFAULT_STARTING_CREDITS

DEFAULT_USAGE_LIST_LIMIT = 50


class LedgerService:
    """
    Credit ledger operations for one unit of work

    Authorization of approve/reject is the caller's responsibility.
    """

    def __init__(
        self,
        uow: UnitOfWork,
        account_repo: CreditAccountRepository,
        transaction_repo: CreditTransactionRepository,
        usage_repo: UsageLogRepository,
        package_repo: CreditPackageRepository,
        starting_credits: int = DEFAULT_STARTING_CREDITS,
        usage_list_limit: int = DEFAULT_USAGE_LIST_LIMIT,
    ):
        self.uow = uow
        self.account_repo = account_repo
        self.transaction_repo = transaction_repo
        self.usage_repo = usage_repo
        self.package_repo = package_repo
        self.starting_credits = starting_credits
        self.usage_list_limit = usage_list_limit

    async def get_balance(self, account_id: str) -> Result[BalanceResponseDTO]:
        use_case = GetBalance(self.uow, self.account_repo, self.starting_credits)
        return await use_case.execute(account_id)

    async def initiate_purchase(
        self,
        account_id: str,
        package_id: int,
        payment_method: str,
        payment_number: Optional[str] = None,
        external_reference: Optional[str] = None,
    ) -> Result[PurchaseResponseDTO]:
        use_case = InitiatePurchase(
            self.uow,
            self.account_repo,
            self.transaction_repo,
            self.package_repo,
            self.starting_credits,
        )
        return await use_case.execute(
            PurchaseCommandDTO(
                account_id=account_id,
                package_id=package_id,
                payment_method=payment_method,
                payment_number=payment_number,
                external_reference=external_reference,
            )
        )

    async def consume(
        self,
        account_id: str,
        feature: str,
        credits: int,
        description: Optional[str] = None,
        document_reference: Optional[str] = None,
        metadata: Optional[Dict[str, Any]] = None,
        idempotency_key: Optional[str] = None,
    ) -> Result[ConsumeResponseDTO]:
        use_case = ConsumeCredit(self.uow, self.account_repo, self.usage_repo, self.starting_credits)
        return await use_case.execute(
            ConsumeCommandDTO(
                account_id=account_id,
                feature=feature,
                credits=credits,
                description=description,
                document_reference=document_reference,
                metadata=metadata,
                idempotency_key=idempotency_key,
            )
        )

    async def approve(self, transaction_id: int, notes: Optional[str] = None) -> Result[TransactionDTO]:
        use_case = ApproveTransaction(self.uow, self.transaction_repo, self.account_repo)
        return await use_case.execute(transaction_id, notes)

    async def reject(self, transaction_id: int, notes: Optional[str] = None) -> Result[TransactionDTO]:
        use_case = RejectTransaction(self.uow, self.transaction_repo)
        return await use_case.execute(transaction_id, notes)

    async def list_pending(self) -> Result[list[PendingTransactionDTO]]:
        return await ListPending(self.transaction_repo, self.package_repo).execute()

    async def list_transactions(
        self, account_id: str, limit: int = 20, offset: int = 0
    ) -> Result[ListTransactionsResponseDTO]:
        return await ListTransactions(self.transaction_repo).execute(account_id, limit, offset)

    async def list_usage(
        self, account_id: str, limit: Optional[int] = None, offset: int = 0
    ) -> Result[ListUsageResponseDTO]:
        return await ListUsage(self.usage_repo).execute(
            account_id, limit or self.usage_list_limit, offset
        )

    async def list_packages(self) -> Result[list[PackageDTO]]:
        return await ListPackages(self.package_repo).execute()

    async def get_credit_stats(self, account_id: str) -> Result[CreditStatsResponseDTO]:
        use_case = GetCreditStats(
            self.uow,
            self.account_repo,
            self.transaction_repo,
            self.usage_repo,
            self.starting_credits,
        )
        return await use_case.execute(account_id)
