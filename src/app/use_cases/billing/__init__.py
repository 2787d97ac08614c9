"""Credit ledger use cases"""
from .get_balance import GetBalance
from .initiate_purchase import InitiatePurchase
from .consume_credit import ConsumeCredit
from .approve_transaction import ApproveTransaction
from .reject_transaction import RejectTransaction
from .list_pending import ListPending
from .list_transactions import ListTransactions
from .list_usage import ListUsage
from .list_packages import ListPackages
from .get_credit_stats import GetCreditStats
from .reconcile_ledger import ReconcileLedger
from .errors import ErrorCode
from .dtos import (
    PurchaseCommandDTO,
    ConsumeCommandDTO,
    BalanceResponseDTO,
    TransactionDTO,
    PendingTransactionDTO,
    PurchaseResponseDTO,
    UsageLogDTO,
    ConsumeResponseDTO,
    ListTransactionsResponseDTO,
    ListUsageResponseDTO,
    PackageDTO,
    CreditStatsResponseDTO,
    AccountDiscrepancyDTO,
    ReconciliationResultDTO,
)

__all__ = [
    "GetBalance",
    "InitiatePurchase",
    "ConsumeCredit",
    "ApproveTransaction",
    "RejectTransaction",
    "ListPending",
    "ListTransactions",
    "ListUsage",
    "ListPackages",
    "GetCreditStats",
    "ReconcileLedger",
    "ErrorCode",
    "PurchaseCommandDTO",
    "ConsumeCommandDTO",
    "BalanceResponseDTO",
    "TransactionDTO",
    "PendingTransactionDTO",
    "PurchaseResponseDTO",
    "UsageLogDTO",
    "ConsumeResponseDTO",
    "ListTransactionsResponseDTO",
    "ListUsageResponseDTO",
    "PackageDTO",
    "CreditStatsResponseDTO",
    "AccountDiscrepancyDTO",
    "ReconciliationResultDTO",
]
