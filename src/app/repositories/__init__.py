from .credit_account_repository import CreditAccountRepository
from .credit_transaction_repository import CreditTransactionRepository
from .usage_log_repository import UsageLogRepository
from .credit_package_repository import CreditPackageRepository

__all__ = [
    "CreditAccountRepository",
    "CreditTransactionRepository",
    "UsageLogRepository",
    "CreditPackageRepository",
]
