from .credit_account_repository import SqlAlchemyCreditAccountRepository
from .credit_transaction_repository import SqlAlchemyCreditTransactionRepository
from .usage_log_repository import SqlAlchemyUsageLogRepository
from .credit_package_repository import SqlAlchemyCreditPackageRepository

__all__ = [
    "SqlAlchemyCreditAccountRepository",
    "SqlAlchemyCreditTransactionRepository",
    "SqlAlchemyUsageLogRepository",
    "SqlAlchemyCreditPackageRepository",
]
