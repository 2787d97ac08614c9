from .base import BaseModel
from .credit_account import CreditAccount
from .credit_package import CreditPackage
from .credit_transaction import CreditTransaction, TransactionStatus, PaymentMethod, month_start, claim_month_for
from .usage_log import UsageLog

__all__ = [
    "BaseModel",
    "CreditAccount",
    "CreditPackage",
    "CreditTransaction",
    "TransactionStatus",
    "PaymentMethod",
    "month_start",
    "claim_month_for",
    "UsageLog",
]
