"""RejectTransaction Use Case

Rejects a pending purchase. The balance is never touched.
"""

from src.domain.credit_transaction import TransactionStatus
from .resolve_transaction import ResolveTransaction


class RejectTransaction(ResolveTransaction):
    """Use Case: Reject a pending purchase (PENDING -> REJECTED)"""

    target_status = TransactionStatus.REJECTED
    default_note = "Rejected by administrator"
    failure_code = "REJECT_TRANSACTION_FAILED"
