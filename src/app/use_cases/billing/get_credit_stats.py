"""Get Credit Stats Use Case

Dashboard summary of an account's purchases and consumption.
"""

import logging
from datetime import datetime
from libs.result import Result, Return, Error
from src.app.services.unit_of_work import UnitOfWork
from src.app.repositories.credit_account_repository import CreditAccountRepository
from src.app.repositories.credit_transaction_repository import CreditTransactionRepository
from src.app.repositories.usage_log_repository import UsageLogRepository
from src.domain.credit_account import DEFAULT_STARTING_CREDITS
from src.domain.credit_transaction import month_start
from .dtos import CreditStatsResponseDTO
from .errors import STORE_UNAVAILABLE_ERRORS, store_unavailable

logger = logging.getLogger(__name__)


class GetCreditStats:
    """
    Use case: credit statistics for an account

    - total_purchased: credits of COMPLETED purchases
    - total_used: credits over all usage logs
    - this_month_usage: usage logs since the first of the current month
    - efficiency: round(total_used / total_purchased * 100), 0 without purchases
    """

    def __init__(
        self,
        uow: UnitOfWork,
        account_repo: CreditAccountRepository,
        transaction_repo: CreditTransactionRepository,
        usage_repo: UsageLogRepository,
        starting_credits: int = DEFAULT_STARTING_CREDITS,
    ):
        self.uow = uow
        self.account_repo = account_repo
        self.transaction_repo = transaction_repo
        self.usage_repo = usage_repo
        self.starting_credits = starting_credits

    async def execute(self, account_id: str) -> Result[CreditStatsResponseDTO]:
        try:
            # Balance and totals come from one database transaction
            account = await self.account_repo.get_or_create(account_id, self.starting_credits)
            current_balance = account.current_credits
            total_purchased = await self.transaction_repo.get_completed_credit_sum(account_id)
            total_used = await self.usage_repo.get_credit_sum(account_id)
            this_month_usage = await self.usage_repo.get_credit_sum(
                account_id, since=month_start(datetime.utcnow())
            )

            await self.uow.commit()
        except STORE_UNAVAILABLE_ERRORS as e:
            await self.uow.rollback()
            logger.error(f"Store unavailable while computing stats of {account_id}: {e}")
            return Return.err(store_unavailable(e))
        except Exception as e:
            await self.uow.rollback()
            logger.exception(f"Failed to compute credit stats of {account_id}")
            return Return.err(
                Error(
                    code="GET_CREDIT_STATS_FAILED",
                    message="Failed to compute credit statistics",
                    reason=str(e),
                )
            )

        efficiency = round(total_used / total_purchased * 100) if total_purchased > 0 else 0

        return Return.ok(
            CreditStatsResponseDTO(
                account_id=account_id,
                current_balance=current_balance,
                total_purchased=total_purchased,
                total_used=total_used,
                this_month_usage=this_month_usage,
                efficiency=efficiency,
            )
        )
