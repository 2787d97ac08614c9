"""Get Balance Use Case

Retrieves an account's credit balance, creating the account with its
starting grant on first access.
"""

import logging
from libs.result import Result, Return, Error
from src.app.services.unit_of_work import UnitOfWork
from src.app.repositories.credit_account_repository import CreditAccountRepository
from src.app.use_cases.billing.dtos import BalanceResponseDTO
from src.domain.credit_account import DEFAULT_STARTING_CREDITS
from .errors import STORE_UNAVAILABLE_ERRORS, store_unavailable

logger = logging.getLogger(__name__)


class GetBalance:
    """
    Get Balance Use Case

    Returns current, bonus and used credits for an account. The only write
    it may perform is the insert-if-absent of a new account.
    """

    def __init__(
        self,
        uow: UnitOfWork,
        account_repo: CreditAccountRepository,
        starting_credits: int = DEFAULT_STARTING_CREDITS,
    ):
        self.uow = uow
        self.account_repo = account_repo
        self.starting_credits = starting_credits

    async def execute(self, account_id: str) -> Result[BalanceResponseDTO]:
        """
        Execute get balance operation

        Args:
            account_id: The account identifier

        Returns:
            Result[BalanceResponseDTO]: Success with balance data or error
        """
        try:
            account = await self.account_repo.get_or_create(account_id, self.starting_credits)
            await self.uow.commit()
        except STORE_UNAVAILABLE_ERRORS as e:
            await self.uow.rollback()
            logger.error(f"Store unavailable while reading balance of {account_id}: {e}")
            return Return.err(store_unavailable(e))
        except Exception as e:
            await self.uow.rollback()
            logger.exception(f"Failed to read balance of {account_id}")
            return Return.err(
                Error(
                    code="GET_BALANCE_FAILED",
                    message="Failed to retrieve credit balance",
                    reason=str(e),
                )
            )

        return Return.ok(
            BalanceResponseDTO(
                account_id=account.account_id,
                current_credits=account.current_credits,
                bonus_credits=account.bonus_credits,
                used_credits=account.used_credits,
                last_updated=account.updated_at,
            )
        )
