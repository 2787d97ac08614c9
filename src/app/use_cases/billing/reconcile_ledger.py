"""ReconcileLedger Use Case

Checks every account's used_credits against the sum of its usage logs.
"""

import logging
import time
from datetime import datetime
from libs.result import Result, Return, Error
from src.app.repositories.credit_account_repository import CreditAccountRepository
from src.app.repositories.usage_log_repository import UsageLogRepository
from .dtos import AccountDiscrepancyDTO, ReconciliationResultDTO

logger = logging.getLogger(__name__)


class ReconcileLedger:
    """
    Use Case: Reconcile account usage counters against usage logs

    Business Rules:
    1. For each account, used_credits must equal the sum of its usage logs
    2. Mismatches are recorded and logged
    3. Does NOT modify any data (read-only reconciliation)
    """

    def __init__(
        self,
        account_repo: CreditAccountRepository,
        usage_repo: UsageLogRepository,
    ):
        self.account_repo = account_repo
        self.usage_repo = usage_repo

    async def execute(self) -> Result[ReconciliationResultDTO]:
        """
        Execute ledger reconciliation

        Returns:
            Result[ReconciliationResultDTO]: Reconciliation result with any discrepancies
        """
        start_time = time.time()
        reconciliation_time = datetime.utcnow()

        try:
            logger.info("Starting credit ledger reconciliation")

            accounts = await self.account_repo.get_all()
            total_accounts = len(accounts)

            discrepancies: list[AccountDiscrepancyDTO] = []

            for account in accounts:
                logged_credits = await self.usage_repo.get_credit_sum(account.account_id)

                if account.used_credits != logged_credits:
                    discrepancy = AccountDiscrepancyDTO(
                        account_id=account.account_id,
                        used_credits=account.used_credits,
                        logged_credits=logged_credits,
                        discrepancy=account.used_credits - logged_credits,
                    )
                    discrepancies.append(discrepancy)

                    logger.warning(
                        f"Discrepancy found for account {account.account_id}: "
                        f"used_credits={account.used_credits}, "
                        f"logged_credits={logged_credits}, "
                        f"discrepancy={discrepancy.discrepancy}"
                    )

            execution_time_ms = int((time.time() - start_time) * 1000)

            response = ReconciliationResultDTO(
                total_accounts_checked=total_accounts,
                discrepancies_found=len(discrepancies),
                discrepancies=discrepancies,
                reconciliation_time=reconciliation_time,
                execution_time_ms=execution_time_ms,
            )

            if discrepancies:
                logger.warning(
                    f"Reconciliation complete. Found {len(discrepancies)} discrepancies "
                    f"out of {total_accounts} accounts in {execution_time_ms}ms"
                )
            else:
                logger.info(
                    f"Reconciliation complete. All {total_accounts} accounts balanced "
                    f"in {execution_time_ms}ms"
                )

            return Return.ok(response)

        except Exception as e:
            logger.error(f"Ledger reconciliation failed: {e}")
            return Return.err(
                Error(
                    code="RECONCILIATION_FAILED",
                    message="Failed to reconcile credit ledger",
                    reason=str(e),
                )
            )
