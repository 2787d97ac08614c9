"""Usage-log reconciliation job

Compares each account's used_credits counter with the sum of its usage logs.
A mismatch means a debit was committed without its usage log, or the other
way round, and is reported at ERROR level. Nothing is repaired here.

    python -m src.worker.ledger_reconciler --once
    python -m src.worker.ledger_reconciler --interval 3600
"""

import argparse
import asyncio
import logging
from typing import Callable, Optional
from sqlmodel.ext.asyncio.session import AsyncSession

from config import ApplicationConfig
from src.adapter.repositories.credit_account_repository import SqlAlchemyCreditAccountRepository
from src.adapter.repositories.usage_log_repository import SqlAlchemyUsageLogRepository
from src.app.use_cases.billing import ReconcileLedger, ReconciliationResultDTO

logger = logging.getLogger(__name__)


class LedgerReconciler:
    """Runs ReconcileLedger in a fresh session per pass"""

    def __init__(self, session_factory: Callable[[], AsyncSession]):
        self.session_factory = session_factory

    async def run_once(self) -> ReconciliationResultDTO:
        async with self.session_factory() as session:
            result = await ReconcileLedger(
                account_repo=SqlAlchemyCreditAccountRepository(session),
                usage_repo=SqlAlchemyUsageLogRepository(session),
            ).execute()

        if result.is_err():
            raise RuntimeError(f"Usage log check failed: {result.error.reason or result.error.message}")

        report = result.value
        for d in report.discrepancies:
            logger.error(
                f"Account {d.account_id} used_credits={d.used_credits} "
                f"but usage logs sum to {d.logged_credits} (off by {d.discrepancy})"
            )
        return report

    async def run(self, interval_seconds: int, max_passes: Optional[int] = None):
        """Check every interval_seconds; a failed pass is logged and retried next interval"""
        passes = 0
        while max_passes is None or passes < max_passes:
            try:
                await self.run_once()
            except Exception:
                logger.exception("Usage log check pass failed")
            passes += 1
            if max_passes is None or passes < max_passes:
                await asyncio.sleep(interval_seconds)


async def main(argv: Optional[list[str]] = None):
    from src.depends import AsyncSessionLocal, engine

    parser = argparse.ArgumentParser(description="Check used_credits against usage logs")
    parser.add_argument("--once", action="store_true", help="Run a single pass and exit")
    parser.add_argument(
        "--interval",
        type=int,
        default=ApplicationConfig.RECONCILIATION_INTERVAL_SECONDS,
        help="Seconds between passes",
    )
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=ApplicationConfig.LOG_LEVEL,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    if not ApplicationConfig.RECONCILIATION_ENABLED:
        logger.info("RECONCILIATION_ENABLED is off, nothing to do")
        return

    reconciler = LedgerReconciler(AsyncSessionLocal)
    try:
        if args.once:
            report = await reconciler.run_once()
            logger.info(
                f"Checked {report.total_accounts_checked} accounts, "
                f"{report.discrepancies_found} mismatched"
            )
        else:
            await reconciler.run(args.interval)
    finally:
        await engine.dispose()


if __name__ == "__main__":
    asyncio.run(main())
