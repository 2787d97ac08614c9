"""SQLAlchemy implementation of CreditTransactionRepository

Status transitions are conditional updates whose predicate only matches legal
source states, so a transaction cannot be resolved twice even when two
approvals race.
"""

from datetime import datetime
from typing import Optional
from sqlalchemy import update
from sqlmodel import select, func
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.repositories.credit_transaction_repository import CreditTransactionRepository
from src.domain.credit_transaction import CreditTransaction, TransactionStatus


class SqlAlchemyCreditTransactionRepository(CreditTransactionRepository):
    """
    SQLAlchemy implementation of CreditTransactionRepository

    Features:
    - Monthly free-claim uniqueness via (account_id, package_id, claim_month)
    - Guarded status transitions (WHERE status IN <legal sources>)
    - Paginated history ordered by created_at DESC
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, transaction: CreditTransaction) -> CreditTransaction:
        self.session.add(transaction)
        await self.session.flush()
        await self.session.refresh(transaction)
        return transaction

    async def get_by_id(self, transaction_id: int) -> Optional[CreditTransaction]:
        stmt = (
            select(CreditTransaction)
            .where(CreditTransaction.id == transaction_id)
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def find_free_claim(
        self, account_id: str, package_id: int, since: datetime
    ) -> Optional[CreditTransaction]:
        stmt = (
            select(CreditTransaction)
            .where(
                CreditTransaction.account_id == account_id,
                CreditTransaction.package_id == package_id,
                CreditTransaction.status == TransactionStatus.COMPLETED,
                CreditTransaction.created_at >= since,
            )
            .order_by(CreditTransaction.created_at)
            .limit(1)
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def transition_status(
        self,
        transaction_id: int,
        target: TransactionStatus,
        notes: Optional[str] = None,
    ) -> Optional[CreditTransaction]:
        """
        Move a transaction into `target` if its stored status allows it

        Returns:
            The refreshed CreditTransaction, None when no row matched
        """
        sources = TransactionStatus.sources_of(target)
        if not sources:
            raise ValueError(f"No status can transition to {target.value}")

        stmt = (
            update(CreditTransaction)
            .where(
                CreditTransaction.id == transaction_id,
                CreditTransaction.status.in_(sources),
            )
            .values(status=target, notes=notes, updated_at=datetime.utcnow())
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        if result.rowcount == 0:
            return None
        return await self.get_by_id(transaction_id)

    async def get_by_account_id(
        self, account_id: str, limit: int = 20, offset: int = 0
    ) -> tuple[list[CreditTransaction], int]:
        count_stmt = select(func.count()).select_from(CreditTransaction).where(
            CreditTransaction.account_id == account_id
        )
        count_result = await self.session.execute(count_stmt)
        total = count_result.scalar() or 0

        stmt = (
            select(CreditTransaction)
            .where(CreditTransaction.account_id == account_id)
            .order_by(CreditTransaction.created_at.desc(), CreditTransaction.id.desc())
            .limit(limit)
            .offset(offset)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all()), total

    async def get_by_status(self, status: TransactionStatus) -> list[CreditTransaction]:
        stmt = (
            select(CreditTransaction)
            .where(CreditTransaction.status == status)
            .order_by(CreditTransaction.created_at.desc(), CreditTransaction.id.desc())
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def get_completed_credit_sum(self, account_id: str) -> int:
        stmt = select(func.coalesce(func.sum(CreditTransaction.credits), 0)).where(
            CreditTransaction.account_id == account_id,
            CreditTransaction.status == TransactionStatus.COMPLETED,
        )
        result = await self.session.execute(stmt)
        return int(result.scalar() or 0)
