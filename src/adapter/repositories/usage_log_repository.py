"""SQLAlchemy implementation of UsageLogRepository"""

from datetime import datetime
from typing import Optional
from sqlmodel import select, func
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.repositories.usage_log_repository import UsageLogRepository
from src.domain.usage_log import UsageLog


class SqlAlchemyUsageLogRepository(UsageLogRepository):

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, usage_log: UsageLog) -> UsageLog:
        self.session.add(usage_log)
        await self.session.flush()
        await self.session.refresh(usage_log)
        return usage_log

    async def get_by_idempotency_key(
        self, account_id: str, idempotency_key: str
    ) -> Optional[UsageLog]:
        stmt = select(UsageLog).where(
            UsageLog.account_id == account_id,
            UsageLog.idempotency_key == idempotency_key,
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_by_account_id(
        self, account_id: str, limit: int = 50, offset: int = 0
    ) -> tuple[list[UsageLog], int]:
        count_stmt = select(func.count()).select_from(UsageLog).where(
            UsageLog.account_id == account_id
        )
        count_result = await self.session.execute(count_stmt)
        total = count_result.scalar() or 0

        stmt = (
            select(UsageLog)
            .where(UsageLog.account_id == account_id)
            .order_by(UsageLog.created_at.desc(), UsageLog.id.desc())
            .limit(limit)
            .offset(offset)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all()), total

    async def get_credit_sum(self, account_id: str, since: Optional[datetime] = None) -> int:
        stmt = select(func.coalesce(func.sum(UsageLog.credits), 0)).where(
            UsageLog.account_id == account_id
        )
        if since is not None:
            stmt = stmt.where(UsageLog.created_at >= since)

        result = await self.session.execute(stmt)
        return int(result.scalar() or 0)
