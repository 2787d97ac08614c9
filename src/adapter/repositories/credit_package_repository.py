"""SQLAlchemy implementation of CreditPackageRepository"""

from typing import Optional
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.repositories.credit_package_repository import CreditPackageRepository
from src.domain.credit_package import CreditPackage


class SqlAlchemyCreditPackageRepository(CreditPackageRepository):

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, package_id: int) -> Optional[CreditPackage]:
        stmt = select(CreditPackage).where(CreditPackage.id == package_id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_active(self) -> list[CreditPackage]:
        stmt = (
            select(CreditPackage)
            .where(CreditPackage.is_active == True)  # noqa: E712
            .order_by(CreditPackage.credits, CreditPackage.id)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())
