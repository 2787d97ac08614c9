"""SQLAlchemy implementation of CreditAccountRepository

Balance mutations are single conditional UPDATE statements, so the store's
row locking serializes concurrent credits and debits on one account.
"""

from typing import Optional
from datetime import datetime
from sqlalchemy import update
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.exc import IntegrityError
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.repositories.credit_account_repository import CreditAccountRepository
from src.domain.credit_account import CreditAccount

# Dialects with INSERT ... ON CONFLICT DO NOTHING
_UPSERT_INSERTS = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}


class SqlAlchemyCreditAccountRepository(CreditAccountRepository):
    """
    SQLAlchemy implementation of CreditAccountRepository

    Features:
    - Insert-if-absent account creation (ON CONFLICT DO NOTHING)
    - Conditional debit (WHERE current_credits >= amount)
    - Fresh reads after every mutation (populate_existing)
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_account_id(self, account_id: str) -> Optional[CreditAccount]:
        stmt = (
            select(CreditAccount)
            .where(CreditAccount.account_id == account_id)
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_or_create(self, account_id: str, starting_credits: int) -> CreditAccount:
        """
        Create the account with a starting grant unless it already exists

        A conflicting concurrent insert is ignored by the database, so the
        row that wins keeps the only starting grant.
        """
        now = datetime.utcnow()
        values = dict(
            account_id=account_id,
            current_credits=starting_credits,
            bonus_credits=0,
            used_credits=0,
            created_at=now,
            updated_at=now,
        )

        insert = _UPSERT_INSERTS.get(self.session.get_bind().dialect.name)
        if insert is not None:
            stmt = insert(CreditAccount.__table__).values(**values).on_conflict_do_nothing(
                index_elements=["account_id"]
            )
            await self.session.execute(stmt)
        else:
            # Create, then fetch on unique-constraint conflict
            try:
                async with self.session.begin_nested():
                    self.session.add(CreditAccount(**values))
            except IntegrityError:
                pass

        return await self.get_by_account_id(account_id)

    async def credit(self, account_id: str, amount: int) -> Optional[CreditAccount]:
        if amount <= 0:
            raise ValueError(f"Credit amount must be greater than 0, got {amount}")

        stmt = (
            update(CreditAccount)
            .where(CreditAccount.account_id == account_id)
            .values(
                current_credits=CreditAccount.current_credits + amount,
                updated_at=datetime.utcnow(),
            )
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        if result.rowcount == 0:
            return None
        return await self.get_by_account_id(account_id)

    async def debit(self, account_id: str, amount: int) -> Optional[CreditAccount]:
        if amount <= 0:
            raise ValueError(f"Debit amount must be greater than 0, got {amount}")

        stmt = (
            update(CreditAccount)
            .where(
                CreditAccount.account_id == account_id,
                CreditAccount.current_credits >= amount,
            )
            .values(
                current_credits=CreditAccount.current_credits - amount,
                used_credits=CreditAccount.used_credits + amount,
                updated_at=datetime.utcnow(),
            )
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        if result.rowcount == 0:
            return None
        return await self.get_by_account_id(account_id)

    async def get_all(self) -> list[CreditAccount]:
        stmt = select(CreditAccount).order_by(CreditAccount.id)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())
