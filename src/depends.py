from fastapi import Depends
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel.ext.asyncio.session import AsyncSession
from config import ApplicationConfig
from src.adapter.repositories import (
    SqlAlchemyCreditAccountRepository,
    SqlAlchemyCreditTransactionRepository,
    SqlAlchemyUsageLogRepository,
    SqlAlchemyCreditPackageRepository,
)
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.app.services.ledger_service import LedgerService

engine = create_async_engine(ApplicationConfig.DB_URI, echo=False, future=True)

AsyncSessionLocal = sessionmaker(
    engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
)


async def get_session() -> AsyncSession:
    async with AsyncSessionLocal() as session:
        yield session


def build_ledger_service(session: AsyncSession) -> LedgerService:
    return LedgerService(
        uow=SqlAlchemyUnitOfWork(session),
        account_repo=SqlAlchemyCreditAccountRepository(session),
        transaction_repo=SqlAlchemyCreditTransactionRepository(session),
        usage_repo=SqlAlchemyUsageLogRepository(session),
        package_repo=SqlAlchemyCreditPackageRepository(session),
        starting_credits=ApplicationConfig.DEFAULT_STARTING_CREDITS,
        usage_list_limit=ApplicationConfig.USAGE_LIST_LIMIT,
    )


async def get_ledger_service(session: AsyncSession = Depends(get_session)) -> LedgerService:
    return build_ledger_service(session)
