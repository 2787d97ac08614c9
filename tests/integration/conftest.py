from decimal import Decimal

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

import src.domain  # noqa: F401  registers tables on SQLModel.metadata
from src.depends import build_ledger_service, get_session
from src.adapter.repositories import (
    SqlAlchemyCreditAccountRepository,
    SqlAlchemyCreditTransactionRepository,
    SqlAlchemyUsageLogRepository,
    SqlAlchemyCreditPackageRepository,
)
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.app.services.ledger_service import LedgerService
from src.domain.credit_package import CreditPackage


@pytest_asyncio.fixture(scope="function")
async def engine(tmp_path):
    """Create test database engine on a temporary SQLite file"""
    # A file database so that concurrent sessions use separate connections
    test_db_url = f"sqlite+aiosqlite:///{tmp_path / 'credits_test.db'}"

    engine = create_async_engine(test_db_url, echo=False, future=True)

    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest_asyncio.fixture
async def session_factory(engine):
    return sessionmaker(engine, class_=AsyncSession, expire_on_commit=False, autoflush=False)


@pytest_asyncio.fixture
async def db_session(session_factory):
    """Create a new database session for each test"""
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def packages(db_session):
    """Credit package catalog: one free, two paid, one retired"""
    catalog = [
        CreditPackage(name="Starter", description="Free monthly credits", credits=50, price=Decimal("0.00")),
        CreditPackage(name="Standard", credits=100, price=Decimal("500.00")),
        CreditPackage(name="Premium", credits=300, price=Decimal("1200.00")),
        CreditPackage(name="Legacy", credits=200, price=Decimal("900.00"), is_active=False),
    ]
    db_session.add_all(catalog)
    await db_session.commit()
    for package in catalog:
        await db_session.refresh(package)
    return {package.name: package for package in catalog}


def make_ledger_service(session: AsyncSession, starting_credits: int = 500) -> LedgerService:
    return LedgerService(
        uow=SqlAlchemyUnitOfWork(session),
        account_repo=SqlAlchemyCreditAccountRepository(session),
        transaction_repo=SqlAlchemyCreditTransactionRepository(session),
        usage_repo=SqlAlchemyUsageLogRepository(session),
        package_repo=SqlAlchemyCreditPackageRepository(session),
        starting_credits=starting_credits,
    )


@pytest_asyncio.fixture
async def ledger(db_session):
    """LedgerService bound to the test session"""
    return build_ledger_service(db_session)


@pytest_asyncio.fixture
async def client(db_session):
    """Create test client with database session override"""
    from src.api.app import create_app
    from config import ApplicationConfig

    app = create_app(ApplicationConfig)

    # Override the session dependency to use test session
    async def override_get_session():
        yield db_session

    app.dependency_overrides[get_session] = override_get_session

    # Use ASGITransport for httpx AsyncClient
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac


@pytest.fixture
def ledger_factory():
    """Build a LedgerService for an independent session (concurrency tests)"""
    return make_ledger_service
