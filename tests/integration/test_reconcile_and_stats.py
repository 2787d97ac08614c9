"""Integration tests for ledger reconciliation, credit stats and listings"""

import pytest
from sqlalchemy import update

from src.adapter.repositories import SqlAlchemyCreditAccountRepository, SqlAlchemyUsageLogRepository
from src.app.use_cases.billing import ReconcileLedger
from src.domain.credit_account import CreditAccount


@pytest.mark.asyncio
class TestReconcileLedgerIntegration:

    async def test_consistent_ledger_has_no_discrepancies(self, ledger, db_session):
        await ledger.consume("school_1", "admit-card", 50)
        await ledger.consume("school_2", "marksheet", 20)
        await ledger.consume("school_2", "marksheet", 600)

        result = await ReconcileLedger(
            SqlAlchemyCreditAccountRepository(db_session),
            SqlAlchemyUsageLogRepository(db_session),
        ).execute()

        assert result.is_ok()
        assert result.value.total_accounts_checked == 2
        assert result.value.discrepancies_found == 0

    async def test_detects_tampered_counter(self, ledger, db_session):
        await ledger.consume("school_1", "admit-card", 50)
        await db_session.execute(
            update(CreditAccount)
            .where(CreditAccount.account_id == "school_1")
            .values(used_credits=75)
        )
        await db_session.commit()

        result = await ReconcileLedger(
            SqlAlchemyCreditAccountRepository(db_session),
            SqlAlchemyUsageLogRepository(db_session),
        ).execute()

        assert result.value.discrepancies_found == 1
        assert result.value.discrepancies[0].account_id == "school_1"
        assert result.value.discrepancies[0].discrepancy == 25


@pytest.mark.asyncio
class TestCreditStatsIntegration:

    async def test_stats_after_purchases_and_usage(self, ledger, packages):
        """
        Given: 100 + 50 credits purchased (approved and free) and 60 used
        When: Stats are requested
        Then: efficiency is round(60 / 150 * 100) = 40
        """
        purchase = await ledger.initiate_purchase("school_1", packages["Standard"].id, "cash")
        await ledger.approve(purchase.value.transaction.id)
        await ledger.initiate_purchase("school_1", packages["Starter"].id, "free")
        pending = await ledger.initiate_purchase("school_1", packages["Premium"].id, "cash")
        await ledger.consume("school_1", "admit-card", 40)
        await ledger.consume("school_1", "marksheet", 20)

        stats = await ledger.get_credit_stats("school_1")

        assert stats.is_ok()
        assert stats.value.total_purchased == 150
        assert stats.value.total_used == 60
        assert stats.value.this_month_usage == 60
        assert stats.value.efficiency == 40
        assert stats.value.current_balance == 590
        assert pending.value.status == "pending"

    async def test_stats_of_new_account(self, ledger):
        stats = await ledger.get_credit_stats("school_new")

        assert stats.is_ok()
        assert stats.value.current_balance == 500
        assert stats.value.total_purchased == 0
        assert stats.value.efficiency == 0


@pytest.mark.asyncio
class TestListingsIntegration:

    async def test_packages_ordered_by_credits(self, ledger, packages):
        result = await ledger.list_packages()

        assert [p.name for p in result.value] == ["Starter", "Standard", "Premium"]
        assert result.value[0].is_free is True

    async def test_transactions_paginated_newest_first(self, ledger, packages):
        ids = []
        for _ in range(3):
            purchase = await ledger.initiate_purchase("school_1", packages["Standard"].id, "cash")
            ids.append(purchase.value.transaction.id)
        await ledger.initiate_purchase("school_2", packages["Standard"].id, "cash")

        page = await ledger.list_transactions("school_1", limit=2, offset=1)

        assert page.value.total == 3
        assert [t.id for t in page.value.transactions] == [ids[1], ids[0]]
