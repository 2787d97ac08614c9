"""Unit tests for GetCreditStats use case"""

import pytest
from datetime import datetime
from unittest.mock import AsyncMock, MagicMock

from src.app.use_cases.billing.get_credit_stats import GetCreditStats
from src.domain.credit_account import CreditAccount


@pytest.fixture
def repos():
    account_repo = MagicMock()
    transaction_repo = MagicMock()
    usage_repo = MagicMock()
    now = datetime.utcnow()
    account_repo.get_or_create = AsyncMock(
        return_value=CreditAccount(
            id=1,
            account_id="school_1",
            current_credits=420,
            bonus_credits=0,
            used_credits=180,
            created_at=now,
            updated_at=now,
        )
    )
    return account_repo, transaction_repo, usage_repo


@pytest.mark.asyncio
class TestGetCreditStats:

    async def test_computes_efficiency(self, mock_uow, repos):
        """
        Given: 300 credits purchased, 180 used, 40 of them this month
        When: GetCreditStats is executed
        Then: efficiency is round(180 / 300 * 100) = 60
        """
        # Arrange
        account_repo, transaction_repo, usage_repo = repos
        transaction_repo.get_completed_credit_sum = AsyncMock(return_value=300)
        usage_repo.get_credit_sum = AsyncMock(side_effect=[180, 40])
        use_case = GetCreditStats(mock_uow, account_repo, transaction_repo, usage_repo)

        # Act
        result = await use_case.execute("school_1")

        # Assert
        assert result.is_ok()
        assert result.value.current_balance == 420
        assert result.value.total_purchased == 300
        assert result.value.total_used == 180
        assert result.value.this_month_usage == 40
        assert result.value.efficiency == 60

        since = usage_repo.get_credit_sum.call_args_list[1].kwargs["since"]
        assert since.day == 1 and since.hour == 0

    async def test_efficiency_is_zero_without_purchases(self, mock_uow, repos):
        account_repo, transaction_repo, usage_repo = repos
        transaction_repo.get_completed_credit_sum = AsyncMock(return_value=0)
        usage_repo.get_credit_sum = AsyncMock(side_effect=[80, 80])
        use_case = GetCreditStats(mock_uow, account_repo, transaction_repo, usage_repo)

        result = await use_case.execute("school_1")

        assert result.is_ok()
        assert result.value.efficiency == 0

    async def test_rounds_efficiency(self, mock_uow, repos):
        account_repo, transaction_repo, usage_repo = repos
        transaction_repo.get_completed_credit_sum = AsyncMock(return_value=300)
        usage_repo.get_credit_sum = AsyncMock(side_effect=[100, 0])
        use_case = GetCreditStats(mock_uow, account_repo, transaction_repo, usage_repo)

        result = await use_case.execute("school_1")

        assert result.value.efficiency == 33

    async def test_commits_after_all_reads(self, mock_uow, repos):
        """
        Given: A first access that creates the account
        When: GetCreditStats is executed
        Then: The balance and every sum are read before the single commit
        """
        # Arrange
        account_repo, transaction_repo, usage_repo = repos
        calls = []
        account = account_repo.get_or_create.return_value
        account_repo.get_or_create = AsyncMock(
            side_effect=lambda *args: calls.append("account") or account
        )
        transaction_repo.get_completed_credit_sum = AsyncMock(
            side_effect=lambda *args: calls.append("purchased") or 300
        )
        usage_repo.get_credit_sum = AsyncMock(
            side_effect=lambda *args, **kwargs: calls.append("used") or 180
        )
        mock_uow.commit = AsyncMock(side_effect=lambda: calls.append("commit"))
        use_case = GetCreditStats(mock_uow, account_repo, transaction_repo, usage_repo)

        # Act
        result = await use_case.execute("school_1")

        # Assert
        assert result.is_ok()
        assert calls == ["account", "purchased", "used", "used", "commit"]
