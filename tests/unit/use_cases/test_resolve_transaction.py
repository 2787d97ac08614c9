"""Unit tests for ApproveTransaction and RejectTransaction use cases

Tests cover:
- Approval credits the account exactly once
- Rejection never touches the balance
- Resolving a terminal transaction fails with INVALID_STATE
- Unknown transactions fail with TRANSACTION_NOT_FOUND
"""

import pytest
from datetime import datetime
from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock

from src.app.use_cases.billing.approve_transaction import ApproveTransaction
from src.app.use_cases.billing.reject_transaction import RejectTransaction
from src.domain.credit_account import CreditAccount
from src.domain.credit_transaction import CreditTransaction, PaymentMethod, TransactionStatus


@pytest.fixture
def mock_transaction_repo():
    return MagicMock()


@pytest.fixture
def mock_account_repo():
    return MagicMock()


def make_transaction(status=TransactionStatus.PENDING, notes=None):
    now = datetime.utcnow()
    return CreditTransaction(
        id=12,
        account_id="school_1",
        package_id=2,
        credits=100,
        price=Decimal("500.00"),
        payment_method=PaymentMethod.CASH,
        status=status,
        notes=notes,
        created_at=now,
        updated_at=now,
    )


def make_account(current_credits):
    now = datetime.utcnow()
    return CreditAccount(
        id=1,
        account_id="school_1",
        current_credits=current_credits,
        bonus_credits=0,
        used_credits=0,
        created_at=now,
        updated_at=now,
    )


@pytest.mark.asyncio
class TestApproveTransaction:

    async def test_approve_pending_credits_account(self, mock_uow, mock_transaction_repo, mock_account_repo):
        """
        Given: A PENDING cash purchase of 100 credits
        When: An administrator approves it
        Then: Status becomes COMPLETED and the account is credited 100
        """
        # Arrange
        mock_transaction_repo.transition_status = AsyncMock(
            return_value=make_transaction(TransactionStatus.COMPLETED, "Approved by administrator")
        )
        mock_account_repo.credit = AsyncMock(return_value=make_account(600))
        use_case = ApproveTransaction(mock_uow, mock_transaction_repo, mock_account_repo)

        # Act
        result = await use_case.execute(12)

        # Assert
        assert result.is_ok()
        assert result.value.status == "completed"
        assert result.value.notes == "Approved by administrator"
        mock_transaction_repo.transition_status.assert_called_once_with(
            12, TransactionStatus.COMPLETED, "Approved by administrator"
        )
        mock_account_repo.credit.assert_called_once_with("school_1", 100)
        mock_uow.commit.assert_called_once()

    async def test_approve_uses_custom_notes(self, mock_uow, mock_transaction_repo, mock_account_repo):
        mock_transaction_repo.transition_status = AsyncMock(
            return_value=make_transaction(TransactionStatus.COMPLETED, "Cash received at office")
        )
        mock_account_repo.credit = AsyncMock(return_value=make_account(600))
        use_case = ApproveTransaction(mock_uow, mock_transaction_repo, mock_account_repo)

        await use_case.execute(12, notes="Cash received at office")

        mock_transaction_repo.transition_status.assert_called_once_with(
            12, TransactionStatus.COMPLETED, "Cash received at office"
        )

    async def test_approve_twice_is_invalid_state(self, mock_uow, mock_transaction_repo, mock_account_repo):
        """
        Given: Transaction is already COMPLETED
        When: It is approved again
        Then: Returns INVALID_STATE and credits nothing
        """
        mock_transaction_repo.transition_status = AsyncMock(return_value=None)
        mock_transaction_repo.get_by_id = AsyncMock(
            return_value=make_transaction(TransactionStatus.COMPLETED)
        )
        mock_account_repo.credit = AsyncMock()
        use_case = ApproveTransaction(mock_uow, mock_transaction_repo, mock_account_repo)

        result = await use_case.execute(12)

        assert result.is_err()
        assert result.error.code == "INVALID_STATE"
        assert result.error.message == "Transaction 12 is already completed"
        mock_account_repo.credit.assert_not_called()
        mock_uow.commit.assert_not_called()
        mock_uow.rollback.assert_called_once()

    async def test_approve_unknown_transaction(self, mock_uow, mock_transaction_repo, mock_account_repo):
        mock_transaction_repo.transition_status = AsyncMock(return_value=None)
        mock_transaction_repo.get_by_id = AsyncMock(return_value=None)
        use_case = ApproveTransaction(mock_uow, mock_transaction_repo, mock_account_repo)

        result = await use_case.execute(404)

        assert result.is_err()
        assert result.error.code == "TRANSACTION_NOT_FOUND"

    async def test_approve_without_account_rolls_back(self, mock_uow, mock_transaction_repo, mock_account_repo):
        mock_transaction_repo.transition_status = AsyncMock(
            return_value=make_transaction(TransactionStatus.COMPLETED)
        )
        mock_account_repo.credit = AsyncMock(return_value=None)
        use_case = ApproveTransaction(mock_uow, mock_transaction_repo, mock_account_repo)

        result = await use_case.execute(12)

        assert result.is_err()
        assert result.error.code == "ACCOUNT_NOT_FOUND"
        mock_uow.rollback.assert_called_once()
        mock_uow.commit.assert_not_called()

    async def test_approve_non_positive_credits_is_invalid_amount(
        self, mock_uow, mock_transaction_repo, mock_account_repo
    ):
        """
        Given: A pending transaction carrying 0 credits
        When: It is approved
        Then: INVALID_AMOUNT is returned and nothing is credited or committed
        """
        # Arrange
        transaction = make_transaction(TransactionStatus.COMPLETED)
        transaction.credits = 0
        mock_transaction_repo.transition_status = AsyncMock(return_value=transaction)
        mock_account_repo.credit = AsyncMock()
        use_case = ApproveTransaction(mock_uow, mock_transaction_repo, mock_account_repo)

        # Act
        result = await use_case.execute(12)

        # Assert
        assert result.is_err()
        assert result.error.code == "INVALID_AMOUNT"
        mock_account_repo.credit.assert_not_called()
        mock_uow.rollback.assert_called_once()
        mock_uow.commit.assert_not_called()

    async def test_approve_unexpected_failure(self, mock_uow, mock_transaction_repo, mock_account_repo):
        mock_transaction_repo.transition_status = AsyncMock(side_effect=RuntimeError("boom"))
        use_case = ApproveTransaction(mock_uow, mock_transaction_repo, mock_account_repo)

        result = await use_case.execute(12)

        assert result.is_err()
        assert result.error.code == "APPROVE_TRANSACTION_FAILED"
        mock_uow.rollback.assert_called_once()


@pytest.mark.asyncio
class TestRejectTransaction:

    async def test_reject_pending(self, mock_uow, mock_transaction_repo):
        mock_transaction_repo.transition_status = AsyncMock(
            return_value=make_transaction(TransactionStatus.REJECTED, "Rejected by administrator")
        )
        use_case = RejectTransaction(mock_uow, mock_transaction_repo)

        result = await use_case.execute(12)

        assert result.is_ok()
        assert result.value.status == "rejected"
        mock_transaction_repo.transition_status.assert_called_once_with(
            12, TransactionStatus.REJECTED, "Rejected by administrator"
        )
        mock_uow.commit.assert_called_once()

    async def test_reject_after_approval_is_invalid_state(self, mock_uow, mock_transaction_repo):
        mock_transaction_repo.transition_status = AsyncMock(return_value=None)
        mock_transaction_repo.get_by_id = AsyncMock(
            return_value=make_transaction(TransactionStatus.COMPLETED)
        )
        use_case = RejectTransaction(mock_uow, mock_transaction_repo)

        result = await use_case.execute(12)

        assert result.is_err()
        assert result.error.code == "INVALID_STATE"
        assert "requested=rejected" in result.error.reason
