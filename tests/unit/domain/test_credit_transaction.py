"""Unit tests for CreditTransaction domain rules

Tests cover:
- Status state machine (pending -> completed | rejected)
- Payment proof requirements per payment method
- Free-claim month bucketing
"""

import pytest
from datetime import datetime
from decimal import Decimal

from src.domain.credit_transaction import (
    CreditTransaction,
    PaymentMethod,
    TransactionStatus,
    claim_month_for,
    month_start,
)


class TestTransactionStatus:
    """Test the closed status state machine"""

    def test_pending_can_complete_or_reject(self):
        assert TransactionStatus.PENDING.can_transition_to(TransactionStatus.COMPLETED)
        assert TransactionStatus.PENDING.can_transition_to(TransactionStatus.REJECTED)

    @pytest.mark.parametrize("terminal", [TransactionStatus.COMPLETED, TransactionStatus.REJECTED])
    def test_terminal_states_have_no_exit(self, terminal):
        assert terminal.is_terminal
        for target in TransactionStatus:
            assert not terminal.can_transition_to(target)

    def test_pending_is_not_terminal(self):
        assert not TransactionStatus.PENDING.is_terminal

    def test_pending_cannot_transition_to_itself(self):
        assert not TransactionStatus.PENDING.can_transition_to(TransactionStatus.PENDING)

    def test_sources_of_completed_is_only_pending(self):
        assert TransactionStatus.sources_of(TransactionStatus.COMPLETED) == (TransactionStatus.PENDING,)

    def test_nothing_leads_back_to_pending(self):
        assert TransactionStatus.sources_of(TransactionStatus.PENDING) == ()

    def test_status_values_are_lowercase(self):
        assert [s.value for s in TransactionStatus] == ["pending", "completed", "rejected"]


class TestPaymentMethod:
    """Test payment proof requirements"""

    def test_cash_needs_no_proof(self):
        assert PaymentMethod.CASH.requires_payment_proof is False

    @pytest.mark.parametrize("method", [PaymentMethod.BKASH, PaymentMethod.NAGAD, PaymentMethod.ROCKET])
    def test_mobile_wallets_need_proof(self, method):
        assert method.requires_payment_proof is True

    def test_unknown_method_is_rejected(self):
        with pytest.raises(ValueError):
            PaymentMethod("paypal")


class TestClaimMonth:
    """Test month bucketing used by the free-claim limit"""

    def test_claim_month_format(self):
        assert claim_month_for(datetime(2024, 3, 31, 23, 59, 59)) == "2024-03"

    def test_month_start_truncates_to_first_instant(self):
        assert month_start(datetime(2024, 3, 17, 14, 5, 9, 123)) == datetime(2024, 3, 1)

    def test_month_boundary_changes_bucket(self):
        assert claim_month_for(datetime(2024, 1, 31, 23, 59)) != claim_month_for(datetime(2024, 2, 1, 0, 0))


class TestCreditTransactionDefaults:

    def test_new_transaction_is_pending(self):
        txn = CreditTransaction(
            account_id="school_1",
            package_id=2,
            credits=100,
            price=Decimal("500.00"),
            payment_method=PaymentMethod.CASH,
        )

        assert txn.status == TransactionStatus.PENDING
        assert txn.claim_month is None
        assert txn.created_at is not None
