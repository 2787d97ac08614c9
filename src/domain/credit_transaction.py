"""Credit Transaction Domain Entity

One row per purchase attempt, including free packages. The status field is a
closed state machine: pending -> completed | rejected, both terminal.
"""

from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Optional
from sqlmodel import Field, Column, Index
from sqlalchemy import ForeignKey, Integer, Numeric, String, Text, UniqueConstraint
from src.domain.base import BaseModel, BigIntegerId


class TransactionStatus(str, Enum):
    """Purchase transaction lifecycle states"""
    PENDING = "pending"        # Awaiting administrator approval
    COMPLETED = "completed"    # Credits applied (terminal)
    REJECTED = "rejected"      # Credits never applied (terminal)

    @property
    def is_terminal(self) -> bool:
        return not _ALLOWED_TRANSITIONS[self]

    def can_transition_to(self, target: "TransactionStatus") -> bool:
        return target in _ALLOWED_TRANSITIONS[self]

    @classmethod
    def sources_of(cls, target: "TransactionStatus") -> tuple["TransactionStatus", ...]:
        """States from which `target` may be entered"""
        return tuple(s for s in cls if target in _ALLOWED_TRANSITIONS[s])


_ALLOWED_TRANSITIONS: dict[TransactionStatus, frozenset] = {
    TransactionStatus.PENDING: frozenset({TransactionStatus.COMPLETED, TransactionStatus.REJECTED}),
    TransactionStatus.COMPLETED: frozenset(),
    TransactionStatus.REJECTED: frozenset(),
}


class PaymentMethod(str, Enum):
    """How a purchase is paid for"""
    FREE = "free"
    CASH = "cash"          # Settled in person, verified by an administrator
    BKASH = "bkash"        # Mobile wallets require payment proof
    NAGAD = "nagad"
    ROCKET = "rocket"

    @property
    def requires_payment_proof(self) -> bool:
        """Whether a paid purchase with this method must carry payment proof"""
        return self is not PaymentMethod.CASH


class CreditTransaction(BaseModel, table=True):
    """
    Credit Transaction - Purchase attempt and its approval lifecycle

    Domain Rules:
    - Free packages (price == 0) are created directly as COMPLETED
    - Paid packages are created as PENDING and resolved by an administrator
    - Non-cash paid methods need payment_number and external_reference
    - Credits are applied to the account exactly once, on entering COMPLETED
    - claim_month is set only on free claims; the unique constraint on
      (account_id, package_id, claim_month) allows one free claim per month
    - Rows are never deleted
    """

    __tablename__ = "credit_transactions"
    __table_args__ = (
        UniqueConstraint('account_id', 'package_id', 'claim_month', name='uq_free_claim_per_month'),
        Index('ix_credit_transactions_created_at', 'created_at'),
        Index('ix_credit_transactions_account_status', 'account_id', 'status'),
    )

    id: int = Field(
        sa_column=Column(BigIntegerId, primary_key=True, autoincrement=True),
        description="Unique transaction identifier (auto-increment)"
    )

    account_id: str = Field(
        sa_column=Column(String(255), ForeignKey("credit_accounts.account_id"), nullable=False),
        description="Owning account"
    )

    package_id: int = Field(
        sa_column=Column(BigIntegerId, ForeignKey("credit_packages.id"), nullable=False),
        description="Purchased credit package"
    )

    credits: int = Field(
        sa_column=Column(Integer, nullable=False),
        description="Credits granted if the transaction completes"
    )

    price: Decimal = Field(
        sa_column=Column(Numeric(10, 2), nullable=False),
        description="Price paid (0 for free packages)"
    )

    payment_method: PaymentMethod = Field(
        description="Payment method (free, cash, bkash, nagad, rocket)"
    )

    payment_number: Optional[str] = Field(
        default=None,
        sa_column=Column(String(50), nullable=True),
        description="Sender wallet number for mobile payments"
    )

    external_reference: Optional[str] = Field(
        default=None,
        sa_column=Column(String(255), nullable=True),
        description="Payment provider transaction ID supplied by the payer"
    )

    status: TransactionStatus = Field(
        default=TransactionStatus.PENDING,
        description="Lifecycle status (pending, completed, rejected)"
    )

    description: Optional[str] = Field(
        default=None,
        sa_column=Column(Text, nullable=True),
        description="Human-readable description"
    )

    notes: Optional[str] = Field(
        default=None,
        sa_column=Column(Text, nullable=True),
        description="Annotation set by the approver"
    )

    claim_month: Optional[str] = Field(
        default=None,
        sa_column=Column(String(7), nullable=True),
        description="YYYY-MM bucket of a free claim (NULL for paid purchases)"
    )

    created_at: datetime = Field(
        default_factory=datetime.utcnow,
        description="Transaction creation timestamp"
    )

    updated_at: datetime = Field(
        default_factory=datetime.utcnow,
        description="Last status change timestamp"
    )

    class Config:
        """SQLModel configuration"""
        json_schema_extra = {
            "example": {
                "id": 17,
                "account_id": "3f6c2a52-6f1e-4d8e-9a55-6d8d1e2b7c10",
                "package_id": 2,
                "credits": 100,
                "price": "500.00",
                "payment_method": "bkash",
                "payment_number": "01700000000",
                "external_reference": "8N7A6B5C4D",
                "status": "pending",
                "description": "Credit purchase - Standard",
                "notes": None,
                "claim_month": None,
                "created_at": "2024-01-01T00:00:00Z",
                "updated_at": "2024-01-01T00:00:00Z"
            }
        }


def month_start(moment: datetime) -> datetime:
    """First instant of the calendar month containing `moment`"""
    return moment.replace(day=1, hour=0, minute=0, second=0, microsecond=0)


def claim_month_for(moment: datetime) -> str:
    """Month bucket used by the free-claim uniqueness constraint"""
    return moment.strftime("%Y-%m")
