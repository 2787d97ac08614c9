"""Credit Account Domain Entity

Holds the credit balance of one account. Each account has exactly one row,
created lazily with a starting grant on first access.
"""

from datetime import datetime
from sqlmodel import Field, Column
from sqlalchemy import CheckConstraint, Integer
from src.domain.base import BaseModel, BigIntegerId

# Grant given to an account on first access
DEFAULT_STARTING_CREDITS = 500


class CreditAccount(BaseModel, table=True):
    """
    Credit Account - Per-account credit balance

    Domain Rules:
    - One row per account (account_id is unique)
    - current_credits must be non-negative
    - used_credits only increases (lifetime consumption counter)
    - bonus_credits is informational and never debited
    - Balances change only through conditional updates in the repository
    """

    __tablename__ = "credit_accounts"
    __table_args__ = (
        CheckConstraint('current_credits >= 0', name='current_credits_non_negative'),
        CheckConstraint('bonus_credits >= 0', name='bonus_credits_non_negative'),
        CheckConstraint('used_credits >= 0', name='used_credits_non_negative'),
    )

    id: int = Field(
        sa_column=Column(BigIntegerId, primary_key=True, autoincrement=True),
        description="Unique row identifier (auto-increment)"
    )

    account_id: str = Field(
        index=True,
        unique=True,
        description="Externally issued account identity (immutable)"
    )

    current_credits: int = Field(
        default=0,
        sa_column=Column(Integer, nullable=False, default=0),
        description="Spendable balance (must be >= 0)"
    )

    bonus_credits: int = Field(
        default=0,
        sa_column=Column(Integer, nullable=False, default=0),
        description="Promotional balance, tracked but not spendable"
    )

    used_credits: int = Field(
        default=0,
        sa_column=Column(Integer, nullable=False, default=0),
        description="Lifetime consumed credits"
    )

    created_at: datetime = Field(
        default_factory=datetime.utcnow,
        description="Account creation timestamp"
    )

    updated_at: datetime = Field(
        default_factory=datetime.utcnow,
        description="Last balance update timestamp"
    )

    class Config:
        """SQLModel configuration"""
        json_schema_extra = {
            "example": {
                "id": 1,
                "account_id": "3f6c2a52-6f1e-4d8e-9a55-6d8d1e2b7c10",
                "current_credits": 450,
                "bonus_credits": 0,
                "used_credits": 50,
                "created_at": "2024-01-01T00:00:00Z",
                "updated_at": "2024-01-01T00:00:00Z"
            }
        }
