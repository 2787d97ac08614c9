"""Usage Log Domain Entity

Immutable record of credits spent on a feature invocation.
"""

from datetime import datetime
from typing import Optional
from sqlmodel import Field, Column, Index
from sqlalchemy import CheckConstraint, ForeignKey, Integer, String, Text, UniqueConstraint
from src.domain.base import BaseModel, BigIntegerId


class UsageLog(BaseModel, table=True):
    """
    Usage Log - Credits consumed by a feature

    Domain Rules:
    - credits must be positive
    - Created in the same database transaction as the account debit
    - Immutable once written
    - Sum of credits per account equals CreditAccount.used_credits
    - idempotency_key is optional; when present it is unique per account
    """

    __tablename__ = "credit_usage_logs"
    __table_args__ = (
        CheckConstraint('credits > 0', name='usage_credits_positive'),
        UniqueConstraint('account_id', 'idempotency_key', name='uq_usage_idempotency_key_per_account'),
        Index('ix_credit_usage_logs_account_created', 'account_id', 'created_at'),
    )

    id: int = Field(
        sa_column=Column(BigIntegerId, primary_key=True, autoincrement=True),
        description="Unique usage log identifier (auto-increment)"
    )

    account_id: str = Field(
        sa_column=Column(String(255), ForeignKey("credit_accounts.account_id"), nullable=False),
        description="Account whose credits were consumed"
    )

    feature: str = Field(
        sa_column=Column(String(100), nullable=False),
        description="Feature tag that consumed credits (e.g. 'admit-card')"
    )

    credits: int = Field(
        sa_column=Column(Integer, nullable=False),
        description="Credits consumed"
    )

    description: Optional[str] = Field(
        default=None,
        sa_column=Column(Text, nullable=True),
        description="Human-readable description"
    )

    document_reference: Optional[str] = Field(
        default=None,
        sa_column=Column(String(255), nullable=True),
        description="Link to the generated artifact, if any"
    )

    metadata_json: Optional[str] = Field(
        default=None,
        sa_column=Column(Text, nullable=True),
        description="JSON metadata supplied by the consumer"
    )

    idempotency_key: Optional[str] = Field(
        default=None,
        sa_column=Column(String(255), nullable=True),
        description="Optional caller key that makes retries safe"
    )

    created_at: datetime = Field(
        default_factory=datetime.utcnow,
        description="Consumption timestamp (immutable)"
    )

    class Config:
        json_schema_extra = {
            "example": {
                "id": 1,
                "account_id": "3f6c2a52-6f1e-4d8e-9a55-6d8d1e2b7c10",
                "feature": "admit-card",
                "credits": 50,
                "description": "Admit card generation - 10 documents",
                "document_reference": "template_4",
                "metadata_json": "{\"students\": 10}",
                "idempotency_key": None,
                "created_at": "2024-01-01T00:00:00Z"
            }
        }
