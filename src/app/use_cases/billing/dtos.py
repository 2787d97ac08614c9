"""Data Transfer Objects for Billing Use Cases

Pydantic models for command inputs and response outputs.
"""

import json
from datetime import datetime
from decimal import Decimal
from typing import Optional, Dict, Any
from pydantic import BaseModel, Field
from src.domain.credit_transaction import CreditTransaction
from src.domain.credit_package import CreditPackage
from src.domain.usage_log import UsageLog


class PurchaseCommandDTO(BaseModel):
    """
    Command DTO for initiating a credit purchase

    Used as input to InitiatePurchase use case.
    """

    account_id: str = Field(
        ...,
        description="Purchasing account"
    )

    package_id: int = Field(
        ...,
        description="Credit package to purchase"
    )

    payment_method: str = Field(
        ...,
        description="Payment method (free, cash, bkash, nagad, rocket)"
    )

    payment_number: Optional[str] = Field(
        default=None,
        description="Sender wallet number (required for non-cash paid packages)"
    )

    external_reference: Optional[str] = Field(
        default=None,
        description="Payment provider transaction ID (required for non-cash paid packages)"
    )

    class Config:
        json_schema_extra = {
            "example": {
                "account_id": "3f6c2a52-6f1e-4d8e-9a55-6d8d1e2b7c10",
                "package_id": 2,
                "payment_method": "bkash",
                "payment_number": "01700000000",
                "external_reference": "8N7A6B5C4D"
            }
        }


class ConsumeCommandDTO(BaseModel):
    """
    Command DTO for consuming credits

    Used as input to ConsumeCredit use case. The credit cost is resolved by
    the caller from its own feature price list.
    """

    account_id: str = Field(
        ...,
        description="Account whose credits are consumed"
    )

    feature: str = Field(
        ...,
        description="Feature tag (e.g. 'admit-card', 'marksheet')"
    )

    credits: int = Field(
        ...,
        description="Credits to consume (must be > 0)"
    )

    description: Optional[str] = Field(
        default=None,
        description="Human-readable description"
    )

    document_reference: Optional[str] = Field(
        default=None,
        description="Link to the generated artifact"
    )

    metadata: Optional[Dict[str, Any]] = Field(
        default=None,
        description="Optional metadata for audit trail"
    )

    idempotency_key: Optional[str] = Field(
        default=None,
        description="Optional key that makes retries of the same request safe"
    )

    class Config:
        json_schema_extra = {
            "example": {
                "account_id": "3f6c2a52-6f1e-4d8e-9a55-6d8d1e2b7c10",
                "feature": "admit-card",
                "credits": 50,
                "description": "Admit card generation - 10 documents",
                "document_reference": "template_4",
                "metadata": {"students": 10},
                "idempotency_key": "admit-card:batch_812"
            }
        }


class BalanceResponseDTO(BaseModel):
    """
    Response DTO for get balance operation

    Returned by GetBalance use case.
    """

    account_id: str = Field(..., description="Account identifier")
    current_credits: int = Field(..., description="Spendable balance")
    bonus_credits: int = Field(..., description="Promotional balance (informational)")
    used_credits: int = Field(..., description="Lifetime consumed credits")
    last_updated: datetime = Field(..., description="Timestamp of last balance update")

    class Config:
        json_schema_extra = {
            "example": {
                "account_id": "3f6c2a52-6f1e-4d8e-9a55-6d8d1e2b7c10",
                "current_credits": 450,
                "bonus_credits": 0,
                "used_credits": 50,
                "last_updated": "2024-01-01T00:00:00Z"
            }
        }


class TransactionDTO(BaseModel):
    """Purchase transaction as exposed to callers"""

    id: int
    account_id: str
    package_id: int
    credits: int
    price: Decimal
    payment_method: str
    payment_number: Optional[str] = None
    external_reference: Optional[str] = None
    status: str
    description: Optional[str] = None
    notes: Optional[str] = None
    created_at: datetime
    updated_at: datetime


class PendingTransactionDTO(TransactionDTO):
    """Pending purchase with the name of the package being bought"""

    package_name: Optional[str] = Field(default=None, description="Name of the purchased package")


class PurchaseResponseDTO(BaseModel):
    """
    Response DTO for InitiatePurchase

    credits_added is True only for free packages, which complete immediately.
    """

    transaction: TransactionDTO
    credits_added: bool = Field(..., description="Whether the purchase was auto-completed")
    status: str = Field(..., description="Resulting transaction status")
    current_credits: int = Field(..., description="Balance after the purchase")


class UsageLogDTO(BaseModel):
    """Consumption event as exposed to callers"""

    id: int
    account_id: str
    feature: str
    credits: int
    description: Optional[str] = None
    document_reference: Optional[str] = None
    metadata: Optional[Dict[str, Any]] = None
    idempotency_key: Optional[str] = None
    created_at: datetime


class ConsumeResponseDTO(BaseModel):
    """Response DTO for ConsumeCredit"""

    usage_log: UsageLogDTO
    current_credits: int = Field(..., description="Balance after consumption")
    used_credits: int = Field(..., description="Lifetime consumed credits after consumption")


class ListTransactionsResponseDTO(BaseModel):
    transactions: list[TransactionDTO]
    total: int
    limit: int
    offset: int


class ListUsageResponseDTO(BaseModel):
    usage_logs: list[UsageLogDTO]
    total: int
    limit: int
    offset: int


class PackageDTO(BaseModel):
    id: int
    name: str
    description: Optional[str] = None
    credits: int
    price: Decimal
    is_free: bool


class CreditStatsResponseDTO(BaseModel):
    """
    Response DTO for GetCreditStats

    efficiency is total_used as a rounded percentage of total_purchased.
    """

    account_id: str
    current_balance: int
    total_purchased: int
    total_used: int
    this_month_usage: int
    efficiency: int


class AccountDiscrepancyDTO(BaseModel):
    """used_credits that does not match the account's usage logs"""

    account_id: str
    used_credits: int
    logged_credits: int
    discrepancy: int


class ReconciliationResultDTO(BaseModel):
    total_accounts_checked: int
    discrepancies_found: int
    discrepancies: list[AccountDiscrepancyDTO]
    reconciliation_time: datetime
    execution_time_ms: int


def to_transaction_dto(transaction: CreditTransaction) -> TransactionDTO:
    return TransactionDTO(
        id=transaction.id,
        account_id=transaction.account_id,
        package_id=transaction.package_id,
        credits=transaction.credits,
        price=transaction.price,
        payment_method=_enum_value(transaction.payment_method),
        payment_number=transaction.payment_number,
        external_reference=transaction.external_reference,
        status=_enum_value(transaction.status),
        description=transaction.description,
        notes=transaction.notes,
        created_at=transaction.created_at,
        updated_at=transaction.updated_at,
    )


def to_usage_log_dto(usage_log: UsageLog) -> UsageLogDTO:
    return UsageLogDTO(
        id=usage_log.id,
        account_id=usage_log.account_id,
        feature=usage_log.feature,
        credits=usage_log.credits,
        description=usage_log.description,
        document_reference=usage_log.document_reference,
        metadata=json.loads(usage_log.metadata_json) if usage_log.metadata_json else None,
        idempotency_key=usage_log.idempotency_key,
        created_at=usage_log.created_at,
    )


def to_package_dto(package: CreditPackage) -> PackageDTO:
    return PackageDTO(
        id=package.id,
        name=package.name,
        description=package.description,
        credits=package.credits,
        price=package.price,
        is_free=package.is_free,
    )


def _enum_value(value) -> str:
    return value.value if hasattr(value, "value") else value
