"""Request schemas for Credit API

Pydantic models for validating incoming HTTP requests.
"""

from typing import Optional, Dict, Any
from pydantic import BaseModel, Field


class PurchaseRequestSchema(BaseModel):
    """
    Request schema for purchasing a credit package

    Used for POST /credits/{account_id}/purchase endpoint.
    """

    package_id: int = Field(
        ...,
        description="Credit package to purchase"
    )

    payment_method: str = Field(
        ...,
        min_length=1,
        description="Payment method (free, cash, bkash, nagad, rocket)"
    )

    payment_number: Optional[str] = Field(
        default=None,
        max_length=50,
        description="Sender wallet number (required for non-cash paid packages)"
    )

    external_reference: Optional[str] = Field(
        default=None,
        max_length=255,
        description="Payment provider transaction ID (required for non-cash paid packages)"
    )

    class Config:
        json_schema_extra = {
            "example": {
                "package_id": 2,
                "payment_method": "bkash",
                "payment_number": "01700000000",
                "external_reference": "8N7A6B5C4D"
            }
        }


class ConsumeRequestSchema(BaseModel):
    """
    Request schema for consuming credits

    Used for POST /credits/{account_id}/consume endpoint. A non-positive
    amount is rejected by the ledger with INVALID_AMOUNT, not by validation.
    """

    feature: str = Field(
        ...,
        min_length=1,
        max_length=100,
        description="Feature tag (required, non-empty)"
    )

    credits: int = Field(
        ...,
        description="Credits to consume"
    )

    description: Optional[str] = Field(
        default=None,
        description="Human-readable description"
    )

    document_reference: Optional[str] = Field(
        default=None,
        max_length=255,
        description="Link to the generated artifact"
    )

    metadata: Optional[Dict[str, Any]] = Field(
        default=None,
        description="Optional metadata for audit trail"
    )

    idempotency_key: Optional[str] = Field(
        default=None,
        min_length=1,
        max_length=255,
        description="Optional key that makes retries safe"
    )

    class Config:
        json_schema_extra = {
            "example": {
                "feature": "admit-card",
                "credits": 50,
                "description": "Admit card generation - 10 documents",
                "document_reference": "template_4",
                "metadata": {"students": 10},
                "idempotency_key": "admit-card:batch_812"
            }
        }


class ResolveTransactionRequestSchema(BaseModel):
    """Optional body for approve/reject endpoints"""

    notes: Optional[str] = Field(
        default=None,
        description="Administrator note stored on the transaction"
    )
