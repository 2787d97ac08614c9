"""Credit Package Domain Entity

Catalog entry mapping a price to a number of credits. Read-only to the ledger.
"""

from datetime import datetime
from decimal import Decimal
from typing import Optional
from sqlmodel import Field, Column
from sqlalchemy import CheckConstraint, Integer, Numeric, String, Text
from src.domain.base import BaseModel, BigIntegerId


class CreditPackage(BaseModel, table=True):
    """
    Credit Package - Purchasable bundle of credits

    Domain Rules:
    - credits must be positive
    - price must be non-negative; price == 0 marks a free package
    - Inactive packages cannot be purchased
    """

    __tablename__ = "credit_packages"
    __table_args__ = (
        CheckConstraint('credits > 0', name='package_credits_positive'),
        CheckConstraint('price >= 0', name='package_price_non_negative'),
    )

    id: int = Field(
        sa_column=Column(BigIntegerId, primary_key=True, autoincrement=True),
        description="Unique package identifier (auto-increment)"
    )

    name: str = Field(
        sa_column=Column(String(100), nullable=False),
        description="Display name of the package"
    )

    description: Optional[str] = Field(
        default=None,
        sa_column=Column(Text, nullable=True),
        description="Optional package description"
    )

    credits: int = Field(
        sa_column=Column(Integer, nullable=False),
        description="Credits granted when the package is purchased"
    )

    price: Decimal = Field(
        sa_column=Column(Numeric(10, 2), nullable=False),
        description="Package price (0 for free packages)"
    )

    is_active: bool = Field(
        default=True,
        description="Whether the package can currently be purchased"
    )

    created_at: datetime = Field(
        default_factory=datetime.utcnow,
        description="Package creation timestamp"
    )

    @property
    def is_free(self) -> bool:
        return Decimal(self.price) == 0

    class Config:
        """SQLModel configuration"""
        json_schema_extra = {
            "example": {
                "id": 2,
                "name": "Standard",
                "description": "100 credits for document generation",
                "credits": 100,
                "price": "500.00",
                "is_active": True,
                "created_at": "2024-01-01T00:00:00Z"
            }
        }
