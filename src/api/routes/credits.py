"""Credit API Routes

FastAPI routes for account balances, package purchases and credit usage.
"""

from typing import Optional
from fastapi import APIRouter, Depends, Query, status

from src.api.schemas.credit_request import PurchaseRequestSchema, ConsumeRequestSchema
from src.app.services.ledger_service import LedgerService
from src.app.use_cases.billing.dtos import (
    BalanceResponseDTO,
    ConsumeResponseDTO,
    CreditStatsResponseDTO,
    ListTransactionsResponseDTO,
    ListUsageResponseDTO,
    PackageDTO,
    PurchaseResponseDTO,
)
from src.depends import get_ledger_service
from src.api.error import ClientError, status_for

router = APIRouter(prefix="/credits", tags=["Credits"])


def _unwrap(result):
    if result.is_err():
        raise ClientError(result.error, status_code=status_for(result.error))
    return result.value


@router.get(
    "/packages",
    response_model=list[PackageDTO],
    status_code=status.HTTP_200_OK,
)
async def list_packages(service: LedgerService = Depends(get_ledger_service)):
    """
    List active credit packages, smallest bundle first.

    Packages with price 0 are free and can be claimed once per month.
    """
    return _unwrap(await service.list_packages())


@router.get(
    "/{account_id}/balance",
    response_model=BalanceResponseDTO,
    status_code=status.HTTP_200_OK,
)
async def get_balance(
    account_id: str,
    service: LedgerService = Depends(get_ledger_service)
):
    """
    Get the credit balance of an account.

    The account is created with its starting grant on first access.

    **Example response:**
    ```json
    {
      "account_id": "3f6c2a52-6f1e-4d8e-9a55-6d8d1e2b7c10",
      "current_credits": 450,
      "bonus_credits": 0,
      "used_credits": 50,
      "last_updated": "2024-01-01T00:00:00Z"
    }
    ```
    """
    return _unwrap(await service.get_balance(account_id))


@router.get(
    "/{account_id}/stats",
    response_model=CreditStatsResponseDTO,
    status_code=status.HTTP_200_OK,
)
async def get_credit_stats(
    account_id: str,
    service: LedgerService = Depends(get_ledger_service)
):
    """Purchased, used and this month's credits with usage efficiency."""
    return _unwrap(await service.get_credit_stats(account_id))


@router.get(
    "/{account_id}/transactions",
    response_model=ListTransactionsResponseDTO,
    status_code=status.HTTP_200_OK,
)
async def list_transactions(
    account_id: str,
    limit: int = Query(20, ge=1, le=100, description="Maximum transactions to return"),
    offset: int = Query(0, ge=0, description="Number of transactions to skip"),
    service: LedgerService = Depends(get_ledger_service)
):
    """Purchase history of an account, most recent first."""
    return _unwrap(await service.list_transactions(account_id, limit, offset))


@router.get(
    "/{account_id}/usage",
    response_model=ListUsageResponseDTO,
    status_code=status.HTTP_200_OK,
)
async def list_usage(
    account_id: str,
    limit: Optional[int] = Query(None, ge=1, le=500, description="Maximum usage logs to return"),
    offset: int = Query(0, ge=0, description="Number of usage logs to skip"),
    service: LedgerService = Depends(get_ledger_service)
):
    """Consumption history of an account, most recent first."""
    return _unwrap(await service.list_usage(account_id, limit, offset))


@router.post(
    "/{account_id}/purchase",
    response_model=PurchaseResponseDTO,
    status_code=status.HTTP_200_OK,
    responses={
        409: {
            "description": "Free package already claimed this month",
            "content": {
                "application/json": {
                    "example": {
                        "error": {
                            "code": "FREE_PACKAGE_ALREADY_CLAIMED",
                            "message": "Free package already claimed this month"
                        }
                    }
                }
            }
        },
        400: {
            "description": "Missing payment proof",
            "content": {
                "application/json": {
                    "example": {
                        "error": {
                            "code": "MISSING_PAYMENT_PROOF",
                            "message": "Payment number and transaction reference are required"
                        }
                    }
                }
            }
        }
    }
)
async def purchase_package(
    account_id: str,
    request: PurchaseRequestSchema,
    service: LedgerService = Depends(get_ledger_service)
):
    """
    Purchase a credit package.

    Free packages are credited immediately; paid packages are created as
    PENDING and credited when an administrator approves them.

    **Returns:**
    - 200: Transaction created
    - 400: Missing payment proof or unsupported payment method
    - 404: Package not found
    - 409: Free package already claimed this month
    """
    result = await service.initiate_purchase(
        account_id=account_id,
        package_id=request.package_id,
        payment_method=request.payment_method,
        payment_number=request.payment_number,
        external_reference=request.external_reference,
    )
    return _unwrap(result)


@router.post(
    "/{account_id}/consume",
    response_model=ConsumeResponseDTO,
    status_code=status.HTTP_200_OK,
    responses={
        402: {
            "description": "Insufficient credits",
            "content": {
                "application/json": {
                    "example": {
                        "error": {
                            "code": "INSUFFICIENT_CREDITS",
                            "message": "Insufficient credits. Required: 50, Available: 20"
                        }
                    }
                }
            }
        }
    }
)
async def consume_credits(
    account_id: str,
    request: ConsumeRequestSchema,
    service: LedgerService = Depends(get_ledger_service)
):
    """
    Consume credits for a feature invocation.

    The debit and the usage log are written together. Repeating a request
    with the same idempotency_key returns the original usage log.

    **Returns:**
    - 200: Credits consumed
    - 400: Non-positive amount
    - 402: Insufficient credits available
    """
    result = await service.consume(
        account_id=account_id,
        feature=request.feature,
        credits=request.credits,
        description=request.description,
        document_reference=request.document_reference,
        metadata=request.metadata,
        idempotency_key=request.idempotency_key,
    )
    return _unwrap(result)
