"""Admin API Routes

Review of pending credit purchases. Every route requires the administrator
key unless authentication is disabled.
"""

import secrets
from typing import Optional
from fastapi import APIRouter, Depends, Header, status

from config import ApplicationConfig
from libs.result import Error
from src.api.schemas.credit_request import ResolveTransactionRequestSchema
from src.app.services.ledger_service import LedgerService
from src.app.use_cases.billing.dtos import PendingTransactionDTO, TransactionDTO
from src.depends import get_ledger_service
from src.api.error import ClientError, status_for


async def require_admin(x_admin_key: Optional[str] = Header(default=None)):
    if ApplicationConfig.AUTH_DISABLED:
        return
    expected = ApplicationConfig.ADMIN_API_KEY
    if not expected or not x_admin_key or not secrets.compare_digest(x_admin_key, expected):
        raise ClientError(
            Error(code="UNAUTHORIZED", message="Administrator key required"),
            status_code=status.HTTP_401_UNAUTHORIZED,
        )


router = APIRouter(
    prefix="/admin/credits",
    tags=["Admin"],
    dependencies=[Depends(require_admin)],
)


@router.get(
    "/transactions/pending",
    response_model=list[PendingTransactionDTO],
    status_code=status.HTTP_200_OK,
)
async def list_pending(service: LedgerService = Depends(get_ledger_service)):
    """Purchases awaiting review, newest first."""
    result = await service.list_pending()
    if result.is_err():
        raise ClientError(result.error, status_code=status_for(result.error))
    return result.value


@router.post(
    "/transactions/{transaction_id}/approve",
    response_model=TransactionDTO,
    status_code=status.HTTP_200_OK,
    responses={
        409: {
            "description": "Transaction already resolved",
            "content": {
                "application/json": {
                    "example": {
                        "error": {
                            "code": "INVALID_STATE",
                            "message": "Transaction 12 is already completed"
                        }
                    }
                }
            }
        }
    }
)
async def approve_transaction(
    transaction_id: int,
    request: Optional[ResolveTransactionRequestSchema] = None,
    service: LedgerService = Depends(get_ledger_service)
):
    """
    Approve a pending purchase and credit the account.

    **Returns:**
    - 200: Transaction completed
    - 404: Transaction not found
    - 409: Transaction is not pending
    """
    result = await service.approve(transaction_id, request.notes if request else None)
    if result.is_err():
        raise ClientError(result.error, status_code=status_for(result.error))
    return result.value


@router.post(
    "/transactions/{transaction_id}/reject",
    response_model=TransactionDTO,
    status_code=status.HTTP_200_OK,
)
async def reject_transaction(
    transaction_id: int,
    request: Optional[ResolveTransactionRequestSchema] = None,
    service: LedgerService = Depends(get_ledger_service)
):
    """
    Reject a pending purchase. The balance is left untouched.

    **Returns:**
    - 200: Transaction rejected
    - 404: Transaction not found
    - 409: Transaction is not pending
    """
    result = await service.reject(transaction_id, request.notes if request else None)
    if result.is_err():
        raise ClientError(result.error, status_code=status_for(result.error))
    return result.value
