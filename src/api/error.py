"""HTTP error mapping for use-case errors"""

from fastapi import Request, status
from fastapi.responses import JSONResponse
from libs.result import Error
from src.app.use_cases.billing.errors import ErrorCode

ERROR_STATUS_CODES = {
    ErrorCode.INVALID_AMOUNT: status.HTTP_400_BAD_REQUEST,
    ErrorCode.INVALID_PAYMENT_METHOD: status.HTTP_400_BAD_REQUEST,
    ErrorCode.MISSING_PAYMENT_PROOF: status.HTTP_400_BAD_REQUEST,
    ErrorCode.INSUFFICIENT_CREDITS: status.HTTP_402_PAYMENT_REQUIRED,
    ErrorCode.PACKAGE_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.TRANSACTION_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.ACCOUNT_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.FREE_PACKAGE_ALREADY_CLAIMED: status.HTTP_409_CONFLICT,
    ErrorCode.INVALID_STATE: status.HTTP_409_CONFLICT,
    ErrorCode.STORE_UNAVAILABLE: status.HTTP_503_SERVICE_UNAVAILABLE,
}


def status_for(error: Error) -> int:
    if error.code in ERROR_STATUS_CODES:
        return ERROR_STATUS_CODES[error.code]
    # Operation-specific *_FAILED codes are unexpected server-side failures
    if error.code.endswith("_FAILED"):
        return status.HTTP_500_INTERNAL_SERVER_ERROR
    return status.HTTP_400_BAD_REQUEST


class ClientError(Exception):
    """Raised by routes to return a use-case Error as an HTTP response"""

    def __init__(self, error: Error, status_code: int = status.HTTP_400_BAD_REQUEST):
        super().__init__(error.message)
        self.error = error
        self.status_code = status_code


async def client_error_handler(request: Request, exc: ClientError) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.error.model_dump(exclude_none=True)},
    )
