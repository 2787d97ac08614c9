"""Error codes returned by the credit ledger use cases"""

import asyncio
from sqlalchemy.exc import InterfaceError, OperationalError
from libs.result import Error


class ErrorCode:
    INVALID_AMOUNT = "INVALID_AMOUNT"
    INSUFFICIENT_CREDITS = "INSUFFICIENT_CREDITS"
    MISSING_PAYMENT_PROOF = "MISSING_PAYMENT_PROOF"
    INVALID_PAYMENT_METHOD = "INVALID_PAYMENT_METHOD"
    FREE_PACKAGE_ALREADY_CLAIMED = "FREE_PACKAGE_ALREADY_CLAIMED"
    PACKAGE_NOT_FOUND = "PACKAGE_NOT_FOUND"
    TRANSACTION_NOT_FOUND = "TRANSACTION_NOT_FOUND"
    ACCOUNT_NOT_FOUND = "ACCOUNT_NOT_FOUND"
    INVALID_STATE = "INVALID_STATE"
    STORE_UNAVAILABLE = "STORE_UNAVAILABLE"


# Connectivity problems and timeouts talking to the database
STORE_UNAVAILABLE_ERRORS = (OperationalError, InterfaceError, OSError, asyncio.TimeoutError)


def store_unavailable(exc: Exception) -> Error:
    return Error(
        code=ErrorCode.STORE_UNAVAILABLE,
        message="Credit store is temporarily unavailable",
        reason=str(exc),
    )
