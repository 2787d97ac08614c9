"""Unit tests for use-case error to HTTP status mapping"""

import pytest

from libs.result import Error
from src.api.error import status_for


@pytest.mark.parametrize(
    "code, expected",
    [
        ("INVALID_AMOUNT", 400),
        ("MISSING_PAYMENT_PROOF", 400),
        ("INSUFFICIENT_CREDITS", 402),
        ("TRANSACTION_NOT_FOUND", 404),
        ("PACKAGE_NOT_FOUND", 404),
        ("FREE_PACKAGE_ALREADY_CLAIMED", 409),
        ("INVALID_STATE", 409),
        ("STORE_UNAVAILABLE", 503),
        ("CONSUME_CREDIT_FAILED", 500),
    ],
)
def test_status_for(code, expected):
    assert status_for(Error(code=code, message="x")) == expected
