"""InitiatePurchase Use Case

Creates a purchase transaction for a credit package. Free packages complete
immediately (once per calendar month); paid packages wait for approval.
"""

import logging
from datetime import datetime
from sqlalchemy.exc import IntegrityError
from libs.result import Result, Return, Error
from src.app.services.unit_of_work import UnitOfWork
from src.app.repositories.credit_account_repository import CreditAccountRepository
from src.app.repositories.credit_transaction_repository import CreditTransactionRepository
from src.app.repositories.credit_package_repository import CreditPackageRepository
from src.domain.credit_account import DEFAULT_STARTING_CREDITS
from src.domain.credit_transaction import (
    CreditTransaction,
    PaymentMethod,
    TransactionStatus,
    claim_month_for,
    month_start,
)
from .dtos import PurchaseCommandDTO, PurchaseResponseDTO, to_transaction_dto
from .errors import ErrorCode, STORE_UNAVAILABLE_ERRORS, store_unavailable

logger = logging.getLogger(__name__)

PENDING_NOTE = "Awaiting payment verification"


class InitiatePurchase:
    """
    Use Case: Initiate a credit package purchase

    Business Rules:
    1. Package must exist and be active
    2. Paid packages with a non-cash method need payment_number and
       external_reference
    3. Free packages (price == 0) complete immediately and credit the
       account in the same database transaction
    4. A free package can be claimed once per account per calendar month,
       guarded by a unique (account_id, package_id, claim_month) constraint
    5. Paid packages are created PENDING and leave the balance untouched

    Flow:
    1. Validate package and payment proof (no side effects on failure)
    2. For free packages, pre-check this month's claims
    3. Ensure the account exists
    4. Insert transaction (constraint violation = already claimed)
    5. Credit the account if the package is free
    6. Commit
    """

    def __init__(
        self,
        uow: UnitOfWork,
        account_repo: CreditAccountRepository,
        transaction_repo: CreditTransactionRepository,
        package_repo: CreditPackageRepository,
        starting_credits: int = DEFAULT_STARTING_CREDITS,
    ):
        self.uow = uow
        self.account_repo = account_repo
        self.transaction_repo = transaction_repo
        self.package_repo = package_repo
        self.starting_credits = starting_credits

    async def execute(self, command: PurchaseCommandDTO) -> Result[PurchaseResponseDTO]:
        """
        Execute purchase initiation

        Args:
            command: PurchaseCommandDTO with account_id, package_id and payment details

        Returns:
            Result[PurchaseResponseDTO]: Created transaction and whether it was auto-completed
        """
        try:
            payment_method = PaymentMethod(command.payment_method)
        except ValueError:
            return Return.err(
                Error(
                    code=ErrorCode.INVALID_PAYMENT_METHOD,
                    message=f"Unsupported payment method: {command.payment_method}",
                )
            )

        is_free = False
        try:
            # Step 1: Validate package and payment proof
            package = await self.package_repo.get_by_id(command.package_id)
            if not package or not package.is_active:
                return Return.err(
                    Error(
                        code=ErrorCode.PACKAGE_NOT_FOUND,
                        message=f"Credit package {command.package_id} not found",
                    )
                )

            is_free = package.is_free

            if not is_free and payment_method.requires_payment_proof:
                if not command.payment_number or not command.external_reference:
                    return Return.err(
                        Error(
                            code=ErrorCode.MISSING_PAYMENT_PROOF,
                            message="Payment number and transaction reference are required",
                            reason=f"payment_method={payment_method.value}",
                        )
                    )

            now = datetime.utcnow()

            # Step 2: Fast path for an already claimed free package
            if is_free:
                existing_claim = await self.transaction_repo.find_free_claim(
                    command.account_id, package.id, month_start(now)
                )
                if existing_claim:
                    return Return.err(self._already_claimed(command.account_id, command.package_id))

            # Step 3: Ensure the account exists
            account = await self.account_repo.get_or_create(
                command.account_id, self.starting_credits
            )

            # Step 4: Insert transaction
            transaction = CreditTransaction(
                account_id=command.account_id,
                package_id=package.id,
                credits=package.credits,
                price=package.price,
                payment_method=payment_method,
                payment_number=command.payment_number,
                external_reference=command.external_reference,
                status=TransactionStatus.COMPLETED if is_free else TransactionStatus.PENDING,
                description=f"Credit purchase - {package.name}",
                notes=None if is_free else PENDING_NOTE,
                claim_month=claim_month_for(now) if is_free else None,
                created_at=now,
                updated_at=now,
            )
            created_transaction = await self.transaction_repo.create(transaction)

            # Step 5: Free packages are applied immediately
            if is_free:
                account = await self.account_repo.credit(command.account_id, package.credits)

            # Step 6: Commit
            await self.uow.commit()

        except IntegrityError as e:
            await self.uow.rollback()
            if is_free:
                return Return.err(self._already_claimed(command.account_id, command.package_id))
            logger.error(f"Integrity error creating purchase for {command.account_id}: {e}")
            return Return.err(
                Error(
                    code="PURCHASE_FAILED",
                    message="Failed to create credit purchase",
                    reason=str(e),
                )
            )
        except STORE_UNAVAILABLE_ERRORS as e:
            await self.uow.rollback()
            logger.error(f"Store unavailable while creating purchase for {command.account_id}: {e}")
            return Return.err(store_unavailable(e))
        except Exception as e:
            await self.uow.rollback()
            logger.exception(f"Failed to create purchase for {command.account_id}")
            return Return.err(
                Error(
                    code="PURCHASE_FAILED",
                    message="Failed to create credit purchase",
                    reason=str(e),
                )
            )

        logger.info(
            f"Purchase {created_transaction.id} created for {command.account_id}: "
            f"package={created_transaction.package_id}, credits={created_transaction.credits}, "
            f"status={created_transaction.status.value}"
        )

        return Return.ok(
            PurchaseResponseDTO(
                transaction=to_transaction_dto(created_transaction),
                credits_added=is_free,
                status=created_transaction.status.value,
                current_credits=account.current_credits,
            )
        )

    def _already_claimed(self, account_id: str, package_id: int) -> Error:
        logger.warning(
            f"Rejected repeat free claim of package {package_id} by {account_id}"
        )
        return Error(
            code=ErrorCode.FREE_PACKAGE_ALREADY_CLAIMED,
            message="Free package already claimed this month",
            reason=f"package_id={package_id}",
        )
