"""ConsumeCredit Use Case

Spends credits for a feature invocation and records a usage log in the same
database transaction as the debit.
"""

import json
import logging
from sqlalchemy.exc import IntegrityError
from libs.result import Result, Return, Error
from src.app.services.unit_of_work import UnitOfWork
from src.app.repositories.credit_account_repository import CreditAccountRepository
from src.app.repositories.usage_log_repository import UsageLogRepository
from src.domain.credit_account import DEFAULT_STARTING_CREDITS
from src.domain.usage_log import UsageLog
from .dtos import ConsumeCommandDTO, ConsumeResponseDTO, to_usage_log_dto
from .errors import ErrorCode, STORE_UNAVAILABLE_ERRORS, store_unavailable

logger = logging.getLogger(__name__)


class ConsumeCredit:
    """
    Use Case: Consume credits from an account

    Business Rules:
    1. credits must be > 0
    2. The debit is one conditional update (current_credits >= credits),
       so concurrent consumers can never overdraw the account
    3. Debit and usage log are committed together or not at all
    4. Optional idempotency_key: a replay returns the original usage log
       without debiting again

    Flow:
    1. Validate amount
    2. Return existing usage log for a known idempotency_key
    3. Ensure the account exists
    4. Conditional debit (insufficient -> rollback, error)
    5. Insert usage log
    6. Commit
    """

    def __init__(
        self,
        uow: UnitOfWork,
        account_repo: CreditAccountRepository,
        usage_repo: UsageLogRepository,
        starting_credits: int = DEFAULT_STARTING_CREDITS,
    ):
        self.uow = uow
        self.account_repo = account_repo
        self.usage_repo = usage_repo
        self.starting_credits = starting_credits

    async def execute(self, command: ConsumeCommandDTO) -> Result[ConsumeResponseDTO]:
        """
        Execute credit consumption

        Args:
            command: ConsumeCommandDTO with account_id, feature, credits

        Returns:
            Result[ConsumeResponseDTO]: Usage log and resulting balance, or error
        """
        # Step 1: Validate amount
        if command.credits <= 0:
            return Return.err(
                Error(
                    code=ErrorCode.INVALID_AMOUNT,
                    message="Credits to consume must be greater than 0",
                    reason=f"credits={command.credits}",
                )
            )

        try:
            # Step 2: Idempotent replay
            if command.idempotency_key:
                existing_log = await self.usage_repo.get_by_idempotency_key(
                    command.account_id, command.idempotency_key
                )
                if existing_log:
                    return await self._replay(existing_log)

            # Step 3: Ensure the account exists
            await self.account_repo.get_or_create(command.account_id, self.starting_credits)

            # Step 4: Conditional debit
            account = await self.account_repo.debit(command.account_id, command.credits)
            if account is None:
                current = await self.account_repo.get_by_account_id(command.account_id)
                available = current.current_credits if current else 0
                await self.uow.rollback()
                return Return.err(
                    Error(
                        code=ErrorCode.INSUFFICIENT_CREDITS,
                        message=f"Insufficient credits. Required: {command.credits}, Available: {available}",
                        reason=f"current_credits={available}, required={command.credits}",
                    )
                )

            # Step 5: Usage log
            usage_log = await self.usage_repo.create(
                UsageLog(
                    account_id=command.account_id,
                    feature=command.feature,
                    credits=command.credits,
                    description=command.description,
                    document_reference=command.document_reference,
                    metadata_json=json.dumps(command.metadata) if command.metadata else None,
                    idempotency_key=command.idempotency_key,
                )
            )

            # Step 6: Commit
            await self.uow.commit()

        except IntegrityError as e:
            await self.uow.rollback()
            # A concurrent request with the same key won the race
            if command.idempotency_key:
                existing_log = await self.usage_repo.get_by_idempotency_key(
                    command.account_id, command.idempotency_key
                )
                if existing_log:
                    return await self._replay(existing_log)
            logger.error(f"Integrity error consuming credits for {command.account_id}: {e}")
            return Return.err(
                Error(
                    code="CONSUME_CREDIT_FAILED",
                    message="Failed to consume credit",
                    reason=str(e),
                )
            )
        except STORE_UNAVAILABLE_ERRORS as e:
            await self.uow.rollback()
            logger.error(f"Store unavailable while consuming credits for {command.account_id}: {e}")
            return Return.err(store_unavailable(e))
        except Exception as e:
            await self.uow.rollback()
            logger.exception(f"Failed to consume credits for {command.account_id}")
            return Return.err(
                Error(
                    code="CONSUME_CREDIT_FAILED",
                    message="Failed to consume credit",
                    reason=str(e),
                )
            )

        logger.info(
            f"Consumed {command.credits} credits for {command.account_id} "
            f"(feature={command.feature}, remaining={account.current_credits})"
        )

        return Return.ok(
            ConsumeResponseDTO(
                usage_log=to_usage_log_dto(usage_log),
                current_credits=account.current_credits,
                used_credits=account.used_credits,
            )
        )

    async def _replay(self, usage_log: UsageLog) -> Result[ConsumeResponseDTO]:
        account = await self.account_repo.get_by_account_id(usage_log.account_id)
        return Return.ok(
            ConsumeResponseDTO(
                usage_log=to_usage_log_dto(usage_log),
                current_credits=account.current_credits if account else 0,
                used_credits=account.used_credits if account else 0,
            )
        )
