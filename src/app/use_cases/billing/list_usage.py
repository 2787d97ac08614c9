"""
List Usage Use Case

Retrieves an account's consumption history with pagination.
"""
import logging
from libs.result import Result, Return
from src.app.repositories.usage_log_repository import UsageLogRepository
from .dtos import ListUsageResponseDTO, to_usage_log_dto
from .errors import STORE_UNAVAILABLE_ERRORS, store_unavailable

logger = logging.getLogger(__name__)


class ListUsage:
    """Use case: usage logs of an account, newest first"""

    def __init__(self, usage_repo: UsageLogRepository):
        self.usage_repo = usage_repo

    async def execute(
        self, account_id: str, limit: int = 50, offset: int = 0
    ) -> Result[ListUsageResponseDTO]:
        try:
            usage_logs, total = await self.usage_repo.get_by_account_id(
                account_id=account_id,
                limit=limit,
                offset=offset,
            )
        except STORE_UNAVAILABLE_ERRORS as e:
            logger.error(f"Store unavailable while listing usage for {account_id}: {e}")
            return Return.err(store_unavailable(e))

        return Return.ok(
            ListUsageResponseDTO(
                usage_logs=[to_usage_log_dto(log) for log in usage_logs],
                total=total,
                limit=limit,
                offset=offset,
            )
        )
