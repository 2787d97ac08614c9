"""List Packages Use Case"""

import logging
from libs.result import Result, Return
from src.app.repositories.credit_package_repository import CreditPackageRepository
from .dtos import PackageDTO, to_package_dto
from .errors import STORE_UNAVAILABLE_ERRORS, store_unavailable

logger = logging.getLogger(__name__)


class ListPackages:
    """Use case: purchasable credit packages, cheapest bundle first"""

    def __init__(self, package_repo: CreditPackageRepository):
        self.package_repo = package_repo

    async def execute(self) -> Result[list[PackageDTO]]:
        try:
            packages = await self.package_repo.get_active()
        except STORE_UNAVAILABLE_ERRORS as e:
            logger.error(f"Store unavailable while listing packages: {e}")
            return Return.err(store_unavailable(e))

        return Return.ok([to_package_dto(package) for package in packages])
