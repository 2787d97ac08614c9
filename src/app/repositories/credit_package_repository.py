"""Credit Package Repository Interface

Read-only access to the credit package catalog.
"""

from abc import ABC, abstractmethod
from typing import Optional
from src.domain.credit_package import CreditPackage


class CreditPackageRepository(ABC):

    @abstractmethod
    async def get_by_id(self, package_id: int) -> Optional[CreditPackage]:
        """
        Retrieve package by ID

        Args:
            package_id: Package ID

        Returns:
            CreditPackage if found, None otherwise
        """
        pass

    @abstractmethod
    async def get_active(self) -> list[CreditPackage]:
        """
        Retrieve purchasable packages ordered by credits ascending

        Returns:
            List of active CreditPackage
        """
        pass
