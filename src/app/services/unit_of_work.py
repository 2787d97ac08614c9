"""Unit of Work Interface

One unit of work is one database transaction. Use cases commit it on success
and roll it back on any failure, so no caller ever observes a half-applied
ledger mutation.
"""

from abc import ABC, abstractmethod


class UnitOfWork(ABC):

    async def __aenter__(self):
        return self

    async def __aexit__(self, *args):
        # Anything not committed by now is discarded
        await self.rollback()

    @abstractmethod
    async def commit(self):
        pass

    @abstractmethod
    async def rollback(self):
        pass
