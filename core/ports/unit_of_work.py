"""
Unit of work port (interface).

Handlers that must change several aggregates together open a
unit of work; every repository call made inside the block is
committed or rolled back as one.
"""
from abc import ABC, abstractmethod
from typing import AsyncContextManager


class UnitOfWork(ABC):
    """
    Abstract transaction boundary.

    Usage:
        async with unit_of_work.atomic():
            await tenant_license_repository.end(...)
            await license_key_repository.revoke(...)
    """

    @abstractmethod
    def atomic(self) -> AsyncContextManager[None]:
        """
        Open a transaction.

        Returns:
            Async context manager that commits on normal exit and
            rolls back when the block raises
        """
        pass
