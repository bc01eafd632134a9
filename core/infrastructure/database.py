"""
Database utilities and transaction management.
"""

import contextlib
from typing import AsyncGenerator, AsyncContextManager

from asgiref.sync import sync_to_async
from django.db import transaction

from core.ports.unit_of_work import UnitOfWork


@contextlib.asynccontextmanager
async def async_transaction() -> AsyncGenerator[None, None]:
    """
    Async context manager for database transactions.

    The atomic block is entered and exited on the thread-sensitive
    executor, the same thread every ``sync_to_async`` repository call
    runs on, so all queries issued inside the block share one
    connection and one transaction.

    Usage:
        async with async_transaction():
            # Database operations
            pass
    """
    atomic = transaction.atomic()
    await sync_to_async(atomic.__enter__)()
    try:
        yield
    except BaseException as exc:
        await sync_to_async(atomic.__exit__)(type(exc), exc, exc.__traceback__)
        raise
    else:
        await sync_to_async(atomic.__exit__)(None, None, None)


class DjangoUnitOfWork(UnitOfWork):
    """Unit of work backed by ``django.db.transaction.atomic``."""

    def atomic(self) -> AsyncContextManager[None]:
        """Open a database transaction."""
        return async_transaction()
