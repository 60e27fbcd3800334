"""Unit-of-work interface: transactional scope an adapter can honour.

A unit of work groups repository calls so they either all take effect or
none do.  The adapter exposes its native transaction handle through
get_transaction(); callers thread it into repository calls via
OperationOptions(transaction=...).

execute() is the preferred entry point:

    async def transfer(uow: UnitOfWork[AsyncSession]) -> Account:
        opts = OperationOptions(transaction=uow.get_transaction())
        await accounts.update_by_id(src_id, debit, opts)
        return await accounts.update_by_id(dst_id, credit, opts)

    account = await uow.execute(transfer)

The instance can also be used as an async context manager with the same
commit-on-success / rollback-on-error behaviour.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Awaitable, Callable
from types import TracebackType
from typing import Generic, TypeVar

logger = logging.getLogger(__name__)

TransactionT = TypeVar("TransactionT")
R = TypeVar("R")


class UnitOfWork(ABC, Generic[TransactionT]):
    """Abstract transaction lifecycle.

    start/commit/rollback raise TransactionStateError when called in the
    wrong state (start while active, commit/rollback while inactive).  The
    handle returned by get_transaction() belongs to the active scope and
    must not be reused after commit() or rollback().
    """

    @property
    @abstractmethod
    def is_active(self) -> bool:
        """True between start() and commit()/rollback()."""

    @abstractmethod
    async def start(self) -> None:
        """Begin a transaction.  Raises TransactionStateError if one is active."""

    @abstractmethod
    async def commit(self) -> None:
        """Durably apply the active transaction.  Raises TransactionStateError if none."""

    @abstractmethod
    async def rollback(self) -> None:
        """Discard the active transaction.  Raises TransactionStateError if none."""

    @abstractmethod
    def get_transaction(self) -> TransactionT:
        """Return the native transaction handle for options.transaction."""

    async def execute(self, work: Callable[[UnitOfWork[TransactionT]], Awaitable[R]]) -> R:
        """Run `work` inside a managed transaction.

        Commits when `work` returns; on any failure (cancellation included)
        rolls back first and then re-raises the original exception.  Exactly
        one of commit() / rollback() is invoked.
        """
        await self.start()
        try:
            result = await work(self)
        except BaseException:
            await self._rollback_after_failure()
            raise
        await self.commit()
        return result

    async def _rollback_after_failure(self) -> None:
        logger.warning("Unit of work failed; rolling back")
        try:
            await self.rollback()
        except Exception:
            # Keep the caller's original error as the one that propagates.
            logger.exception("Rollback failed")

    async def __aenter__(self) -> UnitOfWork[TransactionT]:
        await self.start()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        if exc_type is None:
            await self.commit()
        else:
            await self._rollback_after_failure()
