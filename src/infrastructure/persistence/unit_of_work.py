"""SQLAlchemy implementation of UnitOfWork.

Each start() opens a fresh AsyncSession from the factory and begins a
transaction on it; that session is the transaction handle repositories
receive through OperationOptions.transaction.  commit() and rollback()
close the session, so a handle must not be reused afterwards.
"""

from __future__ import annotations

import logging

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from src.domain.errors import TransactionStateError
from src.domain.repositories.unit_of_work import UnitOfWork

logger = logging.getLogger(__name__)


class SqlUnitOfWork(UnitOfWork[AsyncSession]):
    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory
        self._session: AsyncSession | None = None

    @property
    def is_active(self) -> bool:
        return self._session is not None

    def _active_session(self, action: str) -> AsyncSession:
        if self._session is None:
            raise TransactionStateError(f"Cannot {action}: no active transaction")
        return self._session

    async def start(self) -> None:
        if self._session is not None:
            raise TransactionStateError("Cannot start: a transaction is already active")
        session = self._session_factory()
        try:
            await session.begin()
        except BaseException:
            await session.close()
            raise
        self._session = session
        logger.debug("Transaction started")

    async def commit(self) -> None:
        session = self._active_session("commit")
        try:
            await session.commit()
        finally:
            self._session = None
            await session.close()
        logger.debug("Transaction committed")

    async def rollback(self) -> None:
        session = self._active_session("rollback")
        try:
            await session.rollback()
        finally:
            self._session = None
            await session.close()
        logger.debug("Transaction rolled back")

    def get_transaction(self) -> AsyncSession:
        return self._active_session("get transaction")
