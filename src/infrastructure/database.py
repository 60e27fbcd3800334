"""Async SQLAlchemy engine, session factory, and the two ways to scope work.

Request-scoped work takes a session from get_session() and hands it to
SqlRepository subclasses; the session.begin() block owns the commit.
Work that spans several repositories, or must commit independently of a
request, uses create_unit_of_work() and passes
OperationOptions(transaction=uow.get_transaction()) to each call.
"""

from collections.abc import AsyncGenerator

from sqlalchemy.ext.asyncio import (
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from src.infrastructure.config import get_settings
from src.infrastructure.persistence.unit_of_work import SqlUnitOfWork

settings = get_settings()

engine = create_async_engine(
    settings.database_url,
    echo=settings.database_echo,
    pool_pre_ping=True,
)

AsyncSessionLocal = async_sessionmaker(
    bind=engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


class Base(DeclarativeBase):
    """Shared declarative base for models handled by SqlRepository subclasses."""


async def get_session() -> AsyncGenerator[AsyncSession, None]:
    """Yield a session inside a transaction for SqlRepository(session).

    Repositories built on this session never commit themselves; the
    surrounding session.begin() block commits on success and rolls back
    on error.
    """
    async with AsyncSessionLocal() as session:
        async with session.begin():
            yield session


def create_unit_of_work() -> SqlUnitOfWork:
    """A fresh SqlUnitOfWork drawing sessions from AsyncSessionLocal."""
    return SqlUnitOfWork(AsyncSessionLocal)
