"""Unit tests for src/infrastructure/database.py.

Tests cover object types, the get_session dependency and the
unit-of-work factory.
No database connection is required.
"""

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker
from sqlalchemy.orm import DeclarativeBase

from src.infrastructure.database import (
    AsyncSessionLocal,
    Base,
    create_unit_of_work,
    engine,
    get_session,
)
from src.infrastructure.persistence.unit_of_work import SqlUnitOfWork


def test_base_is_declarative_base():
    assert issubclass(Base, DeclarativeBase)


def test_engine_is_async():
    assert isinstance(engine, AsyncEngine)


def test_engine_uses_configured_url():
    assert engine.url.drivername == "postgresql+asyncpg"


def test_session_factory_produces_async_sessions():
    assert isinstance(AsyncSessionLocal, async_sessionmaker)
    assert AsyncSessionLocal.class_ is AsyncSession


def test_session_factory_keeps_objects_after_commit():
    assert AsyncSessionLocal.kw["expire_on_commit"] is False


async def test_get_session_yields_session_inside_transaction():
    gen = get_session()
    session = await gen.__anext__()
    try:
        assert isinstance(session, AsyncSession)
        assert session.in_transaction()
    finally:
        await gen.aclose()


def test_create_unit_of_work_uses_shared_session_factory():
    uow = create_unit_of_work()
    assert isinstance(uow, SqlUnitOfWork)
    assert uow._session_factory is AsyncSessionLocal
    assert uow.is_active is False


def test_create_unit_of_work_returns_independent_instances():
    assert create_unit_of_work() is not create_unit_of_work()
