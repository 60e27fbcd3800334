"""Tests for src/domain/repositories/base.py."""

import inspect

import pytest

from src.domain.repositories.base import BaseRepository

OPERATIONS = [
    "create",
    "find_all",
    "find_many",
    "find_by_pagination",
    "find_by_id",
    "find_one",
    "update_by_id",
    "delete_by_id",
    "delete_many",
]


def test_repository_cannot_be_instantiated_directly():
    with pytest.raises(TypeError):
        BaseRepository()  # type: ignore[abstract]


def test_repository_declares_exactly_the_contract_operations():
    assert BaseRepository.__abstractmethods__ == frozenset(OPERATIONS)


@pytest.mark.parametrize("name", OPERATIONS)
def test_every_operation_is_async(name):
    assert inspect.iscoroutinefunction(getattr(BaseRepository, name))


@pytest.mark.parametrize("name", OPERATIONS)
def test_every_operation_takes_optional_options_last(name):
    params = list(inspect.signature(getattr(BaseRepository, name)).parameters.values())
    assert params[-1].name == "options"
    assert params[-1].default is None


def test_repository_concrete_subclass_must_implement_all_methods():
    class _Partial(BaseRepository):
        async def create(self, create_dto, options=None): return create_dto
        # missing everything else

    with pytest.raises(TypeError):
        _Partial()  # type: ignore[abstract]


def test_repository_full_concrete_subclass_instantiates():
    class _Full(BaseRepository):
        async def create(self, create_dto, options=None): return create_dto
        async def find_all(self, options=None): return []
        async def find_many(self, filters, options=None): return []
        async def find_by_pagination(self, search_request, options=None): return None
        async def find_by_id(self, id, options=None): return None
        async def find_one(self, filters, options=None): return None
        async def update_by_id(self, id, update_dto, options=None): return update_dto
        async def delete_by_id(self, id, options=None): return None
        async def delete_many(self, ids, options=None): return None

    assert _Full() is not None
