"""Tests for src/domain/services/base.py: pure delegation to the repository."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from src.domain.errors import NotFoundError
from src.domain.models.options import OperationOptions
from src.domain.models.pagination import DeleteResult, PaginationResult
from src.domain.models.search import SearchRequest
from src.domain.repositories.base import BaseRepository
from src.domain.services.base import BaseService, CrudService


def _service():
    repo = AsyncMock(spec=BaseRepository)
    return BaseService(repo), repo


def test_crud_service_is_abstract():
    with pytest.raises(TypeError):
        CrudService()  # type: ignore[abstract]


def test_base_service_implements_crud_service():
    service, _ = _service()
    assert isinstance(service, CrudService)


def test_repository_exposed_read_only():
    service, repo = _service()
    assert service.repository is repo
    with pytest.raises(AttributeError):
        service.repository = MagicMock()  # type: ignore[misc]


async def test_create_forwards_dto_and_options():
    service, repo = _service()
    repo.create.return_value = "created"
    opts = OperationOptions(populate=True)
    dto = {"name": "Ada"}
    assert await service.create(dto, opts) == "created"
    repo.create.assert_awaited_once_with(dto, opts)


async def test_create_forwards_none_when_options_omitted():
    service, repo = _service()
    await service.create({"name": "Ada"})
    repo.create.assert_awaited_once_with({"name": "Ada"}, None)


async def test_find_all_forwards_options():
    service, repo = _service()
    repo.find_all.return_value = [1, 2]
    opts = OperationOptions()
    assert await service.find_all(opts) == [1, 2]
    repo.find_all.assert_awaited_once_with(opts)


async def test_find_many_forwards_filters():
    service, repo = _service()
    repo.find_many.return_value = []
    filters = {"age": 30}
    assert await service.find_many(filters) == []
    repo.find_many.assert_awaited_once_with(filters, None)


async def test_find_by_pagination_returns_repository_result_unchanged():
    service, repo = _service()
    page = PaginationResult.build([], page=1, limit=10, total=0)
    repo.find_by_pagination.return_value = page
    req = SearchRequest()
    assert await service.find_by_pagination(req) is page
    repo.find_by_pagination.assert_awaited_once_with(req, None)


async def test_find_by_id_forwards_raise_exception_option():
    service, repo = _service()
    repo.find_by_id.return_value = None
    opts = OperationOptions.from_flags(raise_exception=True)
    await service.find_by_id(7, opts)
    repo.find_by_id.assert_awaited_once_with(7, opts)


async def test_find_one_forwards_filters_and_options():
    service, repo = _service()
    opts = OperationOptions(select_fields=["name"])
    await service.find_one({"email": "a@b.c"}, opts)
    repo.find_one.assert_awaited_once_with({"email": "a@b.c"}, opts)


async def test_update_by_id_forwards_in_order():
    service, repo = _service()
    repo.update_by_id.return_value = "updated"
    assert await service.update_by_id("abc", {"age": 31}) == "updated"
    repo.update_by_id.assert_awaited_once_with("abc", {"age": 31}, None)


async def test_delete_by_id_forwards():
    service, repo = _service()
    repo.delete_by_id.return_value = DeleteResult(message="ok", deleted_count=1)
    result = await service.delete_by_id(3)
    assert result.deleted_count == 1
    repo.delete_by_id.assert_awaited_once_with(3, None)


async def test_delete_many_forwards_ids():
    service, repo = _service()
    ids = [1, 2, 3]
    await service.delete_many(ids)
    repo.delete_many.assert_awaited_once_with(ids, None)


async def test_repository_errors_propagate_verbatim():
    service, repo = _service()
    error = NotFoundError("Author 9 not found")
    repo.update_by_id.side_effect = error
    with pytest.raises(NotFoundError) as exc_info:
        await service.update_by_id(9, {"age": 1})
    assert exc_info.value is error


async def test_adapter_errors_are_not_translated():
    service, repo = _service()
    repo.find_all.side_effect = ConnectionError("db down")
    with pytest.raises(ConnectionError):
        await service.find_all()


async def test_subclass_can_override_single_method():
    class _AuditedService(BaseService):
        async def create(self, create_dto, options=None):
            return {"audited": await super().create(create_dto, options)}

    repo = AsyncMock(spec=BaseRepository)
    repo.create.return_value = "row"
    repo.find_all.return_value = ["row"]
    service = _AuditedService(repo)
    assert await service.create({}) == {"audited": "row"}
    assert await service.find_all() == ["row"]
