"""Service-layer facade over a single repository.

CrudService is the interface controllers and business logic depend on.
BaseService implements it by forwarding every call, arguments and options
unchanged, to the injected BaseRepository.  It adds no validation,
retries, logging or error translation: application services subclass it
and override individual methods to add business rules.

    class AuthorService(BaseService[Author, AuthorCreate, AuthorUpdate, AsyncSession]):
        async def create(self, create_dto, options=None):
            if await self.repository.find_one({"email": create_dto.email}, options):
                raise ValidationError("email already registered")
            return await super().create(create_dto, options)
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Mapping, Sequence
from typing import Any, Generic

from src.domain.models.options import OperationOptions
from src.domain.models.pagination import DeleteResult, PaginationResult
from src.domain.models.search import SearchRequest
from src.domain.repositories.base import (
    BaseRepository,
    CreateDTO,
    EntityId,
    T,
    TransactionT,
    UpdateDTO,
)


class CrudService(ABC, Generic[T, CreateDTO, UpdateDTO, TransactionT]):
    """Abstract service interface mirroring BaseRepository one-to-one."""

    @abstractmethod
    async def create(
        self,
        create_dto: CreateDTO,
        options: OperationOptions[TransactionT] | None = None,
    ) -> T: ...

    @abstractmethod
    async def find_all(
        self,
        options: OperationOptions[TransactionT] | None = None,
    ) -> list[T]: ...

    @abstractmethod
    async def find_many(
        self,
        filters: Mapping[str, Any],
        options: OperationOptions[TransactionT] | None = None,
    ) -> list[T]: ...

    @abstractmethod
    async def find_by_pagination(
        self,
        search_request: SearchRequest,
        options: OperationOptions[TransactionT] | None = None,
    ) -> PaginationResult[T]: ...

    @abstractmethod
    async def find_by_id(
        self,
        id: EntityId,
        options: OperationOptions[TransactionT] | None = None,
    ) -> T | None: ...

    @abstractmethod
    async def find_one(
        self,
        filters: Mapping[str, Any],
        options: OperationOptions[TransactionT] | None = None,
    ) -> T | None: ...

    @abstractmethod
    async def update_by_id(
        self,
        id: EntityId,
        update_dto: UpdateDTO,
        options: OperationOptions[TransactionT] | None = None,
    ) -> T: ...

    @abstractmethod
    async def delete_by_id(
        self,
        id: EntityId,
        options: OperationOptions[TransactionT] | None = None,
    ) -> DeleteResult: ...

    @abstractmethod
    async def delete_many(
        self,
        ids: Sequence[EntityId],
        options: OperationOptions[TransactionT] | None = None,
    ) -> DeleteResult: ...


class BaseService(CrudService[T, CreateDTO, UpdateDTO, TransactionT]):
    """Pure delegation to the repository captured at construction.

    The repository reference is fixed for the service's lifetime and exposed
    read-only.  Errors raised by the repository propagate verbatim.
    """

    def __init__(
        self,
        repository: BaseRepository[T, CreateDTO, UpdateDTO, TransactionT],
    ) -> None:
        self._repository = repository

    @property
    def repository(self) -> BaseRepository[T, CreateDTO, UpdateDTO, TransactionT]:
        return self._repository

    async def create(
        self,
        create_dto: CreateDTO,
        options: OperationOptions[TransactionT] | None = None,
    ) -> T:
        return await self._repository.create(create_dto, options)

    async def find_all(
        self,
        options: OperationOptions[TransactionT] | None = None,
    ) -> list[T]:
        return await self._repository.find_all(options)

    async def find_many(
        self,
        filters: Mapping[str, Any],
        options: OperationOptions[TransactionT] | None = None,
    ) -> list[T]:
        return await self._repository.find_many(filters, options)

    async def find_by_pagination(
        self,
        search_request: SearchRequest,
        options: OperationOptions[TransactionT] | None = None,
    ) -> PaginationResult[T]:
        return await self._repository.find_by_pagination(search_request, options)

    async def find_by_id(
        self,
        id: EntityId,
        options: OperationOptions[TransactionT] | None = None,
    ) -> T | None:
        return await self._repository.find_by_id(id, options)

    async def find_one(
        self,
        filters: Mapping[str, Any],
        options: OperationOptions[TransactionT] | None = None,
    ) -> T | None:
        return await self._repository.find_one(filters, options)

    async def update_by_id(
        self,
        id: EntityId,
        update_dto: UpdateDTO,
        options: OperationOptions[TransactionT] | None = None,
    ) -> T:
        return await self._repository.update_by_id(id, update_dto, options)

    async def delete_by_id(
        self,
        id: EntityId,
        options: OperationOptions[TransactionT] | None = None,
    ) -> DeleteResult:
        return await self._repository.delete_by_id(id, options)

    async def delete_many(
        self,
        ids: Sequence[EntityId],
        options: OperationOptions[TransactionT] | None = None,
    ) -> DeleteResult:
        return await self._repository.delete_many(ids, options)
