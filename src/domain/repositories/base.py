"""Generic repository base interface.

BaseRepository[T, CreateDTO, UpdateDTO, TransactionT] is the root
abstraction every data-source adapter implements.  Concrete implementations
live in src/infrastructure/persistence/ and are wired at the application
boundary via dependency injection.

Design notes:
  - All methods are async to accommodate async database drivers (asyncpg / SQLAlchemy async).
  - T is the entity type returned to callers; CreateDTO / UpdateDTO are the
    input payloads (UpdateDTO conventionally partial).
  - TransactionT is the adapter's native transaction handle; callers obtain
    it from UnitOfWork.get_transaction() and pass it via options.transaction.
  - Every method takes an optional OperationOptions bag as its last
    argument; None means all defaults.
  - No method may mutate its DTO, filter or id arguments.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Mapping, Sequence
from typing import Any, Generic, TypeVar

from src.domain.models.options import OperationOptions
from src.domain.models.pagination import DeleteResult, PaginationResult
from src.domain.models.search import SearchRequest

T = TypeVar("T")
CreateDTO = TypeVar("CreateDTO")
UpdateDTO = TypeVar("UpdateDTO")
TransactionT = TypeVar("TransactionT")

EntityId = str | int


class BaseRepository(ABC, Generic[T, CreateDTO, UpdateDTO, TransactionT]):
    """Abstract CRUD, filter and pagination interface for one entity type."""

    @abstractmethod
    async def create(
        self,
        create_dto: CreateDTO,
        options: OperationOptions[TransactionT] | None = None,
    ) -> T:
        """Persist a new entity and return its stored state (DB-generated fields populated).

        Raises ValidationError when the adapter deems the payload invalid.
        """

    @abstractmethod
    async def find_all(
        self,
        options: OperationOptions[TransactionT] | None = None,
    ) -> list[T]:
        """Return every entity in the adapter's default scope.

        Adapters that cap the result size must document the cap.
        """

    @abstractmethod
    async def find_many(
        self,
        filters: Mapping[str, Any],
        options: OperationOptions[TransactionT] | None = None,
    ) -> list[T]:
        """Return entities matching the filter map; [] when nothing matches."""

    @abstractmethod
    async def find_by_pagination(
        self,
        search_request: SearchRequest,
        options: OperationOptions[TransactionT] | None = None,
    ) -> PaginationResult[T]:
        """Filter (structured filters AND free-text search), then sort, then page.

        The search/sort algorithm is adapter-defined; the result shape is not:
        len(data) <= limit and total_pages == ceil(total / limit).
        """

    @abstractmethod
    async def find_by_id(
        self,
        id: EntityId,
        options: OperationOptions[TransactionT] | None = None,
    ) -> T | None:
        """Return the entity with the given identifier, or None.

        Raises NotFoundError instead of returning None when
        options.raise_exception is set.
        """

    @abstractmethod
    async def find_one(
        self,
        filters: Mapping[str, Any],
        options: OperationOptions[TransactionT] | None = None,
    ) -> T | None:
        """Return the first entity matching the filter map, or None.

        Same raise_exception contract as find_by_id.
        """

    @abstractmethod
    async def update_by_id(
        self,
        id: EntityId,
        update_dto: UpdateDTO,
        options: OperationOptions[TransactionT] | None = None,
    ) -> T:
        """Apply the partial update and return the resulting entity.

        Always raises NotFoundError when the id does not exist, regardless
        of raise_exception.
        """

    @abstractmethod
    async def delete_by_id(
        self,
        id: EntityId,
        options: OperationOptions[TransactionT] | None = None,
    ) -> DeleteResult:
        """Remove one entity.  Raises NotFoundError if it does not exist."""

    @abstractmethod
    async def delete_many(
        self,
        ids: Sequence[EntityId],
        options: OperationOptions[TransactionT] | None = None,
    ) -> DeleteResult:
        """Remove every entity whose identifier is in ids.

        An empty ids sequence succeeds with zero deletions.  Whether missing
        ids abort the whole call or are skipped is adapter-defined and must
        be documented by the adapter.
        """
