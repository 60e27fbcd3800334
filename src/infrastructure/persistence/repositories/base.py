"""Generic SQLAlchemy implementation of BaseRepository.

Subclasses bind one mapped ORM class and inherit every CRUD, filter and
pagination operation:

    class SqlAuthorRepository(SqlRepository[OrmAuthor, Author, AuthorCreate, AuthorUpdate]):
        model = OrmAuthor
        domain_model = Author
        search_fields = ("name", "email")

The transaction handle is the AsyncSession itself.  When
options.transaction is set the call runs on that session (typically
SqlUnitOfWork.get_transaction()) instead of the constructor session.

Nothing here commits.  Writes are flushed so DB-generated values are
visible and the row is re-read, so results reflect persisted state; the
owning session (get_session) or unit of work decides when to commit.

delete_many is best-effort: ids that do not exist are skipped and the
result reports how many rows were actually removed.  Rows are deleted
through the session one by one, so relationship cascades apply exactly as
they do for delete_by_id.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from typing import Any, Generic, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy import Select, func, inspect, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import InstrumentedAttribute, Mapper, defer, load_only, selectinload
from sqlalchemy.orm.interfaces import ORMOption

from src.domain.errors import NotFoundError, ValidationError
from src.domain.models.enums import SortOrder
from src.domain.models.options import DEFAULT_OPTIONS, OperationOptions
from src.domain.models.pagination import DeleteResult, PaginationResult
from src.domain.models.search import SearchRequest
from src.domain.repositories.base import BaseRepository, CreateDTO, EntityId, T, UpdateDTO
from src.infrastructure.persistence.filters import (
    build_filter_clauses,
    build_search_clause,
    resolve_column,
)

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT")


class SqlRepository(
    BaseRepository[T, CreateDTO, UpdateDTO, AsyncSession],
    Generic[ModelT, T, CreateDTO, UpdateDTO],
):
    """BaseRepository over a single mapped class with a single-column primary key.

    model: the mapped ORM class (required on subclasses).
    domain_model: optional Pydantic model built from the loaded attributes
        of each row; rows are returned as-is when unset.  Fields skipped by
        a projection must have defaults on domain_model.
    search_fields: text columns matched by SearchRequest.search.
    max_results: hard cap applied by find_all; None means no cap.
    """

    model: type[ModelT]
    domain_model: type[BaseModel] | None = None
    search_fields: tuple[str, ...] = ()
    max_results: int | None = None

    def __init__(self, session: AsyncSession) -> None:
        if getattr(self, "model", None) is None:
            raise TypeError(f"{type(self).__name__} must set the `model` class attribute")
        mapper: Mapper = inspect(self.model)
        if len(mapper.primary_key) != 1:
            raise TypeError(f"{self.model.__name__} must have a single-column primary key")
        self._session = session
        self._mapper = mapper
        self._pk: InstrumentedAttribute = getattr(
            self.model, mapper.get_property_by_column(mapper.primary_key[0]).key
        )

    # --- mapping hooks ---

    def _to_domain(self, row: ModelT) -> T:
        """Build domain_model from the row's loaded attributes only.

        Columns left out by select_fields / dont_select_fields and relations
        that were not populated stay out of the payload; reading them would
        trigger a lazy load outside the async context.
        """
        if self.domain_model is None:
            return row  # type: ignore[return-value]
        unloaded = inspect(row).unloaded
        payload = {
            key: getattr(row, key) for key in self._mapper.attrs.keys() if key not in unloaded
        }
        try:
            return self.domain_model.model_validate(payload, from_attributes=True)  # type: ignore[return-value]
        except PydanticValidationError as exc:
            raise ValidationError(
                f"Cannot build {self.domain_model.__name__} from the loaded "
                f"{self.model.__name__} fields: {exc.errors()[0]['msg']}",
                details={"fields": sorted(payload)},
            ) from exc

    def _values(self, dto: Any, *, partial: bool) -> dict[str, Any]:
        """Column values from a Pydantic model or mapping, without mutating it."""
        if isinstance(dto, BaseModel):
            values = dto.model_dump(exclude_unset=partial)
        elif isinstance(dto, Mapping):
            values = dict(dto)
        else:
            raise ValidationError(
                f"Unsupported payload type {type(dto).__name__} for {self.model.__name__}"
            )
        unknown = sorted(key for key in values if key not in self._mapper.column_attrs)
        if unknown:
            raise ValidationError(
                f"Unknown field(s) for {self.model.__name__}: {', '.join(unknown)}",
                details={"fields": unknown},
            )
        return values

    # --- query helpers ---

    def _session_for(self, options: OperationOptions) -> AsyncSession:
        return options.transaction if options.transaction is not None else self._session

    def _loader_options(self, options: OperationOptions) -> list[ORMOption]:
        if options.select_fields and options.dont_select_fields:
            raise ValidationError("select_fields and dont_select_fields are mutually exclusive")
        loaders: list[ORMOption] = []
        if options.select_fields:
            loaders.append(
                load_only(*(resolve_column(self.model, name) for name in options.select_fields))
            )
        elif options.dont_select_fields:
            loaders.extend(
                defer(resolve_column(self.model, name)) for name in options.dont_select_fields
            )
        if options.wants_population:
            names = options.populate_fields or list(self._mapper.relationships.keys())
            for name in names:
                if name not in self._mapper.relationships:
                    raise ValidationError(
                        f"Unknown relation {name!r} for {self.model.__name__}",
                        details={"field": name},
                    )
                loaders.append(selectinload(getattr(self.model, name)))
        return loaders

    def _select(self, options: OperationOptions) -> Select:
        return select(self.model).options(*self._loader_options(options))

    def _ordering(self, search_request: SearchRequest) -> list[Any]:
        order: list[Any] = []
        if search_request.sort_by:
            column = resolve_column(self.model, search_request.sort_by)
            order.append(column.desc() if search_request.sort_order == SortOrder.DESC else column.asc())
        # Primary key last so pages are stable across equal sort keys.
        order.append(self._pk.asc())
        return order

    async def _reload(self, session: AsyncSession, row: ModelT, options: OperationOptions) -> T:
        identity = inspect(row).identity[0]
        stmt = (
            self._select(options)
            .where(self._pk == identity)
            .execution_options(populate_existing=True)
        )
        result = await session.execute(stmt)
        return self._to_domain(result.scalar_one())

    async def _get_row(self, session: AsyncSession, id: EntityId) -> ModelT:
        row = await session.get(self.model, id)
        if row is None:
            raise NotFoundError(
                f"{self.model.__name__} {id} not found",
                details={"id": id},
            )
        return row

    # --- BaseRepository ---

    async def create(
        self,
        create_dto: CreateDTO,
        options: OperationOptions[AsyncSession] | None = None,
    ) -> T:
        options = options or DEFAULT_OPTIONS
        session = self._session_for(options)
        row = self.model(**self._values(create_dto, partial=False))
        session.add(row)
        await session.flush()
        logger.debug("Created %s %s", self.model.__name__, inspect(row).identity[0])
        return await self._reload(session, row, options)

    async def find_all(
        self,
        options: OperationOptions[AsyncSession] | None = None,
    ) -> list[T]:
        options = options or DEFAULT_OPTIONS
        stmt = self._select(options).order_by(self._pk.asc())
        if self.max_results is not None:
            stmt = stmt.limit(self.max_results)
        result = await self._session_for(options).execute(stmt)
        return [self._to_domain(row) for row in result.scalars()]

    async def find_many(
        self,
        filters: Mapping[str, Any],
        options: OperationOptions[AsyncSession] | None = None,
    ) -> list[T]:
        options = options or DEFAULT_OPTIONS
        stmt = (
            self._select(options)
            .where(*build_filter_clauses(self.model, filters))
            .order_by(self._pk.asc())
        )
        result = await self._session_for(options).execute(stmt)
        return [self._to_domain(row) for row in result.scalars()]

    async def find_by_pagination(
        self,
        search_request: SearchRequest,
        options: OperationOptions[AsyncSession] | None = None,
    ) -> PaginationResult[T]:
        options = options or DEFAULT_OPTIONS
        session = self._session_for(options)

        clauses = build_filter_clauses(self.model, search_request.filters)
        if search_request.search:
            clauses.append(build_search_clause(self.model, self.search_fields, search_request.search))

        count_stmt = select(func.count()).select_from(self.model).where(*clauses)
        total = (await session.execute(count_stmt)).scalar_one()

        stmt = (
            self._select(options)
            .where(*clauses)
            .order_by(*self._ordering(search_request))
            .offset(search_request.offset)
            .limit(search_request.limit)
        )
        result = await session.execute(stmt)
        return PaginationResult.build(
            [self._to_domain(row) for row in result.scalars()],
            page=search_request.page,
            limit=search_request.limit,
            total=total,
        )

    async def find_by_id(
        self,
        id: EntityId,
        options: OperationOptions[AsyncSession] | None = None,
    ) -> T | None:
        options = options or DEFAULT_OPTIONS
        stmt = self._select(options).where(self._pk == id)
        result = await self._session_for(options).execute(stmt)
        row = result.scalar_one_or_none()
        if row is None:
            if options.raise_exception:
                raise NotFoundError(
                    f"{self.model.__name__} {id} not found",
                    details={"id": id},
                )
            return None
        return self._to_domain(row)

    async def find_one(
        self,
        filters: Mapping[str, Any],
        options: OperationOptions[AsyncSession] | None = None,
    ) -> T | None:
        options = options or DEFAULT_OPTIONS
        stmt = (
            self._select(options)
            .where(*build_filter_clauses(self.model, filters))
            .order_by(self._pk.asc())
            .limit(1)
        )
        result = await self._session_for(options).execute(stmt)
        row = result.scalars().first()
        if row is None:
            if options.raise_exception:
                raise NotFoundError(
                    f"No {self.model.__name__} matches the given filters",
                    details={"filters": dict(filters)},
                )
            return None
        return self._to_domain(row)

    async def update_by_id(
        self,
        id: EntityId,
        update_dto: UpdateDTO,
        options: OperationOptions[AsyncSession] | None = None,
    ) -> T:
        options = options or DEFAULT_OPTIONS
        session = self._session_for(options)
        values = self._values(update_dto, partial=True)
        row = await self._get_row(session, id)
        for key, value in values.items():
            setattr(row, key, value)
        await session.flush()
        logger.debug("Updated %s %s (%s)", self.model.__name__, id, ", ".join(values))
        return await self._reload(session, row, options)

    async def delete_by_id(
        self,
        id: EntityId,
        options: OperationOptions[AsyncSession] | None = None,
    ) -> DeleteResult:
        options = options or DEFAULT_OPTIONS
        session = self._session_for(options)
        row = await self._get_row(session, id)
        await session.delete(row)
        await session.flush()
        logger.debug("Deleted %s %s", self.model.__name__, id)
        return DeleteResult(
            message=f"{self.model.__name__} {id} deleted",
            deleted_count=1,
        )

    async def delete_many(
        self,
        ids: Sequence[EntityId],
        options: OperationOptions[AsyncSession] | None = None,
    ) -> DeleteResult:
        options = options or DEFAULT_OPTIONS
        if not ids:
            return DeleteResult(message=f"Deleted 0 {self.model.__name__} records", deleted_count=0)
        session = self._session_for(options)
        result = await session.execute(select(self.model).where(self._pk.in_(list(ids))))
        rows = result.scalars().all()
        for row in rows:
            await session.delete(row)
        await session.flush()
        deleted = len(rows)
        if deleted < len(ids):
            logger.info(
                "Deleted %d of %d requested %s records; the rest did not exist",
                deleted,
                len(ids),
                self.model.__name__,
            )
        return DeleteResult(
            message=f"Deleted {deleted} of {len(ids)} {self.model.__name__} records",
            deleted_count=deleted,
        )
