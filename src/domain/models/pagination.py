"""Result shapes returned by repository operations.

PaginationResult: one page of entities plus totals
DeleteResult: confirmation returned by delete_by_id / delete_many
"""

from __future__ import annotations

import math
from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

T = TypeVar("T")


class PaginationResult(BaseModel, Generic[T]):
    """A single page of results.

    total_pages is always ceil(total / limit) (0 when nothing matched) and
    data never holds more than `limit` items.  Use build() rather than
    computing total_pages by hand.
    """

    model_config = ConfigDict(
        frozen=True,
        arbitrary_types_allowed=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    data: list[T]
    page: int = Field(ge=1)
    limit: int = Field(ge=1)
    total_pages: int = Field(ge=0)
    total: int = Field(ge=0)

    @model_validator(mode="after")
    def _totals_consistent(self) -> PaginationResult[T]:
        expected = math.ceil(self.total / self.limit)
        if self.total_pages != expected:
            raise ValueError(
                f"total_pages must be ceil(total / limit) = {expected}, got {self.total_pages}"
            )
        if len(self.data) > self.limit:
            raise ValueError(
                f"page holds {len(self.data)} items but limit is {self.limit}"
            )
        return self

    @classmethod
    def build(
        cls,
        data: list[T],
        *,
        page: int,
        limit: int,
        total: int,
    ) -> PaginationResult[T]:
        """Named constructor that derives total_pages from total and limit."""
        return cls(
            data=data,
            page=page,
            limit=limit,
            total_pages=math.ceil(total / limit),
            total=total,
        )


class DeleteResult(BaseModel):
    """Human-readable confirmation of a delete, with the number of rows removed."""

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    message: str
    deleted_count: int = Field(default=0, ge=0)
