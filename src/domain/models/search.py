"""Search request value objects consumed by find_by_pagination.

SearchRequest is what a request layer builds from a query string or body;
field aliases follow the camelCase wire names (sortBy, sortOrder) while
Python code uses snake_case.  How search and filters are evaluated is left
to the repository adapter.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

from .enums import FilterOperator, SortOrder


class FilterCondition(BaseModel):
    """A single structured filter: apply `operator` with `value` to one field.

    BETWEEN expects [low, high]; IN expects a list, tuple or set; the
    substring operators (contains / startsWith / endsWith) expect a string.
    """

    model_config = ConfigDict(frozen=True)

    value: Any
    operator: FilterOperator = FilterOperator.EQUALS

    @model_validator(mode="after")
    def _value_matches_operator(self) -> FilterCondition:
        if self.operator == FilterOperator.BETWEEN:
            if not isinstance(self.value, (list, tuple)) or len(self.value) != 2:
                raise ValueError("between expects a two-element [low, high] value")
        elif self.operator == FilterOperator.IN:
            if not isinstance(self.value, (list, tuple, set, frozenset)):
                raise ValueError("in expects a list of values")
        elif self.operator.is_text_match and not isinstance(self.value, str):
            raise ValueError(f"{self.operator.value} expects a string value")
        return self


class SearchRequest(BaseModel):
    """Page, sort, free-text search and structured filters for one query.

    Filters are independent and combined conjunctively, together with the
    free-text search term.  A blank search term is treated as absent.
    """

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    page: int = Field(default=1, ge=1)
    limit: int = Field(default=10, ge=1)
    sort_by: str | None = None
    sort_order: SortOrder = SortOrder.ASC
    search: str | None = None
    filters: dict[str, FilterCondition] = Field(default_factory=dict)

    @field_validator("search")
    @classmethod
    def _normalise_search(cls, value: str | None) -> str | None:
        if value is None:
            return None
        value = value.strip()
        return value or None

    @property
    def offset(self) -> int:
        """Number of rows to skip before the requested page."""
        return (self.page - 1) * self.limit
