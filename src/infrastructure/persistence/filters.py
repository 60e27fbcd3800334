"""Translate filter maps and search terms into SQLAlchemy WHERE clauses.

Text operators (contains / startsWith / endsWith) and free-text search are
case-insensitive and escape LIKE wildcards in the user's value.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping
from typing import Any

from pydantic import ValidationError as PydanticValidationError
from sqlalchemy import ColumnElement, inspect, or_
from sqlalchemy.orm import InstrumentedAttribute

from src.domain.errors import ValidationError
from src.domain.models.enums import FilterOperator
from src.domain.models.search import FilterCondition

_OPERATORS: dict[FilterOperator, Callable[[Any, Any], ColumnElement[bool]]] = {
    FilterOperator.CONTAINS: lambda column, value: column.icontains(value, autoescape=True),
    FilterOperator.EQUALS: lambda column, value: column == value,
    FilterOperator.LESS_THAN: lambda column, value: column < value,
    FilterOperator.GREATER_THAN: lambda column, value: column > value,
    FilterOperator.STARTS_WITH: lambda column, value: column.istartswith(value, autoescape=True),
    FilterOperator.ENDS_WITH: lambda column, value: column.iendswith(value, autoescape=True),
    FilterOperator.IN: lambda column, value: column.in_(list(value)),
    FilterOperator.BETWEEN: lambda column, value: column.between(value[0], value[1]),
}


def resolve_column(model: type, name: str) -> InstrumentedAttribute:
    """Return the mapped column attribute `name` on `model`.

    Raises ValidationError for unknown names and for relationships, so
    request-supplied field names never reach SQL unchecked.
    """
    if name not in inspect(model).column_attrs:
        raise ValidationError(
            f"Unknown field {name!r} for {model.__name__}",
            details={"field": name},
        )
    return getattr(model, name)


def to_condition(spec: Any) -> FilterCondition:
    """Normalise one filter-map value into a FilterCondition.

    Accepted forms:
      FilterCondition: used as is
      {"value": ..., "operator": ...}: validated into a FilterCondition
      list / tuple / set: IN
      anything else: EQUALS (None matches NULL)
    """
    if isinstance(spec, FilterCondition):
        return spec
    try:
        if isinstance(spec, Mapping) and "operator" in spec:
            return FilterCondition.model_validate(spec)
        if isinstance(spec, (list, tuple, set, frozenset)):
            return FilterCondition(value=spec, operator=FilterOperator.IN)
    except PydanticValidationError as exc:
        raise ValidationError(
            f"Invalid filter: {exc.errors()[0]['msg']}",
            details={"filter": spec},
        ) from exc
    return FilterCondition(value=spec, operator=FilterOperator.EQUALS)


def build_condition(column: InstrumentedAttribute, condition: FilterCondition) -> ColumnElement[bool]:
    return _OPERATORS[condition.operator](column, condition.value)


def build_filter_clauses(model: type, filters: Mapping[str, Any]) -> list[ColumnElement[bool]]:
    """One clause per filter entry; callers AND them together."""
    return [
        build_condition(resolve_column(model, name), to_condition(spec))
        for name, spec in filters.items()
    ]


def build_search_clause(model: type, fields: Iterable[str], term: str) -> ColumnElement[bool]:
    """OR of case-insensitive substring matches of `term` across `fields`."""
    columns = [resolve_column(model, name) for name in fields]
    if not columns:
        raise ValidationError(
            f"Free-text search is not supported for {model.__name__}",
            details={"search": term},
        )
    return or_(*(column.icontains(term, autoescape=True) for column in columns))
