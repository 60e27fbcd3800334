"""Domain enumerations for search and pagination requests.

All string-valued enums use str mixin so they serialize cleanly to JSON
and remain comparable to plain strings (FastAPI / Pydantic default behaviour).
"""

from enum import Enum


class FilterOperator(str, Enum):
    """Operator set every compliant adapter must support.

    Values match the wire names a request layer receives
    (e.g. ?filters[age][operator]=greaterThan).
    """

    CONTAINS = "contains"
    EQUALS = "equals"
    LESS_THAN = "lessThan"
    GREATER_THAN = "greaterThan"
    STARTS_WITH = "startsWith"
    ENDS_WITH = "endsWith"
    IN = "in"
    BETWEEN = "between"

    @property
    def is_text_match(self) -> bool:
        """True for the substring-style operators that only apply to strings."""
        return self in (
            FilterOperator.CONTAINS,
            FilterOperator.STARTS_WITH,
            FilterOperator.ENDS_WITH,
        )


class SortOrder(str, Enum):
    ASC = "asc"
    DESC = "desc"
