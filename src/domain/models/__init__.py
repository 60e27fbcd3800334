"""Domain model package.

Request/response value objects shared by the repository and service
layers.  All are Pydantic models with no ORM or infrastructure
dependencies.  Import from this package to avoid coupling application code
to individual module paths.
"""

from .enums import FilterOperator, SortOrder
from .options import DEFAULT_OPTIONS, OperationOptions
from .pagination import DeleteResult, PaginationResult
from .search import FilterCondition, SearchRequest

__all__ = [
    # enums
    "FilterOperator",
    "SortOrder",
    # options
    "OperationOptions",
    "DEFAULT_OPTIONS",
    # search
    "FilterCondition",
    "SearchRequest",
    # results
    "PaginationResult",
    "DeleteResult",
]
