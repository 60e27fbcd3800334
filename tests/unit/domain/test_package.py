"""Tests for the domain package exports."""

from src.domain.models import __all__ as models_all
from src.domain.models import (
    DeleteResult,
    FilterCondition,
    FilterOperator,
    OperationOptions,
    PaginationResult,
    SearchRequest,
    SortOrder,
)
from src.domain.repositories import BaseRepository, UnitOfWork
from src.domain.services import BaseService, CrudService


def test_domain_models_exports_eight_names():
    assert len(models_all) == 8


def test_filter_operator_importable_from_package():
    assert FilterOperator.IN == "in"


def test_value_objects_importable_from_package():
    for cls in (DeleteResult, FilterCondition, OperationOptions, PaginationResult, SearchRequest):
        assert cls.__module__.startswith("src.domain.models.")


def test_sort_order_importable_from_package():
    assert SortOrder.DESC == "desc"


def test_contracts_importable_from_packages():
    assert BaseRepository.__name__ == "BaseRepository"
    assert UnitOfWork.__name__ == "UnitOfWork"
    assert issubclass(BaseService, CrudService)
