"""Tests for src/domain/errors.py."""

import pytest

from src.domain.errors import (
    NotFoundError,
    RepositoryError,
    TransactionStateError,
    ValidationError,
)


@pytest.mark.parametrize("cls", [NotFoundError, ValidationError, TransactionStateError])
def test_error_kinds_share_base(cls):
    assert issubclass(cls, RepositoryError)


def test_error_codes():
    assert NotFoundError("x").code == "not_found"
    assert ValidationError("x").code == "validation_error"
    assert TransactionStateError("x").code == "transaction_state_error"


def test_message_is_exception_text():
    assert str(NotFoundError("Author 7 not found")) == "Author 7 not found"


def test_code_override():
    assert ValidationError("x", code="duplicate_email").code == "duplicate_email"


def test_to_dict_without_details():
    assert NotFoundError("gone").to_dict() == {"message": "gone", "code": "not_found"}


def test_to_dict_with_details():
    err = NotFoundError("gone", details={"id": 7})
    assert err.to_dict()["details"] == {"id": 7}
