"""Error kinds surfaced by the repository and unit-of-work contracts.

RepositoryError is the root; adapters raise the subclasses below and let
every other failure (connectivity, constraint violations, driver errors)
propagate unchanged.  Mapping these to transport responses is the job of
the request-handling layer.
"""

from __future__ import annotations

from typing import Any


class RepositoryError(Exception):
    """Base class for all contract-level errors.

    Carries a human-readable message, a stable machine code and optional
    structured details (e.g. the offending field or identifier).
    """

    code = "repository_error"

    def __init__(
        self,
        message: str,
        code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        if code is not None:
            self.code = code
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Serialisable form for a request layer to embed in a response."""
        result: dict[str, Any] = {"message": self.message, "code": self.code}
        if self.details:
            result["details"] = self.details
        return result


class NotFoundError(RepositoryError):
    """Requested entity does not exist.

    Raised by lookups only when the caller opted in via raise_exception, and
    always by update_by_id / delete_by_id.
    """

    code = "not_found"


class ValidationError(RepositoryError):
    """Adapter rejected a DTO, filter, sort key or projection as invalid."""

    code = "validation_error"


class TransactionStateError(RepositoryError):
    """Unit-of-work method called outside its valid state."""

    code = "transaction_state_error"
