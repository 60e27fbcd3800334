"""Per-call options bag accepted by every repository and service operation.

OperationOptions replaces the older positional style
(create(dto, populate), find_by_id(id, populate, raise_exception)); use
OperationOptions.from_flags() when porting callers written that way.
"""

from __future__ import annotations

from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

TransactionT = TypeVar("TransactionT")


class OperationOptions(BaseModel, Generic[TransactionT]):
    """Options understood by repository adapters.

    populate: include related/referenced data in the result.
    populate_fields: restrict population to these relations (implies populate).
    raise_exception: turn a "not found" lookup result into NotFoundError.
    transaction: opaque handle from UnitOfWork.get_transaction();
        passed through by identity, never copied.
    select_fields: include-list of returned columns.
    dont_select_fields: exclude-list of returned columns.

    Nothing here ties the fields together; an adapter may reject
    conflicting combinations such as both projection lists at once.
    """

    model_config = ConfigDict(
        frozen=True,
        arbitrary_types_allowed=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    populate: bool = False
    populate_fields: list[str] | None = None
    raise_exception: bool = False
    transaction: TransactionT | None = None
    select_fields: list[str] | None = None
    dont_select_fields: list[str] | None = None

    @classmethod
    def from_flags(
        cls,
        populate: bool = False,
        raise_exception: bool = False,
    ) -> OperationOptions[TransactionT]:
        """Build an options bag from the legacy positional booleans."""
        return cls(populate=populate, raise_exception=raise_exception)

    @property
    def wants_population(self) -> bool:
        return self.populate or bool(self.populate_fields)


DEFAULT_OPTIONS: OperationOptions = OperationOptions()

