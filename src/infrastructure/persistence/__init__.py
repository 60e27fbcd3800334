"""Persistence package.

SQLAlchemy adapters for the domain contracts: the generic SqlRepository
that application repositories subclass, the SqlUnitOfWork transaction
scope, and the filter/search clause builders they share.
"""

from src.infrastructure.persistence.repositories import SqlRepository
from src.infrastructure.persistence.unit_of_work import SqlUnitOfWork

__all__ = [
    "SqlRepository",
    "SqlUnitOfWork",
]
