"""Concrete SQLAlchemy repository implementations.

Application repositories subclass SqlRepository, set `model` (and
optionally `domain_model` / `search_fields`), and are constructed with the
request's AsyncSession at the application boundary.
"""

from .base import SqlRepository

__all__ = ["SqlRepository"]
