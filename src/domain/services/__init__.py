"""Domain services package."""

from .base import BaseService, CrudService

__all__ = ["BaseService", "CrudService"]
