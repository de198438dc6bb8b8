"""
Validators backed by an ORM: check submitted values against persisted objects.

    from orm_validators import UniqueObject, BaseRepository, SQLAlchemyObjectManager
"""

from .exceptions import (
    OrmValidatorError,
    InvalidArgumentError,
    ValidationRuntimeError,
    RepositoryError,
    InvalidFieldError,
)
from .metadata import ClassMetadata, ObjectManager, SQLAlchemyObjectManager
from .repositories import BaseRepository, ObjectRepository
from .validators import AbstractValidator, ObjectLookup, UniqueObject

__all__ = [
    "OrmValidatorError",
    "InvalidArgumentError",
    "ValidationRuntimeError",
    "RepositoryError",
    "InvalidFieldError",
    "ClassMetadata",
    "ObjectManager",
    "SQLAlchemyObjectManager",
    "BaseRepository",
    "ObjectRepository",
    "AbstractValidator",
    "ObjectLookup",
    "UniqueObject",
]
