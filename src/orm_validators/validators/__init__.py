from .abstract_validator import AbstractValidator
from .object_lookup import ObjectLookup
from .unique_object import UniqueObject, diff_identifiers

__all__ = [
    "AbstractValidator",
    "ObjectLookup",
    "UniqueObject",
    "diff_identifiers",
]
