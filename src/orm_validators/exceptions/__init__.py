# orm_validators/
# │
# ├── exceptions/
# │   ├── __init__.py
# │   └── base.py                    # Package-level errors (InvalidArgumentError, ValidationRuntimeError, ...)

from .base import (
    OrmValidatorError,
    InvalidArgumentError,
    ValidationRuntimeError,
    RepositoryError,
    InvalidFieldError,
)

__all__ = [
    "OrmValidatorError",
    "InvalidArgumentError",
    "ValidationRuntimeError",
    "RepositoryError",
    "InvalidFieldError",
]
