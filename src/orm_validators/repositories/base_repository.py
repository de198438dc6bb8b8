"""
Repository adapter used by the validators to look records up by field values.

`ObjectRepository` is the capability the validators depend on: a `model` class
and an async `find_one_by(criteria)`. `BaseRepository` is the SQLAlchemy
(async session) implementation of it; any other object exposing the same two
members works as well.

Like the rest of the repository layer, `BaseRepository` never commits: the
session and its transaction belong to the caller.
"""
from orm_validators.exceptions.base import RepositoryError, InvalidFieldError
from orm_validators.utils.inspection import find_unknown_model_kwargs

import time
from typing import Any, Generic, Mapping, Protocol, Type, TypeVar, runtime_checkable
from sqlalchemy import and_, inspect as sa_inspect, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
import logging

# Type variable for the model class
ModelType = TypeVar("ModelType")

logger = logging.getLogger(__name__)


@runtime_checkable
class ObjectRepository(Protocol):
    """Anything that can find one persisted object of `model` by field values."""

    model: type

    async def find_one_by(self, criteria: Mapping[str, Any]) -> Any | None:
        ...


class BaseRepository(Generic[ModelType]):
    """
    Generic SQLAlchemy repository providing lookups by field values.

    Type Parameters:
        ModelType: The SQLAlchemy model class this repository manages.
    """

    def __init__(self, model: Type[ModelType], db: AsyncSession):
        """
        Initialize the repository.

        Args:
            model: The SQLAlchemy model class (not an instance), e.g. User, not User().
            db: The async database session, owned by the caller.
        """
        self.model = model
        self.db = db

    def get_class_name(self) -> str:
        return self.model.__name__

    async def find_one_by(self, criteria: Mapping[str, Any]) -> ModelType | None:
        """
        Find a single entity whose fields equal the given criteria.

        Args:
            criteria: mapping of mapped attribute name -> value. A None value
                matches NULL (`IS NULL`).

        Returns:
            The first matching entity (ordered by primary key), None otherwise

        Raises:
            InvalidFieldError: If a criteria key is not a mapped column attribute
            RepositoryError: If the query fails
        """
        unknown = find_unknown_model_kwargs(self.model, criteria)
        if unknown:
            # INFO: caller-level misconfiguration; expected input problem -> no stack trace
            logger.info(
                "repo.find_one_by.invalid_fields",
                extra={
                    "model": self.model.__name__,
                    "operation": "find_one_by",
                    "invalid_fields": sorted(unknown),
                },
            )
            raise InvalidFieldError(
                f"Unknown field(s) for {self.model.__name__}: {', '.join(unknown)}", fields=unknown)

        # Example: SELECT * FROM users WHERE username = :username ORDER BY id LIMIT 1
        conditions = [getattr(self.model, field) == value for field, value in criteria.items()]
        query = (
            select(self.model)
            .where(and_(*conditions))
            .order_by(*sa_inspect(self.model).primary_key)
            .limit(1)
        )

        start = time.perf_counter()
        try:
            result = await self.db.execute(query)
            entity = result.scalars().first()
        except SQLAlchemyError as e:
            logger.error(
                f"Error finding {self.model.__name__} by {sorted(criteria)}: {e}")
            raise RepositoryError(
                f"Failed to find {self.model.__name__}", fields=sorted(criteria)) from e

        logger.debug(
            "repo.find_one_by.done",
            extra={
                "model": self.model.__name__,
                "operation": "find_one_by",
                # keys only; values may be user input
                "criteria_keys": sorted(criteria),
                "found": entity is not None,
                "duration_ms": int((time.perf_counter() - start) * 1000),
            },
        )
        return entity
