"""
Identity metadata for mapped classes.

The validators only need two facts about an entity class: which attributes form
its identity, and what those attributes hold on a given instance. `ObjectManager`
is that capability; `SQLAlchemyObjectManager` answers it from the SQLAlchemy
mapper (`sqlalchemy.inspect(model)`), so nothing is declared twice.
"""

import logging
from typing import Any, Protocol, runtime_checkable

from sqlalchemy.ext.asyncio import AsyncSession

from orm_validators.exceptions.base import InvalidArgumentError
from orm_validators.repositories.base_repository import BaseRepository
from orm_validators.utils.inspection import (
    describe_provided,
    get_identifier_attribute_names,
    is_mapped_class,
)

logger = logging.getLogger(__name__)


class ClassMetadata:
    """
    Identity information for one mapped class.

    Identifier names are attribute keys (what callers use on instances), not
    column names, in primary key order.
    """

    def __init__(self, model: type):
        self.model = model
        self.name = model.__name__
        self._identifier_names = get_identifier_attribute_names(model)

    def get_identifier_field_names(self) -> list[str]:
        return list(self._identifier_names)

    def is_identifier(self, field_name: str) -> bool:
        return field_name in self._identifier_names

    def get_identifier_values(self, obj: Any) -> dict[str, Any]:
        """
        Return {identifier name: value} for `obj`.

        Identifiers that are still None (e.g. a pending object that was never
        flushed) are left out, so an unsaved object never "matches" an identity.
        """
        if not isinstance(obj, self.model):
            raise InvalidArgumentError(
                f"Expected an instance of {self.name}, {describe_provided(obj)} given")

        values = {}
        for name in self._identifier_names:
            value = getattr(obj, name)
            if value is not None:
                values[name] = value
        return values

    def __repr__(self) -> str:
        return f"<ClassMetadata(name={self.name!r}, identifiers={self._identifier_names!r})>"


@runtime_checkable
class ObjectManager(Protocol):
    """Anything that can hand out identity metadata for a mapped class."""

    def get_class_metadata(self, model: type) -> ClassMetadata:
        ...


class SQLAlchemyObjectManager:
    """
    ObjectManager backed by SQLAlchemy mapper inspection.

    The session is optional: metadata lookups never touch the database. It is
    only needed to build repositories with `get_repository()`.
    """

    def __init__(self, session: AsyncSession | None = None):
        self.session = session
        self._metadata: dict[type, ClassMetadata] = {}

    def get_class_metadata(self, model: type) -> ClassMetadata:
        metadata = self._metadata.get(model)
        if metadata is not None:
            return metadata

        if not is_mapped_class(model):
            provided = model.__qualname__ if isinstance(model, type) else describe_provided(model)
            raise InvalidArgumentError(f"{provided} is not a mapped class")

        metadata = ClassMetadata(model)
        self._metadata[model] = metadata
        logger.debug(
            "metadata.loaded",
            extra={"model": metadata.name, "identifiers": metadata.get_identifier_field_names()},
        )
        return metadata

    def get_repository(self, model: type) -> BaseRepository:
        if self.session is None:
            raise InvalidArgumentError("A session is required to build repositories")
        # validates the class is mapped before handing out a repository
        self.get_class_metadata(model)
        return BaseRepository(model, self.session)
