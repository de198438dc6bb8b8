"""
Validator that checks a value is used by at most one object: the one being edited.

Typical use is an edit form. The submitted `username` may already exist in the
database, but if the row holding it is the row being edited, the value is still
unique. The caller passes the edited row's identity as `context` (usually the form
data), and the validator compares it with the identity of the row it found.

    validator = UniqueObject(
        object_repository=BaseRepository(User, session),
        object_manager=SQLAlchemyObjectManager(),
        fields="username",
    )
    ok = await validator.validate("alice", context={"id": form["id"]})
    if not ok:
        validator.get_messages()   # {"objectNotUnique": "There is already another object matching 'alice'"}
"""

import logging
import uuid
from typing import Any, Mapping

from orm_validators.exceptions.base import InvalidArgumentError, ValidationRuntimeError
from orm_validators.metadata.object_manager import ClassMetadata, ObjectManager
from orm_validators.utils.inspection import NOTHING, describe_provided
from .abstract_validator import AbstractValidator
from .object_lookup import ObjectLookup

logger = logging.getLogger(__name__)


def _same_identifier_value(expected: Any, found: Any) -> bool:
    # contexts usually come from form data ("5", a UUID's text) while matches hold typed values
    if expected == found:
        return True
    if isinstance(found, uuid.UUID) and isinstance(expected, str):
        # any accepted UUID spelling (upper case, braces, no hyphens) names the same row
        try:
            return uuid.UUID(expected) == found
        except ValueError:
            return False
    return str(expected) == str(found)


def diff_identifiers(expected: Mapping[str, Any], found: Mapping[str, Any]) -> list[str]:
    """
    Names of expected identifiers that `found` lacks or holds a different value for.

    Keys present only in `found` are ignored.
    """
    return [
        name for name, value in expected.items()
        if name not in found or not _same_identifier_value(value, found[name])
    ]


class UniqueObject(AbstractValidator):
    """
    Valid when no object matches the value, or when the matching object has the
    identity given in the context.

    Options (keyword-only):
        object_repository: ObjectRepository to search in (required)
        object_manager: ObjectManager resolving identifiers (required)
        fields: field name or list of field names to match (required)
        token: optional mapping {identifier field name: context key name}
        messages: optional overrides for the message templates
    """

    OBJECT_NOT_UNIQUE = "objectNotUnique"

    message_templates = {
        OBJECT_NOT_UNIQUE: "There is already another object matching '{value}'",
    }

    def __init__(
        self,
        *,
        object_repository: Any = NOTHING,
        object_manager: Any = NOTHING,
        fields: Any = NOTHING,
        token: Mapping[str, str] | None = None,
        messages: Mapping[str, str] | None = None,
    ):
        super().__init__(messages=messages)
        self.lookup = ObjectLookup(object_repository, fields)

        if object_manager is NOTHING or not isinstance(object_manager, ObjectManager):
            raise InvalidArgumentError(
                'Option "object_manager" is required and must be an instance of '
                f"ObjectManager, {describe_provided(object_manager)} given"
            )

        self.object_manager = object_manager
        self.token = token

    @property
    def object_repository(self):
        return self.lookup.object_repository

    @property
    def fields(self) -> list[str]:
        return self.lookup.fields

    @property
    def token(self) -> dict[str, str] | None:
        return self._token

    @token.setter
    def token(self, token: Mapping[str, str] | None) -> None:
        if token is not None and not isinstance(token, Mapping):
            raise InvalidArgumentError(
                f"Token must be a mapping of identifier names to context keys, {describe_provided(token)} given")
        self._token = dict(token) if token is not None else None

    async def is_valid(self, value: Any, context: Mapping[str, Any] | None = None) -> bool:
        """
        Returns False if there is another object with the same field values but other identifiers.

        Raises:
            ValidationRuntimeError: a match exists and the context is missing or incomplete,
                or the value cannot be mapped onto the configured fields
        """
        criteria = self.lookup.clean_search_value(value)
        match = await self.lookup.find_match(criteria)

        if match is None:
            return True

        expected = self.get_expected_identifiers(context)
        found = self.get_found_identifiers(match)

        mismatched = diff_identifiers(expected, found)
        if not mismatched:
            logger.debug(
                "validator.unique_object.self_match",
                extra={"model": self._class_metadata().name, "criteria_keys": sorted(criteria)},
            )
            return True

        logger.info(
            "validator.unique_object.not_unique",
            extra={
                "model": self._class_metadata().name,
                "criteria_keys": sorted(criteria),
                "mismatched_identifiers": sorted(mismatched),
            },
        )
        self.error(self.OBJECT_NOT_UNIQUE, criteria)
        return False

    def get_found_identifiers(self, match: Any) -> dict[str, Any]:
        """Identifiers of the matched object, keyed by context names when a token is set."""
        identifier_values = self._class_metadata().get_identifier_values(match)

        if self.token is None:
            return identifier_values

        return self.replace_field_name_with_mapped_field_name(identifier_values)

    def get_expected_identifiers(self, context: Mapping[str, Any] | None) -> dict[str, Any]:
        """
        Identifiers read from the context.

        Raises:
            ValidationRuntimeError: context is None / not a mapping, or lacks an identifier
        """
        if context is None:
            raise ValidationRuntimeError("Expected context to be a mapping but is None")
        if not isinstance(context, Mapping):
            raise ValidationRuntimeError(
                f"Expected context to be a mapping, {describe_provided(context)} given")

        identifiers = self.get_identifiers()
        if self.token is not None:
            identifiers = list(self.token.values())

        result = {}
        for identifier_field in identifiers:
            # a None value counts as missing: an unsaved record has no identity yet
            if context.get(identifier_field) is None:
                raise ValidationRuntimeError(
                    f"Expected context to contain {identifier_field}", fields=[identifier_field])
            result[identifier_field] = context[identifier_field]
        return result

    def get_identifiers(self) -> list[str]:
        """The names of the identifiers of the repository's model."""
        return self._class_metadata().get_identifier_field_names()

    def replace_field_name_with_mapped_field_name(self, identifier_values: Mapping[str, Any]) -> dict[str, Any]:
        """Rename identifier keys through the token; names the token does not cover are kept."""
        field_map = self.token or {}
        return {field_map.get(key, key): value for key, value in identifier_values.items()}

    def _class_metadata(self) -> ClassMetadata:
        return self.object_manager.get_class_metadata(self.object_repository.model)
