"""
Lookup of an existing object by a configured list of fields.

This is the "does an object with these field values exist?" capability that
validators compose: it checks its configuration once, turns whatever value a form
hands over into a criteria mapping, and performs a single repository round-trip.
"""

import logging
from typing import Any, Mapping

from orm_validators.exceptions.base import InvalidArgumentError, ValidationRuntimeError
from orm_validators.repositories.base_repository import ObjectRepository
from orm_validators.utils.inspection import NOTHING, describe_provided
from orm_validators.utils.normalizers import to_field_list

logger = logging.getLogger(__name__)

class ObjectLookup:
    """
    Args:
        object_repository: anything satisfying `ObjectRepository`
            (a `model` attribute and an async `find_one_by`)
        fields: a field name, or a list of field names, matched against the value

    Raises:
        InvalidArgumentError: on a missing/wrong repository or a bad field list
    """

    def __init__(self, object_repository: Any = NOTHING, fields: Any = NOTHING):
        if object_repository is NOTHING or not isinstance(object_repository, ObjectRepository):
            raise InvalidArgumentError(
                'Option "object_repository" is required and must be an instance of '
                f"ObjectRepository, {describe_provided(object_repository)} given"
            )

        self.object_repository = object_repository
        self.fields = self._validate_fields(None if fields is NOTHING else fields)

    @staticmethod
    def _validate_fields(fields: Any) -> list[str]:
        fields = to_field_list(fields)
        if fields is None:
            raise InvalidArgumentError(
                'Key "fields" must be provided and be a field or a list of fields to be used '
                "when searching for existing instances"
            )

        for field in fields:
            if not isinstance(field, str):
                raise InvalidArgumentError(
                    f"Provided fields must be strings, {describe_provided(field)} provided")

        if not fields:
            raise InvalidArgumentError("Provided fields list was empty!")

        return fields

    def clean_search_value(self, value: Any) -> dict[str, Any]:
        """
        Turn the validated value into {field: value} over the configured fields.

        - mapping: each configured field is picked from it (extra keys are ignored)
        - list / tuple: positional, one item per configured field
        - anything else: a single value for a single field

        Raises:
            ValidationRuntimeError: a configured field is missing, or the item count is wrong
        """
        if isinstance(value, Mapping):
            matched = {}
            for field in self.fields:
                if field not in value:
                    raise ValidationRuntimeError(
                        f'Field "{field}" was not provided, but was expected since the configured '
                        "field list needs it for validation",
                        fields=[field],
                    )
                matched[field] = value[field]
            return matched

        values = list(value) if isinstance(value, (list, tuple)) else [value]
        if len(values) != len(self.fields):
            raise ValidationRuntimeError(
                f"Provided values count is {len(values)}, while expected number of fields "
                f"to be matched is {len(self.fields)}",
                fields=self.fields,
            )
        return dict(zip(self.fields, values))

    async def find_match(self, criteria: Mapping[str, Any]) -> Any | None:
        match = await self.object_repository.find_one_by(criteria)
        logger.debug(
            "lookup.find_match",
            extra={
                "model": getattr(self.object_repository.model, "__name__", "?"),
                "criteria_keys": sorted(criteria),
                "found": match is not None,
            },
        )
        return match
