"""
Shared plumbing for validators: message templates, message accumulation and
the `validate()` entry point.

Convention: a validator answers with a boolean. When it answers False it records
one message per error code; the caller reads them with `get_messages()`.
Exceptions are reserved for misconfiguration and broken caller contracts.
"""

from typing import Any, Mapping

from orm_validators.exceptions.base import InvalidArgumentError


class AbstractValidator:
    # error code -> template; `{value}` is replaced by the rejected value
    message_templates: dict[str, str] = {}

    def __init__(self, messages: Mapping[str, str] | None = None):
        # per-instance copy so overrides never leak into the class defaults
        self.message_templates = dict(type(self).message_templates)
        self._messages: dict[str, str] = {}

        for key, template in (messages or {}).items():
            self.set_message(template, key)

    def set_message(self, template: str, key: str) -> None:
        if key not in self.message_templates:
            raise InvalidArgumentError(f'No message template exists for key "{key}"', fields=[key])
        self.message_templates[key] = template

    def get_messages(self) -> dict[str, str]:
        return dict(self._messages)

    async def validate(self, value: Any, context: Mapping[str, Any] | None = None) -> bool:
        """Validate `value`, discarding messages left over from the previous call."""
        self._messages = {}
        return await self.is_valid(value, context)

    async def is_valid(self, value: Any, context: Mapping[str, Any] | None = None) -> bool:
        raise NotImplementedError

    def error(self, key: str, value: Any = None) -> None:
        self._messages[key] = self.create_message(key, value)

    def create_message(self, key: str, value: Any) -> str:
        # only {value} is substituted; any other braces in a template are kept as written
        return self.message_templates[key].replace("{value}", self.format_value(value))

    @staticmethod
    def format_value(value: Any) -> str:
        if isinstance(value, Mapping):
            return ", ".join(str(v) for v in value.values())
        if isinstance(value, (list, tuple)):
            return ", ".join(str(v) for v in value)
        return str(value)
