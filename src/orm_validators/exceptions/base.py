"""
Custom exceptions raised by the validators and their persistence adapters.

Two families live here:

- configuration / precondition errors (`InvalidArgumentError`, `ValidationRuntimeError`)
  signal a programmer or caller-contract mistake. They are never turned into a
  "validation failed" result.
- repository errors (`RepositoryError`, `InvalidFieldError`) wrap failures of the
  underlying SQLAlchemy lookup.

A duplicate value is NOT an exception: validators return False and keep the
message for the caller (see `AbstractValidator.get_messages()`).
"""

from typing import Iterable


class OrmValidatorError(Exception):
    """
    Base exception for every error raised by this package.

    - message: human-friendly message (safe to show to clients)
    - fields: optional list of field names related to the error (e.g., ['id'])
    - error_code: canonical short code (e.g., 'invalid_argument') used by clients
    """

    def __init__(self, message: str, *, fields: Iterable[str] | None = None,
                 error_code: str | None = None):
        super().__init__(message)
        self.message = message
        self.fields = list(fields) if fields else None
        self.error_code = error_code

    def __str__(self) -> str:
        base = self.message
        parts = []
        if self.fields:
            parts.append(f"fields: {', '.join(self.fields)}")
        if self.error_code:
            parts.append(f"code: {self.error_code}")
        if parts:
            return f"{base} ({'; '.join(parts)})"
        return base

    def to_payload(self) -> dict:
        """
        Return a JSON-serializable dict for callers that report errors as JSON.
        Standard shape:
            {
                "detail": "A human-friendly message",
                "code": "precondition_failed",   # optional canonical code
                "fields": ["id"],                # optional list for client usage
            }
        """
        payload = {"detail": self.message}
        if self.error_code:
            payload["code"] = self.error_code
        if self.fields:
            payload["fields"] = list(self.fields)
        return payload


class InvalidArgumentError(OrmValidatorError, ValueError):
    """Raised at construction time when a required option is missing or has the wrong type."""

    def __init__(self, message: str, *, fields: Iterable[str] | None = None):
        super().__init__(message, fields=fields, error_code="invalid_argument")


class ValidationRuntimeError(OrmValidatorError, RuntimeError):
    """Raised at validation time when the caller breaks the contract (missing context, bad value shape)."""

    def __init__(self, message: str, *, fields: Iterable[str] | None = None):
        super().__init__(message, fields=fields, error_code="precondition_failed")


class RepositoryError(OrmValidatorError):
    """Raised when the repository lookup itself fails."""

    def __init__(self, message: str, *, fields: Iterable[str] | None = None,
                 error_code: str | None = "repository_error"):
        super().__init__(message, fields=fields, error_code=error_code)


class InvalidFieldError(RepositoryError):
    """Raised when lookup criteria reference fields the model does not map."""

    def __init__(self, message: str, *, fields: Iterable[str] | None = None):
        super().__init__(message, fields=fields, error_code="invalid_field")


__all__ = [
    "OrmValidatorError",
    "InvalidArgumentError",
    "ValidationRuntimeError",
    "RepositoryError",
    "InvalidFieldError",
]
