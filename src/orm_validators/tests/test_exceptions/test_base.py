import pytest

from orm_validators.exceptions import (
    InvalidArgumentError,
    InvalidFieldError,
    OrmValidatorError,
    RepositoryError,
    ValidationRuntimeError,
)


def test_str_includes_fields_and_code():
    err = ValidationRuntimeError("Expected context to contain id", fields=["id"])

    assert str(err) == "Expected context to contain id (fields: id; code: precondition_failed)"


def test_str_without_extras():
    assert str(OrmValidatorError("plain")) == "plain"


def test_to_payload():
    err = InvalidFieldError("Unknown field(s) for User: nope", fields=["nope"])

    assert err.to_payload() == {
        "detail": "Unknown field(s) for User: nope",
        "code": "invalid_field",
        "fields": ["nope"],
    }


def test_to_payload_omits_empty_parts():
    assert OrmValidatorError("plain").to_payload() == {"detail": "plain"}


@pytest.mark.parametrize(
    "exc_class, builtin",
    [
        (InvalidArgumentError, ValueError),
        (ValidationRuntimeError, RuntimeError),
    ],
)
def test_errors_are_catchable_as_builtins(exc_class, builtin):
    with pytest.raises(builtin):
        raise exc_class("boom")


def test_repository_error_hierarchy():
    assert issubclass(InvalidFieldError, RepositoryError)
    assert issubclass(RepositoryError, OrmValidatorError)
    assert RepositoryError("x").error_code == "repository_error"
