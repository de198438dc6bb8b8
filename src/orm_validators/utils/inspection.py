from typing import Any
from sqlalchemy import inspect as sa_inspect
from sqlalchemy.exc import NoInspectionAvailable

# builtins reported by their type name instead of a qualified class name
_PRIMITIVE_TYPES = (type(None), bool, int, float, complex, str, bytes, list, tuple, dict, set, frozenset)

# default of required options, so "not passed" can be told apart from an explicit None
NOTHING = object()


def describe_provided(value: Any) -> str:
    """
    Return a short, human-readable description of what a caller passed in.

    - builtin values are reported by type name (e.g. 'int', 'str', 'NoneType')
    - an option that was not passed at all (NOTHING) is reported as 'nothing'
    - any other object is reported by its qualified class name (e.g. 'myapp.repos.UserRepo')
    """
    if value is NOTHING:
        return "nothing"
    if isinstance(value, _PRIMITIVE_TYPES):
        return type(value).__name__
    cls = type(value)
    return f"{cls.__module__}.{cls.__qualname__}"


def is_mapped_class(model) -> bool:
    """Return True if `model` is a class mapped by SQLAlchemy's ORM."""
    if not isinstance(model, type):
        return False
    try:
        sa_inspect(model)
    except NoInspectionAvailable:
        return False
    return True


def find_unknown_model_kwargs(model, kwargs: dict) -> list[str]:
    """
    Return list of unknown kwarg keys that are not part of the model's mapped attributes.
    - model: the SQLAlchemy model class (not instance)
    - kwargs: dict of incoming kwargs to validate
    """
    mapper = sa_inspect(model)
    # mapper.attrs includes columns and relationships; attr.key is the name callers use
    allowed = {attr.key for attr in mapper.column_attrs}
    return [k for k in kwargs.keys() if k not in allowed]


def get_identifier_attribute_names(model) -> list[str]:
    """
    Attribute keys of the model's primary key columns, in primary key order.

    The attribute key can differ from the column name
    (e.g. `user_id: Mapped[int] = mapped_column("uid", primary_key=True)` -> 'user_id').
    """
    mapper = sa_inspect(model)
    return [mapper.get_property_by_column(col).key for col in mapper.primary_key]
