from dataclasses import MISSING, Field, fields, is_dataclass
from types import NoneType, UnionType
from typing import Any, NewType, TypeVar
from uuid import UUID, uuid4

from warden.domain.datetime import UtcDatetime


def get_default_type(field_type: Any) -> Any:  # type: ignore
    if isinstance(field_type, UnionType):
        if NoneType in field_type.__args__:
            return None

        raise TypeError("Cannot auto build union types")

    if isinstance(field_type, NewType):
        return get_default_type(field_type.__supertype__)

    if issubclass(field_type, UUID):
        return uuid4()

    if issubclass(field_type, UtcDatetime):
        return field_type.now()

    return field_type()


T = TypeVar("T")


def build(ty: type[T], **kwargs: Any) -> T:  # type: ignore
    """
    Build a dataclass, filling in any required fields that aren't passed with
    a zero value (or a random one, for ids).
    """

    if not is_dataclass(ty):
        raise TypeError("Type must be a dataclass")

    unset_fields: dict[str, Field] = {}  # type: ignore[type-arg]

    for field in fields(ty):
        if field.default is MISSING and field.default_factory is MISSING:
            unset_fields[field.name] = field

    data = kwargs.copy()

    for missing_key in unset_fields.keys() - kwargs.keys():
        data[missing_key] = get_default_type(unset_fields[missing_key].type)

    return ty(**data)  # type: ignore
