"""Typed field readers for decoding checkpoint statistics records."""

from __future__ import annotations

from enum import Enum
from typing import TypeVar

from ..core.errors import CheckpointStatsValidationError

EnumT = TypeVar("EnumT", bound=Enum)


def as_str(value: object, *, field_name: str) -> str:
    if not isinstance(value, str):
        raise CheckpointStatsValidationError(f"{field_name} is invalid")
    return value


def as_str_or_none(value: object, *, field_name: str) -> str | None:
    if value is None:
        return None
    return as_str(value, field_name=field_name)


def as_int(value: object, *, field_name: str) -> int:
    # bool is an int subclass but never a valid counter.
    if isinstance(value, bool) or not isinstance(value, int):
        raise CheckpointStatsValidationError(f"{field_name} is invalid")
    return value


def as_bool(value: object, *, field_name: str) -> bool:
    if not isinstance(value, bool):
        raise CheckpointStatsValidationError(f"{field_name} is invalid")
    return value


def as_enum(value: object, enum_type: type[EnumT], *, field_name: str) -> EnumT:
    name = as_str(value, field_name=field_name)
    try:
        return enum_type[name]
    except KeyError:
        raise CheckpointStatsValidationError(f"{field_name} is invalid") from None


def as_object(value: object, *, field_name: str) -> dict[str, object]:
    if not isinstance(value, dict):
        raise CheckpointStatsValidationError(f"{field_name} is invalid")
    for key in value:
        if not isinstance(key, str):
            raise CheckpointStatsValidationError(f"{field_name} is invalid")
    return value


__all__ = [
    "as_str",
    "as_str_or_none",
    "as_int",
    "as_bool",
    "as_enum",
    "as_object",
]
