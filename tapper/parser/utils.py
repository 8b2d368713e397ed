# Tapper Argument Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Contains the value coercion helpers used as default parse functions.

A value argument converts each raw command line string through a parse
function: a callable taking the string and returning the typed value, raising
`ValueError` or `TypeError` on failure. `make_parse_func()` builds one from a
target type using `coerce_value()`, which understands `Enum`, `bool`,
`datetime`, `Literal` and unions on top of plain constructors.

Functions:
- coerce_bool: Convert a truthy or falsy word to a boolean.
- coerce_enum: Resolve a command line word to an Enum member.
- coerce_value: General-purpose coercion to a target type.
- make_parse_func: Bind `coerce_value` to a target type.
"""
import types
from datetime import datetime
from enum import Enum, EnumMeta
from typing import Any, Callable, Literal, Union, get_args, get_origin

from dateutil import parser as date_parser

ParseFunc = Callable[[str], Any]

TRUE_WORDS = frozenset({"true", "t", "1", "yes", "y", "on"})
FALSE_WORDS = frozenset({"false", "f", "0", "no", "n", "off"})


def coerce_bool(value: str | bool) -> bool:
    """
    Convert a truthy or falsy word to a boolean.

    Matching ignores case and surrounding whitespace.

    Raises:
        ValueError: If the word is in neither the truthy nor the falsy set.
    """
    if isinstance(value, bool):
        return value
    word = value.strip().lower()
    if word in TRUE_WORDS:
        return True
    if word in FALSE_WORDS:
        return False
    raise ValueError(f"'{value}' is not a boolean word")


def coerce_enum(value: Any, enum_type: EnumMeta) -> Enum:
    """
    Resolve `value` to a member of `enum_type`.

    Member names are tried first, as given and upper-cased, then member
    values after converting `value` to the type of the first member's value.
    """
    if isinstance(value, enum_type):
        return value

    if isinstance(value, str):
        for name in (value, value.upper()):
            if name in enum_type.__members__:
                return enum_type.__members__[name]

    value_type = type(next(iter(enum_type)).value)
    try:
        return enum_type(value_type(value))
    except (ValueError, TypeError):
        choices = ", ".join(str(member.value) for member in enum_type)
        raise ValueError(f"'{value}' should be one of {{{choices}}}") from None


def _coerce_union(value: str, members: tuple[Any, ...]) -> Any:
    for member in members:
        try:
            return coerce_value(value, member)
        except (ValueError, TypeError):
            continue
    raise ValueError(f"Value '{value}' could not be coerced to any of {members}")


def coerce_value(value: str, target_type: Any) -> Any:
    """
    Convert a command line string to `target_type`.

    `Literal` types accept only their listed strings, unions try each member
    in order, and anything else is called with the string.

    Raises:
        ValueError: If the conversion fails.
    """
    origin = get_origin(target_type)

    if origin is Literal:
        if value not in get_args(target_type):
            raise ValueError(f"Value '{value}' is not one of {get_args(target_type)}")
        return value
    if origin is Union or isinstance(target_type, types.UnionType):
        return _coerce_union(value, get_args(target_type))
    if isinstance(target_type, EnumMeta):
        return coerce_enum(value, target_type)
    if target_type is bool:
        return coerce_bool(value)
    if target_type is datetime:
        try:
            return date_parser.parse(value)
        except (ValueError, OverflowError) as error:
            raise ValueError(f"Value '{value}' could not be parsed as a datetime") from error
    return target_type(value)


def make_parse_func(target_type: Any = str) -> ParseFunc:
    """Return a parse function converting strings to `target_type`."""
    if target_type is str:
        return str

    def _parse(value: str) -> Any:
        return coerce_value(value, target_type)

    _parse.__name__ = f"parse_{getattr(target_type, '__name__', 'value')}"
    return _parse
