"""
Tapper Argument Parser

Copyright (c) 2025 rtj.dev LLC.
Licensed under the MIT License. See LICENSE file for details.
"""

from .config import build_parser, loads
from .exceptions import (
    ArgumentError,
    CommandLineError,
    ConstraintViolationError,
    CountMismatchError,
    DeclarationError,
    InvalidValueError,
    MissingValueError,
    NoValueError,
    TapperError,
    UnknownArgumentError,
)
from .parser import (
    AllOf,
    AnyRequiredOf,
    Argument,
    ArgumentGroup,
    ArgumentParser,
    ConstArgument,
    ConstraintKind,
    ExactlyOneOf,
    Implies,
    LexicalConfig,
    NoneOf,
    ValueArgument,
)

__all__ = [
    "AllOf",
    "AnyRequiredOf",
    "Argument",
    "ArgumentError",
    "ArgumentGroup",
    "ArgumentParser",
    "CommandLineError",
    "ConstArgument",
    "ConstraintKind",
    "ConstraintViolationError",
    "CountMismatchError",
    "DeclarationError",
    "ExactlyOneOf",
    "Implies",
    "InvalidValueError",
    "LexicalConfig",
    "MissingValueError",
    "NoValueError",
    "NoneOf",
    "TapperError",
    "UnknownArgumentError",
    "ValueArgument",
    "build_parser",
    "loads",
]
