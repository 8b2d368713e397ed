"""
Tapper Argument Parser

Copyright (c) 2025 rtj.dev LLC.
Licensed under the MIT License. See LICENSE file for details.
"""

from .argument import Argument, ConstArgument, ValueArgument
from .argument_parser import ArgumentParser
from .base import BaseArgument
from .constraint import (
    AllOf,
    AnyRequiredOf,
    ConstraintNode,
    ExactlyOneOf,
    Implies,
    NoneOf,
    constraint_for,
)
from .group import ArgumentGroup
from .matcher import Token, TokenKind, TokenMatcher, classify_token
from .parser_types import DEFAULT_MARKERS, ArgumentState, ConstraintKind, LexicalConfig

__all__ = [
    "AllOf",
    "AnyRequiredOf",
    "Argument",
    "ArgumentGroup",
    "ArgumentParser",
    "ArgumentState",
    "BaseArgument",
    "ConstArgument",
    "ConstraintKind",
    "ConstraintNode",
    "DEFAULT_MARKERS",
    "ExactlyOneOf",
    "Implies",
    "LexicalConfig",
    "NoneOf",
    "Token",
    "TokenKind",
    "TokenMatcher",
    "ValueArgument",
    "classify_token",
    "constraint_for",
]
