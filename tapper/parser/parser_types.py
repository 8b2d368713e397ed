# Tapper Argument Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Type utilities and shared state models for Tapper's argument parser.

Contents:
- `ArgumentState`: The occurrence counter and value cell of one logical
  argument. Every clone of an `Argument` holds the same `ArgumentState`, so a
  token matched through any group or constraint tree updates all of them.
- `ConstraintKind`: Enum of the combinators a `ConstraintNode` can apply,
  with config-friendly aliases.
- `LexicalConfig`: The lexical markers that introduce flags and names, join a
  name to its value, and stop option parsing.
- `DEFAULT_MARKERS`: GNU-style markers (`-`, `--`, `=`, `--`).
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator


@dataclass(eq=False)
class ArgumentState:
    """Tracks how many times an argument occurred and the value it holds."""

    count: int = 0
    value: Any = None

    def increment(self) -> int:
        """Record one more occurrence and return the new count."""
        self.count += 1
        return self.count


class ConstraintKind(Enum):
    """
    Defines how a `ConstraintNode` combines its children.

    Members:
        NONE: No child may be set.
        ONE: Exactly one child must be set.
        ANY: Every required child must be set; the rest are free.
        ALL: All children must be set, or none when the node is optional.
        IMPLIES: For every adjacent pair (A, B), A set means B must be set.

    Aliases:
        - "none_of" → "none"
        - "exactly_one_of" / "xor" → "one"
        - "any_required_of" / "any_of" / "or" → "any"
        - "all_of" / "and" → "all"

    Example:
        ConstraintKind("exactly_one_of") → ConstraintKind.ONE
    """

    NONE = "none"
    ONE = "one"
    ANY = "any"
    ALL = "all"
    IMPLIES = "implies"

    @classmethod
    def choices(cls) -> list[ConstraintKind]:
        """Return a list of all constraint kinds."""
        return list(cls)

    @classmethod
    def _get_alias(cls, value: str) -> str:
        aliases = {
            "none_of": "none",
            "exactly_one_of": "one",
            "xor": "one",
            "any_required_of": "any",
            "any_of": "any",
            "or": "any",
            "all_of": "all",
            "and": "all",
        }
        return aliases.get(value, value)

    @classmethod
    def _missing_(cls, value: object) -> ConstraintKind:
        if not isinstance(value, str):
            raise ValueError(f"Invalid {cls.__name__}: {value!r}")
        normalized = value.strip().lower().replace("-", "_")
        alias = cls._get_alias(normalized)
        for member in cls:
            if member.value == alias:
                return member
        valid = ", ".join(member.value for member in cls)
        raise ValueError(f"Invalid {cls.__name__}: '{value}'. Must be one of: {valid}")

    @property
    def join_token(self) -> str:
        """String placed between the usage strings of a node's children."""
        return " | " if self is ConstraintKind.ONE else " "

    def __str__(self) -> str:
        return self.value


class LexicalConfig(BaseModel):
    """
    Lexical markers used to classify command line tokens.

    Attributes:
        flag_prefix (str): Introduces a cluster of single-character flags.
        name_prefix (str): Introduces a multi-character name.
        name_delimiter (str): Joins a name to an attached value.
        stop_marker (str): Switches every following token to positional.
    """

    model_config = ConfigDict(frozen=True)

    flag_prefix: str = "-"
    name_prefix: str = "--"
    name_delimiter: str = "="
    stop_marker: str = "--"

    @field_validator("flag_prefix", "name_prefix", "stop_marker")
    @classmethod
    def validate_marker(cls, value: str) -> str:
        if not value:
            raise ValueError("markers must not be empty")
        return value

    @field_validator("name_delimiter")
    @classmethod
    def validate_delimiter(cls, value: str) -> str:
        if len(value) != 1:
            raise ValueError("name_delimiter must be a single character")
        return value


DEFAULT_MARKERS = LexicalConfig()
