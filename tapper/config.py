# Tapper Argument Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""config.py
Declarative parser definitions for Tapper.

A parser can be described as plain data instead of code: a mapping (or YAML /
TOML text) listing the arguments of the root group, extra groups, lexical
markers and constraint trees. Constraints reference arguments by `dest` and
may nest other constraints.

Example (YAML):
    program: convert
    arguments:
      - kind: flag
        aliases: [v, verbose]
        help: Print more output
        many: true
      - kind: value
        aliases: [o, output]
        value_name: FILE
      - kind: value
        dest: source
        value_name: SOURCE
        required: true
    constraints:
      - kind: implies
        members: [verbose, output]

    parser = loads(text)
    parser.parse(["-v", "-o", "out.txt", "in.txt"])
"""
from __future__ import annotations

from datetime import datetime
from pathlib import Path
from typing import Any, Literal, Union

import toml
import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from tapper.exceptions import DeclarationError
from tapper.logger import logger
from tapper.parser.argument import Argument, ConstArgument, ValueArgument
from tapper.parser.argument_parser import ArgumentParser
from tapper.parser.constraint import ConstraintNode, constraint_for
from tapper.parser.group import ArgumentGroup
from tapper.parser.parser_types import ConstraintKind, LexicalConfig

TYPE_NAMES: dict[str, Any] = {
    "str": str,
    "int": int,
    "float": float,
    "bool": bool,
    "path": Path,
    "datetime": datetime,
}


class RawArgument(BaseModel):
    """Raw argument model for declarative parser definitions."""

    kind: Literal["flag", "value", "const"] = "flag"
    aliases: list[str] = Field(default_factory=list)
    dest: str | None = None
    help: str = ""
    required: bool = False
    min_count: int = 1
    max_count: int | None = None
    many: bool = False

    type: str = "str"
    multi: bool = False
    default: Any = None
    value_name: str = "value"
    const: Any = None

    @field_validator("type")
    @classmethod
    def validate_type(cls, value: str) -> str:
        if value not in TYPE_NAMES:
            valid = ", ".join(TYPE_NAMES)
            raise ValueError(f"Unknown type '{value}'. Must be one of: {valid}")
        return value

    def build(self, markers: LexicalConfig) -> Argument:
        options: dict[str, Any] = {
            "help": self.help,
            "required": self.required,
            "min_count": self.min_count,
            "dest": self.dest,
            "markers": markers,
        }
        if self.max_count is not None:
            options["max_count"] = self.max_count

        argument: Argument
        if self.kind == "value":
            argument = ValueArgument(
                *self.aliases,
                type=TYPE_NAMES[self.type],
                default=self.default,
                multi=self.multi,
                value_name=self.value_name,
                **options,
            )
        elif self.kind == "const":
            argument = ConstArgument(
                *self.aliases, const=self.const, default=self.default, **options
            )
        else:
            argument = Argument(*self.aliases, **options)
        if self.many:
            argument.many()
        return argument


class RawConstraint(BaseModel):
    """Raw constraint model; members are argument dests or nested constraints."""

    kind: ConstraintKind
    required: bool | None = None
    members: list[Union[str, RawConstraint]] = Field(default_factory=list)

    @field_validator("kind", mode="before")
    @classmethod
    def validate_kind(cls, value: Any) -> ConstraintKind:
        if isinstance(value, ConstraintKind):
            return value
        return ConstraintKind(value)

    def build(self, arguments: dict[str, Argument]) -> ConstraintNode:
        children = []
        for member in self.members:
            if isinstance(member, RawConstraint):
                children.append(member.build(arguments))
            elif member in arguments:
                children.append(arguments[member])
            else:
                raise DeclarationError(
                    f"Constraint {self.kind} references unknown argument '{member}'"
                )
        return constraint_for(self.kind, *children, required=self.required)


RawConstraint.model_rebuild()


class RawGroup(BaseModel):
    """Raw named group of arguments."""

    name: str
    arguments: list[RawArgument] = Field(default_factory=list)


class ParserDefinition(BaseModel):
    """Top-level declarative parser definition."""

    program: str | None = None
    help_text: str = ""
    help_epilog: str = ""
    markers: LexicalConfig = Field(default_factory=LexicalConfig)
    arguments: list[RawArgument] = Field(default_factory=list)
    groups: list[RawGroup] = Field(default_factory=list)
    constraints: list[RawConstraint] = Field(default_factory=list)


def build_parser(data: dict[str, Any]) -> ArgumentParser:
    """Build an `ArgumentParser` from a declarative mapping."""
    try:
        definition = ParserDefinition.model_validate(data)
    except ValidationError as error:
        raise DeclarationError(f"Invalid parser definition: {error}") from error

    by_dest: dict[str, Argument] = {}

    def register(raw: RawArgument) -> Argument:
        argument = raw.build(definition.markers)
        if argument.dest in by_dest:
            raise DeclarationError(f"Duplicate argument dest '{argument.dest}'")
        by_dest[argument.dest] = argument
        return argument

    parser = ArgumentParser(
        *(register(raw) for raw in definition.arguments),
        program=definition.program,
        help_text=definition.help_text,
        help_epilog=definition.help_epilog,
        markers=definition.markers,
    )
    for raw_group in definition.groups:
        group = ArgumentGroup(raw_group.name)
        for raw in raw_group.arguments:
            group.add(register(raw))
        parser.add_group(group)
    for raw_constraint in definition.constraints:
        parser.add_constraint(raw_constraint.build(by_dest))

    logger.debug(
        "Built parser with %d arguments and %d constraints",
        len(by_dest),
        len(definition.constraints),
    )
    return parser


def loads(text: str, format: Literal["yaml", "toml"] = "yaml") -> ArgumentParser:
    """Build an `ArgumentParser` from YAML or TOML text."""
    try:
        if format == "yaml":
            data = yaml.safe_load(text)
        elif format == "toml":
            data = toml.loads(text)
        else:
            raise DeclarationError(f"Unsupported definition format '{format}'")
    except (yaml.YAMLError, toml.TomlDecodeError) as error:
        raise DeclarationError(f"Could not read {format} definition: {error}") from error

    if not isinstance(data, dict):
        raise DeclarationError("A parser definition must be a mapping")
    return build_parser(data)
