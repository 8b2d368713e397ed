# Tapper Argument Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""
This module implements `ArgumentParser`, the entry point that turns a raw
token list into populated, validated arguments.

The parser owns a root group ("Arguments"), any number of extra groups, and a
constraints group. Parsing is a single pass over the tokens followed by a
single validation pass:

- The stop marker (`--`) switches all following tokens to positional.
- `--name` sets a named argument; `--name=value` or `--name value` gives a
  value argument its value. A delimiter on a flag that takes no value is an
  error.
- `-abc` sets each flag in turn; the first flag taking a value consumes the
  rest of the token (`-ovalue`) or the next token (`-o value`).
- Anything else fills the next positional argument that can accept it.
- Afterwards each group validates in declaration order, then the
  constraints. The first violation is raised.

Public Interface:
- `add(...)`: Add arguments to the root group.
- `add_group(...)`: Add a named group, scanned after the earlier ones.
- `add_constraint(...)`: Add constraint trees checked after all groups.
- `parse(tokens)`: Parse a token list into a `dict[str, Any]` of values.
- `parse_argv(argv)`: Same, treating `argv[0]` as the program name.
- `help()`: Usage line plus the column-aligned listing of every group.
- `render_help()`: Print the help through the rich console.

Example Usage:
    verbose = Argument("v", "verbose", help="Print more output", max_count=0)
    output = ValueArgument("o", "output", help="Output file", value_name="FILE")
    source = +ValueArgument(help="Input file", value_name="SOURCE")

    parser = ArgumentParser(verbose, output, source, program="convert")
    args = parser.parse(["-vv", "--output=out.txt", "in.txt"])

    # args == {'verbose': True, 'output': 'out.txt', 'source': 'in.txt'}
    # verbose.count == 2
"""
from __future__ import annotations

from typing import Any, Sequence

from rich.console import Console
from rich.markup import escape

from tapper.console import console
from tapper.exceptions import (
    DeclarationError,
    MissingValueError,
    NoValueError,
    UnknownArgumentError,
)
from tapper.logger import logger
from tapper.parser.argument import Argument
from tapper.parser.base import BaseArgument
from tapper.parser.group import ArgumentGroup
from tapper.parser.matcher import Token, TokenKind, TokenMatcher, classify_token
from tapper.parser.parser_types import DEFAULT_MARKERS, LexicalConfig


class ArgumentParser:
    """
    Command line parser over groups of declared arguments.

    Attributes:
        program (str | None): Program name shown in the usage line.
        markers (LexicalConfig): Markers used to classify tokens.
        groups (list[ArgumentGroup]): Lookup groups, the root group first.
        constraints (ArgumentGroup): Constraint trees checked after the groups.
    """

    def __init__(
        self,
        *arguments: BaseArgument,
        program: str | None = None,
        help_text: str = "",
        help_epilog: str = "",
        markers: LexicalConfig = DEFAULT_MARKERS,
        console: Console = console,
    ) -> None:
        self.program: str | None = program
        self.help_text: str = help_text
        self.help_epilog: str = help_epilog
        self.markers: LexicalConfig = markers
        self.console: Console = console
        self.groups: list[ArgumentGroup] = [ArgumentGroup("Arguments", *arguments)]
        self.constraints: ArgumentGroup = ArgumentGroup("Constraints")
        self.matcher: TokenMatcher = TokenMatcher(self.groups)

    def add(self, *arguments: BaseArgument) -> ArgumentParser:
        """Add arguments to the root group."""
        for argument in arguments:
            self.groups[0].add(argument)
        return self

    def add_group(self, group: ArgumentGroup) -> ArgumentParser:
        """Add a named group after the existing ones."""
        if not isinstance(group, ArgumentGroup):
            raise DeclarationError(f"Expected an ArgumentGroup, got {group!r}")
        self.groups.append(group)
        return self

    def add_constraint(self, *constraints: BaseArgument) -> ArgumentParser:
        """Add constraints validated after every group."""
        for constraint in constraints:
            self.constraints.add(constraint)
        return self

    def get_argument(self, dest: str) -> Argument | None:
        """Return the first declared argument with the given destination name."""
        for group in self.groups:
            for argument in group.arguments:
                if argument.dest == dest:
                    return argument
        return None

    def __getitem__(self, ident: str) -> Argument:
        for group in self.groups:
            for argument in group.arguments:
                if argument.matches_flag(ident) or argument.matches_name(ident):
                    return argument
        raise KeyError(ident)

    def parse_argv(self, argv: Sequence[str]) -> dict[str, Any]:
        """Parse a process argument vector whose first element is the program name."""
        if argv and not self.program:
            self.program = argv[0]
        return self.parse(argv[1:])

    def parse(self, tokens: Sequence[str]) -> dict[str, Any]:
        """
        Parse `tokens`, validate every group and constraint, and return the values.

        Raises:
            CommandLineError: On the first unknown token, bad value or violation.
        """
        tokens = list(tokens)
        logger.debug("Parsing %d tokens: %s", len(tokens), tokens)
        positional_only = False
        i = 0
        while i < len(tokens):
            token = classify_token(tokens[i], self.markers, positional_only)
            logger.debug("Token %r classified as %s", token.text, token.kind.value)
            if token.kind is TokenKind.STOP:
                positional_only = True
            elif token.kind is TokenKind.NAMED:
                i = self._handle_named(token, tokens, i)
            elif token.kind is TokenKind.FLAGS:
                i = self._handle_flags(token, tokens, i)
            else:
                self._handle_positional(token)
            i += 1

        self.validate()
        return self.values()

    def _next_value(self, argument: Argument, tokens: list[str], i: int) -> tuple[str, int]:
        if i + 1 >= len(tokens):
            raise MissingValueError(argument)
        return tokens[i + 1], i + 1

    def _handle_named(self, token: Token, tokens: list[str], i: int) -> int:
        argument = self.matcher.find_name(token.ident)
        if argument is None:
            raise UnknownArgumentError(name=token.ident)

        if argument.accepts_value:
            if token.value is not None:
                argument.set(token.value)
            else:
                value, i = self._next_value(argument, tokens, i)
                argument.set(value)
        elif token.value is not None:
            raise NoValueError(argument)
        else:
            argument.set()
        return i

    def _handle_flags(self, token: Token, tokens: list[str], i: int) -> int:
        flags = token.ident
        for index, flag in enumerate(flags):
            argument = self.matcher.find_flag(flag)
            if argument is None:
                raise UnknownArgumentError(flag=flag)
            if not argument.accepts_value:
                argument.set()
                continue

            rest = flags[index + 1 :]
            if rest:
                argument.set(rest)
            else:
                value, i = self._next_value(argument, tokens, i)
                argument.set(value)
            break
        return i

    def _handle_positional(self, token: Token) -> None:
        argument = self.matcher.find_positional()
        if argument is None:
            raise UnknownArgumentError()
        if argument.accepts_value:
            argument.set(token.text)
        else:
            argument.set()

    def validate(self) -> None:
        """Validate every group in declaration order, then the constraints."""
        logger.debug(
            "Validating %d groups and %d constraints",
            len(self.groups),
            len(self.constraints),
        )
        for group in self.groups:
            group.validate()
        self.constraints.validate()

    def values(self) -> dict[str, Any]:
        """Return the current value of every declared argument by `dest`."""
        result: dict[str, Any] = {}
        for group in self.groups:
            for argument in group.arguments:
                result.setdefault(argument.dest, argument.value)
        return result

    def get_usage(self) -> str:
        """Render the usage line: the root group, then every non-empty group."""
        parts = [self.program] if self.program else []
        parts.extend(group.usage for group in self.groups)
        return "Usage: " + " ".join(part for part in parts if part)

    def _ident_width(self) -> int:
        idents = [argument.ident for group in self.groups for argument in group.arguments]
        return max((len(ident) for ident in idents), default=0) + 2

    def help(self) -> str:
        """
        Return the help text.

        Returns:
            str: The usage line, then each non-empty group with its arguments
            listed as `ident` and description, aligned on the longest ident.
        """
        width = self._ident_width()
        help_text = self.get_usage() + "\n"
        for group in self.groups:
            if len(group) == 0:
                continue
            help_text += f"\n{group.name}:\n"
            for argument in group.arguments:
                help_text += f"  {argument.ident:<{width}}{argument.help}".rstrip() + "\n"
        return help_text

    def render_help(self) -> None:
        """
        Print formatted help text using Rich output.

        Includes usage, description, argument groups, and optional epilog.
        """
        width = self._ident_width()
        self.console.print(f"[bold]{escape(self.get_usage())}[/bold]\n")

        if self.help_text:
            self.console.print(escape(self.help_text) + "\n")

        for group in self.groups:
            if len(group) == 0:
                continue
            self.console.print(f"[bold]{escape(group.name)}:[/bold]")
            for argument in group.arguments:
                ident = escape(f"{argument.ident:<{width}}")
                self.console.print(f"  {ident}{escape(argument.help)}")

        if self.help_epilog:
            self.console.print("\n" + escape(self.help_epilog), style="dim")

    def __str__(self) -> str:
        """Return a human-readable summary of the parser state."""
        arguments = sum(len(group.arguments) for group in self.groups)
        return (
            f"ArgumentParser(groups={len(self.groups)}, arguments={arguments}, "
            f"constraints={len(self.constraints)})"
        )

    def __repr__(self) -> str:
        return str(self)
