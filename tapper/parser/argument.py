# Tapper Argument Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Defines the argument kinds a program can declare.

Each argument describes one command line input: its aliases, how often it may
occur, whether it is required, and whether it takes a value. Occurrences are
counted in an `ArgumentState` shared by every clone of the argument, so adding
the same argument to a group and to several constraint trees still yields one
logical counter.

Kinds:
- `Argument`: A plain flag. Setting it only counts the occurrence.
- `ValueArgument`: Takes a value, converted by an injected parse function.
  Single-valued arguments overwrite their value, `multi` ones append to a list.
- `ConstArgument`: A plain flag that stores a fixed constant once set.

Identifiers are given positionally: one-character identifiers are flags
(`-a`), longer ones are names (`--alpha`). An argument declared without any
identifier is positional.

Example:
    verbose = Argument("v", "verbose", help="Print more output")
    output = ValueArgument("o", "output", help="Output file", value_name="FILE")
    inputs = ValueArgument(help="Input files", value_name="INPUT", multi=True)
"""
from __future__ import annotations

import copy
from typing import Any, Callable

from tapper.exceptions import (
    CountMismatchError,
    DeclarationError,
    InvalidValueError,
)
from tapper.parser.base import BaseArgument
from tapper.parser.parser_types import DEFAULT_MARKERS, ArgumentState, LexicalConfig
from tapper.parser.utils import ParseFunc, make_parse_func


class Argument(BaseArgument):
    """
    Represents a plain command line flag.

    Attributes:
        flags (list[str]): Single-character aliases, first one shown in usage.
        names (list[str]): Multi-character aliases.
        positional (bool): True if declared without any alias.
        help (str): Description shown in the help listing.
        required (bool): True if the argument must occur at least once.
        markers (LexicalConfig): Markers used to render usage strings.
    """

    accepts_value: bool = False

    def __init__(
        self,
        *idents: str,
        help: str = "",
        required: bool = False,
        min_count: int = 1,
        max_count: int = 1,
        dest: str | None = None,
        check: Callable[..., Any] | None = None,
        markers: LexicalConfig = DEFAULT_MARKERS,
    ) -> None:
        self.flags: list[str] = []
        self.names: list[str] = []
        self.positional: bool = not idents
        self.help: str = help
        self.required: bool = required
        self.markers: LexicalConfig = markers
        self._dest: str | None = dest
        self._check: Callable[..., Any] | None = check
        self._min_count: int = 1
        self._max_count: int = 0
        self.max_count = max_count
        self.min_count = min_count
        self._state: ArgumentState = ArgumentState(value=self._initial_value())
        self.alias(*idents)

    def _initial_value(self) -> Any:
        return None

    def alias(self, *idents: str) -> Argument:
        """Add flag (one character) or name (longer) aliases."""
        for ident in idents:
            if not isinstance(ident, str) or not ident:
                raise DeclarationError(f"Alias {ident!r} must be a non-empty string")
            if len(ident) == 1:
                self.flags.append(ident)
            else:
                self.names.append(ident)
        return self

    def check(self, check: Callable[..., Any] | None) -> Argument:
        """Install a callback run after every successful `set()`."""
        self._check = check
        return self

    @property
    def dest(self) -> str:
        if self._dest:
            return self._dest
        return self._default_dest()

    def _default_dest(self) -> str:
        if self.names:
            return self.names[0].replace("-", "_")
        if self.flags:
            return self.flags[0]
        return "argument"

    @property
    def state(self) -> ArgumentState:
        return self._state

    # Lookup

    def matches_flag(self, flag: str) -> bool:
        return flag in self.flags

    def matches_name(self, name: str) -> bool:
        return name in self.names

    def matches_positional(self) -> bool:
        return self.positional

    def matches(self, ident: str | None = None) -> bool:
        """Match a flag, a name, or (with no ident) a positional slot."""
        if ident is None:
            return self.matches_positional()
        if len(ident) == 1:
            return self.matches_flag(ident)
        return self.matches_name(ident)

    def find_all_arguments(self) -> list[Argument]:
        return [self]

    # Counts

    @property
    def min_count(self) -> int:
        return self._min_count

    @min_count.setter
    def min_count(self, value: int) -> None:
        if value < 1:
            raise DeclarationError("Cannot set a minimum occurrence count below 1")
        self._min_count = value
        if self._max_count != 0 and value > self._max_count:
            self._max_count = value

    @property
    def max_count(self) -> int:
        return self._max_count

    @max_count.setter
    def max_count(self, value: int) -> None:
        if value < 0:
            raise DeclarationError("Cannot set a negative maximum occurrence count")
        if value != 0 and value < self._min_count:
            raise DeclarationError(
                f"Cannot set a maximum occurrence count below the minimum of {self._min_count}"
            )
        self._max_count = value

    def many(self, many: bool = True) -> Argument:
        """Allow unbounded occurrences, or restore a finite maximum."""
        if many:
            self._max_count = 0
        else:
            self._max_count = max(self._max_count, self._min_count)
        return self

    @property
    def count(self) -> int:
        return self._state.count

    def can_accept(self) -> bool:
        return self._max_count == 0 or self._state.count < self._max_count

    # Values

    @property
    def value(self) -> Any:
        return self.is_set()

    def set(self, value: str | None = None) -> None:
        """Record one occurrence of this argument."""
        if value is not None:
            raise DeclarationError(f"Argument {self.usage} does not take a value")
        self._state.increment()
        self._run_check()

    def _run_check(self, *values: Any) -> None:
        if self._check is not None:
            self._check(self, *values)

    # Validation

    def validate(self) -> None:
        count = self._state.count
        if count == 0:
            if self.required:
                raise CountMismatchError(self, count, 1)
            return
        if count < self._min_count:
            raise CountMismatchError(self, count, self._min_count)
        if self._max_count != 0 and count > self._max_count:
            raise CountMismatchError(self, count, self._max_count)

    # Rendering

    @property
    def usage(self) -> str:
        if self.flags:
            return f"{self.markers.flag_prefix}{self.flags[0]}"
        if self.names:
            return f"{self.markers.name_prefix}{self.names[0]}"
        return self.dest

    @property
    def ident(self) -> str:
        """Identifier shown in the first column of the help listing."""
        parts = []
        if self.flags:
            parts.append(f"{self.markers.flag_prefix}{self.flags[0]}")
        if self.names:
            parts.append(f"{self.markers.name_prefix}{self.names[0]}")
        return ", ".join(parts) if parts else self.usage

    def clone(self) -> Argument:
        """Copy this argument, keeping the occurrence state shared."""
        clone = copy.copy(self)
        clone.flags = list(self.flags)
        clone.names = list(self.names)
        return clone

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.ident!r}, count={self.count})"


class ValueArgument(Argument):
    """
    Represents an argument that takes a value.

    Attributes:
        type (Any): Target type used to build the default parse function.
        parse_func (Callable[[str], Any]): Converts raw strings to values.
        default (Any): Value held before the argument is set.
        multi (bool): Append each value to a list instead of overwriting.
        value_name (str): Placeholder shown in usage strings.
    """

    accepts_value: bool = True

    def __init__(
        self,
        *idents: str,
        help: str = "",
        type: Any = str,
        parse: ParseFunc | None = None,
        default: Any = None,
        multi: bool = False,
        value_name: str = "value",
        required: bool = False,
        min_count: int = 1,
        max_count: int | None = None,
        dest: str | None = None,
        check: Callable[..., Any] | None = None,
        markers: LexicalConfig = DEFAULT_MARKERS,
    ) -> None:
        self.type = type
        self.parse_func: ParseFunc = parse or make_parse_func(type)
        self.default = default
        self.multi = multi
        self.value_name = value_name
        if max_count is None:
            max_count = 0 if multi else 1
        super().__init__(
            *idents,
            help=help,
            required=required,
            min_count=min_count,
            max_count=max_count,
            dest=dest,
            check=check,
            markers=markers,
        )

    def _initial_value(self) -> Any:
        if self.multi:
            return list(self.default or [])
        return self.default

    def _default_dest(self) -> str:
        if self.names or self.flags:
            return super()._default_dest()
        return self.value_name.lower().replace("-", "_")

    @property
    def value(self) -> Any:
        return self._state.value

    def set(self, value: str | None = None) -> None:
        """Convert `value`, store it and record one occurrence."""
        if value is None:
            raise DeclarationError(f"Argument {self.usage} must be set with a value")
        try:
            converted = self.parse_func(value)
        except (ValueError, TypeError) as error:
            raise InvalidValueError(self, value) from error
        self._run_check(converted)
        if self.multi:
            self._state.value.append(converted)
        else:
            self._state.value = converted
        self._state.increment()

    @property
    def usage(self) -> str:
        if self.positional:
            if self.max_count != 1:
                return f"{self.value_name}..."
            return self.value_name
        return f"{super().usage} {self.value_name}"

    @property
    def ident(self) -> str:
        if self.positional:
            return self.value_name
        return super().ident


class ConstArgument(Argument):
    """
    Represents a flag that stores a constant once set.

    Attributes:
        const (Any): Value stored when the flag occurs.
        default (Any): Value held before the flag occurs.
    """

    def __init__(self, *idents: str, const: Any, default: Any = None, **kwargs: Any) -> None:
        self.const = const
        self.default = default
        super().__init__(*idents, **kwargs)

    def _initial_value(self) -> Any:
        return self.default

    @property
    def value(self) -> Any:
        return self._state.value

    def set(self, value: str | None = None) -> None:
        if value is not None:
            raise DeclarationError(f"Argument {self.usage} does not take a value")
        self._state.value = self.const
        self._state.increment()
        self._run_check()
