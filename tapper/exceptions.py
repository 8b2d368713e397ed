# Tapper Argument Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Defines all custom exception classes used by Tapper.

Errors fall in two families: declaration errors, raised while a program builds
its arguments and constraints, and command line errors, raised by
`ArgumentParser.parse()` when the tokens it was given do not fit the
declarations. Every command line error is fatal to the current parse call.

All exceptions inherit from `TapperError`, the base exception for the package.

Exception Hierarchy:
- TapperError
    ├── DeclarationError
    └── CommandLineError
        ├── UnknownArgumentError
        ├── ArgumentError
        │   ├── CountMismatchError
        │   ├── InvalidValueError
        │   ├── MissingValueError
        │   └── NoValueError
        └── ConstraintViolationError

Argument errors always name the offending argument through its usage string
(for example `-o value` or `--verbose`), so callers can print the message as-is
and optionally follow it with `ArgumentParser.help()`.
"""
from __future__ import annotations

from typing import TYPE_CHECKING, Any, Sequence

if TYPE_CHECKING:
    from tapper.parser.argument import Argument


class TapperError(Exception):
    """Base exception for Tapper."""


class DeclarationError(TapperError):
    """Exception raised when arguments, constraints or markers are declared incorrectly."""


class CommandLineError(TapperError):
    """Exception raised when the command line does not match the declarations."""


class UnknownArgumentError(CommandLineError):
    """Exception raised when a flag, name or positional token matches no argument."""

    def __init__(self, flag: str | None = None, name: str | None = None) -> None:
        self.flag = flag
        self.name = name
        if flag is not None:
            message = f"The flag argument {flag} is unknown"
        elif name is not None:
            message = f"The named argument {name} is unknown"
        else:
            message = "No positional arguments are supported"
        super().__init__(message)


class ArgumentError(CommandLineError):
    """
    Exception raised when an error occurs verifying a single argument.

    Attributes:
        argument (Argument): The argument that triggered the error.
    """

    def __init__(self, argument: Argument, reason: str = "") -> None:
        self.argument = argument
        message = f"Argument {argument.usage}"
        if reason:
            message = f"{message} {reason}"
        super().__init__(message)


class CountMismatchError(ArgumentError):
    """
    Exception raised when an argument occurred an incorrect number of times.

    If `expected` is higher than `count` it is a minimum, otherwise a maximum.
    """

    def __init__(self, argument: Argument, count: int, expected: int) -> None:
        self.count = count
        self.expected = expected
        if count < expected:
            if expected > 1:
                reason = f"is required to occur at least {expected} times"
            else:
                reason = "is required"
        elif expected > 1:
            reason = f"can occur at most {expected} times"
        else:
            reason = "can only be set once"
        super().__init__(argument, reason)


class InvalidValueError(ArgumentError):
    """Exception raised when a value cannot be converted for an argument."""

    def __init__(self, argument: Argument, value: Any) -> None:
        self.value = value
        super().__init__(argument, f"does not accept the value {value}")


class MissingValueError(ArgumentError):
    """Exception raised when the command line ends before an argument got its value."""

    def __init__(self, argument: Argument) -> None:
        super().__init__(argument, "requires a value")


class NoValueError(ArgumentError):
    """Exception raised when a value is attached to an argument that takes none."""

    def __init__(self, argument: Argument) -> None:
        super().__init__(argument, "does not accept a value")


class ConstraintViolationError(CommandLineError):
    """
    Exception raised when a constraint over several arguments is not satisfied.

    The message is the reason followed by the usage of every argument involved,
    unless an explicit message is given.

    Attributes:
        reason (str): Why the constraint failed.
        arguments (list): The arguments or nested constraints involved.
    """

    def __init__(
        self, reason: str, arguments: Sequence[Any], message: str | None = None
    ) -> None:
        self.reason = reason
        self.arguments = list(arguments)
        if message is None:
            usages = " ".join(argument.usage for argument in self.arguments)
            message = f"{reason} {usages}" if usages else reason
        super().__init__(message)
