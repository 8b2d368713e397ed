import pytest

from tapper import (
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
from tapper.parser import Argument


@pytest.mark.parametrize(
    "error_type",
    [CountMismatchError, InvalidValueError, MissingValueError, NoValueError],
)
def test_argument_errors_are_command_line_errors(error_type):
    assert issubclass(error_type, ArgumentError)
    assert issubclass(error_type, CommandLineError)
    assert issubclass(error_type, TapperError)


def test_error_families():
    assert issubclass(UnknownArgumentError, CommandLineError)
    assert issubclass(ConstraintViolationError, CommandLineError)
    assert issubclass(DeclarationError, TapperError)
    assert not issubclass(DeclarationError, CommandLineError)


def test_argument_error_message():
    error = ArgumentError(Argument("a", "alpha"), "is broken")
    assert str(error) == "Argument -a is broken"
    assert str(ArgumentError(Argument("alpha"))) == "Argument --alpha"


def test_count_mismatch_messages():
    arg = Argument("a")
    assert str(CountMismatchError(arg, 0, 1)) == "Argument -a is required"
    assert str(CountMismatchError(arg, 1, 3)) == (
        "Argument -a is required to occur at least 3 times"
    )
    assert str(CountMismatchError(arg, 4, 3)) == "Argument -a can occur at most 3 times"
    assert str(CountMismatchError(arg, 2, 1)) == "Argument -a can only be set once"


def test_constraint_violation_message():
    a, b = Argument("a"), Argument("b")
    error = ConstraintViolationError("Pick one of", [a, b])
    assert str(error) == "Pick one of -a -b"
    assert error.arguments == [a, b]
    assert str(ConstraintViolationError("Nothing to report", [])) == "Nothing to report"
