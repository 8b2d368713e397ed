# Tapper Argument Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Defines `BaseArgument`, the common ground of arguments and constraints.

Both a single `Argument` and a `ConstraintNode` can be required, can report
whether they are set, validate themselves after parsing, render a usage string,
and be cloned into another constraint tree. They also share the operator
syntax used to build constraint trees declaratively:

    a ^ b     exactly one of a, b
    a | b     any of a, b (required ones must be set)
    a & b     all of a, b
    a >> b    a implies b
    ~a        none of a
    +a / -a   mark a required / optional (returns a itself)
"""
from __future__ import annotations

from typing import Any

from tapper.parser.parser_types import ConstraintKind


class BaseArgument:
    """Base class for arguments and argument constraints."""

    required: bool = False

    @property
    def count(self) -> int:
        raise NotImplementedError

    @property
    def usage(self) -> str:
        raise NotImplementedError

    def is_set(self) -> bool:
        return self.count > 0

    def __bool__(self) -> bool:
        return self.is_set()

    def validate(self) -> None:
        """Raise a `CommandLineError` if this argument is not satisfied."""
        raise NotImplementedError

    def clone(self) -> BaseArgument:
        raise NotImplementedError

    def find_all_arguments(self) -> list[Any]:
        """Return every leaf `Argument` contained in this argument."""
        raise NotImplementedError

    def set_required(self, required: bool = True) -> BaseArgument:
        self.required = required
        return self

    def __pos__(self) -> BaseArgument:
        return self.set_required(True)

    def __neg__(self) -> BaseArgument:
        return self.set_required(False)

    def __xor__(self, other: BaseArgument) -> BaseArgument:
        return _combine(ConstraintKind.ONE, self, other)

    def __or__(self, other: BaseArgument) -> BaseArgument:
        return _combine(ConstraintKind.ANY, self, other)

    def __and__(self, other: BaseArgument) -> BaseArgument:
        return _combine(ConstraintKind.ALL, self, other)

    def __rshift__(self, other: BaseArgument) -> BaseArgument:
        return _combine(ConstraintKind.IMPLIES, self, other)

    def __invert__(self) -> BaseArgument:
        from tapper.parser.constraint import constraint_for

        return constraint_for(ConstraintKind.NONE, self)


def _combine(kind: ConstraintKind, left: BaseArgument, right: Any) -> BaseArgument:
    from tapper.parser.constraint import ConstraintNode, constraint_for

    if not isinstance(right, BaseArgument):
        return NotImplemented
    if isinstance(left, ConstraintNode) and left.kind is kind:
        node = left.clone()
        node.add(right)
        return node
    return constraint_for(kind, left, right)
