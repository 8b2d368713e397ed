# Tapper Argument Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Implements the constraint-satisfaction engine over declared arguments.

A `ConstraintNode` combines an ordered list of children, each an `Argument`
or another `ConstraintNode`, and checks a structural rule about which of them
were set once parsing is done. Nesting nodes builds a tree:

    NoneOf          no child may be set
    ExactlyOneOf    exactly one child must be set (zero too, when optional)
    AnyRequiredOf   every required child must be set; the rest are free
    AllOf           all children must be set, or none when the node is optional
    Implies         for each adjacent pair (A, B), A set means B must be set

Children are cloned on `add()`. Cloned arguments keep sharing their occurrence
state with the declared argument, so setting an argument once satisfies every tree
that references it.

Each node also renders a usage string such as `-a [ -b ] ( -c | -d )`. It is
built incrementally as children are added and never recomputed, so it always
follows insertion order and reflects each child's `required` flag at the time
it was added.

Example:
    mode = ExactlyOneOf(+fast, slow)
    parser.add_constraint(mode)
    parser.add_constraint(output >> fmt)
"""
from __future__ import annotations

import copy
from typing import Iterator

from tapper.exceptions import ConstraintViolationError, DeclarationError
from tapper.parser.argument import Argument
from tapper.parser.base import BaseArgument
from tapper.parser.parser_types import ConstraintKind


class ConstraintNode(BaseArgument):
    """
    Base class for a combinator over arguments and nested constraints.

    Subclasses fix `kind` and implement `validate()`.

    Attributes:
        children (list[BaseArgument]): Owned clones, in insertion order.
        required (bool): Whether zero satisfied children is an error.
    """

    kind: ConstraintKind
    default_required: bool = False

    def __init__(self, *children: BaseArgument, required: bool | None = None) -> None:
        self.children: list[BaseArgument] = []
        self.required = self.default_required if required is None else required
        self._usage: str = ""
        for child in children:
            self.add(child)

    def add(self, child: BaseArgument) -> ConstraintNode:
        """Clone `child` into this node and extend the usage string."""
        if not isinstance(child, BaseArgument):
            raise DeclarationError(
                f"Cannot add {child!r} to a constraint: expected an argument or constraint"
            )
        clone = child.clone()
        if self.children:
            self._usage += self.kind.join_token
        self._usage += self._child_usage(clone)
        self.children.append(clone)
        return self

    def __iadd__(self, child: BaseArgument) -> ConstraintNode:
        return self.add(child)

    def _child_usage(self, child: BaseArgument) -> str:
        usage = child.usage
        if isinstance(child, ConstraintNode):
            if not child.children:
                return usage
            differs = self.kind is ConstraintKind.ANY and child.kind is not ConstraintKind.ANY
            if differs and not child.required:
                return f"[ {usage} ]"
            if child.kind is ConstraintKind.NONE:
                return usage
            if self.kind is ConstraintKind.ONE or differs or child.kind is ConstraintKind.ONE:
                return f"( {usage} )"
            return usage
        if self.kind is ConstraintKind.ANY and not child.required:
            return f"[ {usage} ]"
        return usage

    @property
    def usage(self) -> str:
        return self._usage

    @property
    def count(self) -> int:
        """Number of children currently set."""
        return sum(1 for child in self.children if child.is_set())

    def is_set(self) -> bool:
        return self.count > 0

    def find_all_arguments(self) -> list[Argument]:
        collected: list[Argument] = []
        for child in self.children:
            collected.extend(child.find_all_arguments())
        return collected

    def clone(self) -> ConstraintNode:
        clone = copy.copy(self)
        clone.children = [child.clone() for child in self.children]
        return clone

    def _validate_relevant_children(self) -> None:
        for child in self.children:
            if child.count > 0 or child.required:
                child.validate()

    def _validate_all_children(self) -> None:
        for child in self.children:
            child.validate()

    def __len__(self) -> int:
        return len(self.children)

    def __iter__(self) -> Iterator[BaseArgument]:
        return iter(self.children)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.usage!r}, required={self.required})"


class NoneOf(ConstraintNode):
    """No child may be set."""

    kind = ConstraintKind.NONE

    @property
    def usage(self) -> str:
        if not self.children:
            return ""
        if len(self.children) > 1:
            return f"!( {self._usage} )"
        return f"!{self._usage}"

    def validate(self) -> None:
        self._validate_all_children()
        failed = [child for child in self.children if child.is_set()]
        if len(failed) == 1:
            raise ConstraintViolationError("Cannot set the argument", failed)
        if failed:
            raise ConstraintViolationError(
                "Not allowed to set the following arguments:", failed
            )


class ExactlyOneOf(ConstraintNode):
    """Exactly one child must be set. When not required, none is accepted too."""

    kind = ConstraintKind.ONE
    default_required = True

    def is_set(self) -> bool:
        return self.count == 1

    def validate(self) -> None:
        self._validate_all_children()
        counter = self.count
        if counter > 1 or (counter == 0 and self.required):
            raise ConstraintViolationError(
                "Must set exactly one argument from", self.children
            )


class AnyRequiredOf(ConstraintNode):
    """Every required child must be set; when the node is required, at least one child."""

    kind = ConstraintKind.ANY

    def validate(self) -> None:
        self._validate_relevant_children()
        missing = [
            child for child in self.children if child.required and not child.is_set()
        ]
        if missing:
            raise ConstraintViolationError(
                "The following required arguments are missing:", missing
            )
        if self.required and self.count == 0 and self.children:
            raise ConstraintViolationError(
                "At least one of the following arguments must be set:", self.children
            )


class AllOf(ConstraintNode):
    """All children must be set, or none of them when the node is not required."""

    kind = ConstraintKind.ALL

    def is_set(self) -> bool:
        return bool(self.children) and self.count == len(self.children)

    def validate(self) -> None:
        self._validate_relevant_children()
        missing = [child for child in self.children if not child.is_set()]
        if missing and (len(missing) < len(self.children) or self.required):
            raise ConstraintViolationError("The following arguments are missing:", missing)


class Implies(ConstraintNode):
    """Each child, when set, requires the child that follows it."""

    kind = ConstraintKind.IMPLIES

    def validate(self) -> None:
        self._validate_relevant_children()
        for antecedent, consequent in zip(self.children, self.children[1:]):
            if antecedent.is_set() and not consequent.is_set():
                raise ConstraintViolationError(
                    "Unmet implication:",
                    [antecedent, consequent],
                    message=f"Argument {antecedent.usage} requires {consequent.usage}",
                )


_NODE_TYPES: dict[ConstraintKind, type[ConstraintNode]] = {
    ConstraintKind.NONE: NoneOf,
    ConstraintKind.ONE: ExactlyOneOf,
    ConstraintKind.ANY: AnyRequiredOf,
    ConstraintKind.ALL: AllOf,
    ConstraintKind.IMPLIES: Implies,
}


def constraint_for(
    kind: ConstraintKind | str, *children: BaseArgument, required: bool | None = None
) -> ConstraintNode:
    """Build the constraint node class matching `kind` over `children`."""
    if not isinstance(kind, ConstraintKind):
        try:
            kind = ConstraintKind(kind)
        except ValueError as error:
            raise DeclarationError(str(error)) from error
    return _NODE_TYPES[kind](*children, required=required)
