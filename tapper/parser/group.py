# Tapper Argument Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Defines `ArgumentGroup`, a named collection of arguments.

Groups serve two purposes: they split the help listing into titled sections,
and the parser scans them in declaration order to resolve tokens. A group is
an optional `AnyRequiredOf` node, so its usage string brackets optional
arguments (`-a [ -b ]`). Validation delegates to every member, set or not, so
an optional constraint still checks its required children.

The flattened member list is deduplicated by occurrence state, so adding the
same argument twice, directly or through a constraint, lists it once.
"""
from __future__ import annotations

from tapper.exceptions import ConstraintViolationError
from tapper.parser.argument import Argument
from tapper.parser.base import BaseArgument
from tapper.parser.constraint import AnyRequiredOf


class ArgumentGroup(AnyRequiredOf):
    """
    Named, ordered, deduplicating collection of arguments.

    Attributes:
        name (str): Title shown in the help listing.
    """

    def __init__(self, name: str, *arguments: BaseArgument) -> None:
        self.name: str = name
        self._arguments: list[Argument] | None = None
        super().__init__(*arguments, required=False)

    def validate(self) -> None:
        """Validate every member, then report required members left unset."""
        self._validate_all_children()
        missing = [
            child for child in self.children if child.required and not child.is_set()
        ]
        if missing:
            raise ConstraintViolationError(
                "The following required arguments are missing:", missing
            )

    def add(self, child: BaseArgument) -> ArgumentGroup:
        super().add(child)
        self._arguments = None
        return self

    @property
    def arguments(self) -> list[Argument]:
        """Flattened, deduplicated member arguments in declaration order."""
        if self._arguments is None:
            seen: set[int] = set()
            members: list[Argument] = []
            for argument in self.find_all_arguments():
                key = id(argument.state)
                if key in seen:
                    continue
                seen.add(key)
                members.append(argument)
            self._arguments = members
        return self._arguments

    def clone(self) -> ArgumentGroup:
        clone = super().clone()
        clone._arguments = None
        return clone

    def __repr__(self) -> str:
        return f"ArgumentGroup({self.name!r}, arguments={len(self.arguments)})"
