# Tapper Argument Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Token classification and argument lookup for `ArgumentParser`.

`classify_token()` decides what a raw command line token is, in this order:

1. The stop marker itself (`--`).
2. A named token (`--name` or `--name=value`), unless option parsing stopped.
3. A flag cluster (`-abc`, `-ovalue`), unless option parsing stopped.
4. A positional token (anything else, including a lone `-`).

`TokenMatcher` resolves a flag, a name, or a positional slot against an
ordered list of `ArgumentGroup`s. Groups and their members are scanned in
declaration order and the first match that can still accept an occurrence
wins. When every match is exhausted the last one is returned anyway, so that
setting it reports an over-count instead of an unknown argument.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Sequence

from tapper.parser.argument import Argument
from tapper.parser.group import ArgumentGroup
from tapper.parser.parser_types import DEFAULT_MARKERS, LexicalConfig


class TokenKind(Enum):
    """Classification of a single command line token."""

    STOP = "stop"
    NAMED = "named"
    FLAGS = "flags"
    POSITIONAL = "positional"


@dataclass(frozen=True)
class Token:
    """
    A classified command line token.

    Attributes:
        kind (TokenKind): What the token is.
        text (str): The raw token.
        ident (str): The name for named tokens, the flag characters for clusters.
        value (str | None): The value attached with the name delimiter, if any.
    """

    kind: TokenKind
    text: str
    ident: str = ""
    value: str | None = None


def classify_token(
    token: str, markers: LexicalConfig = DEFAULT_MARKERS, positional_only: bool = False
) -> Token:
    """Classify `token` using `markers`."""
    if token == markers.stop_marker:
        return Token(TokenKind.STOP, token)
    if positional_only:
        return Token(TokenKind.POSITIONAL, token)

    name_prefix = markers.name_prefix
    if token.startswith(name_prefix) and len(token) > len(name_prefix):
        body = token[len(name_prefix) :]
        # a delimiter at the start of the name is part of the name
        found = body.find(markers.name_delimiter, 1)
        if found == -1:
            return Token(TokenKind.NAMED, token, ident=body)
        return Token(TokenKind.NAMED, token, ident=body[:found], value=body[found + 1 :])

    flag_prefix = markers.flag_prefix
    if token.startswith(flag_prefix) and len(token) > len(flag_prefix):
        return Token(TokenKind.FLAGS, token, ident=token[len(flag_prefix) :])

    return Token(TokenKind.POSITIONAL, token)


class TokenMatcher:
    """Resolves identifiers to declared arguments across groups."""

    def __init__(self, groups: Sequence[ArgumentGroup]) -> None:
        self.groups = groups

    def find_flag(self, flag: str) -> Argument | None:
        return self._find(lambda argument: argument.matches_flag(flag))

    def find_name(self, name: str) -> Argument | None:
        return self._find(lambda argument: argument.matches_name(name))

    def find_positional(self) -> Argument | None:
        return self._find(lambda argument: argument.matches_positional())

    def _find(self, predicate: Callable[[Argument], bool]) -> Argument | None:
        match: Argument | None = None
        for group in self.groups:
            for argument in group.arguments:
                if predicate(argument):
                    match = argument
                    if argument.can_accept():
                        return argument
        return match
