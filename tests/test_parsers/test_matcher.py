import pytest
from pydantic import ValidationError

from tapper.parser import (
    Argument,
    ArgumentGroup,
    ConstraintKind,
    LexicalConfig,
    TokenKind,
    TokenMatcher,
    ValueArgument,
    classify_token,
)


@pytest.mark.parametrize(
    "token, kind, ident, value",
    [
        ("--", TokenKind.STOP, "", None),
        ("--name", TokenKind.NAMED, "name", None),
        ("--name=value", TokenKind.NAMED, "name", "value"),
        ("--name=", TokenKind.NAMED, "name", ""),
        ("--name=a=b", TokenKind.NAMED, "name", "a=b"),
        ("--=name", TokenKind.NAMED, "=name", None),
        ("-abc", TokenKind.FLAGS, "abc", None),
        ("-ovalue", TokenKind.FLAGS, "ovalue", None),
        ("-", TokenKind.POSITIONAL, "", None),
        ("value", TokenKind.POSITIONAL, "", None),
    ],
)
def test_classify_token(token, kind, ident, value):
    result = classify_token(token)
    assert result.kind is kind
    assert result.text == token
    assert result.ident == ident
    assert result.value == value


def test_classify_token_positional_only():
    assert classify_token("-a", positional_only=True).kind is TokenKind.POSITIONAL
    assert classify_token("--name", positional_only=True).kind is TokenKind.POSITIONAL
    assert classify_token("--", positional_only=True).kind is TokenKind.STOP


def test_classify_token_custom_markers():
    markers = LexicalConfig(
        flag_prefix="/", name_prefix="//", name_delimiter=":", stop_marker=";;"
    )
    named = classify_token("//size:10", markers)
    assert named.kind is TokenKind.NAMED
    assert (named.ident, named.value) == ("size", "10")
    assert classify_token("/ab", markers).kind is TokenKind.FLAGS
    assert classify_token(";;", markers).kind is TokenKind.STOP
    assert classify_token("--x", markers).kind is TokenKind.POSITIONAL


def test_lexical_config_validation():
    with pytest.raises(ValidationError):
        LexicalConfig(flag_prefix="")
    with pytest.raises(ValidationError):
        LexicalConfig(name_delimiter="==")
    markers = LexicalConfig()
    with pytest.raises(ValidationError):
        markers.flag_prefix = "+"


def test_matcher_prefers_argument_that_can_accept():
    first = Argument("a", help="first")
    second = Argument("a", help="second")
    matcher = TokenMatcher([ArgumentGroup("One", first), ArgumentGroup("Two", second)])

    assert matcher.find_flag("a").help == "first"
    first.set()
    assert matcher.find_flag("a").help == "second"
    second.set()
    assert matcher.find_flag("a").help == "second"


def test_matcher_lookups():
    verbose = Argument("v", "verbose")
    source = ValueArgument(value_name="SOURCE")
    matcher = TokenMatcher([ArgumentGroup("Arguments", verbose, source)])

    assert matcher.find_name("verbose").state is verbose.state
    assert matcher.find_flag("v").state is verbose.state
    assert matcher.find_positional().state is source.state
    assert matcher.find_name("v") is None
    assert matcher.find_flag("x") is None


def test_matcher_without_positional():
    matcher = TokenMatcher([ArgumentGroup("Arguments", Argument("a"))])
    assert matcher.find_positional() is None


@pytest.mark.parametrize(
    "alias, kind",
    [
        ("xor", ConstraintKind.ONE),
        ("exactly-one-of", ConstraintKind.ONE),
        ("any_of", ConstraintKind.ANY),
        ("AND", ConstraintKind.ALL),
        ("implies", ConstraintKind.IMPLIES),
        ("none_of", ConstraintKind.NONE),
    ],
)
def test_constraint_kind_aliases(alias, kind):
    assert ConstraintKind(alias) is kind


def test_constraint_kind_invalid():
    with pytest.raises(ValueError, match="Must be one of"):
        ConstraintKind("sometimes")
    assert str(ConstraintKind.ALL) == "all"
    assert ConstraintKind.ONE.join_token == " | "
    assert ConstraintKind.ALL.join_token == " "
