from datetime import datetime
from pathlib import Path

import pytest

from tapper.config import build_parser, loads
from tapper.exceptions import ConstraintViolationError, DeclarationError
from tapper.parser import ExactlyOneOf, Implies, ValueArgument

YAML_DEFINITION = """
program: convert
help_text: Convert a file.
arguments:
  - kind: flag
    aliases: [v, verbose]
    help: Print more output
    many: true
  - kind: value
    aliases: [o, output]
    value_name: FILE
    type: path
  - kind: value
    dest: source
    value_name: SOURCE
    required: true
groups:
  - name: Mode
    arguments:
      - kind: flag
        aliases: [f, fast]
      - kind: flag
        aliases: [s, slow]
constraints:
  - kind: implies
    members: [verbose, output]
  - kind: exactly_one_of
    required: false
    members: [fast, slow]
"""

TOML_DEFINITION = """
program = "stamp"

[markers]
flag_prefix = "/"
name_prefix = "//"
name_delimiter = ":"
stop_marker = ";;"

[[arguments]]
kind = "value"
aliases = ["at"]
type = "datetime"

[[arguments]]
kind = "const"
aliases = ["q"]
dest = "level"
const = 0
default = 1
"""


def test_build_from_yaml():
    parser = loads(YAML_DEFINITION)
    assert parser.program == "convert"
    assert parser.help_text == "Convert a file."
    assert [group.name for group in parser.groups] == ["Arguments", "Mode"]
    assert parser.get_usage() == "Usage: convert [ -v ] [ -o FILE ] SOURCE [ -f ] [ -s ]"

    args = parser.parse(["-vv", "-o", "out.txt", "--fast", "in.txt"])
    assert args["verbose"] is True
    assert args["output"] == Path("out.txt")
    assert args["source"] == "in.txt"
    assert args["fast"] is True
    assert parser["verbose"].count == 2


def test_yaml_constraints_are_built():
    parser = loads(YAML_DEFINITION)
    kinds = [type(node) for node in parser.constraints]
    assert kinds == [Implies, ExactlyOneOf]
    with pytest.raises(ConstraintViolationError, match="Argument -v requires -o FILE"):
        parser.parse(["-v", "in.txt"])


def test_build_from_toml():
    parser = loads(TOML_DEFINITION, format="toml")
    args = parser.parse(["//at:2024-05-01T10:00:00", "/q"])
    assert args["at"] == datetime(2024, 5, 1, 10, 0)
    assert args["level"] == 0
    assert parser.get_usage() == "Usage: stamp [ //at value ] [ /q ]"


def test_build_parser_from_mapping():
    parser = build_parser(
        {
            "arguments": [
                {"kind": "value", "aliases": ["n"], "type": "int", "multi": True},
            ],
            "constraints": [{"kind": "any", "required": True, "members": ["n"]}],
        }
    )
    argument = parser["n"]
    assert isinstance(argument, ValueArgument)
    assert parser.parse(["-n1", "-n", "2"]) == {"n": [1, 2]}


def test_nested_constraints():
    parser = build_parser(
        {
            "arguments": [
                {"aliases": ["a"]},
                {"aliases": ["b"]},
                {"aliases": ["c"]},
            ],
            "constraints": [
                {
                    "kind": "xor",
                    "members": ["a", {"kind": "and", "members": ["b", "c"]}],
                }
            ],
        }
    )
    node = parser.constraints.children[0]
    assert node.usage == "-a | ( -b -c )"
    parser.parse(["-bc"])


@pytest.mark.parametrize(
    "data, message",
    [
        ({"arguments": [{"kind": "switch"}]}, "Invalid parser definition"),
        ({"arguments": [{"type": "complex"}]}, "Invalid parser definition"),
        ({"constraints": [{"kind": "sometimes"}]}, "Invalid parser definition"),
        ({"markers": {"flag_prefix": ""}}, "Invalid parser definition"),
        ({"constraints": [{"kind": "all", "members": ["ghost"]}]}, "unknown argument 'ghost'"),
        (
            {"arguments": [{"aliases": ["a"]}, {"aliases": ["a"]}]},
            "Duplicate argument dest 'a'",
        ),
        ({"arguments": [{"aliases": ["a"], "min_count": 0}]}, "minimum occurrence"),
    ],
)
def test_invalid_definitions(data, message):
    with pytest.raises(DeclarationError, match=message):
        build_parser(data)


def test_loads_rejects_bad_text():
    with pytest.raises(DeclarationError, match="Could not read yaml definition"):
        loads("arguments: [unclosed")
    with pytest.raises(DeclarationError, match="Could not read toml definition"):
        loads("program = ", format="toml")
    with pytest.raises(DeclarationError, match="must be a mapping"):
        loads("- just\n- a list\n")
    with pytest.raises(DeclarationError, match="Unsupported definition format"):
        loads("program: x", format="json")
