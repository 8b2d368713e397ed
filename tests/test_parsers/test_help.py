from tapper.parser import (
    Argument,
    ArgumentGroup,
    ArgumentParser,
    ExactlyOneOf,
    ValueArgument,
)


def build_parser():
    verbose = Argument("v", "verbose", help="Print more output").many()
    output = ValueArgument("o", "output", help="Output file", value_name="FILE")
    source = +ValueArgument(help="Input file", value_name="SOURCE")
    parser = ArgumentParser(
        verbose,
        output,
        source,
        program="convert",
        help_text="Convert a file.",
        help_epilog="See the manual for details.",
    )
    fast = Argument("f", "fast", help="Favour speed")
    slow = Argument("s", "slow", help="Favour quality")
    parser.add_group(ArgumentGroup("Mode", fast ^ slow))
    return parser


def test_usage_line():
    parser = build_parser()
    assert parser.get_usage() == "Usage: convert [ -v ] [ -o FILE ] SOURCE ( -f | -s )"


def test_help_text():
    assert build_parser().help() == (
        "Usage: convert [ -v ] [ -o FILE ] SOURCE ( -f | -s )\n"
        "\n"
        "Arguments:\n"
        "  -v, --verbose  Print more output\n"
        "  -o, --output   Output file\n"
        "  SOURCE         Input file\n"
        "\n"
        "Mode:\n"
        "  -f, --fast     Favour speed\n"
        "  -s, --slow     Favour quality\n"
    )


def test_help_skips_empty_groups_and_constraints():
    a = Argument("a")
    parser = ArgumentParser(a)
    parser.add_group(ArgumentGroup("Empty"))
    parser.add_constraint(~a)
    assert parser.help() == "Usage: [ -a ]\n\nArguments:\n  -a\n"


def test_exactly_one_of_usage_keeps_declaration_order():
    a, b = +Argument("a"), Argument("b")
    parser = ArgumentParser()
    parser.add_group(ArgumentGroup("Choice", ExactlyOneOf(a, b)))
    assert parser.get_usage() == "Usage: ( -a | -b )"


def test_render_help(capsys):
    build_parser().render_help()
    captured = capsys.readouterr()
    assert "Convert a file." in captured.out
    assert "Arguments:" in captured.out
    assert "Print more output" in captured.out
    assert "Favour quality" in captured.out
    assert "See the manual for details." in captured.out
