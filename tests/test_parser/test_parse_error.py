import io

import pytest

from argwalk import Arg, Command
from argwalk.parser import ErrorKind, ErrorOption, ParseError

FOOTER = "help: invoke the command with '-h/--h' flag to learn more.\n"


@pytest.fixture
def color():
    return Arg.single_value_option_with_valid_values(
        "color", "c", "Color", ["red", "green"]
    )


def test_render_without_hint():
    error = ParseError.unrecognized_command("bogus")
    assert error.render() == f"error: unrecognized command 'bogus'\n\n{FOOTER}"


def test_unrecognized_command_suggestions():
    error = ParseError.unrecognized_command("rnu", ["run", "rerun"])
    assert error.suggestions == ("run", "rerun")
    assert error.render() == (
        "error: unrecognized command 'rnu'\n"
        "\n"
        "help: did you mean this?\n"
        "\t-> run\n"
        "\t-> rerun\n"
        f"\n{FOOTER}"
    )
    assert ParseError.unrecognized_command("rnu", []).hint() is None


@pytest.mark.parametrize(
    "error, message",
    [
        (
            ParseError.positional_argument_not_provided("run"),
            "positional argument is missing for command 'run'",
        ),
        (
            ParseError.subcommand_not_provided("app"),
            "subcommand is missing for command 'app'",
        ),
        (ParseError.unrecognized_option("--nope"), "unrecognized option '--nope'"),
        (
            ParseError.unexpected_positional_argument("app", "extra"),
            "unexpected positional argument 'extra' for command 'app'",
        ),
    ],
)
def test_command_level_messages(error, message):
    assert error.message() == message
    assert str(error) == message
    assert error.hint() is None


def test_option_names_in_messages():
    both = Arg.single_value_option("output", "o")
    short_only = Arg("output", short_name="o", max_values=1)
    long_only = Arg.single_value_option("output", None)

    assert ParseError.option_value_not_provided(both).message() == (
        "a value is missing for option '-o/--output'"
    )
    assert ParseError.option_value_not_provided(short_only).message() == (
        "a value is missing for option '-o'"
    )
    assert ParseError.option_value_not_provided(long_only).message() == (
        "a value is missing for option '--output'"
    )
    assert str(ErrorOption(name="FILE")) == "FILE"


def test_unexpected_option_value():
    error = ParseError.unexpected_option_value(Arg.boolean_option("verbose", "v"), "yes")
    assert error.kind is ErrorKind.UNEXPECTED_OPTION_VALUE
    assert error.render() == (
        "error: a value 'yes' was not expected for option '-v/--verbose'\n" f"\n{FOOTER}"
    )


def test_invalid_value_lists_valid_values(color):
    error = ParseError.invalid_option_value(color, "blue")
    assert error.render() == (
        "error: 'blue' is invalid value for option '-c/--color'\n"
        "\n"
        "help: valid values are:\n"
        "\t-> red\n"
        "\t-> green\n"
        "\n"
        f"{FOOTER}"
    )


def test_missing_value_lists_valid_values(color):
    error = ParseError.option_value_not_provided(color)
    assert error.render() == (
        "error: a value is missing for option '-c/--color'\n"
        "\n"
        "help: valid values are:\n"
        "\t-> red\n"
        "\t-> green\n"
        "\n"
        f"{FOOTER}"
    )

    plain = ParseError.option_value_not_provided(Arg.single_value_option("output", "o"))
    assert plain.hint() is None


def test_empty_value(color):
    error = ParseError.empty_option_value(Arg.single_value_option("name", "n"))
    assert error.render() == (
        f"error: empty value was not expected for option '-n/--name'\n\n{FOOTER}"
    )
    assert "valid values are" in ParseError.empty_option_value(color).render()


def test_arity_hints():
    tags = Arg.multi_values_option("tag", "t", max_values=3).set_min_values(2)

    too_few = ParseError.too_few_option_value(tags, 1)
    assert too_few.render() == (
        "error: minimum of '2' values were expected for option '-t/--tag'\n"
        "\n"
        "help: try adding '1' more value/s\n"
        "\n"
        f"{FOOTER}"
    )

    too_many = ParseError.too_many_option_value(tags, 5)
    assert too_many.render() == (
        "error: only upto '3' values were expected for option '-t/--tag'\n"
        "\n"
        "help: try reducing '2' value/s\n"
        "\n"
        f"{FOOTER}"
    )


def test_errors_are_values():
    assert ParseError.unrecognized_command("x") == ParseError.unrecognized_command("x")
    assert ParseError.unrecognized_command("x") != ParseError.unrecognized_command("y")


def test_print_uses_inherited_error_stream():
    stream = io.StringIO()
    root = Command("app")
    child = Command("run")
    root.add_subcommand(child)
    root.set_err(stream)

    error = ParseError.positional_argument_not_provided("run")
    error.print(child)
    assert stream.getvalue() == error.render()


def test_print_defaults_to_stderr(capsys):
    error = ParseError.unrecognized_option("-x")
    error.print()
    captured = capsys.readouterr()
    assert captured.err == f"error: unrecognized option '-x'\n\n{FOOTER}"
    assert captured.out == ""
