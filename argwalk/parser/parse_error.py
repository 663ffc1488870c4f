# Argwalk CLI Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Defines `ParseError`, the diagnostic payload produced when user input does not
match a command declaration, and its text rendering.

A `ParseError` is a tagged union: `kind` selects the variant and only the
payload fields belonging to that variant are populated. Instances are built
through the classmethod constructors (`ParseError.unrecognized_option(...)`,
`ParseError.too_few_option_value(...)`, ...) so a variant can never be created
with the wrong payload.

Rendering follows a stable template:

    error: <message>
    [
    help: <hint>]

    help: invoke the command with '-h/--h' flag to learn more.

Exports:
    - ErrorKind: Enum of error variants.
    - ErrorOption: The short/long name pair of the option that failed.
    - ParseError: The diagnostic itself.
"""
from __future__ import annotations

import sys
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Iterable, TextIO

if TYPE_CHECKING:
    from argwalk.command import Command
    from argwalk.parser.arg import Arg

HELP_FOOTER = "help: invoke the command with '-h/--h' flag to learn more.\n"


class ErrorKind(Enum):
    """
    Variants of `ParseError`, one per failure the matcher can diagnose.

    Members:
        UNRECOGNIZED_COMMAND: A token did not name any subcommand.
        POSITIONAL_ARGUMENT_NOT_PROVIDED: A required positional received no value.
        SUBCOMMAND_NOT_PROVIDED: A command requiring a subcommand got none.
        UNRECOGNIZED_OPTION: A short or long option name is not declared.
        OPTION_VALUE_NOT_PROVIDED: A value-taking option received no value.
        UNEXPECTED_OPTION_VALUE: A switch was given a value.
        EMPTY_OPTION_VALUE: An empty value was given where it is not allowed.
        INVALID_OPTION_VALUE: A value is outside the allow-list.
        TOO_FEW_OPTION_VALUE: Fewer values than `min_values`.
        TOO_MANY_OPTION_VALUE: More values than `max_values`.
        UNEXPECTED_POSITIONAL_ARGUMENT: A value arrived after every positional
            slot was full on a command without subcommands.
    """

    UNRECOGNIZED_COMMAND = "unrecognized_command"
    POSITIONAL_ARGUMENT_NOT_PROVIDED = "positional_argument_not_provided"
    SUBCOMMAND_NOT_PROVIDED = "subcommand_not_provided"
    UNRECOGNIZED_OPTION = "unrecognized_option"
    OPTION_VALUE_NOT_PROVIDED = "option_value_not_provided"
    UNEXPECTED_OPTION_VALUE = "unexpected_option_value"
    EMPTY_OPTION_VALUE = "empty_option_value"
    INVALID_OPTION_VALUE = "invalid_option_value"
    TOO_FEW_OPTION_VALUE = "too_few_option_value"
    TOO_MANY_OPTION_VALUE = "too_many_option_value"
    UNEXPECTED_POSITIONAL_ARGUMENT = "unexpected_positional_argument"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class ErrorOption:
    """The names of the argument a parse error refers to."""

    short_name: str | None = None
    long_name: str | None = None
    name: str | None = None

    @classmethod
    def from_arg(cls, arg: Arg) -> ErrorOption:
        return cls(short_name=arg.short_name, long_name=arg.long_name, name=arg.name)

    def __str__(self) -> str:
        if self.short_name is not None and self.long_name is not None:
            return f"-{self.short_name}/--{self.long_name}"
        elif self.short_name is not None:
            return f"-{self.short_name}"
        elif self.long_name is not None:
            return f"--{self.long_name}"
        return self.name or ""


@dataclass(frozen=True)
class ParseError:
    """
    A parse failure diagnostic.

    Attributes:
        kind (ErrorKind): The variant.
        command_name (str | None): Command name, for command-level variants.
        option_name (str | None): The unrecognized option as typed (`-x`, `--nope`).
        option (ErrorOption | None): The option, for option-level variants.
        value (str | None): The offending value, where one exists.
        valid_values (tuple[str, ...] | None): Allow-list, for the hint.
        num_values (int | None): Values received, for arity variants.
        min_values (int | None): Lower bound, for `TOO_FEW_OPTION_VALUE`.
        max_values (int | None): Upper bound, for `TOO_MANY_OPTION_VALUE`.
        suggestions (tuple[str, ...] | None): Close subcommand names, for
            `UNRECOGNIZED_COMMAND`.
    """

    kind: ErrorKind
    command_name: str | None = None
    option_name: str | None = None
    option: ErrorOption | None = None
    value: str | None = None
    valid_values: tuple[str, ...] | None = None
    num_values: int | None = None
    min_values: int | None = None
    max_values: int | None = None
    suggestions: tuple[str, ...] | None = None

    @classmethod
    def unrecognized_command(
        cls, name: str, suggestions: Iterable[str] | None = None
    ) -> ParseError:
        return cls(
            ErrorKind.UNRECOGNIZED_COMMAND,
            command_name=name,
            suggestions=tuple(suggestions) if suggestions else None,
        )

    @classmethod
    def positional_argument_not_provided(cls, command_name: str) -> ParseError:
        return cls(ErrorKind.POSITIONAL_ARGUMENT_NOT_PROVIDED, command_name=command_name)

    @classmethod
    def subcommand_not_provided(cls, command_name: str) -> ParseError:
        return cls(ErrorKind.SUBCOMMAND_NOT_PROVIDED, command_name=command_name)

    @classmethod
    def unrecognized_option(cls, option_name: str) -> ParseError:
        return cls(ErrorKind.UNRECOGNIZED_OPTION, option_name=option_name)

    @classmethod
    def option_value_not_provided(cls, arg: Arg) -> ParseError:
        return cls(
            ErrorKind.OPTION_VALUE_NOT_PROVIDED,
            option=ErrorOption.from_arg(arg),
            valid_values=_valid_values(arg),
        )

    @classmethod
    def unexpected_option_value(cls, arg: Arg, value: str) -> ParseError:
        return cls(
            ErrorKind.UNEXPECTED_OPTION_VALUE,
            option=ErrorOption.from_arg(arg),
            value=value,
        )

    @classmethod
    def empty_option_value(cls, arg: Arg) -> ParseError:
        return cls(
            ErrorKind.EMPTY_OPTION_VALUE,
            option=ErrorOption.from_arg(arg),
            valid_values=_valid_values(arg),
        )

    @classmethod
    def invalid_option_value(cls, arg: Arg, value: str) -> ParseError:
        return cls(
            ErrorKind.INVALID_OPTION_VALUE,
            option=ErrorOption.from_arg(arg),
            value=value,
            valid_values=_valid_values(arg) or (),
        )

    @classmethod
    def too_few_option_value(cls, arg: Arg, num_values: int) -> ParseError:
        return cls(
            ErrorKind.TOO_FEW_OPTION_VALUE,
            option=ErrorOption.from_arg(arg),
            num_values=num_values,
            min_values=arg.min_values,
        )

    @classmethod
    def too_many_option_value(cls, arg: Arg, num_values: int) -> ParseError:
        return cls(
            ErrorKind.TOO_MANY_OPTION_VALUE,
            option=ErrorOption.from_arg(arg),
            num_values=num_values,
            max_values=arg.max_values,
        )

    @classmethod
    def unexpected_positional_argument(cls, command_name: str, value: str) -> ParseError:
        return cls(
            ErrorKind.UNEXPECTED_POSITIONAL_ARGUMENT,
            command_name=command_name,
            value=value,
        )

    def message(self) -> str:
        """Return the one-line message, without the `error: ` prefix."""
        match self.kind:
            case ErrorKind.UNRECOGNIZED_COMMAND:
                return f"unrecognized command '{self.command_name}'"
            case ErrorKind.POSITIONAL_ARGUMENT_NOT_PROVIDED:
                return f"positional argument is missing for command '{self.command_name}'"
            case ErrorKind.SUBCOMMAND_NOT_PROVIDED:
                return f"subcommand is missing for command '{self.command_name}'"
            case ErrorKind.UNRECOGNIZED_OPTION:
                return f"unrecognized option '{self.option_name}'"
            case ErrorKind.OPTION_VALUE_NOT_PROVIDED:
                return f"a value is missing for option '{self.option}'"
            case ErrorKind.UNEXPECTED_OPTION_VALUE:
                return f"a value '{self.value}' was not expected for option '{self.option}'"
            case ErrorKind.EMPTY_OPTION_VALUE:
                return f"empty value was not expected for option '{self.option}'"
            case ErrorKind.INVALID_OPTION_VALUE:
                return f"'{self.value}' is invalid value for option '{self.option}'"
            case ErrorKind.TOO_FEW_OPTION_VALUE:
                return (
                    f"minimum of '{self.min_values}' values were expected "
                    f"for option '{self.option}'"
                )
            case ErrorKind.TOO_MANY_OPTION_VALUE:
                return (
                    f"only upto '{self.max_values}' values were expected "
                    f"for option '{self.option}'"
                )
            case ErrorKind.UNEXPECTED_POSITIONAL_ARGUMENT:
                return (
                    f"unexpected positional argument '{self.value}' "
                    f"for command '{self.command_name}'"
                )
        raise ValueError(f"Unsupported error kind: {self.kind}")

    def hint(self) -> str | None:
        """Return the `help:` block that follows the message, if any."""
        match self.kind:
            case ErrorKind.UNRECOGNIZED_COMMAND:
                if not self.suggestions:
                    return None
                lines = ["help: did you mean this?\n"]
                lines.extend(f"\t-> {name}\n" for name in self.suggestions)
                return "".join(lines)
            case ErrorKind.OPTION_VALUE_NOT_PROVIDED | ErrorKind.EMPTY_OPTION_VALUE:
                if self.valid_values is None:
                    return None
                return _valid_values_text(self.valid_values)
            case ErrorKind.INVALID_OPTION_VALUE:
                return _valid_values_text(self.valid_values or ())
            case ErrorKind.TOO_FEW_OPTION_VALUE:
                assert self.min_values is not None and self.num_values is not None
                return f"help: try adding '{self.min_values - self.num_values}' more value/s\n"
            case ErrorKind.TOO_MANY_OPTION_VALUE:
                assert self.max_values is not None and self.num_values is not None
                return f"help: try reducing '{self.num_values - self.max_values}' value/s\n"
        return None

    def render(self) -> str:
        """Render the full user-facing diagnostic text."""
        text = f"error: {self.message()}\n"
        hint = self.hint()
        if hint:
            text += f"\n{hint}"
        return f"{text}\n{HELP_FOOTER}"

    def print(self, command: Command | None = None) -> None:
        """
        Write the rendered diagnostic to the error stream.

        Uses the error stream resolved by `command` (its own override, else one
        inherited from its parents), or `sys.stderr` when no command is given.
        Write failures propagate as `OSError`.
        """
        stream: TextIO = command.err_or_stderr() if command is not None else sys.stderr
        stream.write(self.render())
        stream.flush()

    def __str__(self) -> str:
        return self.message()


def _valid_values(arg: Arg) -> tuple[str, ...] | None:
    if not arg.valid_values:
        return None
    return tuple(arg.valid_values)


def _valid_values_text(valid_values: tuple[str, ...]) -> str:
    lines = ["help: valid values are:\n"]
    lines.extend(f"\t-> {value}\n" for value in valid_values)
    return "".join(lines)
