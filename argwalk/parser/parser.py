# Argwalk CLI Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""
This module implements `Parser`, the matching engine that walks a `Command`
tree and consumes tokens from a `Tokenizer` to build `ArgMatches`.

For every command level the parser:

1. pulls tokens with the command's option table,
2. resolves option tokens, collecting attached or following values and
   enforcing `max_values` as values arrive,
3. dispatches a positional token naming a subcommand (or alias) to that
   subcommand, which consumes everything left,
4. binds other positional tokens to positional slots in index order, the
   last slot absorbing extra values up to its `max_values`,
5. at the end of the level checks `min_values`, required positionals and
   required subcommands, then records declared defaults.

Any failure raises `ArgumentParseError` carrying one `ParseError`; no partial
result is returned. `-h/--help`, `--version`, and `HELP_ON_EMPTY_ARGS` raise
flow signals instead, for the application layer to handle.

Example Usage:
    matches = Parser().parse(root, ["-v", "run", "main.py"])
    matches.contains_arg("verbose")                              # True
    matches.subcommand_matches("run").get_single_value("FILE")   # "main.py"
"""
from __future__ import annotations

from typing import NoReturn, Sequence

from argwalk.command import HELP_ARG_NAME, VERSION_ARG_NAME, Command, CommandProperty
from argwalk.exceptions import ArgumentParseError
from argwalk.logger import logger
from argwalk.parser.arg import Arg, ArgProperty
from argwalk.parser.arg_matches import ArgMatches
from argwalk.parser.parse_error import ParseError
from argwalk.parser.tokenizer import Token, Tokenizer
from argwalk.signals import HelpSignal, VersionSignal


class Parser:
    """
    Matches raw argument strings against a command tree.

    The parser holds no state between calls and never modifies the tree, so a
    single instance can parse any number of argument lists.
    """

    def parse(self, command: Command, args: Sequence[str]) -> ArgMatches:
        """
        Parse `args` (without the program name) against `command`.

        Returns:
            ArgMatches: The root match record, linked to the records of the
                subcommands that were invoked.

        Raises:
            ArgumentParseError: If the input does not match the declaration.
            HelpSignal: If help was requested.
            VersionSignal: If `--version` was given on a versioned command.
        """
        logger.debug("Parsing %r against command '%s'", list(args), command.name)
        return self._parse_command(command, Tokenizer(args))

    def _parse_command(self, command: Command, tokenizer: Tokenizer) -> ArgMatches:
        matches = ArgMatches()
        if (
            command.has_property(CommandProperty.HELP_ON_EMPTY_ARGS)
            and not tokenizer.remaining()
        ):
            raise HelpSignal(command)

        while (token := tokenizer.next_token(command)) is not None:
            if token.is_option:
                self._match_option(command, token, tokenizer, matches)
                continue

            assert token.value is not None, "positional tokens always carry their text"
            subcommand = command.find_subcommand(token.value)
            if subcommand is not None:
                self._check_option_values(command, matches)
                self._record_defaults(command, matches)
                logger.debug(
                    "Dispatching '%s' to subcommand '%s'", command.name, subcommand.name
                )
                child = self._parse_command(subcommand, tokenizer)
                matches._set_subcommand(subcommand.name, child)
                return matches

            self._match_positional(command, token.value, matches)

        if command.has_property(CommandProperty.POSITIONAL_ARG_REQUIRED):
            for arg in command.positional_args:
                if matches._num_values(arg.name) < max(1, arg.min_values):
                    self._fail(
                        ParseError.positional_argument_not_provided(command.name),
                        command,
                    )
        if command.has_property(CommandProperty.SUBCOMMAND_REQUIRED):
            self._fail(ParseError.subcommand_not_provided(command.name), command)

        self._check_option_values(command, matches)
        self._record_defaults(command, matches)
        return matches

    def _match_option(
        self,
        command: Command,
        token: Token,
        tokenizer: Tokenizer,
        matches: ArgMatches,
    ) -> None:
        arg = token.arg
        if arg is None:
            self._fail(ParseError.unrecognized_option(token.option_text()), command)

        if arg.is_switch:
            if token.has_attached_value:
                assert token.value is not None
                self._fail(ParseError.unexpected_option_value(arg, token.value), command)
            if arg.name == HELP_ARG_NAME:
                raise HelpSignal(command)
            if arg.name == VERSION_ARG_NAME and command.version:
                raise VersionSignal(command)
            matches._record_occurrence(arg.name)
            return

        if token.has_attached_value:
            assert token.value is not None
            values = self._split_attached_value(arg, token.value)
        else:
            values = self._consume_following_values(command, arg, tokenizer, matches)

        for value in values:
            self._validate_value(command, arg, value)

        num_values = matches._num_values(arg.name) + len(values)
        if num_values > arg.max_values:
            self._fail(ParseError.too_many_option_value(arg, num_values), command)

        matches._record_occurrence(arg.name)
        matches._record_values(arg.name, values)

    def _split_attached_value(self, arg: Arg, value: str) -> list[str]:
        if arg.values_delimiter and value:
            return value.split(arg.values_delimiter)
        return [value]

    def _consume_following_values(
        self, command: Command, arg: Arg, tokenizer: Tokenizer, matches: ArgMatches
    ) -> list[str]:
        """
        Take the value(s) of an option from the following raw strings.

        One value for single-value options. Multi-value options keep taking
        values until they reach `max_values` (counting earlier occurrences), an
        option, `--`, a subcommand name, or the end of input.
        """
        first = tokenizer.next_value()
        if first is None:
            self._fail(ParseError.option_value_not_provided(arg), command)
        values = [first]
        while matches._num_values(arg.name) + len(values) < arg.max_values:
            value = tokenizer.peek_value()
            if value is None or command.find_subcommand(value) is not None:
                break
            tokenizer.next_value()
            values.append(value)
        return values

    def _validate_value(self, command: Command, arg: Arg, value: str) -> None:
        if value == "" and not arg.has_property(ArgProperty.ALLOW_EMPTY_VALUE):
            self._fail(ParseError.empty_option_value(arg), command)
        if not arg.is_valid_value(value):
            self._fail(ParseError.invalid_option_value(arg, value), command)

    def _find_positional_slot(self, command: Command, matches: ArgMatches) -> Arg | None:
        """
        Return the slot for the next positional value.

        Slots without a value are filled in index order first. Only the last
        slot then takes extra values, up to its `max_values`.
        """
        positional_args = command.positional_args
        for arg in positional_args:
            if matches._num_values(arg.name) == 0:
                return arg
        if positional_args:
            last = positional_args[-1]
            if matches._num_values(last.name) < last.max_values:
                return last
        return None

    def _match_positional(self, command: Command, value: str, matches: ArgMatches) -> None:
        arg = self._find_positional_slot(command, matches)
        if arg is None:
            if command.subcommands:
                self._fail(
                    ParseError.unrecognized_command(value, command.find_suggestions(value)),
                    command,
                )
            self._fail(ParseError.unexpected_positional_argument(command.name, value), command)

        if not arg.is_valid_value(value):
            self._fail(ParseError.invalid_option_value(arg, value), command)
        matches._record_occurrence(arg.name)
        matches._record_values(arg.name, [value])

    def _check_option_values(self, command: Command, matches: ArgMatches) -> None:
        for arg in command.options:
            if arg.is_switch or not matches.is_present(arg.name):
                continue
            num_values = matches._num_values(arg.name)
            if num_values < arg.min_values:
                self._fail(ParseError.too_few_option_value(arg, num_values), command)

    def _record_defaults(self, command: Command, matches: ArgMatches) -> None:
        for arg in (*command.positional_args, *command.options):
            if arg.default_values is not None:
                matches._record_default(arg.name, arg.default_values)

    def _fail(self, error: ParseError, command: Command) -> NoReturn:
        logger.debug("Parse of command '%s' failed: %s", command.name, error.kind)
        raise ArgumentParseError(error, command)


def parse_args(command: Command, args: Sequence[str]) -> ArgMatches:
    """Parse `args` against `command` with a fresh `Parser`."""
    return Parser().parse(command, args)
