# Argwalk CLI Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Defines `App`, the application-level entry point of Argwalk.

`App` owns the root `Command` of a command tree and ties the parser to the
process: it reads `sys.argv`, prints diagnostics and help to the streams of the
command where parsing stopped, maps outcomes to exit codes, and runs the hooks
of the command that was invoked.

Exit codes:
    0: Success, help displayed, or version displayed.
    1: The command line did not match the declaration.

Example:
    app = App("app", "My application", version="1.0.0")
    app.root_command().add_arg(Arg.boolean_option("verbose", "v", "Verbose output"))

    run = app.create_command("run", "Run a file")
    run.add_arg(Arg.positional("FILE", "File to run"))
    run.set_run(lambda command, args: print(f"running {args[0]}"))

    app.main()
"""
from __future__ import annotations

import asyncio
import sys
from typing import Sequence

from argwalk.command import Command
from argwalk.exceptions import ArgumentParseError
from argwalk.help import render_help, render_version
from argwalk.hook_manager import execute_run_hooks
from argwalk.logger import logger
from argwalk.parser.arg_matches import ArgMatches
from argwalk.parser.parser import Parser
from argwalk.signals import HelpSignal, VersionSignal


class App:
    """
    A command-line application built around a root `Command`.

    Args:
        name (str): Program name, used as the root command's name.
        description (str | None): Description shown in the root help.
        version (str | None): Version string; enables `--version` on the root.

    Attributes:
        matches (ArgMatches | None): Match record of the last successful parse.
    """

    def __init__(
        self,
        name: str,
        description: str | None = None,
        version: str | None = None,
    ) -> None:
        self._root = Command(name, description)
        if version:
            self._root.set_version(version)
        self.parser = Parser()
        self.matches: ArgMatches | None = None

    @property
    def name(self) -> str:
        return self._root.name

    @property
    def version(self) -> str | None:
        return self._root.version

    def root_command(self) -> Command:
        return self._root

    def create_command(self, name: str, description: str | None = None) -> Command:
        """Create a command and attach it under the root command."""
        command = Command(name, description)
        self._root.add_subcommand(command)
        return command

    def parse_from(self, args: Sequence[str]) -> ArgMatches:
        """
        Parse `args` (without the program name) against the root command.

        Raises:
            ArgumentParseError: If the input does not match the declaration.
            HelpSignal: If help was requested.
            VersionSignal: If the version was requested.
        """
        self.matches = self.parser.parse(self._root, args)
        return self.matches

    def parse_process(self) -> ArgMatches:
        """
        Parse `sys.argv[1:]`, exiting the process instead of raising.

        Help and version requests print to the output stream and exit with 0.
        Parse failures print the rendered diagnostic to the error stream of the
        failing command and exit with 1.
        """
        try:
            return self.parse_from(sys.argv[1:])
        except ArgumentParseError as error:
            error.error.print(error.command or self._root)
            sys.exit(1)
        except HelpSignal as signal:
            self.display_help(signal.command)
            sys.exit(0)
        except VersionSignal as signal:
            self.display_version(signal.command)
            sys.exit(0)

    def display_help(self, command: Command | None = None) -> None:
        render_help(command or self._root)

    def display_version(self, command: Command | None = None) -> None:
        render_version(command or self._root)

    def get_invoked_command(self, matches: ArgMatches) -> tuple[Command, ArgMatches]:
        """Follow the subcommand chain of `matches` to the deepest command reached."""
        command = self._root
        while (subcommand := matches.subcommand) is not None:
            child = command.find_subcommand(subcommand.name)
            assert child is not None, "matches always name declared subcommands"
            command, matches = child, subcommand.matches
        return command, matches

    @staticmethod
    def get_positional_values(command: Command, matches: ArgMatches) -> list[str]:
        """Return the values bound to the positionals of `command`, in index order."""
        values: list[str] = []
        for arg in command.positional_args:
            values.extend(matches.get_multi_values(arg.name) or [])
        return values

    async def run(self, args: Sequence[str] | None = None) -> int:
        """
        Parse `args` (default `sys.argv[1:]`) and run the hooks of the invoked
        command.

        Returns:
            int: The process exit code.
        """
        if args is None:
            args = sys.argv[1:]
        try:
            matches = self.parse_from(args)
        except ArgumentParseError as error:
            error.error.print(error.command or self._root)
            return 1
        except HelpSignal as signal:
            self.display_help(signal.command)
            return 0
        except VersionSignal as signal:
            self.display_version(signal.command)
            return 0

        command, command_matches = self.get_invoked_command(matches)
        if command.deprecated:
            stream = command.err_or_stderr()
            stream.write(f"Command '{command.name}' is deprecated, {command.deprecated}\n")
            stream.flush()

        positional_values = self.get_positional_values(command, command_matches)
        logger.debug("Running '%s' with %r", " ".join(command.get_path()), positional_values)
        await execute_run_hooks(command, positional_values)
        return 0

    def main(self, args: Sequence[str] | None = None) -> None:
        """Run the application and exit the process with its exit code."""
        sys.exit(asyncio.run(self.run(args)))

    def __str__(self) -> str:
        return f"App(name={self.name!r}, version={self.version!r})"
