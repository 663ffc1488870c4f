# Argwalk CLI Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Defines all custom exception classes used by the Argwalk argument parser.

Declaration problems (a bad `Arg`, a duplicated positional index, a command
attached twice) are raised while the command tree is being built. Parse
failures are raised while matching user input and always carry exactly one
`ParseError` describing what went wrong.

All exceptions inherit from `ArgwalkError`, the base exception for the package.

Exception Hierarchy:
- ArgwalkError
    ├── ArgumentDeclarationError
    │   └── DuplicatePositionalArgIndexError
    ├── CommandDeclarationError
    ├── InvalidHookError
    └── ArgumentParseError
"""
from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from argwalk.command import Command
    from argwalk.parser.parse_error import ParseError


class ArgwalkError(Exception):
    """Base exception for Argwalk."""


class ArgumentDeclarationError(ArgwalkError):
    """Exception raised when an argument is declared with inconsistent settings."""


class DuplicatePositionalArgIndexError(ArgumentDeclarationError):
    """Exception raised when two positional arguments claim the same index."""


class CommandDeclarationError(ArgwalkError):
    """Exception raised when a command tree is assembled incorrectly."""


class InvalidHookError(ArgwalkError):
    """Exception raised when a run hook is not callable."""


class ArgumentParseError(ArgwalkError):
    """
    Exception raised when user input does not match the command declaration.

    Attributes:
        error (ParseError): The diagnostic describing the failure.
        command (Command | None): The command level where matching failed.
    """

    def __init__(self, error: ParseError, command: Command | None = None) -> None:
        super().__init__(error.message())
        self.error = error
        self.command = command
