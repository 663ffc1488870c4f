# Argwalk CLI Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Defines flow control signals raised by the Argwalk parser.

These signals interrupt matching to hand control back to the application
layer (to display help or the version string) without being treated as
parse failures.

All signals inherit from `FlowSignal`, which is a subclass of `BaseException`
to ensure they bypass standard `except Exception` blocks.

Signals:
- HelpSignal: `-h/--help` was given, or a command with `HELP_ON_EMPTY_ARGS`
  received no arguments.
- VersionSignal: `--version` was given on a command that declares a version.
"""
from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from argwalk.command import Command


class FlowSignal(BaseException):
    """Base class for all flow control signals in Argwalk.

    These are not errors. They carry the command the signal was raised for so
    the caller can render output for the right level of the tree.
    """

    def __init__(self, command: Command, message: str) -> None:
        super().__init__(message)
        self.command = command


class HelpSignal(FlowSignal):
    """Raised to display help information for a command."""

    def __init__(self, command: Command, message: str = "Help signal received."):
        super().__init__(command, message)


class VersionSignal(FlowSignal):
    """Raised to display the version of a command."""

    def __init__(self, command: Command, message: str = "Version signal received."):
        super().__init__(command, message)
