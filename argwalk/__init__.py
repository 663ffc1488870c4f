"""
Argwalk CLI Parser

Copyright (c) 2025 rtj.dev LLC.
Licensed under the MIT License. See LICENSE file for details.
"""

import logging

from .app import App
from .command import Command, CommandProperty
from .exceptions import (
    ArgumentDeclarationError,
    ArgumentParseError,
    ArgwalkError,
    CommandDeclarationError,
    DuplicatePositionalArgIndexError,
    InvalidHookError,
)
from .hook_manager import RunHookType
from .parser import Arg, ArgMatches, ArgProperty, ErrorKind, ParseError
from .parser.parser import Parser, parse_args
from .signals import FlowSignal, HelpSignal, VersionSignal

logger = logging.getLogger("argwalk")

__all__ = [
    "App",
    "Arg",
    "ArgMatches",
    "ArgProperty",
    "ArgumentDeclarationError",
    "ArgumentParseError",
    "ArgwalkError",
    "Command",
    "CommandDeclarationError",
    "CommandProperty",
    "DuplicatePositionalArgIndexError",
    "ErrorKind",
    "FlowSignal",
    "HelpSignal",
    "InvalidHookError",
    "ParseError",
    "Parser",
    "RunHookType",
    "VersionSignal",
    "parse_args",
]
