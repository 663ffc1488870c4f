"""
Argwalk CLI Parser

Copyright (c) 2025 rtj.dev LLC.
Licensed under the MIT License. See LICENSE file for details.
"""

from .arg import Arg, ArgProperty
from .arg_matches import ArgMatches, MatchedArgValue, MatchedSubcommand
from .parse_error import ErrorKind, ErrorOption, ParseError
from .tokenizer import Token, TokenKind, Tokenizer

__all__ = [
    "Arg",
    "ArgProperty",
    "ArgMatches",
    "MatchedArgValue",
    "MatchedSubcommand",
    "ErrorKind",
    "ErrorOption",
    "ParseError",
    "Token",
    "TokenKind",
    "Tokenizer",
]
