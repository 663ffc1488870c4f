# Argwalk CLI Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Lexical analysis of raw command-line strings into classified tokens.

The `Tokenizer` is pulled by the parser one token at a time. Each pull takes
the option table of the command currently being matched, because whether
`-abc` is three switches or one switch followed by an attached value depends
on which short options take values.

Classification, in priority order, of a raw string `t`:

1. `t` does not start with `-`, or is exactly `-` → POSITIONAL.
   `--` ends option processing: it is consumed and every later string is
   POSITIONAL.
2. `--name` / `--name=value` → LONG_OPTION / LONG_OPTION_WITH_VALUE, split on
   the first `=`.
3. `-abc` → one token per character, scanned left to right. Switches are
   emitted and scanning continues. The first value-taking option ends the chain
   and takes the rest of the string as its value: after `=` if the next
   character is `=`, otherwise the remaining characters. With nothing left, its
   value must come from the next raw string. A switch followed by `=` is
   emitted with the text after `=` as an (unexpected) value.
4. Unknown names are emitted with `arg=None`; the parser reports them.

Delimiter splitting of attached values is done by the parser, so values taken
from a following raw string are never split.
"""
from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Sequence

from argwalk.parser.arg import Arg

if TYPE_CHECKING:
    from argwalk.command import Command

END_OF_OPTIONS = "--"


class TokenKind(Enum):
    """
    Classification of a token.

    Members:
        LONG_OPTION: `--name` without a value.
        LONG_OPTION_WITH_VALUE: `--name=value`.
        SHORT_OPTION: `-n`, or one character of a chain, without a value.
        SHORT_OPTION_WITH_VALUE: `-nvalue` or `-n=value`, possibly ending a chain.
        POSITIONAL: A value or subcommand candidate.
    """

    LONG_OPTION = "long_option"
    LONG_OPTION_WITH_VALUE = "long_option_with_value"
    SHORT_OPTION = "short_option"
    SHORT_OPTION_WITH_VALUE = "short_option_with_value"
    POSITIONAL = "positional"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Token:
    """
    A classified piece of the command line.

    Attributes:
        kind (TokenKind): The classification.
        raw (str): The raw string this token was read from.
        name (str | None): Option name without dashes (`v`, `verbose`).
        value (str | None): Attached value, or the text of a positional token.
        arg (Arg | None): The resolved option; None if the name is unknown.
    """

    kind: TokenKind
    raw: str
    name: str | None = None
    value: str | None = None
    arg: Arg | None = None

    @property
    def is_option(self) -> bool:
        return self.kind is not TokenKind.POSITIONAL

    @property
    def is_short(self) -> bool:
        return self.kind in (TokenKind.SHORT_OPTION, TokenKind.SHORT_OPTION_WITH_VALUE)

    @property
    def has_attached_value(self) -> bool:
        return self.kind in (
            TokenKind.LONG_OPTION_WITH_VALUE,
            TokenKind.SHORT_OPTION_WITH_VALUE,
        )

    def option_text(self) -> str:
        """Return the option as the user typed it, e.g. `-v` or `--verbose`."""
        if self.is_short:
            return f"-{self.name}"
        if self.kind is TokenKind.POSITIONAL:
            return self.raw
        return f"--{self.name}" if self.name else self.raw


def looks_like_option(raw: str) -> bool:
    """Return True if `raw` would be read as an option or as `--`."""
    return raw.startswith("-") and raw != "-"


class Tokenizer:
    """
    Lazy tokenizer over a list of raw argument strings.

    Methods:
        next_token(command): Pull the next token using `command`'s options.
        peek_value(): The next raw string if it can be consumed as a value.
        next_value(): Consume and return that raw string.
        remaining(): Raw strings not consumed yet.
    """

    def __init__(self, args: Sequence[str]) -> None:
        self._args: list[str] = list(args)
        self._cursor: int = 0
        self._pending: deque[Token] = deque()
        self._end_of_options: bool = False

    @property
    def end_of_options(self) -> bool:
        return self._end_of_options

    def next_token(self, command: Command) -> Token | None:
        """Return the next token, or None when the input is exhausted."""
        if self._pending:
            return self._pending.popleft()

        while self._cursor < len(self._args):
            raw = self._args[self._cursor]
            self._cursor += 1

            if self._end_of_options or not looks_like_option(raw):
                return Token(TokenKind.POSITIONAL, raw, value=raw)
            if raw == END_OF_OPTIONS:
                self._end_of_options = True
                continue
            if raw.startswith("--"):
                return self._long_token(raw, command)

            self._pending.extend(self._short_tokens(raw, command))
            return self._pending.popleft()
        return None

    def peek_value(self) -> str | None:
        """
        Return the next raw string if it can be taken as an option value.

        Nothing can be taken while a short-option chain is still being emitted,
        and option-looking strings (including `--`) are never values.
        """
        if self._pending or self._cursor >= len(self._args):
            return None
        raw = self._args[self._cursor]
        if looks_like_option(raw) and not self._end_of_options:
            return None
        return raw

    def next_value(self) -> str | None:
        value = self.peek_value()
        if value is not None:
            self._cursor += 1
        return value

    def remaining(self) -> list[str]:
        return self._args[self._cursor :]

    def _long_token(self, raw: str, command: Command) -> Token:
        name, separator, value = raw[2:].partition("=")
        arg = command.find_long_option(name) if name else None
        if separator:
            return Token(TokenKind.LONG_OPTION_WITH_VALUE, raw, name, value, arg)
        return Token(TokenKind.LONG_OPTION, raw, name, None, arg)

    def _short_tokens(self, raw: str, command: Command) -> list[Token]:
        tokens: list[Token] = []
        chars = raw[1:]
        position = 0
        while position < len(chars):
            name = chars[position]
            rest = chars[position + 1 :]
            arg = command.find_short_option(name)

            if arg is None:
                tokens.append(Token(TokenKind.SHORT_OPTION, raw, name, None, None))
                break

            if arg.is_switch:
                if rest.startswith("="):
                    tokens.append(
                        Token(TokenKind.SHORT_OPTION_WITH_VALUE, raw, name, rest[1:], arg)
                    )
                    break
                tokens.append(Token(TokenKind.SHORT_OPTION, raw, name, None, arg))
                position += 1
                continue

            if rest.startswith("="):
                tokens.append(
                    Token(TokenKind.SHORT_OPTION_WITH_VALUE, raw, name, rest[1:], arg)
                )
            elif rest:
                tokens.append(Token(TokenKind.SHORT_OPTION_WITH_VALUE, raw, name, rest, arg))
            else:
                tokens.append(Token(TokenKind.SHORT_OPTION, raw, name, None, arg))
            break
        return tokens
