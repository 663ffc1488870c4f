# Argwalk CLI Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Defines `ArgMatches`, the per-command record of a successful parse.

One `ArgMatches` exists for every command level the parser visited. The levels
are linked through `MatchedSubcommand`, so the result of parsing
`app -v run main.py` is a root record holding `verbose`, whose `subcommand`
points at the record of `run` holding `FILE`.

Only arguments that received input (or declare default values) are present.
The parser fills a record through the underscore-prefixed methods and hands it
back; callers only use the query surface:

- `contains_arg(name)`: Was the argument given (or defaulted)?
- `get_single_value(name)`: First captured value, or None.
- `get_multi_values(name)`: All captured values, or None.
- `get_count(name)`: Number of occurrences on the command line.
- `subcommand` / `subcommand_name` / `subcommand_matches(name)`: The invoked child.
"""
from __future__ import annotations

from dataclasses import dataclass, replace
from types import MappingProxyType
from typing import Any, Iterator, Mapping


@dataclass(frozen=True)
class MatchedArgValue:
    """
    Values captured for one argument.

    Attributes:
        values (tuple[str, ...]): Values in order of occurrence. Empty for switches.
        occurrences (int): How many times the argument appeared. Zero when the
            entry only holds declared default values.
    """

    values: tuple[str, ...] = ()
    occurrences: int = 0

    @property
    def is_default(self) -> bool:
        return self.occurrences == 0


@dataclass(frozen=True)
class MatchedSubcommand:
    """The subcommand invoked below a command, with its own matches."""

    name: str
    matches: ArgMatches


class ArgMatches:
    """
    Read-only query surface over the arguments matched for one command.

    Shape contract: `get_single_value` on an argument that captured several
    values returns the first one; `get_multi_values` on an argument that
    captured one value returns a one-item list. Switches have no values, so
    both return None for them and `get_count` reports their occurrences.
    """

    def __init__(self) -> None:
        self._args: dict[str, MatchedArgValue] = {}
        self._subcommand: MatchedSubcommand | None = None

    def _record_occurrence(self, name: str) -> MatchedArgValue:
        matched = self._args.get(name, MatchedArgValue())
        self._args[name] = replace(matched, occurrences=matched.occurrences + 1)
        return self._args[name]

    def _record_values(self, name: str, values: list[str]) -> MatchedArgValue:
        matched = self._args.get(name, MatchedArgValue())
        self._args[name] = replace(matched, values=(*matched.values, *values))
        return self._args[name]

    def _record_default(self, name: str, values: list[str]) -> None:
        if name not in self._args:
            self._args[name] = MatchedArgValue(values=tuple(values), occurrences=0)

    def _set_subcommand(self, name: str, matches: ArgMatches) -> None:
        self._subcommand = MatchedSubcommand(name=name, matches=matches)

    def _num_values(self, name: str) -> int:
        matched = self._args.get(name)
        return len(matched.values) if matched else 0

    def contains_arg(self, name: str) -> bool:
        """Return True if the argument was given or has a declared default."""
        return name in self._args

    def is_present(self, name: str) -> bool:
        """Return True if the argument appeared on the command line."""
        matched = self._args.get(name)
        return matched is not None and matched.occurrences > 0

    def get_single_value(self, name: str) -> str | None:
        """Return the first captured value of the argument, or None."""
        matched = self._args.get(name)
        if matched is None or not matched.values:
            return None
        return matched.values[0]

    def get_multi_values(self, name: str) -> list[str] | None:
        """Return a copy of every captured value of the argument, or None."""
        matched = self._args.get(name)
        if matched is None or not matched.values:
            return None
        return list(matched.values)

    def get_count(self, name: str) -> int:
        """Return how many times the argument occurred on the command line."""
        matched = self._args.get(name)
        return matched.occurrences if matched else 0

    @property
    def args(self) -> Mapping[str, MatchedArgValue]:
        return MappingProxyType(self._args)

    def arg_names(self) -> list[str]:
        return list(self._args)

    @property
    def subcommand(self) -> MatchedSubcommand | None:
        return self._subcommand

    @property
    def subcommand_name(self) -> str | None:
        return self._subcommand.name if self._subcommand else None

    def subcommand_matches(self, name: str) -> ArgMatches | None:
        """Return the child matches if `name` was the subcommand invoked."""
        if self._subcommand is not None and self._subcommand.name == name:
            return self._subcommand.matches
        return None

    def as_dict(self) -> dict[str, Any]:
        """
        Convert the match tree into plain data.

        Arguments go under `args`: switches map to their occurrence count and
        arguments with values map to their value list. The invoked subcommand
        goes under `subcommand` with its `name`, or is None. Keeping the two
        apart lets an argument share its name with a subcommand.
        """
        args: dict[str, Any] = {}
        for name, matched in self._args.items():
            args[name] = list(matched.values) if matched.values else matched.occurrences
        subcommand: dict[str, Any] | None = None
        if self._subcommand is not None:
            subcommand = {
                "name": self._subcommand.name,
                **self._subcommand.matches.as_dict(),
            }
        return {"args": args, "subcommand": subcommand}

    def __contains__(self, name: object) -> bool:
        return name in self._args

    def __iter__(self) -> Iterator[str]:
        return iter(self._args)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ArgMatches):
            return False
        return self._args == other._args and self._subcommand == other._subcommand

    def __repr__(self) -> str:
        return f"ArgMatches(args={self._args!r}, subcommand={self.subcommand_name!r})"
