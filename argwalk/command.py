# Argwalk CLI Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""command.py

Defines the `Command` node of an Argwalk command tree.

A command owns its positional arguments, its options, and its subcommands.
The parser only reads from the tree; it is built once with `add_arg()`,
`add_subcommand()` and `set_property()` and never changes while parsing.

Besides the lookups the parser needs (`find_short_option`,
`find_long_option`, `find_positional_arg_by_index`, `find_subcommand`), a
command carries:

- Metadata used by help output (`use`, `short`, `long`, `example`, `version`,
  `deprecated`, `hidden`, `group_id`, `annotations`)
- Run hooks (`persistent_pre_run`, `pre_run`, `run`, `post_run`,
  `persistent_post_run`) managed by a `RunHookManager`
- Stream overrides (`set_in`, `set_out`, `set_err`) resolved through the
  parent chain, falling back to the process streams

Example:
    root = Command("app", "My app")
    root.add_arg(Arg.boolean_option("verbose", "v", "Verbose output"))

    run = Command("run", "Run a file")
    run.add_arg(Arg.positional("FILE", "File to run"))
    run.set_property(CommandProperty.POSITIONAL_ARG_REQUIRED)
    root.add_subcommand(run)
"""
from __future__ import annotations

import sys
import weakref
from difflib import get_close_matches
from enum import Enum
from typing import Iterable, TextIO

from argwalk.exceptions import (
    ArgumentDeclarationError,
    CommandDeclarationError,
    DuplicatePositionalArgIndexError,
)
from argwalk.hook_manager import RunHook, RunHookManager, RunHookType
from argwalk.parser.arg import Arg

HELP_ARG_NAME = "help"
VERSION_ARG_NAME = "version"


class CommandProperty(Enum):
    """
    Parsing behaviors that can be applied to a command.

    Members:
        HELP_ON_EMPTY_ARGS: Display help when the command receives no arguments.
        POSITIONAL_ARG_REQUIRED: Every positional argument must be provided.
        SUBCOMMAND_REQUIRED: A subcommand must be provided.
    """

    HELP_ON_EMPTY_ARGS = "help_on_empty_args"
    POSITIONAL_ARG_REQUIRED = "positional_arg_required"
    SUBCOMMAND_REQUIRED = "subcommand_required"

    def __str__(self) -> str:
        return self.value


class Command:
    """
    A node in the command tree.

    Attributes:
        name (str): The name typed on the command line to select this command.
        description (str | None): General description.
        use (str | None): One-line usage message.
        short (str | None): Short description shown in the parent's help.
        long (str | None): Long description shown in this command's help.
        example (str | None): Usage examples.
        aliases (list[str]): Alternative names.
        suggest_for (list[str]): Mistyped names for which this command is suggested.
        group_id (str | None): Group this command is listed under in its parent's help.
        version (str | None): Version string; adds a `--version` switch.
        deprecated (str | None): Notice printed when the command is used.
        hidden (bool): Hide the command from its parent's help.
        annotations (dict[str, str]): Free-form key/value metadata.
        positional_args (list[Arg]): Positional arguments, sorted by index.
        options (list[Arg]): Named arguments, in declaration order.
        subcommands (list[Command]): Child commands, in declaration order.
        properties (set[CommandProperty]): Parsing behaviors.
        hooks (RunHookManager): Registered run hooks.
    """

    def __init__(
        self,
        name: str,
        description: str | None = None,
        *,
        aliases: Iterable[str] | None = None,
        add_help: bool = True,
    ) -> None:
        if not name or name.startswith("-"):
            raise CommandDeclarationError(
                f"Command name {name!r} must be non-empty and must not start with '-'"
            )
        self.name: str = name
        self.description: str | None = description
        self.use: str | None = None
        self.short: str | None = None
        self.long: str | None = None
        self.example: str | None = None
        self.aliases: list[str] = list(aliases or [])
        self.suggest_for: list[str] = []
        self.group_id: str | None = None
        self.version: str | None = None
        self.deprecated: str | None = None
        self.hidden: bool = False
        self.annotations: dict[str, str] = {}
        self.positional_args: list[Arg] = []
        self.options: list[Arg] = []
        self.subcommands: list[Command] = []
        self.properties: set[CommandProperty] = set()
        self.hooks: RunHookManager = RunHookManager()
        self._parent: weakref.ReferenceType[Command] | None = None
        self._in: TextIO | None = None
        self._out: TextIO | None = None
        self._err: TextIO | None = None
        if add_help:
            self.add_arg(
                Arg.boolean_option(HELP_ARG_NAME, "h", "Print this help and exit")
            )

    def add_arg(self, arg: Arg) -> None:
        """
        Append an argument to the command.

        Positional arguments without an index get the next one: 1 for the
        first, otherwise the highest index in use plus one.

        Raises:
            DuplicatePositionalArgIndexError: If an explicit index is taken.
            ArgumentDeclarationError: If the name, short name or long name is taken.
        """
        if any(existing.name == arg.name for existing in self._all_args()):
            raise ArgumentDeclarationError(
                f"Argument '{arg.name}' is already defined on command '{self.name}'"
            )

        if not arg.is_positional:
            if arg.short_name is not None and self.find_short_option(arg.short_name):
                raise ArgumentDeclarationError(
                    f"Short name '-{arg.short_name}' is already used on command '{self.name}'"
                )
            if arg.long_name is not None and self.find_long_option(arg.long_name):
                raise ArgumentDeclarationError(
                    f"Long name '--{arg.long_name}' is already used on command '{self.name}'"
                )
            self.options.append(arg)
            return

        if arg.index is not None:
            if self.find_positional_arg_by_index(arg.index) is not None:
                raise DuplicatePositionalArgIndexError(
                    f"Positional index {arg.index} of '{arg.name}' is already used "
                    f"on command '{self.name}'"
                )
        elif not self.positional_args:
            arg.set_index(1)
        else:
            arg.set_index(max(self._positional_indices()) + 1)

        self.positional_args.append(arg)
        self.positional_args.sort(key=lambda positional: positional.index or 0)

    def add_args(self, args: Iterable[Arg]) -> None:
        for arg in args:
            self.add_arg(arg)

    def add_subcommand(self, subcommand: Command) -> None:
        """Attach a child command and make this command its parent."""
        if subcommand is self:
            raise CommandDeclarationError(f"Command '{self.name}' cannot contain itself")
        if subcommand.parent is not None:
            raise CommandDeclarationError(
                f"Command '{subcommand.name}' is already a subcommand of "
                f"'{subcommand.parent.name}'"
            )
        for name in (subcommand.name, *subcommand.aliases):
            if self.find_subcommand(name) is not None:
                raise CommandDeclarationError(
                    f"Subcommand name '{name}' is already used on command '{self.name}'"
                )
        subcommand._parent = weakref.ref(self)
        self.subcommands.append(subcommand)

    def add_subcommands(self, subcommands: Iterable[Command]) -> None:
        for subcommand in subcommands:
            self.add_subcommand(subcommand)

    def set_property(self, prop: CommandProperty | str) -> None:
        self.properties.add(CommandProperty(prop))

    def unset_property(self, prop: CommandProperty | str) -> None:
        self.properties.discard(CommandProperty(prop))

    def has_property(self, prop: CommandProperty | str) -> bool:
        return CommandProperty(prop) in self.properties

    def count_positional_args(self) -> int:
        return len(self.positional_args)

    def count_options(self) -> int:
        return len(self.options)

    def count_subcommands(self) -> int:
        return len(self.subcommands)

    def find_positional_arg_by_index(self, index: int) -> Arg | None:
        return next((arg for arg in self.positional_args if arg.index == index), None)

    def find_short_option(self, short_name: str) -> Arg | None:
        return next((arg for arg in self.options if arg.short_name == short_name), None)

    def find_long_option(self, long_name: str) -> Arg | None:
        return next((arg for arg in self.options if arg.long_name == long_name), None)

    def find_subcommand(self, name: str) -> Command | None:
        """Find a subcommand by its name or one of its aliases."""
        for subcommand in self.subcommands:
            if subcommand.name == name or name in subcommand.aliases:
                return subcommand
        return None

    def find_suggestions(self, name: str) -> list[str]:
        """
        Suggest visible subcommands for a mistyped `name`.

        Commands listing `name` in `suggest_for` come first, followed by close
        matches of subcommand names.
        """
        visible = [subcommand for subcommand in self.subcommands if not subcommand.hidden]
        suggestions = [
            subcommand.name for subcommand in visible if name in subcommand.suggest_for
        ]
        names = [subcommand.name for subcommand in visible]
        for match in get_close_matches(name, names, n=3, cutoff=0.7):
            if match not in suggestions:
                suggestions.append(match)
        return suggestions

    def find_arg(self, name: str) -> Arg | None:
        return next((arg for arg in self._all_args() if arg.name == name), None)

    def _all_args(self) -> list[Arg]:
        return [*self.positional_args, *self.options]

    def _positional_indices(self) -> list[int]:
        return [arg.index for arg in self.positional_args if arg.index is not None]

    def set_use(self, use: str) -> None:
        self.use = use

    def set_short(self, short: str) -> None:
        self.short = short

    def set_long(self, long: str) -> None:
        self.long = long

    def set_example(self, example: str) -> None:
        self.example = example

    def add_alias(self, alias: str) -> None:
        parent = self.parent
        if parent is not None and parent.find_subcommand(alias) not in (None, self):
            raise CommandDeclarationError(
                f"Alias '{alias}' is already used on command '{parent.name}'"
            )
        self.aliases.append(alias)

    def add_aliases(self, aliases: Iterable[str]) -> None:
        for alias in aliases:
            self.add_alias(alias)

    def add_suggest_for(self, name: str) -> None:
        self.suggest_for.append(name)

    def add_suggest_for_many(self, names: Iterable[str]) -> None:
        for name in names:
            self.add_suggest_for(name)

    def set_group_id(self, group_id: str) -> None:
        self.group_id = group_id

    def set_version(self, version: str) -> None:
        """Set the version, adding a `--version` switch if none is declared."""
        self.version = version
        if self.find_arg(VERSION_ARG_NAME) is None:
            self.add_arg(
                Arg.boolean_option(VERSION_ARG_NAME, None, "Print version and exit")
            )

    def set_deprecated(self, deprecated: str) -> None:
        self.deprecated = deprecated

    def set_hidden(self, hidden: bool) -> None:
        self.hidden = hidden

    def set_annotation(self, key: str, value: str) -> None:
        self.annotations[key] = value

    def get_annotation(self, key: str) -> str | None:
        return self.annotations.get(key)

    def get_description(self) -> str | None:
        """Get the short description, falling back to the general description."""
        return self.short or self.description

    def get_long_description(self) -> str | None:
        """Get the long description, falling back to the general description."""
        return self.long or self.description

    def register_hook(self, hook_type: RunHookType | str, hook: RunHook) -> None:
        self.hooks.register(hook_type, hook)

    def set_persistent_pre_run(self, hook: RunHook) -> None:
        self.hooks.register(RunHookType.PERSISTENT_PRE_RUN, hook)

    def set_pre_run(self, hook: RunHook) -> None:
        self.hooks.register(RunHookType.PRE_RUN, hook)

    def set_run(self, hook: RunHook) -> None:
        self.hooks.register(RunHookType.RUN, hook)

    def set_post_run(self, hook: RunHook) -> None:
        self.hooks.register(RunHookType.POST_RUN, hook)

    def set_persistent_post_run(self, hook: RunHook) -> None:
        self.hooks.register(RunHookType.PERSISTENT_POST_RUN, hook)

    def find_persistent_hook_owner(self, hook_type: RunHookType) -> Command | None:
        """Return the nearest command, starting at this one, with hooks of `hook_type`."""
        current: Command | None = self
        while current is not None:
            if current.hooks.has(hook_type):
                return current
            current = current.parent
        return None

    @property
    def parent(self) -> Command | None:
        return self._parent() if self._parent is not None else None

    def has_parent(self) -> bool:
        return self.parent is not None

    def get_root(self) -> Command:
        current = self
        while (parent := current.parent) is not None:
            current = parent
        return current

    def get_path(self) -> list[str]:
        """Return the command names from the root down to this command."""
        names = [self.name]
        current = self.parent
        while current is not None:
            names.append(current.name)
            current = current.parent
        return list(reversed(names))

    def set_in(self, stream: TextIO | None) -> None:
        """Set the input stream. None restores inheritance."""
        self._in = stream

    def set_out(self, stream: TextIO | None) -> None:
        """Set the output stream for help and usage. None restores inheritance."""
        self._out = stream

    def set_err(self, stream: TextIO | None) -> None:
        """Set the error stream for diagnostics. None restores inheritance."""
        self._err = stream

    def in_or_stdin(self) -> TextIO:
        current: Command | None = self
        while current is not None:
            if current._in is not None:
                return current._in
            current = current.parent
        return sys.stdin

    def out_or_stdout(self) -> TextIO:
        current: Command | None = self
        while current is not None:
            if current._out is not None:
                return current._out
            current = current.parent
        return sys.stdout

    def err_or_stderr(self) -> TextIO:
        current: Command | None = self
        while current is not None:
            if current._err is not None:
                return current._err
            current = current.parent
        return sys.stderr

    def __str__(self) -> str:
        return (
            f"Command(name={self.name!r}, positional={len(self.positional_args)}, "
            f"options={len(self.options)}, subcommands={len(self.subcommands)})"
        )

    def __repr__(self) -> str:
        return str(self)
