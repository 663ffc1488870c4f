# Argwalk CLI Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""config.py
Configuration loader for Argwalk command trees.

A command tree can be declared in YAML or TOML instead of code:

    name: app
    description: My application
    version: 1.0.0
    args:
      - name: verbose
        kind: boolean
        short: v
    commands:
      - name: run
        description: Run a file
        properties: [positional_arg_required]
        args:
          - name: FILE
            kind: positional
        hooks:
          run: my_module.run_file

Hooks are dotted import paths to callables taking `(command, positional_values)`.
"""
from __future__ import annotations

import importlib
import sys
from enum import Enum
from pathlib import Path
from typing import Any

import toml
import yaml
from pydantic import BaseModel, Field, field_validator, model_validator

from argwalk.app import App
from argwalk.command import Command, CommandProperty
from argwalk.console import console
from argwalk.hook_manager import RunHookType
from argwalk.logger import logger
from argwalk.parser.arg import Arg, ArgProperty


def import_action(dotted_path: str) -> Any:
    """Dynamically imports a callable from a dotted path like 'my.module.func'."""
    module_path, _, attr = dotted_path.rpartition(".")
    if not module_path:
        console.print(f"[bold red]Invalid hook path:[/] {dotted_path}")
        sys.exit(1)
    try:
        module = importlib.import_module(module_path)
    except ModuleNotFoundError as error:
        logger.error("Failed to import module '%s': %s", module_path, error)
        console.print(
            f"[bold red]Could not import '{dotted_path}': {error}[/]\n"
            "[dim]Ensure the module is installed and discoverable via PYTHONPATH."
        )
        sys.exit(1)
    try:
        action = getattr(module, attr)
    except AttributeError as error:
        logger.error(
            "Module '%s' does not have attribute '%s': %s", module_path, attr, error
        )
        console.print(
            f"[bold red]Module '{module_path}' has no attribute '{attr}': {error}[/]"
        )
        sys.exit(1)
    return action


class ArgKind(Enum):
    """Kinds of argument declarable in a config file."""

    BOOLEAN = "boolean"
    SINGLE = "single"
    MULTI = "multi"
    POSITIONAL = "positional"

    @classmethod
    def _get_alias(cls, value: str) -> str:
        aliases = {
            "flag": "boolean",
            "switch": "boolean",
            "option": "single",
            "list": "multi",
        }
        return aliases.get(value, value)

    @classmethod
    def _missing_(cls, value: object) -> ArgKind:
        if not isinstance(value, str):
            raise ValueError(f"Invalid {cls.__name__}: {value!r}")
        alias = cls._get_alias(value.strip().lower())
        for member in cls:
            if member.value == alias:
                return member
        valid = ", ".join(member.value for member in cls)
        raise ValueError(f"Invalid {cls.__name__}: '{value}'. Must be one of: {valid}")


class ArgConfig(BaseModel):
    """Argument declaration in an Argwalk config file."""

    name: str
    kind: ArgKind = ArgKind.BOOLEAN
    short: str | None = None
    long: str | None = None
    description: str | None = None
    index: int | None = None
    min_values: int | None = None
    max_values: int | None = None
    delimiter: str | None = None
    valid_values: list[str] | None = None
    default: str | list[str] | None = None
    placeholder: str | None = None
    allow_empty: bool = False

    @field_validator("kind", mode="before")
    @classmethod
    def validate_kind(cls, value: Any) -> ArgKind:
        return ArgKind(value)

    @model_validator(mode="after")
    def validate_names(self) -> ArgConfig:
        if self.kind is ArgKind.POSITIONAL and (self.short or self.long):
            raise ValueError(f"Positional argument '{self.name}' cannot have flags")
        if self.kind is not ArgKind.POSITIONAL and self.index is not None:
            raise ValueError(f"Option '{self.name}' cannot have an index")
        return self

    def to_arg(self) -> Arg:
        match self.kind:
            case ArgKind.BOOLEAN:
                arg = Arg.boolean_option(self.name, self.short, self.description)
            case ArgKind.SINGLE:
                arg = Arg.single_value_option(self.name, self.short, self.description)
            case ArgKind.MULTI:
                arg = Arg.multi_values_option(
                    self.name,
                    self.short,
                    self.description,
                    max_values=self.max_values or 1,
                    values_delimiter=self.delimiter or ",",
                )
            case ArgKind.POSITIONAL:
                arg = Arg.positional(
                    self.name,
                    self.description,
                    index=self.index,
                    max_values=self.max_values or 1,
                )
        if self.long is not None:
            arg.set_long_name(self.long)
        if self.kind is ArgKind.SINGLE and self.delimiter:
            arg.set_values_delimiter(self.delimiter)
        if self.min_values is not None:
            arg.set_min_values(self.min_values)
        if self.valid_values is not None:
            arg.set_valid_values(self.valid_values)
        if self.default is not None:
            defaults = [self.default] if isinstance(self.default, str) else self.default
            arg.set_default_values(defaults)
        if self.placeholder:
            arg.set_value_placeholder(self.placeholder)
        if self.allow_empty:
            arg.set_property(ArgProperty.ALLOW_EMPTY_VALUE)
        return arg


class CommandConfig(BaseModel):
    """Command declaration in an Argwalk config file."""

    name: str
    description: str | None = None
    aliases: list[str] = Field(default_factory=list)
    suggest_for: list[str] = Field(default_factory=list)
    use: str | None = None
    short: str | None = None
    long: str | None = None
    example: str | None = None
    group_id: str | None = None
    version: str | None = None
    deprecated: str | None = None
    hidden: bool = False
    annotations: dict[str, str] = Field(default_factory=dict)
    properties: list[CommandProperty] = Field(default_factory=list)
    args: list[ArgConfig] = Field(default_factory=list)
    hooks: dict[str, str | list[str]] = Field(default_factory=dict)
    commands: list[CommandConfig] = Field(default_factory=list)

    @field_validator("properties", mode="before")
    @classmethod
    def validate_properties(cls, value: Any) -> list[CommandProperty]:
        if not isinstance(value, list):
            raise ValueError("properties must be a list")
        return [CommandProperty(str(prop).strip().lower()) for prop in value]

    @field_validator("hooks")
    @classmethod
    def validate_hooks(cls, value: dict[str, str | list[str]]) -> dict[str, str | list[str]]:
        for hook_type in value:
            RunHookType(hook_type)
        return value

    def configure(self, command: Command) -> Command:
        """Apply this declaration to `command`, building its subcommands."""
        for field_name in ("use", "short", "long", "example", "group_id", "deprecated"):
            if (value := getattr(self, field_name)) is not None:
                setattr(command, field_name, value)
        command.add_aliases(
            alias for alias in self.aliases if alias not in command.aliases
        )
        command.add_suggest_for_many(
            name for name in self.suggest_for if name not in command.suggest_for
        )
        command.set_hidden(self.hidden)
        if self.version:
            command.set_version(self.version)
        for key, value in self.annotations.items():
            command.set_annotation(key, value)
        for prop in self.properties:
            command.set_property(prop)
        command.add_args(arg_config.to_arg() for arg_config in self.args)
        for hook_type, paths in self.hooks.items():
            for path in [paths] if isinstance(paths, str) else paths:
                command.register_hook(hook_type, import_action(path))
        for subcommand_config in self.commands:
            command.add_subcommand(subcommand_config.to_command())
        return command

    def to_command(self) -> Command:
        command = Command(self.name, self.description, aliases=self.aliases)
        return self.configure(command)


class AppConfig(CommandConfig):
    """Top-level Argwalk config: the root command of an `App`."""

    name: str = "argwalk"

    def to_app(self) -> App:
        app = App(self.name, self.description, self.version)
        self.configure(app.root_command())
        return app


def loader(file_path: Path | str) -> App:
    """
    Load an Argwalk command tree from a YAML or TOML file.

    The file should contain a dictionary describing the root command, with
    nested subcommands under `commands`.

    Args:
        file_path (str): Path to the config file (YAML or TOML).

    Returns:
        App: An application whose root command is the declared tree.

    Raises:
        TypeError: If `file_path` is not a string or Path.
        FileNotFoundError: If the file does not exist.
        ValueError: If the file format is unsupported or the content is invalid.
    """
    if isinstance(file_path, (str, Path)):
        path = Path(file_path)
    else:
        raise TypeError("file_path must be a string or Path object.")

    if not path.is_file():
        raise FileNotFoundError(f"No such config file: {file_path}")

    suffix = path.suffix
    with path.open("r", encoding="UTF-8") as config_file:
        if suffix in (".yaml", ".yml"):
            raw_config = yaml.safe_load(config_file)
        elif suffix == ".toml":
            raw_config = toml.load(config_file)
        else:
            raise ValueError(f"Unsupported config format: {suffix}")

    if not isinstance(raw_config, dict):
        raise ValueError(
            "Configuration file must contain a dictionary describing the root command.\n"
            "Example:\n"
            "name: 'app'\n"
            "commands:\n"
            "  - name: 'run'\n"
            "    description: 'Example command'\n"
            "    hooks:\n"
            "      run: 'my_module.my_function'"
        )

    logger.debug("Loading command tree from '%s'", path)
    return AppConfig.model_validate(raw_config).to_app()
