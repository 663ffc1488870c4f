# Argwalk CLI Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Defines the `Arg` dataclass used by `Command` to describe one option or
positional slot in a structured, introspectable format.

An `Arg` is *named* when it has a short name (a single character) and/or a long
name, and *positional* when it has neither. Positional arguments carry a
1-based index, either explicit or assigned by `Command.add_arg()` in order of
declaration.

Key Attributes:
- `name`: Identity of the argument, used as the key in `ArgMatches`
- `short_name` / `long_name`: `-v` / `--verbose` style names
- `min_values` / `max_values`: Arity of the argument
- `values_delimiter`: Splits an attached value (`-f=a,b`) into several values
- `valid_values`: Optional allow-list
- `default_values`: Recorded in the matches when the argument is absent
- `properties`: `ArgProperty` flags (`takes_value`, `allow_empty_value`)

Arguments are usually created with one of the constructors:

    Arg.boolean_option("verbose", "v", "Print more output")
    Arg.single_value_option("output", "o", "Output file")
    Arg.multi_values_option("tag", "t", "Tags to apply", max_values=5)
    Arg.positional("FILE", "File to read")
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable

from argwalk.exceptions import ArgumentDeclarationError


class ArgProperty(Enum):
    """
    Behavioral flags of an `Arg`.

    Members:
        TAKES_VALUE: The argument consumes one or more values.
        ALLOW_EMPTY_VALUE: An empty string (e.g. `--name=`) is accepted as a value.

    Aliases:
        - "value" → "takes_value"
        - "empty" → "allow_empty_value"
    """

    TAKES_VALUE = "takes_value"
    ALLOW_EMPTY_VALUE = "allow_empty_value"

    @classmethod
    def _get_alias(cls, value: str) -> str:
        aliases = {
            "value": "takes_value",
            "empty": "allow_empty_value",
        }
        return aliases.get(value, value)

    @classmethod
    def _missing_(cls, value: object) -> ArgProperty:
        if not isinstance(value, str):
            raise ValueError(f"Invalid {cls.__name__}: {value!r}")
        normalized = value.strip().lower()
        alias = cls._get_alias(normalized)
        for member in cls:
            if member.value == alias:
                return member
        valid = ", ".join(member.value for member in cls)
        raise ValueError(f"Invalid {cls.__name__}: '{value}'. Must be one of: {valid}")

    def __str__(self) -> str:
        return self.value


@dataclass
class Arg:
    """
    Represents a command-line argument declaration.

    Attributes:
        name (str): Identity of the argument within its command.
        short_name (str | None): Single character short name, without the dash.
        long_name (str | None): Long name, without the leading dashes.
        description (str | None): Help text.
        min_values (int): Minimum number of values (0 for switches).
        max_values (int): Maximum number of values (0 for switches).
        values_delimiter (str | None): Character splitting an attached value.
        valid_values (list[str] | None): Allow-list for values.
        default_values (list[str] | None): Values recorded when the argument is absent.
        index (int | None): 1-based position for positional arguments.
        value_placeholder (str | None): Name shown for the value in help output.
        properties (set[ArgProperty]): Behavioral flags.
    """

    name: str
    short_name: str | None = None
    long_name: str | None = None
    description: str | None = None
    min_values: int = 0
    max_values: int = 0
    values_delimiter: str | None = None
    valid_values: list[str] | None = None
    default_values: list[str] | None = None
    index: int | None = None
    value_placeholder: str | None = None
    properties: set[ArgProperty] = field(default_factory=set)

    def __post_init__(self) -> None:
        if not self.name:
            raise ArgumentDeclarationError("Argument name must not be empty")
        if self.short_name is not None:
            self._validate_short_name(self.short_name)
        if self.long_name is not None:
            self._validate_long_name(self.long_name)
        if self.index is not None and self.index < 1:
            raise ArgumentDeclarationError(
                f"Index of '{self.name}' must be a positive integer"
            )
        self._validate_arity(self.min_values, self.max_values)
        self.properties = {ArgProperty(prop) for prop in self.properties}
        if self.max_values > 0:
            self.properties.add(ArgProperty.TAKES_VALUE)
        elif self.is_positional or ArgProperty.TAKES_VALUE in self.properties:
            self.min_values = self.max_values = 1
            self.properties.add(ArgProperty.TAKES_VALUE)
        if self.values_delimiter is not None:
            self.set_values_delimiter(self.values_delimiter)
        if self.valid_values is not None:
            self.set_valid_values(self.valid_values)
        if self.default_values is not None:
            self.set_default_values(self.default_values)

    @classmethod
    def boolean_option(
        cls, name: str, short_name: str | None, description: str | None = None
    ) -> Arg:
        """Create a switch. Its long name is the argument name."""
        return cls(
            name=name,
            short_name=short_name,
            long_name=name,
            description=description,
        )

    @classmethod
    def single_value_option(
        cls, name: str, short_name: str | None, description: str | None = None
    ) -> Arg:
        """Create an option taking exactly one value."""
        return cls(
            name=name,
            short_name=short_name,
            long_name=name,
            description=description,
            min_values=1,
            max_values=1,
            properties={ArgProperty.TAKES_VALUE},
        )

    @classmethod
    def single_value_option_with_valid_values(
        cls,
        name: str,
        short_name: str | None,
        description: str | None,
        valid_values: Iterable[str],
    ) -> Arg:
        """Create an option taking exactly one value from `valid_values`."""
        arg = cls.single_value_option(name, short_name, description)
        arg.set_valid_values(valid_values)
        return arg

    @classmethod
    def multi_values_option(
        cls,
        name: str,
        short_name: str | None,
        description: str | None = None,
        max_values: int = 1,
        values_delimiter: str | None = ",",
    ) -> Arg:
        """
        Create an option taking between one and `max_values` values.

        Values may be repeated across occurrences (`-t a -t b`), given after a
        single occurrence (`-t a b`), or joined with the delimiter in an
        attached value (`-t=a,b`).
        """
        if max_values < 1:
            raise ArgumentDeclarationError(
                f"max_values of '{name}' must be a positive integer"
            )
        return cls(
            name=name,
            short_name=short_name,
            long_name=name,
            description=description,
            min_values=1,
            max_values=max_values,
            values_delimiter=values_delimiter,
            properties={ArgProperty.TAKES_VALUE},
        )

    @classmethod
    def multi_values_option_with_valid_values(
        cls,
        name: str,
        short_name: str | None,
        description: str | None,
        max_values: int,
        valid_values: Iterable[str],
        values_delimiter: str | None = ",",
    ) -> Arg:
        """Create a multi-value option restricted to `valid_values`."""
        arg = cls.multi_values_option(
            name, short_name, description, max_values, values_delimiter
        )
        arg.set_valid_values(valid_values)
        return arg

    @classmethod
    def positional(
        cls,
        name: str,
        description: str | None = None,
        index: int | None = None,
        max_values: int = 1,
    ) -> Arg:
        """
        Create a positional argument.

        When `index` is None, `Command.add_arg()` assigns the next free index.
        A `max_values` above one lets the positional absorb extra values.
        """
        return cls(
            name=name,
            description=description,
            index=index,
            min_values=1,
            max_values=max_values,
            properties={ArgProperty.TAKES_VALUE},
        )

    def _validate_short_name(self, short_name: str) -> None:
        if len(short_name) != 1 or short_name in ("-", "="):
            raise ArgumentDeclarationError(
                f"Short name {short_name!r} of '{self.name}' must be a "
                "single character other than '-' and '='"
            )

    def _validate_long_name(self, long_name: str) -> None:
        if not long_name or long_name.startswith("-") or "=" in long_name:
            raise ArgumentDeclarationError(
                f"Long name {long_name!r} of '{self.name}' must be non-empty "
                "and must not start with '-' or contain '='"
            )

    @staticmethod
    def _validate_arity(min_values: int, max_values: int) -> None:
        if min_values < 0 or max_values < 0:
            raise ArgumentDeclarationError("Arity bounds must not be negative")
        if min_values > max_values:
            raise ArgumentDeclarationError(
                f"min_values ({min_values}) must not exceed max_values ({max_values})"
            )

    def set_short_name(self, short_name: str) -> Arg:
        self._validate_short_name(short_name)
        self.short_name = short_name
        return self

    def set_long_name(self, long_name: str) -> Arg:
        self._validate_long_name(long_name)
        self.long_name = long_name
        return self

    def set_min_values(self, min_values: int) -> Arg:
        self._validate_arity(min_values, self.max_values)
        self.min_values = min_values
        return self

    def set_max_values(self, max_values: int) -> Arg:
        self._validate_arity(self.min_values, max_values)
        if max_values == 0 and self.is_positional:
            raise ArgumentDeclarationError(
                f"Positional argument '{self.name}' must accept at least one value"
            )
        self.max_values = max_values
        if max_values > 0:
            self.properties.add(ArgProperty.TAKES_VALUE)
        else:
            self.properties.discard(ArgProperty.TAKES_VALUE)
        return self

    def set_values_delimiter(self, delimiter: str) -> Arg:
        if len(delimiter) != 1:
            raise ArgumentDeclarationError(
                f"Delimiter of '{self.name}' must be a single character"
            )
        self.values_delimiter = delimiter
        return self

    def set_valid_values(self, valid_values: Iterable[str]) -> Arg:
        if isinstance(valid_values, (str, dict)):
            raise ArgumentDeclarationError(
                f"valid_values of '{self.name}' must be a list of strings"
            )
        values = list(valid_values)
        if not all(isinstance(value, str) for value in values):
            raise ArgumentDeclarationError(
                f"valid_values of '{self.name}' must be a list of strings"
            )
        self.valid_values = values
        return self

    def set_default_value(self, value: str) -> Arg:
        return self.set_default_values([value])

    def set_default_values(self, values: Iterable[str]) -> Arg:
        defaults = list(values)
        if self.valid_values:
            for value in defaults:
                if value not in self.valid_values:
                    raise ArgumentDeclarationError(
                        f"Default value '{value}' of '{self.name}' not in allowed "
                        f"values: {self.valid_values}"
                    )
        self.default_values = defaults
        return self

    def set_value_placeholder(self, placeholder: str) -> Arg:
        self.value_placeholder = placeholder
        return self

    def set_index(self, index: int) -> Arg:
        if index < 1:
            raise ArgumentDeclarationError(
                f"Index of '{self.name}' must be a positive integer"
            )
        self.index = index
        return self

    def set_property(self, prop: ArgProperty | str) -> Arg:
        self.properties.add(ArgProperty(prop))
        return self

    def unset_property(self, prop: ArgProperty | str) -> Arg:
        self.properties.discard(ArgProperty(prop))
        return self

    def has_property(self, prop: ArgProperty | str) -> bool:
        return ArgProperty(prop) in self.properties

    @property
    def is_positional(self) -> bool:
        return self.short_name is None and self.long_name is None

    @property
    def takes_value(self) -> bool:
        return ArgProperty.TAKES_VALUE in self.properties

    @property
    def is_switch(self) -> bool:
        return not self.takes_value

    def is_valid_value(self, value: str) -> bool:
        """Return True if `value` is allowed by the allow-list (if any)."""
        if not self.valid_values:
            return True
        return value in self.valid_values

    def get_placeholder_text(self) -> str:
        """Get the value text shown in usage and help output."""
        if self.valid_values:
            return f"{{{','.join(self.valid_values)}}}"
        placeholder = self.value_placeholder or self.name.upper()
        if self.max_values > 1:
            return f"{placeholder}..."
        return placeholder

    def get_flags_text(self) -> str:
        """Get the `-s, --long` text for a named argument."""
        flags = []
        if self.short_name:
            flags.append(f"-{self.short_name}")
        if self.long_name:
            flags.append(f"--{self.long_name}")
        return ", ".join(flags)
