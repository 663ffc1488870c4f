# Argwalk CLI Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Defines the `RunHookManager` and `RunHookType` used by Argwalk commands to run
user code once the command line has been parsed.

Run hooks are invoked for the deepest command reached by a parse, in a fixed
order:

    persistent_pre_run → pre_run → run → post_run → persistent_post_run

`pre_run`, `run` and `post_run` come from the invoked command itself. The
persistent hooks come from the nearest command up the parent chain (starting
at the invoked command) that registered one, so a root command can wrap every
subcommand.

Each hook receives the invoked command and the values of its positional
arguments, in index order. Both sync and async hooks are supported.

Key Components:
- RunHookType: Enum of run phases, in invocation order
- RunHookManager: Registration and invocation of hooks for one command
- RunHook: Union of sync and async callables

Usage:
    command.hooks.register(RunHookType.RUN, lambda command, args: print(args))
"""
from __future__ import annotations

import inspect
from enum import Enum
from typing import TYPE_CHECKING, Any, Awaitable, Callable, Union

from argwalk.exceptions import InvalidHookError
from argwalk.logger import logger

if TYPE_CHECKING:
    from argwalk.command import Command

RunHook = Union[
    Callable[["Command", list[str]], Any],
    Callable[["Command", list[str]], Awaitable[Any]],
]


class RunHookType(Enum):
    """
    Enum for run phases, declared in invocation order.

    Members:
        PERSISTENT_PRE_RUN: Inherited by subcommands; runs first.
        PRE_RUN: Runs before `run`.
        RUN: The command body.
        POST_RUN: Runs after `run`.
        PERSISTENT_POST_RUN: Inherited by subcommands; runs last.

    Aliases:
        "pre" → "pre_run"
        "post" → "post_run"
        "persistent_pre" → "persistent_pre_run"
        "persistent_post" → "persistent_post_run"

    Example:
        RunHookType("pre") → RunHookType.PRE_RUN
    """

    PERSISTENT_PRE_RUN = "persistent_pre_run"
    PRE_RUN = "pre_run"
    RUN = "run"
    POST_RUN = "post_run"
    PERSISTENT_POST_RUN = "persistent_post_run"

    @classmethod
    def choices(cls) -> list[RunHookType]:
        """Return every run phase in invocation order."""
        return list(cls)

    @classmethod
    def _get_alias(cls, value: str) -> str:
        aliases = {
            "pre": "pre_run",
            "post": "post_run",
            "persistent_pre": "persistent_pre_run",
            "persistent_post": "persistent_post_run",
        }
        return aliases.get(value, value)

    @classmethod
    def _missing_(cls, value: object) -> RunHookType:
        if not isinstance(value, str):
            raise ValueError(f"Invalid {cls.__name__}: {value!r}")
        normalized = value.strip().lower().replace("-", "_")
        alias = cls._get_alias(normalized)
        for member in cls:
            if member.value == alias:
                return member
        valid = ", ".join(member.value for member in cls)
        raise ValueError(f"Invalid {cls.__name__}: '{value}'. Must be one of: {valid}")

    @property
    def is_persistent(self) -> bool:
        return self in (RunHookType.PERSISTENT_PRE_RUN, RunHookType.PERSISTENT_POST_RUN)

    def __str__(self) -> str:
        return self.value


class RunHookManager:
    """
    Manages run hooks for a single command.

    Methods:
        register(hook_type, hook): Register a callable for a run phase.
        has(hook_type): Whether any hook is registered for a phase.
        clear(hook_type): Remove hooks for one or all phases.
        trigger(hook_type, command, args): Invoke the hooks of a phase.
    """

    def __init__(self) -> None:
        self._hooks: dict[RunHookType, list[RunHook]] = {
            hook_type: [] for hook_type in RunHookType
        }

    def register(self, hook_type: RunHookType | str, hook: RunHook) -> None:
        """
        Register a new hook for a run phase.

        Raises:
            ValueError: If the hook type is invalid.
            InvalidHookError: If the hook is not callable.
        """
        hook_type = RunHookType(hook_type)
        if not callable(hook):
            raise InvalidHookError(f"{hook_type} hook {hook!r} is not callable")
        self._hooks[hook_type].append(hook)

    def has(self, hook_type: RunHookType) -> bool:
        return bool(self._hooks[hook_type])

    def get(self, hook_type: RunHookType) -> list[RunHook]:
        return list(self._hooks[hook_type])

    def clear(self, hook_type: RunHookType | None = None) -> None:
        """
        Clear registered hooks for one or all run phases.

        Args:
            hook_type (RunHookType | None): If None, clears all hooks.
        """
        if hook_type:
            self._hooks[hook_type] = []
        else:
            for phase in self._hooks:
                self._hooks[phase] = []

    async def trigger(
        self, hook_type: RunHookType, command: Command, args: list[str]
    ) -> None:
        """
        Invoke every hook registered for a run phase, in registration order.

        Exceptions raised by a hook are logged and propagate, aborting the run.
        """
        for hook in self._hooks[hook_type]:
            name = getattr(hook, "__name__", repr(hook))
            logger.debug("[Hook:%s] Running '%s' for '%s'", name, hook_type, command.name)
            try:
                if inspect.iscoroutinefunction(hook):
                    await hook(command, args)
                else:
                    result = hook(command, args)
                    if inspect.isawaitable(result):
                        await result
            except Exception as hook_error:
                logger.warning(
                    "[Hook:%s] raised an exception during '%s' for '%s': %s",
                    name,
                    hook_type,
                    command.name,
                    hook_error,
                )
                raise

    def __str__(self) -> str:
        """Return a formatted string of registered hooks grouped by run phase."""

        def format_hook_list(hooks: list[RunHook]) -> str:
            return ", ".join(getattr(h, "__name__", repr(h)) for h in hooks) if hooks else "-"

        lines = ["<RunHookManager>"]
        for hook_type in RunHookType:
            lines.append(f"  {hook_type.value}: {format_hook_list(self._hooks[hook_type])}")
        return "\n".join(lines)


async def execute_run_hooks(command: Command, args: list[str]) -> None:
    """
    Run every phase for `command` in order.

    Persistent phases run the hooks of the nearest command (itself or an
    ancestor) that registered them.
    """
    for hook_type in RunHookType.choices():
        if hook_type.is_persistent:
            owner = command.find_persistent_hook_owner(hook_type)
            if owner is None:
                continue
            await owner.hooks.trigger(hook_type, command, args)
        else:
            await command.hooks.trigger(hook_type, command, args)
