# Argwalk CLI Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Rich-based help rendering for Argwalk commands.

Help is written to the output stream resolved by the command (its own override,
else one inherited from its parents, else `sys.stdout`).

Layout:

    usage: app run [OPTIONS] <FILE> [COMMAND]

    <long description>

    commands:          (grouped by `group_id`, hidden commands omitted)
    positional:
    options:

    examples:
"""
from __future__ import annotations

from collections import defaultdict

from rich.console import Console
from rich.markup import escape

from argwalk.command import Command


def get_usage(command: Command) -> str:
    """Return the plain usage line of `command`, without the `usage:` prefix."""
    if command.use:
        return command.use
    parts = [" ".join(command.get_path())]
    if command.options:
        parts.append("[OPTIONS]")
    for arg in command.positional_args:
        placeholder = f"<{arg.value_placeholder or arg.name}>"
        if arg.max_values > 1:
            placeholder += "..."
        parts.append(placeholder)
    if visible_subcommands(command):
        parts.append("[COMMAND]")
    return " ".join(parts)


def visible_subcommands(command: Command) -> list[Command]:
    return [subcommand for subcommand in command.subcommands if not subcommand.hidden]


def _print_row(console: Console, left: str, right: str | None) -> None:
    line = f"  {left:<30} "
    help_text = escape(right or "")
    if help_text and len(left) > 30:
        help_text = f"\n{'':<33}{help_text}"
    console.print(f"{escape(line)}{help_text}")


def render_help(command: Command) -> None:
    """Print formatted help text for `command`."""
    console = Console(file=command.out_or_stdout(), highlight=False)

    console.print(f"[bold]usage:[/bold] {escape(get_usage(command))}\n")

    description = command.get_long_description()
    if description:
        console.print(escape(description) + "\n")

    if command.deprecated:
        console.print(f"[bold]deprecated:[/bold] {escape(command.deprecated)}\n")

    subcommands = visible_subcommands(command)
    if subcommands:
        groups: dict[str | None, list[Command]] = defaultdict(list)
        for subcommand in subcommands:
            groups[subcommand.group_id].append(subcommand)
        for group_id, group in groups.items():
            console.print(f"[bold]{escape(group_id or 'commands')}:[/bold]")
            for subcommand in group:
                names = ", ".join([subcommand.name, *subcommand.aliases])
                _print_row(console, names, subcommand.get_description())
        console.print()

    if command.positional_args:
        console.print("[bold]positional:[/bold]")
        for arg in command.positional_args:
            _print_row(console, arg.value_placeholder or arg.name, arg.description)
        console.print()

    if command.options:
        console.print("[bold]options:[/bold]")
        for arg in command.options:
            flags = arg.get_flags_text()
            if arg.takes_value:
                flags = f"{flags} {arg.get_placeholder_text()}"
            _print_row(console, flags, arg.description)

    if command.example:
        console.print("\n[bold]examples:[/bold]")
        console.print(escape(command.example), style="dim")


def render_version(command: Command) -> None:
    """Print `<name> <version>` for `command`."""
    console = Console(file=command.out_or_stdout(), highlight=False)
    console.print(escape(f"{command.name} {command.version or ''}".rstrip()))
