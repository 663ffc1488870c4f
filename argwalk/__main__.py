"""
Argwalk CLI Parser

Copyright (c) 2025 rtj.dev LLC.
Licensed under the MIT License. See LICENSE file for details.
"""

import asyncio
import os
import sys
from pathlib import Path
from typing import Any

from argwalk.app import App
from argwalk.config import loader
from argwalk.console import console
from argwalk.hook_manager import RunHookType
from argwalk.utils import setup_logging


def find_argwalk_config() -> Path | None:
    candidates = [
        Path.cwd() / "argwalk.yaml",
        Path.cwd() / "argwalk.toml",
        Path.cwd() / ".argwalk.yaml",
        Path.cwd() / ".argwalk.toml",
        Path(os.environ.get("ARGWALK_CONFIG", "argwalk.yaml")),
        Path.home() / ".config" / "argwalk" / "argwalk.yaml",
        Path.home() / ".config" / "argwalk" / "argwalk.toml",
        Path.home() / ".argwalk.yaml",
        Path.home() / ".argwalk.toml",
    ]
    return next((p for p in candidates if p.exists()), None)


def bootstrap() -> Path | None:
    config_path = find_argwalk_config()
    if config_path and str(config_path.parent) not in sys.path:
        sys.path.insert(0, str(config_path.parent))
    return config_path


async def run(app: App, args: list[str]) -> int:
    """Run `app`, printing the match record when the invoked command has no run hook."""
    code = await app.run(args)
    if code == 0 and app.matches is not None:
        command, _ = app.get_invoked_command(app.matches)
        if not command.hooks.has(RunHookType.RUN):
            console.print_json(data=app.matches.as_dict())
    return code


def main() -> Any:
    setup_logging(log_filename=None)
    config_path = bootstrap()
    if not config_path:
        console.print(
            "[bold red]No argwalk config found.[/]\n"
            "Create argwalk.yaml or argwalk.toml in the current directory, "
            "or point $ARGWALK_CONFIG at one."
        )
        sys.exit(1)

    app = loader(config_path)
    sys.exit(asyncio.run(run(app, sys.argv[1:])))


if __name__ == "__main__":
    main()
