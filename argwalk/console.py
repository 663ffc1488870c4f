# Argwalk CLI Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""Global console instance for Argwalk CLI output."""
from rich.console import Console

console = Console(highlight=False)
