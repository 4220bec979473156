"""Shared Rich Console for the command line."""

from typing import Optional

from rich.console import Console

_console: Optional[Console] = None


def get_console() -> Console:
    """Get or create the command line Rich Console."""
    global _console
    if _console is None:
        _console = Console()
    return _console


def print_status(label: str, ok: bool, detail: str = "") -> None:
    """Print a coloured ``[OK]``/``[FAIL]`` status line."""
    marker = "[green][OK][/green]" if ok else "[red][FAIL][/red]"
    suffix = f" {detail}" if detail else ""
    get_console().print(f"{marker} {label}{suffix}")
