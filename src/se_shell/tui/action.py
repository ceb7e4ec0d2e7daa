"""
ACTION block display for echoed commands.

In verbose mode the shell echoes each command before running it.
"""

from typing import Any, Optional

from rich.table import Table
from rich.text import Text

from .console import ShellConsole, get_console


def format_action_params(params: dict[str, Any]) -> Table:
    """
    Format command arguments as a Rich table.

    Args:
        params: Dictionary of parameter names to values

    Returns:
        Rich Table renderable
    """
    table = Table(show_header=False, box=None, padding=(0, 1))
    table.add_column("Param", style="bold")
    table.add_column("Value")

    for key, value in params.items():
        str_value = str(value)
        if len(str_value) > 100:
            str_value = str_value[:97] + "..."
        table.add_row(f"--{key.replace('_', '-')}", str_value)

    return table


def print_action(
    command: str,
    *,
    params: Optional[dict[str, Any]] = None,
    console: Optional[ShellConsole] = None,
) -> None:
    """
    Print an ACTION block for a command about to run.

    Args:
        command: Command name (e.g. "find-element")
        params: Parsed arguments
        console: Console to use (defaults to global console)
    """
    console = console or get_console()

    content = Text()
    content.append("> ", style="bold")
    content.append(command, style=f"bold {console.config.color_action}")

    console.print_block(content, "action")
    if params:
        console.print(format_action_params(params))
