"""
Live progress indicators.

Shows a spinner while a long-running command (waits, driver start) is in
progress.
"""

from contextlib import contextmanager
from typing import Generator, Optional

from .console import ShellConsole, get_console


@contextmanager
def action_spinner(
    message: str,
    *,
    spinner: str = "dots",
    console: Optional[ShellConsole] = None,
) -> Generator[None, None, None]:
    """
    Context manager that shows a spinner while a command is in progress.

    Args:
        message: Message to display next to spinner
        spinner: Spinner style (dots, line, arc, etc.)
        console: Console to use (defaults to global console)

    Usage:
        with action_spinner("Waiting for element..."):
            await wait_element(session, ...)
    """
    console = console or get_console()

    with console.console.status(
        f"[{console.config.color_action}]{message}[/]",
        spinner=spinner,
    ):
        yield
