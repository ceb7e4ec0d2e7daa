"""
RESULT block display for command output.

Renders what tools return: scalars as a one-line result, dicts as a
field/value table, lists of dicts as a rich Table, and failures as a
warning block.
"""

from typing import Any, Literal, Optional

from rich.table import Table
from rich.text import Text

from ..tools.base import ToolResult
from .console import ShellConsole, get_console

OutputFormat = Literal["table", "json"]

MAX_CELL = 100


def _cell(value: Any) -> str:
    if value is None:
        return ""
    str_value = str(value)
    if len(str_value) > MAX_CELL:
        str_value = str_value[: MAX_CELL - 3] + "..."
    return str_value


def print_result(
    content: str,
    *,
    success: bool = True,
    title: Optional[str] = None,
    console: Optional[ShellConsole] = None,
) -> None:
    """
    Print a RESULT block displaying a command outcome.

    Args:
        content: The result content to display
        success: Whether the command was successful
        title: Custom title (overrides default "[RESULT]")
        console: Console to use (defaults to global console)
    """
    console = console or get_console()

    text = Text()
    status_icon = "✓" if success else "✗"
    status_style = "green" if success else "red"
    text.append(f"{status_icon} ", style=f"bold {status_style}")
    text.append(content)

    console.print_block(text, "result", title)


def print_error(
    error_message: str,
    *,
    error_type: Optional[str] = None,
    suggestion: Optional[str] = None,
    console: Optional[ShellConsole] = None,
) -> None:
    """
    Print a failed command as a WARNING block.

    Args:
        error_message: The error message
        error_type: Exception type name, if any
        suggestion: Hint for the user
        console: Console to use (defaults to global console)
    """
    console = console or get_console()

    content = Text()
    content.append("Warning", style="bold")
    if error_type:
        content.append(f" ({error_type})", style="dim")
    content.append("\n\n")
    content.append(error_message)

    if suggestion:
        content.append("\n\n")
        content.append(suggestion, style="italic")

    console.print_block(content, "warning")


def print_data_result(
    data: dict[str, Any],
    *,
    title: Optional[str] = None,
    console: Optional[ShellConsole] = None,
) -> None:
    """
    Print a result containing one record.

    Args:
        data: Dictionary of data to display
        title: Custom title
        console: Console to use (defaults to global console)
    """
    console = console or get_console()

    table = Table(show_header=True, header_style="bold", box=None)
    table.add_column("Field", style="dim")
    table.add_column("Value")

    for key, value in data.items():
        table.add_row(str(key), _cell(value))

    console.print_block(table, "result", title)


def print_records(
    records: list[dict[str, Any]],
    *,
    title: Optional[str] = None,
    console: Optional[ShellConsole] = None,
) -> None:
    """
    Print a list of records as a table, one row per record.

    Columns are the union of the record keys in first-seen order.
    """
    console = console or get_console()

    columns: list[str] = []
    for record in records:
        for key in record:
            if key not in columns:
                columns.append(key)

    table = Table(show_header=True, header_style="bold")
    for column in columns:
        table.add_column(column)
    for record in records:
        table.add_row(*(_cell(record.get(column)) for column in columns))

    console.print_block(table, "result", title or f"[RESULT] {len(records)} row(s)")


def print_tool_result(
    result: ToolResult,
    *,
    output: OutputFormat = "table",
    console: Optional[ShellConsole] = None,
) -> None:
    """
    Render a ToolResult.

    Args:
        result: What the tool returned
        output: "table" for rich blocks, "json" for a JSON document
        console: Console to use (defaults to global console)
    """
    console = console or get_console()

    if output == "json":
        console.console.print_json(
            data={"success": result.success, "data": result.data, "error": result.error},
            default=str,
        )
        return

    if not result.success:
        print_error(
            result.error or "Command failed",
            error_type=result.metadata.get("exception"),
            console=console,
        )
        return

    data = result.data
    if data is None:
        print_result("OK", console=console)
    elif isinstance(data, dict):
        print_data_result(data, console=console)
    elif isinstance(data, list) and data and all(isinstance(item, dict) for item in data):
        print_records(data, console=console)
    elif isinstance(data, list):
        print_result("\n".join(_cell(item) for item in data) or "(empty)", console=console)
    else:
        print_result(str(data), console=console)
