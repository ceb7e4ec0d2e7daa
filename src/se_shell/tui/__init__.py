"""
Rich TUI Interface Module

Terminal output for the shell, built on the Rich library.

Components:
- ShellConsole: Console wrapper with themed blocks
- TUIConfig: Colors and display options from the environment
- ACTION/RESULT/WARNING block functions
- Spinner for long-running commands
"""

from se_shell.tui.console import (
    BlockType,
    ShellConsole,
    TUIConfig,
    get_console,
)
from se_shell.tui.action import (
    format_action_params,
    print_action,
)
from se_shell.tui.result import (
    print_data_result,
    print_error,
    print_records,
    print_result,
    print_tool_result,
)
from se_shell.tui.progress import action_spinner

__all__ = [
    # Console infrastructure
    "BlockType",
    "ShellConsole",
    "TUIConfig",
    "get_console",
    # Action blocks
    "format_action_params",
    "print_action",
    # Result blocks
    "print_data_result",
    "print_error",
    "print_records",
    "print_result",
    "print_tool_result",
    # Progress
    "action_spinner",
]
