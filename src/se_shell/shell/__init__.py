"""
Command shell: parsing lines into tool calls and running them.
"""

from .parser import (
    BUILTIN_COMMANDS,
    ShellArgumentParser,
    build_parser,
    command_name,
    parse_command,
    split_line,
    tool_name,
)
from .runner import ShellRunner

__all__ = [
    "BUILTIN_COMMANDS",
    "ShellArgumentParser",
    "ShellRunner",
    "build_parser",
    "command_name",
    "parse_command",
    "split_line",
    "tool_name",
]
