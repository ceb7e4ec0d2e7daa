"""
Command Line Parsing

Turns a shell line such as

    find-element --by xpath --value "//button[@type='submit']" --timeout 5

into ``("find_element", {"by": "xpath", "value": "...", "timeout": 5.0})``.
The argparse parser is generated from the JSON schemas in the tool
registry, so new tools get a command without touching this module.
"""

import argparse
import shlex
from typing import Any, Optional

from .. import tools  # noqa: F401  (registers every command)
from ..errors import CommandError
from ..tools.base import get_all_tools, validate_variants

BUILTIN_COMMANDS = {
    "help": "Show all commands, or the flags of one command",
    "exit": "Leave the shell",
    "quit": "Leave the shell",
}

SCHEMA_TYPES = {
    "string": str,
    "integer": int,
    "number": float,
}


def command_name(tool_name: str) -> str:
    """find_element -> find-element"""
    return tool_name.replace("_", "-")


def tool_name(command: str) -> str:
    """find-element -> find_element"""
    return command.replace("-", "_")


class ShellArgumentParser(argparse.ArgumentParser):
    """ArgumentParser that raises CommandError instead of exiting."""

    def error(self, message: str):
        raise CommandError(f"{self.prog}: {message}")

    def exit(self, status: int = 0, message: Optional[str] = None):
        raise CommandError(message or f"{self.prog}: exited with status {status}")


def _add_argument(parser: argparse.ArgumentParser, name: str, schema: dict[str, Any], required: bool) -> None:
    flag = f"--{command_name(name)}"
    kwargs: dict[str, Any] = {
        "dest": name,
        "help": schema.get("description"),
        "default": None,
    }
    kind = schema.get("type", "string")

    if kind == "boolean":
        kwargs["action"] = "store_true"
    elif kind == "array":
        kwargs["action"] = "append"
        kwargs["type"] = SCHEMA_TYPES.get(schema.get("items", {}).get("type", "string"), str)
        kwargs["metavar"] = name.upper()
    else:
        kwargs["type"] = SCHEMA_TYPES.get(kind, str)
        if "enum" in schema:
            kwargs["choices"] = schema["enum"]
        else:
            kwargs["metavar"] = name.upper()

    if required and kind != "boolean":
        kwargs["required"] = True

    parser.add_argument(flag, **kwargs)


def build_parser() -> ShellArgumentParser:
    """
    Build the shell parser with one sub-command per registered tool.

    Returns:
        Parser whose ``commands`` attribute maps command names to their
        sub-parsers (used by ``help``)
    """
    parser = ShellArgumentParser(prog="se-shell", add_help=False, exit_on_error=False)
    subparsers = parser.add_subparsers(dest="command", parser_class=ShellArgumentParser)
    commands: dict[str, argparse.ArgumentParser] = {}

    for name, info in sorted(get_all_tools().items()):
        schema = info["parameters"] or {}
        required = set(schema.get("required", []))
        sub = subparsers.add_parser(
            command_name(name),
            help=info["description"],
            description=info["description"],
            add_help=False,
            exit_on_error=False,
        )
        for param, param_schema in schema.get("properties", {}).items():
            _add_argument(sub, param, param_schema, param in required)
        commands[command_name(name)] = sub

    help_parser = subparsers.add_parser("help", help=BUILTIN_COMMANDS["help"], add_help=False, exit_on_error=False)
    help_parser.add_argument("topic", nargs="?", default=None)
    for builtin in ("exit", "quit"):
        subparsers.add_parser(builtin, help=BUILTIN_COMMANDS[builtin], add_help=False, exit_on_error=False)

    parser.commands = commands
    return parser


def _strip_comment(line: str) -> str:
    """Cut the line at an unquoted '#' that starts a word, as bash does."""
    quote = None
    escaped = False
    for index, char in enumerate(line):
        if escaped:
            escaped = False
        elif quote:
            if char == quote:
                quote = None
            elif char == "\\" and quote == '"':
                escaped = True
        elif char == "\\":
            escaped = True
        elif char in "'\"":
            quote = char
        elif char == "#" and (index == 0 or line[index - 1].isspace()):
            return line[:index]
    return line


def split_line(line: str) -> list[str]:
    """
    Tokenize a line with shell quoting.

    A '#' starts a comment only at the beginning of a word, so selectors
    like ``div#main`` and URL fragments pass through.
    """
    lexer = shlex.shlex(_strip_comment(line), posix=True)
    lexer.whitespace_split = True
    lexer.commenters = ""
    try:
        return list(lexer)
    except ValueError as e:
        raise CommandError(f"Cannot parse line: {e}")


def parse_command(
    line: str,
    parser: Optional[ShellArgumentParser] = None,
) -> Optional[tuple[str, dict[str, Any]]]:
    """
    Parse one shell line.

    Args:
        line: Raw input line
        parser: Parser from build_parser() (built on demand)

    Returns:
        (tool_name, kwargs) with unset flags dropped, or None for a blank
        or comment line. Built-ins come back as ("help", {"topic": ...})
        and ("exit", {}).

    Raises:
        CommandError: Unknown command, bad flags or variant violations
    """
    tokens = split_line(line)
    if not tokens:
        return None

    parser = parser or build_parser()
    command = tokens[0]
    if command not in parser.commands and command not in BUILTIN_COMMANDS:
        raise CommandError(f"Unknown command '{command}'. Type 'help' to list commands.")

    try:
        namespace = parser.parse_args(tokens)
    except argparse.ArgumentError as e:
        raise CommandError(f"{command}: {e}")

    arguments = {
        key: value
        for key, value in vars(namespace).items()
        if key != "command" and value is not None
    }

    if command in ("exit", "quit"):
        return "exit", {}
    if command == "help":
        return "help", arguments

    name = tool_name(command)
    validate_variants(name, arguments)
    return name, arguments
