"""
Shell Runner

Executes parsed command lines against a SessionManager and renders the
results. Used by the interactive prompt, ``-c`` commands and script files.
"""

import asyncio
import logging
import signal
import threading
from pathlib import Path
from typing import Any, Iterable, Optional, Union

from ..driver.session import SessionManager
from ..errors import CommandError, ShellError
from ..tools.base import ToolResult, get_tool
from ..tui import (
    ShellConsole,
    action_spinner,
    get_console,
    print_action,
    print_records,
    print_tool_result,
)
from ..tui.result import OutputFormat
from .parser import BUILTIN_COMMANDS, build_parser, command_name, parse_command

logger = logging.getLogger(__name__)

# Commands that block for a while; shown with a spinner
SLOW_COMMANDS = {"start_driver", "wait_element", "wait_driver", "sleep", "navigate"}

PROMPT = "[bold green]se>[/bold green] "


class ShellRunner:
    """
    Runs shell commands.

    Failures never raise out of ``execute``: bad lines and selenium errors
    both come back as failed ToolResults and are printed as warnings.
    """

    def __init__(
        self,
        manager: Optional[SessionManager] = None,
        console: Optional[ShellConsole] = None,
        output: OutputFormat = "table",
        verbose: bool = False,
    ):
        self.manager = manager or SessionManager()
        self.console = console or get_console()
        self.output = output
        self.verbose = verbose
        self.parser = build_parser()
        self.finished = False

    def _failure(self, error: Exception) -> ToolResult:
        logger.warning("%s", error)
        result = ToolResult(
            success=False,
            error=str(error),
            metadata={"exception": type(error).__name__},
        )
        print_tool_result(result, output=self.output, console=self.console)
        return result

    async def execute(self, line: str) -> Optional[ToolResult]:
        """
        Parse and run one line.

        Args:
            line: Command line (blank lines and '#' comments are ignored)

        Returns:
            The command's ToolResult, or None for blank/comment lines
        """
        try:
            parsed = parse_command(line, self.parser)
        except ShellError as e:
            return self._failure(e)

        if parsed is None:
            return None

        name, arguments = parsed
        if name == "exit":
            self.finished = True
            return ToolResult(success=True)
        if name == "help":
            return self.show_help(arguments.get("topic"))

        return await self.call(name, arguments)

    async def call(self, name: str, arguments: dict[str, Any]) -> ToolResult:
        """
        Run a registered tool with already-parsed arguments.

        Args:
            name: Tool name (underscored)
            arguments: Keyword arguments for the tool

        Returns:
            The tool's ToolResult
        """
        info = get_tool(name)
        if info is None:
            return self._failure(CommandError(f"Unknown command '{command_name(name)}'"))

        if self.verbose:
            print_action(command_name(name), params=arguments, console=self.console)

        try:
            if info["scope"] == "session":
                leading = (self.manager.get(),)
            elif info["scope"] == "manager":
                leading = (self.manager,)
            else:
                leading = ()
        except ShellError as e:
            return self._failure(e)

        function = info["function"]
        if name in SLOW_COMMANDS and self.output == "table":
            with action_spinner(f"{command_name(name)}...", console=self.console):
                result = await function(*leading, **arguments)
        else:
            result = await function(*leading, **arguments)

        print_tool_result(result, output=self.output, console=self.console)
        return result

    def show_help(self, topic: Optional[str] = None) -> ToolResult:
        """Print the command list, or the flags of one command."""
        if topic is None:
            rows = [
                {"command": command, "description": sub.description}
                for command, sub in self.parser.commands.items()
            ]
            rows.extend(
                {"command": command, "description": description}
                for command, description in BUILTIN_COMMANDS.items()
            )
            print_records(rows, title="[HELP]", console=self.console)
            return ToolResult(success=True, data=rows)

        sub = self.parser.commands.get(topic)
        if sub is None:
            return self._failure(CommandError(f"Unknown command '{topic}'"))
        text = sub.format_help()
        self.console.print(text)
        return ToolResult(success=True, data=text)

    async def run_lines(self, lines: Iterable[str], stop_on_error: bool = True) -> bool:
        """
        Run lines in order.

        Args:
            lines: Command lines
            stop_on_error: Stop at the first failed command

        Returns:
            True if every command succeeded
        """
        ok = True
        for line in lines:
            result = await self.execute(line)
            if result is not None and not result.success:
                ok = False
                if stop_on_error:
                    break
            if self.finished:
                break
        return ok

    async def run_script(self, path: Union[str, Path], stop_on_error: bool = True) -> bool:
        """Run every line of a script file (see run_lines)."""
        script = Path(path)
        logger.info("Running script %s", script)
        return await self.run_lines(script.read_text(encoding="utf-8").splitlines(), stop_on_error)

    def _prompt(self) -> str:
        current = self.manager.current
        if current is None:
            return PROMPT
        return f"[dim]({current.name})[/dim] {PROMPT}"

    async def execute_interruptibly(self, line: str) -> Optional[ToolResult]:
        """
        Run one line as a task that Ctrl-C cancels.

        Returns None when the command was interrupted; the shell goes back
        to the prompt instead of exiting.
        """
        loop = asyncio.get_running_loop()
        task = asyncio.ensure_future(self.execute(line))
        interrupted = False

        def on_interrupt() -> None:
            nonlocal interrupted
            interrupted = True
            task.cancel()

        try:
            loop.add_signal_handler(signal.SIGINT, on_interrupt)
            installed = True
        except (NotImplementedError, RuntimeError):
            # No signal handlers on Windows event loops or outside the main thread
            installed = False

        try:
            return await task
        except asyncio.CancelledError:
            if not interrupted:
                raise
            logger.info("Interrupted: %s", line)
            self.console.print("\n[yellow]Command interrupted.[/yellow]")
            return None
        finally:
            if installed:
                loop.remove_signal_handler(signal.SIGINT)
                signal.signal(signal.SIGINT, signal.default_int_handler)

    async def interactive(self) -> None:
        """Read-eval loop until exit/quit or end of input; stops all drivers on the way out."""
        if threading.current_thread() is threading.main_thread():
            # Ctrl-C at the prompt raises KeyboardInterrupt instead of cancelling the loop
            signal.signal(signal.SIGINT, signal.default_int_handler)

        self.console.print("[bold]se-shell[/bold]: WebDriver commands. Type 'help' for a list, 'exit' to leave.\n")
        try:
            while not self.finished:
                try:
                    line = self.console.input(self._prompt())
                except EOFError:
                    self.console.print()
                    break
                except KeyboardInterrupt:
                    self.console.print("\n[yellow]Interrupted. Type 'exit' to leave.[/yellow]")
                    continue

                await self.execute_interruptibly(line)
        finally:
            await self.close()

    async def close(self) -> None:
        """Stop every running driver."""
        if len(self.manager):
            await self.manager.stop_all()
