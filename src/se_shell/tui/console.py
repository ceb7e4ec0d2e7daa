"""
Rich TUI Console Setup

Provides the core console used by the shell for command echoes, results
and warnings. Configured via environment variables.
"""

import os
from dataclasses import dataclass
from datetime import datetime
from typing import Literal, Optional

from rich.console import Console
from rich.panel import Panel
from rich.style import Style
from rich.theme import Theme


# Block types for shell output
BlockType = Literal["action", "result", "warning"]


@dataclass
class TUIConfig:
    """
    TUI configuration loaded from environment variables.

    Attributes:
        color_action: Color for ACTION blocks (echoed commands)
        color_result: Color for RESULT blocks (command output)
        color_warning: Color for WARNING blocks (failed commands)
        show_timestamps: Whether to display timestamps
    """

    color_action: str = "green"
    color_result: str = "cyan"
    color_warning: str = "yellow"
    show_timestamps: bool = False

    @classmethod
    def from_env(cls) -> "TUIConfig":
        """Load configuration from environment variables."""
        return cls(
            color_action=os.getenv("COLOR_ACTION", "green"),
            color_result=os.getenv("COLOR_RESULT", "cyan"),
            color_warning=os.getenv("COLOR_WARNING", "yellow"),
            show_timestamps=os.getenv("SHOW_TIMESTAMPS", "false").lower() == "true",
        )


def create_theme(config: TUIConfig) -> Theme:
    """Create a Rich theme from TUI configuration."""
    return Theme(
        {
            "action": Style(color=config.color_action, bold=True),
            "result": Style(color=config.color_result, bold=True),
            "warning": Style(color=config.color_warning, bold=True),
            "timestamp": Style(dim=True),
            "label": Style(bold=True),
        }
    )


class ShellConsole:
    """
    Rich console wrapper for shell output.

    All rendering goes through ``self.console`` so tests can swap in a
    recording Console.
    """

    def __init__(self, config: Optional[TUIConfig] = None, console: Optional[Console] = None):
        """
        Initialize the shell console.

        Args:
            config: TUI configuration. If None, loads from environment.
            console: Rich console to write to (a new one by default)
        """
        self.config = config or TUIConfig.from_env()
        self._theme = create_theme(self.config)
        self.console = console or Console(theme=self._theme)

    def _get_timestamp(self) -> str:
        """Get formatted timestamp if enabled."""
        if self.config.show_timestamps:
            return datetime.now().strftime("%H:%M:%S")
        return ""

    def _get_block_style(self, block_type: BlockType) -> tuple[str, str]:
        styles = {
            "action": (self.config.color_action, "ACTION"),
            "result": (self.config.color_result, "RESULT"),
            "warning": (self.config.color_warning, "WARNING"),
        }
        return styles[block_type]

    def block_title(self, block_type: BlockType, title: Optional[str] = None) -> str:
        """Panel title for a block, with timestamp when enabled."""
        _, label = self._get_block_style(block_type)
        block_title = title or f"[{label}]"
        timestamp = self._get_timestamp()
        if timestamp:
            block_title = f"{timestamp} {block_title}"
        return block_title

    def print_block(
        self,
        content,
        block_type: BlockType,
        title: Optional[str] = None,
    ) -> None:
        """
        Print a styled block to the console.

        Args:
            content: Text or renderable to display
            block_type: Type of block (action, result, warning)
            title: Optional title to override default label
        """
        color, _ = self._get_block_style(block_type)
        panel = Panel(
            content,
            title=self.block_title(block_type, title),
            title_align="left",
            border_style=color,
            padding=(0, 1),
        )
        self.console.print(panel)

    def print(self, *args, **kwargs) -> None:
        """Passthrough to underlying Rich console."""
        self.console.print(*args, **kwargs)

    def input(self, prompt: str = "") -> str:
        """Read a line (raises EOFError at end of input)."""
        return self.console.input(prompt)

    def status(self, message: str):
        """Create a status context for progress indication."""
        return self.console.status(message)


# Global console instance
_console: Optional[ShellConsole] = None


def get_console() -> ShellConsole:
    """Get or create the global console instance."""
    global _console
    if _console is None:
        _console = ShellConsole()
    return _console

