#!/usr/bin/env python
"""
Simple Navigation Example

Drives a browser through a few shell commands: open example.com, read the
title, follow the only link and take a screenshot.

Usage:
    python examples/simple_navigation.py

Requirements:
    - Chrome installed (Selenium Manager fetches chromedriver)
    - se-shell installed: pip install -e .
"""

import asyncio

from se_shell.shell import ShellRunner

COMMANDS = [
    "start-driver --browser chrome --state headless",
    "navigate --url example.com",
    "get-title",
    "find-element --by tag-name --value a --single",
    "click --element E1",
    "get-url",
    "screenshot --path example.png",
]


async def main():
    """Run the commands, stopping at the first failure."""
    runner = ShellRunner(verbose=True)
    try:
        await runner.run_lines(COMMANDS)
    finally:
        await runner.close()


if __name__ == "__main__":
    asyncio.run(main())
