"""
se-shell CLI Entry Point

Runs shell commands interactively, from ``-c`` arguments or from a script
file.

Usage:
    se-shell
    se-shell -c "start-driver --state headless" -c "navigate --url example.com" -c "get-title"
    se-shell login.se --json --keep-going
"""

import argparse
import asyncio
import logging
import sys
from typing import Optional

from dotenv import load_dotenv

from se_shell.config import configure_logging, get_logger
from se_shell.shell import ShellRunner
from se_shell.tui import get_console, print_error

# Load environment variables
load_dotenv()

logger = get_logger(__name__)


def parse_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog="se-shell",
        description="Command shell for driving browsers over WebDriver",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    se-shell
    se-shell -c "start-driver --browser firefox --state headless" -c "navigate --url example.com"
    se-shell checkout.se --keep-going
        """,
    )

    parser.add_argument(
        "script",
        nargs="?",
        help="File with one command per line",
    )

    parser.add_argument(
        "--command", "-c",
        action="append",
        default=[],
        help="Command to run (repeatable, runs before the script)",
    )

    parser.add_argument(
        "--json",
        action="store_true",
        help="Print results as JSON",
    )

    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Echo each command before running it",
    )

    parser.add_argument(
        "--keep-going", "-k",
        action="store_true",
        help="Continue after a failed command",
    )

    parser.add_argument(
        "--dev",
        action="store_true",
        help="Development mode with debug logging",
    )

    return parser.parse_args(argv)


async def run(args: argparse.Namespace) -> int:
    """
    Run the shell for parsed CLI arguments.

    Returns:
        Process exit status
    """
    runner = ShellRunner(
        output="json" if args.json else "table",
        verbose=args.verbose,
    )

    if not args.command and not args.script:
        await runner.interactive()
        return 0

    stop_on_error = not args.keep_going
    try:
        ok = await runner.run_lines(args.command, stop_on_error=stop_on_error)
        if args.script and (ok or not stop_on_error) and not runner.finished:
            ok = await runner.run_script(args.script, stop_on_error=stop_on_error) and ok
    finally:
        await runner.close()

    return 0 if ok else 1


def main(argv: Optional[list[str]] = None) -> int:
    """Main entry point."""
    args = parse_args(argv)

    configure_logging(
        level=logging.DEBUG if args.dev else None,
        verbose=args.dev,
    )
    logger.debug("Starting se-shell with %s", vars(args))

    try:
        return asyncio.run(run(args))
    except KeyboardInterrupt:
        get_console().print("\n[dim]Goodbye![/dim]")
        return 130
    except OSError as e:
        print_error(str(e), error_type=type(e).__name__)
        return 1


def cli() -> None:
    """Console script entry point."""
    sys.exit(main())


if __name__ == "__main__":
    cli()
