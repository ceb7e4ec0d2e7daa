"""
Unit tests for the shell runner: dispatch, rendering, scripts and the prompt loop.
"""

import asyncio
import signal
from unittest.mock import MagicMock

import pytest
import pytest_asyncio

from se_shell.shell.runner import ShellRunner


@pytest.fixture
def runner(manager, shell_console):
    return ShellRunner(manager=manager, console=shell_console)


def output_of(runner) -> str:
    return runner.console.console.file.getvalue()


class TestExecute:
    @pytest.mark.asyncio
    async def test_blank_line(self, runner):
        assert await runner.execute("") is None
        assert await runner.execute("# nothing") is None

    @pytest.mark.asyncio
    async def test_session_command_without_driver(self, runner):
        result = await runner.execute("get-title")
        assert not result.success
        assert result.metadata["exception"] == "NoSessionError"
        assert "start-driver" in output_of(runner)

    @pytest.mark.asyncio
    async def test_start_then_navigate(self, runner, manager):
        result = await runner.execute("start-driver --name main --state headless")
        assert result.success
        assert manager.current.name == "main"

        driver = manager.current.driver
        driver.current_url = "https://example.com/"
        driver.title = "Example Domain"
        result = await runner.execute("navigate --url example.com")

        assert result.success
        driver.get.assert_called_once_with("https://example.com")
        assert "Example Domain" in output_of(runner)

    @pytest.mark.asyncio
    async def test_scope_none_runs_without_driver(self, runner):
        result = await runner.execute("get-keys")
        assert result.success
        assert "{{ENTER}}" in output_of(runner)

    @pytest.mark.asyncio
    async def test_bad_line_is_a_warning(self, runner):
        result = await runner.execute("teleport --to mars")
        assert not result.success
        assert result.metadata["exception"] == "CommandError"
        assert "WARNING" in output_of(runner)

    @pytest.mark.asyncio
    async def test_selenium_failure_is_a_warning(self, runner, manager):
        await runner.execute("start-driver")
        manager.current.driver.find_elements.return_value = []
        result = await runner.execute("find-element --value '#missing'")
        assert not result.success
        assert "No element found using css '#missing'" in output_of(runner)

    @pytest.mark.asyncio
    async def test_exit(self, runner):
        result = await runner.execute("exit")
        assert result.success
        assert runner.finished

    @pytest.mark.asyncio
    async def test_json_output(self, manager, shell_console):
        runner = ShellRunner(manager=manager, console=shell_console, output="json")
        await runner.execute("get-driver")
        assert '"success": true' in output_of(runner)

    @pytest.mark.asyncio
    async def test_verbose_echoes_command(self, manager, shell_console):
        runner = ShellRunner(manager=manager, console=shell_console, verbose=True)
        await runner.execute("get-driver --current")
        text = output_of(runner)
        assert "ACTION" in text
        assert "get-driver" in text


class TestHelp:
    @pytest.mark.asyncio
    async def test_command_list(self, runner):
        result = await runner.execute("help")
        assert result.success
        commands = [row["command"] for row in result.data]
        assert "find-element" in commands
        assert "exit" in commands

    @pytest.mark.asyncio
    async def test_one_command(self, runner):
        result = await runner.execute("help navigate")
        assert "--url" in result.data

    @pytest.mark.asyncio
    async def test_unknown_topic(self, runner):
        result = await runner.execute("help teleport")
        assert not result.success


class TestRunLines:
    @pytest.mark.asyncio
    async def test_stop_on_error(self, runner, manager):
        ok = await runner.run_lines(["teleport", "start-driver"])
        assert ok is False
        assert len(manager) == 0

    @pytest.mark.asyncio
    async def test_keep_going(self, runner, manager):
        ok = await runner.run_lines(["teleport", "start-driver"], stop_on_error=False)
        assert ok is False
        assert len(manager) == 1

    @pytest.mark.asyncio
    async def test_exit_stops_the_run(self, runner, manager):
        ok = await runner.run_lines(["exit", "start-driver"])
        assert ok is True
        assert len(manager) == 0

    @pytest.mark.asyncio
    async def test_run_script(self, runner, manager, tmp_path):
        script = tmp_path / "session.se"
        script.write_text(
            "# open two browsers\n"
            "start-driver --name a\n"
            "\n"
            "start-driver --name b\n"
            "switch-driver --name a\n",
            encoding="utf-8",
        )
        assert await runner.run_script(script) is True
        assert manager.current.name == "a"
        assert len(manager) == 2


class TestInteractive:
    @pytest.mark.asyncio
    async def test_loop_until_eof_stops_drivers(self, runner, manager):
        runner.console.input = MagicMock(side_effect=["start-driver", "teleport", EOFError()])
        await runner.interactive()
        assert runner.console.input.call_count == 3
        assert len(manager) == 0

    @pytest.mark.asyncio
    async def test_keyboard_interrupt_keeps_going(self, runner):
        runner.console.input = MagicMock(side_effect=[KeyboardInterrupt(), "exit"])
        await runner.interactive()
        assert runner.finished
        assert "Interrupted" in output_of(runner)

    @pytest.mark.asyncio
    async def test_prompt_shows_current_driver(self, runner):
        await runner.execute("start-driver --name work")
        assert "(work)" in runner._prompt()


@pytest_asyncio.fixture
async def sigint_handlers(monkeypatch):
    """Record SIGINT handlers the runner installs on the running loop."""
    handlers = {}
    loop = asyncio.get_running_loop()
    monkeypatch.setattr(loop, "add_signal_handler", lambda sig, callback: handlers.__setitem__(sig, callback))
    monkeypatch.setattr(loop, "remove_signal_handler", lambda sig: handlers.pop(sig, None) is not None)
    return handlers


class TestCtrlC:
    @pytest.mark.asyncio
    async def test_interrupted_command_returns_to_prompt(self, runner, sigint_handlers):
        runner.console.input = MagicMock(side_effect=["sleep --seconds 5", "get-keys", EOFError()])
        loop = asyncio.get_running_loop()
        loop.call_later(0.05, lambda: sigint_handlers[signal.SIGINT]())

        await asyncio.wait_for(runner.interactive(), timeout=3)

        text = output_of(runner)
        assert "Command interrupted" in text
        assert "{{ENTER}}" in text
        assert runner.console.input.call_count == 3
        assert sigint_handlers == {}

    @pytest.mark.asyncio
    async def test_handler_only_while_command_runs(self, runner, sigint_handlers):
        result = await runner.execute_interruptibly("get-keys")
        assert result.success
        assert signal.SIGINT not in sigint_handlers

    @pytest.mark.asyncio
    async def test_outside_cancellation_propagates(self, runner, sigint_handlers):
        task = asyncio.ensure_future(runner.execute_interruptibly("sleep --seconds 5"))
        await asyncio.sleep(0.05)
        task.cancel()
        with pytest.raises(asyncio.CancelledError):
            await task
