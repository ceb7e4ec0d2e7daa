"""
Unit tests for the se-shell command line.
"""

from unittest.mock import AsyncMock, MagicMock, patch

from se_shell import main as cli


class TestParseArgs:
    def test_defaults(self):
        args = cli.parse_args([])
        assert args.script is None
        assert args.command == []
        assert not args.json
        assert not args.keep_going

    def test_commands_and_script(self):
        args = cli.parse_args(["-c", "start-driver", "-c", "get-title", "login.se", "--json", "-k"])
        assert args.command == ["start-driver", "get-title"]
        assert args.script == "login.se"
        assert args.json
        assert args.keep_going


def fake_runner(ok: bool = True) -> MagicMock:
    runner = MagicMock()
    runner.finished = False
    runner.run_lines = AsyncMock(return_value=ok)
    runner.run_script = AsyncMock(return_value=ok)
    runner.interactive = AsyncMock()
    runner.close = AsyncMock()
    return runner


class TestMain:
    def test_commands_then_script(self):
        runner = fake_runner()
        with patch.object(cli, "ShellRunner", return_value=runner), patch.object(cli, "configure_logging"):
            status = cli.main(["-c", "start-driver", "run.se"])
        assert status == 0
        runner.run_lines.assert_awaited_once_with(["start-driver"], stop_on_error=True)
        runner.run_script.assert_awaited_once_with("run.se", stop_on_error=True)
        runner.close.assert_awaited_once()

    def test_failure_skips_script(self):
        runner = fake_runner(ok=False)
        with patch.object(cli, "ShellRunner", return_value=runner), patch.object(cli, "configure_logging"):
            status = cli.main(["-c", "teleport", "run.se"])
        assert status == 1
        runner.run_script.assert_not_awaited()

    def test_no_input_is_interactive(self):
        runner = fake_runner()
        with patch.object(cli, "ShellRunner", return_value=runner), patch.object(cli, "configure_logging"):
            assert cli.main([]) == 0
        runner.interactive.assert_awaited_once()
        runner.run_lines.assert_not_awaited()

    def test_missing_script(self, tmp_path):
        runner = fake_runner()
        runner.run_lines = AsyncMock(return_value=True)
        runner.run_script = AsyncMock(side_effect=FileNotFoundError("no such file: gone.se"))
        with patch.object(cli, "ShellRunner", return_value=runner), patch.object(cli, "configure_logging"), \
                patch.object(cli, "print_error") as print_error:
            assert cli.main([str(tmp_path / "gone.se")]) == 1
        print_error.assert_called_once()
        runner.close.assert_awaited_once()
