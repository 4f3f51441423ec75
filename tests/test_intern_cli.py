"""End-to-end tests for the intern front-end."""

import io
import subprocess
from unittest.mock import patch

import pytest

import intern_cli
from cli_config import CliConfig
from constants import ExitCodes
from errors import DependencyNotFound


def _run(argv, project, stdin=""):
    with patch("sys.stdin", io.StringIO(stdin)):
        return intern_cli.run_cli(argv, config=CliConfig(), cwd=str(project))


def _main(argv, stdin=""):
    with patch("sys.stdin", io.StringIO(stdin)):
        with pytest.raises(SystemExit) as exc_info:
            intern_cli.main(argv)
    return exc_info.value.code


class TestDefaultCommand:
    """No command given: run is executed."""

    def test_no_args_runs_tests(self, project, install_intern):
        install_intern(project, "4.1.0")
        with patch("adapters.cli4.run_node", return_value=0) as mock_run:
            assert _run([], project) == 0
        cmd = mock_run.call_args[0][0]
        assert cmd[1].endswith("intern.js")

    def test_flags_without_command_go_to_run(self, project, install_intern):
        install_intern(project, "3.4.6")
        with patch("adapters.cli3.run_node", return_value=0) as mock_run:
            _run(["-v", "--bail"], project)
        assert "bail=true" in mock_run.call_args[0][0]

    def test_runner_exit_code_is_returned(self, project, install_intern):
        install_intern(project, "4.1.0")
        with patch("adapters.cli4.run_node", return_value=5):
            assert _run(["run"], project) == 5

    def test_help_flag_does_not_run(self, project, install_intern, capsys):
        install_intern(project, "4.1.0")
        with patch("adapters.cli4.run_node") as mock_run:
            with pytest.raises(SystemExit) as exc_info:
                _run(["--help"], project)
        assert exc_info.value.code == 0
        mock_run.assert_not_called()
        assert "Run JavaScript tests" in capsys.readouterr().out


class TestCommands:
    """Explicit commands."""

    def test_version_command(self, project, install_intern, capsys):
        install_intern(project, "4.1.0")
        assert _run(["version"], project) == 0
        out = capsys.readouterr().out
        assert "intern-cli: 1.0.0" in out
        assert "intern: 4.1.0" in out

    def test_version_check_lists_dist_tags(self, project, install_intern, capsys):
        install_intern(project, "4.1.0")
        with patch("registry.npm.fetch_dist_tags", return_value={"latest": "4.2.0", "next": "4.3.0-beta.1"}):
            assert _run(["version", "--check"], project) == 0
        out = capsys.readouterr().out
        assert "latest: 4.2.0" in out
        assert "next: 4.3.0-beta.1" in out

    def test_help_for_command(self, project, install_intern, capsys):
        install_intern(project, "4.1.0")
        assert _run(["help", "run"], project) == 0
        out = capsys.readouterr().out
        assert "--webdriver" in out
        assert "--node" in out

    def test_serve_help_names_config_default_per_version(self, project, install_intern, capsys):
        install_intern(project, "4.1.0")
        assert _run(["help", "serve"], project) == 0
        out = capsys.readouterr().out
        assert "intern.json" in out
        assert "tests/intern.js" not in out

        install_intern(project, "3.4.6")
        assert _run(["help", "serve"], project) == 0
        assert "tests/intern.js" in capsys.readouterr().out

    def test_help_for_unknown_command(self, project, install_intern, capsys):
        install_intern(project, "4.1.0")
        assert _run(["help", "bogus"], project) == 0
        out = capsys.readouterr().out
        assert "Unknown command: bogus" in out
        assert "intern init" in out

    def test_run_help_lists_sorted_options(self, project, install_intern, capsys):
        install_intern(project, "3.4.6")
        assert _run(["help", "run"], project) == 0
        body = capsys.readouterr().out.split("-h, --help", 1)[1]
        assert body.index("--bail") < body.index("--webdriver") < body.index("--debug") < body.index("--tunnel")

    def test_unknown_command(self, project, install_intern, capsys):
        install_intern(project, "4.1.0")
        assert _run(["bogus"], project) == ExitCodes.FATAL.value
        out = capsys.readouterr().out
        assert "Unknown command: bogus" in out
        assert "usage: intern" in out

    def test_init_with_intern_3(self, project, install_intern):
        install_intern(project, "3.4.6")
        assert _run(["init", "--browser", "firefox"], project) == 0
        assert (project / "tests" / "intern.js").is_file()


class TestBootstrapFlow:
    """Dependency missing at startup."""

    def test_latest_installs_then_dispatches(self, project, install_intern):
        def fake_install(cmd, check):
            assert cmd == ["npm", "install", "intern@latest", "--save-dev"]
            install_intern(project, "4.1.0")

        with patch("bootstrap.subprocess.run", side_effect=fake_install) as mock_install, \
                patch("adapters.cli4.run_node", return_value=0) as mock_run:
            assert _run([], project, stdin="latest\n") == 0
        mock_install.assert_called_once()
        mock_run.assert_called_once()

    def test_decline_exits_with_instructions(self, project, capsys):
        with patch("bootstrap.subprocess.run") as mock_install:
            assert _main([], stdin="nah\n") == ExitCodes.FATAL.value
        mock_install.assert_not_called()
        err = capsys.readouterr().err
        assert "npm install --save-dev intern@latest" in err
        assert "npm install --save-dev intern@next" in err

    def test_decline_instructions_use_configured_package_manager(self, project):
        with patch("sys.stdin", io.StringIO("no\n")):
            with pytest.raises(DependencyNotFound) as exc_info:
                intern_cli.run_cli([], config=CliConfig(package_manager="yarn"), cwd=str(project))
        assert "  yarn install --save-dev intern@latest" in exc_info.value.lines

    def test_install_failure_exits_1(self, project, capsys):
        error = subprocess.CalledProcessError(1, ["npm", "install", "intern@next", "--save-dev"])
        with patch("bootstrap.subprocess.run", side_effect=error):
            assert _main([], stdin="next\n") == ExitCodes.FATAL.value
        assert "returned non-zero exit status 1" in capsys.readouterr().err


class TestUnsupportedVersion:
    """Installed version outside every adapter range."""

    def test_old_intern_is_fatal(self, project, install_intern, capsys):
        install_intern(project, "2.0.0")
        assert _main(["run"]) == ExitCodes.FATAL.value
        err = capsys.readouterr().err
        assert "This command requires Intern 3.0.0 or newer (2.0.0 is installed)." in err

    def test_unhandled_error_exits_1(self, project, install_intern):
        install_intern(project, "4.1.0")
        with patch("intern_cli.dispatch", side_effect=RuntimeError("boom")):
            assert _main(["run"]) == ExitCodes.FATAL.value


class TestUsageErrors:
    """Bad options and values end the process with the fatal code."""

    def test_invalid_browser_exits_1(self, project, install_intern, capsys):
        install_intern(project, "4.1.0")
        assert _main(["init", "-b", "opera"]) == ExitCodes.FATAL.value
        assert "usage: intern init" in capsys.readouterr().err

    def test_unknown_option_for_default_command_exits_1(self, project, install_intern, capsys):
        install_intern(project, "4.1.0")
        with patch("adapters.cli4.run_node") as mock_run:
            assert _main(["--bogus"]) == ExitCodes.FATAL.value
        mock_run.assert_not_called()
        assert "unrecognized arguments: --bogus" in capsys.readouterr().err

    def test_interrupt_exits_130(self, project, install_intern):
        install_intern(project, "4.1.0")
        with patch("adapters.cli4.run_node", side_effect=KeyboardInterrupt):
            assert _main(["run"]) == ExitCodes.INTERRUPTED.value
