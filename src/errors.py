"""Error taxonomy for the intern front-end.

Every ``CliError`` carries the user-facing lines that the top-level handler
prints before exiting, so callers never format fatal messages themselves.
"""

from __future__ import annotations

from typing import List, Optional, Sequence

from constants import Constants, ExitCodes


class CliError(Exception):
    """Base class for conditions that end the process with a message."""

    exit_code = ExitCodes.FATAL.value

    def __init__(self, message: str, lines: Optional[Sequence[str]] = None):
        super().__init__(message)
        self.lines: List[str] = list(lines) if lines is not None else [message]


class DependencyNotFound(CliError):
    """Raised when no local install of the test runner can be located."""

    def __init__(
        self,
        name: str,
        basedir: str,
        reason: Optional[str] = None,
        package_manager: str = Constants.PACKAGE_MANAGER,
    ):
        message = f"Unable to find a local install of {name} from {basedir}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message, manual_install_lines(name, package_manager))
        self.name = name
        self.basedir = basedir
        self.reason = reason
        self.package_manager = package_manager


class UnsupportedVersion(CliError):
    """Raised when the installed runner version has no matching adapter."""

    def __init__(self, min_version: str, installed: str):
        super().__init__(
            f"This command requires Intern {min_version} or newer "
            f"({installed} is installed)."
        )
        self.min_version = min_version
        self.installed = installed


class UnknownCommand(CliError):
    """Raised when a command name is not present in the registry."""

    def __init__(self, name: str):
        super().__init__(f"Unknown command: {name}")
        self.name = name


class SubprocessFailure(CliError):
    """Raised when an external command cannot be started."""

    def __init__(self, command: Sequence[str], error: Exception):
        super().__init__(str(error))
        self.command = list(command)
        self.error = error


def manual_install_lines(
    name: str = Constants.DEPENDENCY_NAME,
    manager: str = Constants.PACKAGE_MANAGER,
) -> List[str]:
    """Instructions shown when the runner is still missing after bootstrap."""
    return [
        f"Install the latest {name.capitalize()} release with:",
        "",
        f"  {manager} install --save-dev {name}@latest",
        "",
        "Install the development version with:",
        "",
        f"  {manager} install --save-dev {name}@next",
        "",
    ]
