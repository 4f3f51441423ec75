"""Interactive install flow used when no local runner install is found.

The user is asked once whether to install the latest release, the ``next``
pre-release, or nothing. The install command inherits the terminal so npm's
own output and errors are visible; a failing install is not caught here.
"""

from __future__ import annotations

import logging
import re
import subprocess
import sys
from typing import Callable, List, Optional, Pattern, Sequence, TextIO, Tuple

from common.console import print_lines
from common.logging_utils import extra_context, is_debug_enabled
from constants import Constants, InstallChannels
from errors import DependencyNotFound
from versioning.models import ResolvedDependency

logger = logging.getLogger(__name__)

INSTALL_QUESTION = "  Install intern now [latest, next, no]? "

# Each answer must be a prefix of the channel name; the three patterns
# cannot match the same input.
ANSWER_PATTERNS: Tuple[Tuple[InstallChannels, Pattern[str]], ...] = (
    (InstallChannels.LATEST, re.compile(r"l(a(t(e(s(t)?)?)?)?)?")),
    (InstallChannels.NEXT, re.compile(r"ne(x(t)?)?")),
    (InstallChannels.NO, re.compile(r"no?")),
)


def parse_answer(answer: Optional[str]) -> InstallChannels:
    """Map one line of user input to an install channel; default is NO."""
    text = (answer or "").strip().lower()
    for channel, pattern in ANSWER_PATTERNS:
        if pattern.fullmatch(text):
            return channel
    return InstallChannels.NO


class PromptChannel:
    """Line-oriented prompt over an input/output stream pair.

    Closing releases the input stream so nothing keeps waiting on it; the
    underlying streams themselves are left open.
    """

    def __init__(self, stdin: Optional[TextIO] = None, stdout: Optional[TextIO] = None):
        self._stdin = stdin if stdin is not None else sys.stdin
        self._stdout = stdout if stdout is not None else sys.stdout
        self.closed = False

    def question(self, text: str) -> str:
        """Write ``text`` and return one line of input ('' at EOF)."""
        if self.closed:
            raise ValueError("prompt channel is closed")
        self._stdout.write(text)
        self._stdout.flush()
        line = self._stdin.readline()
        return line.rstrip("\r\n")

    def close(self) -> None:
        self.closed = True
        self._stdin = None

    def __enter__(self) -> "PromptChannel":
        return self

    def __exit__(self, *exc) -> None:
        self.close()


def install_command(channel: InstallChannels, package_manager: str = Constants.PACKAGE_MANAGER) -> List[str]:
    return [package_manager, "install", f"{Constants.DEPENDENCY_NAME}@{channel.value}", "--save-dev"]


def run_install(cmd: Sequence[str]) -> None:
    """Run the install command with inherited stdio.

    Raises:
        subprocess.CalledProcessError: If the command exits non-zero.
    """
    logger.info("Running: %s", " ".join(cmd))
    subprocess.run(list(cmd), check=True)  # noqa: S603


def prompt_install(
    channel: PromptChannel,
    package_manager: str = Constants.PACKAGE_MANAGER,
    installer: Callable[[Sequence[str]], None] = run_install,
) -> InstallChannels:
    """Ask whether to install the runner and run the install when accepted."""
    print_lines()
    print_lines(["You need a local install of Intern to use this command.", ""])
    choice = parse_answer(channel.question(INSTALL_QUESTION))

    if is_debug_enabled(logger):
        logger.debug(
            "Install prompt answered",
            extra=extra_context(
                event="decision",
                component="bootstrap",
                action="prompt_install",
                outcome=choice.value,
            ),
        )

    if choice is not InstallChannels.NO:
        print_lines()
        installer(install_command(choice, package_manager))
    return choice


def bootstrap(
    resolve: Callable[[], ResolvedDependency],
    package_manager: str = Constants.PACKAGE_MANAGER,
    stdin: Optional[TextIO] = None,
    stdout: Optional[TextIO] = None,
    installer: Callable[[Sequence[str]], None] = run_install,
) -> ResolvedDependency:
    """Resolve the runner, offering an install once if it is missing.

    Raises:
        DependencyNotFound: If the runner is still missing after the prompt.
        subprocess.CalledProcessError: If the install command fails.
    """
    try:
        return resolve()
    except DependencyNotFound as first_error:
        logger.debug("Initial resolution failed: %s", first_error)

    with PromptChannel(stdin, stdout) as channel:
        prompt_install(channel, package_manager, installer)

    return resolve()
