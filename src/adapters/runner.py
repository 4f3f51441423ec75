"""Helpers shared by the adapters for launching the runner and scaffolding."""

from __future__ import annotations

import logging
import os
import subprocess
import webbrowser
from typing import List, Optional, Sequence

from common.console import print_lines
from constants import Constants, ExitCodes
from errors import SubprocessFailure

logger = logging.getLogger(__name__)


def node_command(script: str, runner_args: Sequence[str], debug: bool = False) -> List[str]:
    """Build ``node [--inspect-brk] <script> <args...>``."""
    cmd = [Constants.NODE_BINARY]
    if debug:
        cmd.append("--inspect-brk")
    cmd.append(script)
    cmd.extend(runner_args)
    return cmd


def run_node(cmd: Sequence[str], vlog: logging.Logger, open_url: Optional[str] = None) -> int:
    """Run the runner in the foreground and return its exit code.

    When ``open_url`` is given it is opened in the default browser once the
    process has been started.

    Raises:
        SubprocessFailure: If the process cannot be started.
    """
    vlog.debug("Running: %s", " ".join(cmd))
    try:
        proc = subprocess.Popen(list(cmd))  # noqa: S603
    except OSError as e:
        raise SubprocessFailure(cmd, e) from e

    try:
        if open_url:
            vlog.debug("Opening %s", open_url)
            webbrowser.open(open_url)
        return proc.wait()
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        proc.terminate()
        proc.wait()
        return ExitCodes.INTERRUPTED.value


def ensure_dir(path: str, vlog: logging.Logger) -> bool:
    """Create ``path`` if needed; returns True when it was created."""
    if os.path.isdir(path):
        vlog.debug("Directory %s already exists", path)
        return False
    os.makedirs(path)
    vlog.debug("Created %s", path)
    return True


def write_if_missing(path: str, content: str, vlog: logging.Logger) -> bool:
    """Write ``content`` to ``path`` unless it already exists."""
    if os.path.exists(path):
        print_lines(f"Skipping {path} (already exists)")
        return False
    with open(path, "w", encoding="utf-8") as f:
        f.write(content)
    vlog.debug("Wrote %s", path)
    return True


def require_intern_dir(context) -> str:
    if not context.intern_dir:
        raise RuntimeError("The intern package directory has not been resolved")
    return context.intern_dir


def browser_note(context, browser: str) -> List[str]:
    note = context.browsers.get(browser, {}).get("note")
    return ["", note] if note else []
