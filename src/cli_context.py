"""Shared context handed to the version adapters and command actions."""

from __future__ import annotations

import argparse
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from cli_config import CliConfig
from commands import CommandRegistry


@dataclass
class Context:
    """Process-lifetime state owned by the front-end.

    Adapters may register or extend commands in ``commands``; everything else
    is read-only for them. ``parser`` and ``subparsers`` are filled in by the
    front-end after dispatch, once the registry is frozen.
    """

    browsers: Dict[str, Dict[str, str]]
    commands: CommandRegistry
    vlog: logging.Logger
    intern_dir: Optional[str]
    intern_pkg: Dict[str, Any]
    config: CliConfig = field(default_factory=CliConfig)
    parser: Optional[argparse.ArgumentParser] = None
    subparsers: Dict[str, argparse.ArgumentParser] = field(default_factory=dict)

    @property
    def tests_dir(self) -> str:
        return self.config.tests_dir

    @property
    def intern_version(self) -> str:
        return str(self.intern_pkg.get("version", ""))
