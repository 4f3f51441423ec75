"""Shared fixtures for the intern front-end tests."""

import json
import logging

import pytest

from cli_config import CliConfig
from cli_context import Context
from cli_registry import register_base_commands
from commands import CommandRegistry
from constants import BROWSERS


def write_intern(root, version, extra=None):
    """Create ``node_modules/intern/package.json`` under ``root``."""
    pkg_dir = root / "node_modules" / "intern"
    pkg_dir.mkdir(parents=True, exist_ok=True)
    data = {"name": "intern", "version": version}
    data.update(extra or {})
    (pkg_dir / "package.json").write_text(json.dumps(data))
    return pkg_dir


@pytest.fixture
def project(tmp_path, monkeypatch):
    """An empty project directory used as the working directory."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("INTERN_CLI_CONFIG", raising=False)
    monkeypatch.delenv("INTERN_CLI_LOG_LEVEL", raising=False)
    monkeypatch.delenv("INTERN_CLI_PACKAGE_MANAGER", raising=False)
    return tmp_path


@pytest.fixture
def install_intern():
    """Factory writing a fake intern install."""
    return write_intern


@pytest.fixture
def make_context(tmp_path):
    """Factory for a Context with the base commands registered."""

    def _make(version="4.1.0", intern_dir=None, config=None):
        config = config or CliConfig()
        registry = register_base_commands(CommandRegistry(), config.tests_dir)
        return Context(
            browsers=BROWSERS,
            commands=registry,
            vlog=logging.getLogger("tests.vlog"),
            intern_dir=str(intern_dir or tmp_path / "node_modules" / "intern"),
            intern_pkg={"name": "intern", "version": version},
            config=config,
        )

    return _make
