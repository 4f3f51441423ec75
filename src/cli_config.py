"""Runtime configuration for the intern front-end.

Values come from, in increasing precedence: built-in defaults, the YAML
config file (``.interncli.yml`` in the working directory or the path in
``INTERN_CLI_CONFIG``), and environment overrides. Loading never raises; a
broken file only produces a warning.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, fields
from typing import Any, Dict, Mapping, Optional

import yaml

from constants import Constants

logger = logging.getLogger(__name__)


@dataclass
class CliConfig:
    """Tunables shared by the front-end and the adapters."""

    tests_dir: str = Constants.TESTS_DIR
    default_command: str = Constants.DEFAULT_COMMAND
    package_manager: str = Constants.PACKAGE_MANAGER
    log_level: Optional[str] = None
    registry_url: str = Constants.REGISTRY_URL_NPM

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "CliConfig":
        known = {f.name for f in fields(cls)}
        values = {}
        for key, value in data.items():
            key = str(key).replace("-", "_")
            if key not in known:
                logger.debug("Ignoring unknown config key: %s", key)
                continue
            if value is None:
                continue
            values[key] = str(value)
        return cls(**values)


def _config_path(cwd: str, env: Mapping[str, str]) -> str:
    override = env.get(Constants.ENV_CONFIG)
    if override:
        return override
    return os.path.join(cwd, Constants.CONFIG_FILE)


def _load_file(path: str) -> Dict[str, Any]:
    """Read a YAML mapping from ``path``; empty dict when absent or invalid."""
    if not os.path.isfile(path):
        return {}
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        logger.warning("Failed to load config %s: %s", path, e)
        return {}
    if data is None:
        return {}
    if not isinstance(data, dict):
        logger.warning("Ignoring config %s: expected a mapping", path)
        return {}
    return data


def load_config(cwd: Optional[str] = None, env: Optional[Mapping[str, str]] = None) -> CliConfig:
    """Build the effective ``CliConfig`` for ``cwd``."""
    cwd = cwd or os.getcwd()
    env = os.environ if env is None else env

    path = _config_path(cwd, env)
    config = CliConfig.from_mapping(_load_file(path))

    if env.get(Constants.ENV_LOG_LEVEL):
        config.log_level = env[Constants.ENV_LOG_LEVEL].upper()
    if env.get(Constants.ENV_PACKAGE_MANAGER):
        config.package_manager = env[Constants.ENV_PACKAGE_MANAGER]
    return config
