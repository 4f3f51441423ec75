"""Locate a locally installed npm package and read its package.json."""

from __future__ import annotations

import json
import logging
import os
from typing import Iterator, Optional

from constants import Constants
from common.logging_utils import extra_context, is_debug_enabled
from errors import DependencyNotFound

from .models import ResolvedDependency

logger = logging.getLogger(__name__)


def _candidate_dirs(name: str, basedir: str) -> Iterator[str]:
    """Yield ``node_modules/<name>`` paths from ``basedir`` up to the root.

    Mirrors Node's module lookup: directories that are themselves named
    ``node_modules`` are skipped as lookup roots.
    """
    current = os.path.abspath(basedir)
    while True:
        if os.path.basename(current) != Constants.NODE_MODULES_DIR:
            yield os.path.join(current, Constants.NODE_MODULES_DIR, name)
        parent = os.path.dirname(current)
        if parent == current:
            return
        current = parent


def find_package_dir(name: str, basedir: str) -> Optional[str]:
    """Return the first directory holding ``<name>/package.json``, or None."""
    for candidate in _candidate_dirs(name, basedir):
        if os.path.isfile(os.path.join(candidate, Constants.PACKAGE_JSON_FILE)):
            return candidate
    return None


def read_package_json(directory: str) -> dict:
    """Parse ``package.json`` in ``directory``.

    Raises:
        OSError: If the file cannot be read.
        ValueError: If it is not valid JSON or not a JSON object.
    """
    path = os.path.join(directory, Constants.PACKAGE_JSON_FILE)
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    if not isinstance(data, dict):
        raise ValueError(f"{path} does not contain a JSON object")
    return data


def resolve_dependency(
    name: str = Constants.DEPENDENCY_NAME,
    basedir: Optional[str] = None,
    package_manager: str = Constants.PACKAGE_MANAGER,
) -> ResolvedDependency:
    """Locate ``name`` relative to ``basedir`` (default: cwd).

    Returns:
        ResolvedDependency with the install directory and parsed metadata.

    Raises:
        DependencyNotFound: If no install is found or its metadata is unusable.
    """
    basedir = basedir or os.getcwd()
    directory = find_package_dir(name, basedir)
    if directory is None:
        if is_debug_enabled(logger):
            logger.debug(
                "Dependency not found",
                extra=extra_context(
                    event="resolve",
                    component="resolver",
                    action="find_package_dir",
                    target=name,
                    outcome="not_found",
                ),
            )
        raise DependencyNotFound(name, basedir, package_manager=package_manager)

    try:
        metadata = read_package_json(directory)
    except (OSError, ValueError) as e:
        logger.warning("Unable to read %s metadata: %s", name, e)
        raise DependencyNotFound(name, basedir, str(e), package_manager) from e

    version = metadata.get("version")
    if not isinstance(version, str) or not version.strip():
        raise DependencyNotFound(name, basedir, "package.json has no version", package_manager)

    if is_debug_enabled(logger):
        logger.debug(
            "Dependency resolved",
            extra=extra_context(
                event="resolve",
                component="resolver",
                action="read_package_json",
                target=directory,
                outcome="success",
                version=version,
            ),
        )
    return ResolvedDependency(name=name, directory=directory, metadata=metadata)
