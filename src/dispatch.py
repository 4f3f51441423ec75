"""Version-gated adapter dispatch.

Each supported family of the test runner has an adapter declaring the
inclusive version range it handles. The first adapter (in declared order)
whose range accepts the installed version registers its commands.
"""

from __future__ import annotations

import logging
from typing import Optional, Sequence

from adapters import ADAPTERS, Adapter
from cli_context import Context
from common.logging_utils import extra_context, is_debug_enabled
from errors import UnsupportedVersion
from versioning.matcher import select_range

logger = logging.getLogger(__name__)


def min_supported_version(adapters: Sequence[Adapter] = ADAPTERS) -> str:
    """Minimum version of the first declared adapter."""
    return adapters[0].version_range.min_version if adapters else ""


def select_adapter(version: str, adapters: Sequence[Adapter] = ADAPTERS) -> Optional[Adapter]:
    """Return the first adapter whose range accepts ``version``, or None."""
    return select_range(version, [(a.version_range, a) for a in adapters])


def dispatch(context: Context, adapters: Sequence[Adapter] = ADAPTERS) -> Adapter:
    """Invoke the adapter matching the installed runner version.

    Raises:
        UnsupportedVersion: If no adapter accepts the installed version.
    """
    version = context.intern_version
    adapter = select_adapter(version, adapters)
    if adapter is None:
        if is_debug_enabled(logger):
            logger.debug(
                "No adapter for version",
                extra=extra_context(
                    event="decision",
                    component="dispatch",
                    action="select_adapter",
                    version=version,
                    outcome="unsupported",
                ),
            )
        raise UnsupportedVersion(min_supported_version(adapters), version)

    context.vlog.debug("Using %s adapter for intern %s", adapter.name, version)
    if is_debug_enabled(logger):
        logger.debug(
            "Adapter selected",
            extra=extra_context(
                event="decision",
                component="dispatch",
                action="select_adapter",
                target=adapter.name,
                version=version,
                outcome="selected",
            ),
        )
    adapter.register(context)
    return adapter
