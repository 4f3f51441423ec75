"""Version-specific command adapters.

``ADAPTERS`` is ordered; dispatch picks the first adapter whose range accepts
the installed runner version.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Tuple

from versioning.models import VersionRange

from . import cli3, cli4


@dataclass(frozen=True)
class Adapter:
    """A supported runner version family and its registration hook."""
    name: str
    version_range: VersionRange
    register: Callable[[Any], None]


ADAPTERS: Tuple[Adapter, ...] = (
    Adapter("cli3", VersionRange(cli3.MIN_VERSION, cli3.MAX_VERSION), cli3.register),
    Adapter("cli4", VersionRange(cli4.MIN_VERSION, cli4.MAX_VERSION), cli4.register),
)
