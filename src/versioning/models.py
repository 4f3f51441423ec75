"""Data models for dependency versions and adapter ranges."""

from dataclasses import dataclass, field
from typing import Any, Dict


@dataclass(frozen=True)
class VersionRange:
    """Inclusive semantic-version range accepted by one adapter."""
    min_version: str
    max_version: str

    def __str__(self) -> str:
        return f"{self.min_version} - {self.max_version}"


@dataclass(frozen=True)
class ResolvedDependency:
    """A located dependency install and its parsed package metadata."""
    name: str
    directory: str
    metadata: Dict[str, Any] = field(default_factory=dict)

    @property
    def version(self) -> str:
        return str(self.metadata.get("version", ""))
