"""Semantic-version range matching used to pick a command adapter."""

from typing import Optional, Sequence, Tuple, TypeVar

import semantic_version

from .models import VersionRange

T = TypeVar("T")


def _version_from_str(v: str) -> Optional[semantic_version.Version]:
    """Parse a version string, returning None when it is not valid semver."""
    try:
        return semantic_version.Version(str(v).strip())
    except ValueError:
        return None


def accepts(version: str, min_version: str, max_version: str) -> bool:
    """Return True if ``min_version <= version <= max_version``.

    Pre-release versions sort below their release (``4.0.0-beta < 4.0.0``).
    Unparseable inputs are never accepted.
    """
    ver = _version_from_str(version)
    low = _version_from_str(min_version)
    high = _version_from_str(max_version)
    if ver is None or low is None or high is None:
        return False
    return low <= ver <= high


def in_range(version: str, version_range: VersionRange) -> bool:
    """``accepts`` for a ``VersionRange``."""
    return accepts(version, version_range.min_version, version_range.max_version)


def select_range(version: str, candidates: Sequence[Tuple[VersionRange, T]]) -> Optional[T]:
    """Return the value paired with the first range accepting ``version``.

    Candidates are checked in the given order, so overlapping ranges resolve
    to the earlier entry.
    """
    for version_range, value in candidates:
        if in_range(version, version_range):
            return value
    return None
