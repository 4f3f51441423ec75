"""npm registry lookups for the test runner package."""

from __future__ import annotations

from typing import Dict

from common.http_client import fetch_json_object
from constants import Constants


def dist_tags_url(name: str, registry_url: str = Constants.REGISTRY_URL_NPM) -> str:
    return f"{registry_url.rstrip('/')}/-/package/{name}/dist-tags"


def fetch_dist_tags(name: str = Constants.DEPENDENCY_NAME, registry_url: str = Constants.REGISTRY_URL_NPM) -> Dict[str, str]:
    """Return the package's dist-tags (e.g. ``{"latest": "4.2.0"}``).

    An empty dict is returned when the lookup fails.
    """
    data = fetch_json_object(dist_tags_url(name, registry_url))
    if data is None:
        return {}
    return {str(tag): str(version) for tag, version in data.items()}
