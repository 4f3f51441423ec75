"""JSON lookups over HTTP for optional registry queries.

A failed lookup is logged and reported as ``None``; it never raises to the
caller, so ``version --check`` cannot break the CLI.
"""
from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import requests

from constants import Constants
from common.logging_utils import extra_context, is_debug_enabled, Timer

logger = logging.getLogger(__name__)


def fetch_json_object(url: str) -> Optional[Dict[str, Any]]:
    """GET ``url`` and return its JSON body when it is an object.

    Connection errors and timeouts are retried up to
    ``Constants.HTTP_RETRY_MAX`` attempts. A non-200 status or a body that
    is not a JSON object is not retried.

    Returns:
        The decoded object, or None when the lookup failed.
    """
    for attempt in range(1, Constants.HTTP_RETRY_MAX + 1):
        with Timer() as t:
            try:
                response = requests.get(url, timeout=Constants.REQUEST_TIMEOUT)
            except requests.RequestException as exc:
                logger.debug("GET %s failed on attempt %d: %s", url, attempt, exc)
                continue

        if is_debug_enabled(logger):
            logger.debug(
                "HTTP response",
                extra=extra_context(
                    event="http_response",
                    component="http_client",
                    target=url,
                    status_code=response.status_code,
                    duration_ms=t.duration_ms(),
                ),
            )
        if response.status_code != 200:
            logger.warning("GET %s returned status %s", url, response.status_code)
            return None
        try:
            data = response.json()
        except ValueError:
            logger.warning("GET %s did not return JSON", url)
            return None
        if not isinstance(data, dict):
            logger.warning("GET %s returned %s, expected a JSON object", url, type(data).__name__)
            return None
        return data

    logger.warning("GET %s failed after %d attempts", url, Constants.HTTP_RETRY_MAX)
    return None
