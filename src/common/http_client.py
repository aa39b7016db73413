"""Shared HTTP helper used by the catalog client.

Encapsulates request error handling so callers get either a response or
None. Network failures are logged at DEBUG and never abort the run; a
failed lookup is treated the same as a package the catalog does not list.
"""
from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import requests

from constants import Constants
from common.logging_utils import extra_context, is_debug_enabled, safe_url, Timer

logger = logging.getLogger(__name__)


def safe_get(
    url: str,
    *,
    context: str,
    params: Optional[Dict[str, str]] = None,
    timeout: Optional[float] = None,
    **kwargs: Any,
) -> Optional[requests.Response]:
    """Perform a single GET request with consistent error handling and DEBUG traces.

    Args:
        url: Target URL.
        context: Human-readable source tag for logs (e.g., "catalog").
        params: Query parameters.
        timeout: Seconds before giving up; None leaves the transport default.
        **kwargs: Passed through to requests.get.

    Returns:
        The response, or None when the request could not be completed.
    """
    headers = {"User-Agent": Constants.USER_AGENT}
    headers.update(kwargs.pop("headers", None) or {})
    safe_target = safe_url(url)
    with Timer() as t:
        if is_debug_enabled(logger):
            logger.debug(
                "HTTP request",
                extra=extra_context(
                    event="http_request",
                    component="http_client",
                    action="GET",
                    target=safe_target,
                    context=context,
                ),
            )
        try:
            res = requests.get(url, params=params, headers=headers, timeout=timeout, **kwargs)
        except requests.Timeout:
            logger.debug("%s request timed out after %s seconds", context, timeout)
            return None
        except requests.RequestException as exc:  # includes ConnectionError
            logger.debug("%s connection error: %s", context, exc)
            return None
    if is_debug_enabled(logger):
        logger.debug(
            "HTTP response",
            extra=extra_context(
                event="http_response",
                component="http_client",
                action="GET",
                outcome="success" if res.status_code == 200 else "non_200",
                status_code=res.status_code,
                duration_ms=t.duration_ms(),
                target=safe_target,
                context=context,
            ),
        )
    return res
