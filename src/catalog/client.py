"""Alpine package catalog client: look up the published version of a package."""
from __future__ import annotations

import logging
import platform
from typing import Dict, Optional

from constants import Constants
from common.logging_utils import extra_context, is_debug_enabled, safe_url
from .parser import extract_version
import catalog as catalog_pkg

logger = logging.getLogger(__name__)


def build_query(
    package_name: str,
    branch: str,
    arch: str,
    repo: str = "",
    maintainer: str = "",
) -> Dict[str, str]:
    """Build the catalog search parameters. Empty filters mean unrestricted."""
    return {
        "name": package_name,
        "branch": branch,
        "repo": repo or "",
        "arch": arch,
        "maintainer": maintainer or "",
    }


def resolve_version(
    package_name: str,
    branch: str,
    *,
    arch: Optional[str] = None,
    repo: str = "",
    maintainer: str = "",
    catalog_url: str = Constants.CATALOG_URL,
    timeout: Optional[float] = None,
) -> Optional[str]:
    """Return the version the catalog publishes for a package on a branch.

    A missing package, a network failure, a non-200 status, an empty body
    and a page without a version cell all give None; they cannot be told
    apart. Exactly one request is made per call.

    Args:
        package_name (str): Package to look up (required).
        branch (str): Canonical branch, e.g. 'v3.17' or 'edge'.
        arch (str, optional): Architecture. Defaults to this machine's.
        repo (str, optional): Repository filter (main, community, ...).
        maintainer (str, optional): Maintainer filter.
        catalog_url (str, optional): Catalog search endpoint.
        timeout (float, optional): Request timeout in seconds.

    Raises:
        ValueError: If package_name is empty.

    Returns:
        Optional[str]: Trimmed version string, or None.
    """
    if not package_name:
        raise ValueError("No package name specified")
    if not branch:
        logger.error("Could not determine Alpine version; skipping %s", package_name)
        return None

    params = build_query(package_name, branch, arch or platform.machine(), repo, maintainer)
    res = catalog_pkg.safe_get(catalog_url, context="catalog", params=params, timeout=timeout)
    if res is None or res.status_code != 200 or not res.text:
        if is_debug_enabled(logger):
            logger.debug(
                "Catalog lookup failed",
                extra=extra_context(
                    event="lookup",
                    component="catalog",
                    action="resolve_version",
                    outcome="no_response" if res is None else "bad_response",
                    status_code=getattr(res, "status_code", None),
                    target=safe_url(catalog_url),
                    package=package_name,
                ),
            )
        return None

    version = (extract_version(res.text) or "").strip()
    if is_debug_enabled(logger):
        logger.debug(
            "Catalog lookup finished",
            extra=extra_context(
                event="lookup",
                component="catalog",
                action="resolve_version",
                outcome="found" if version else "not_found",
                package=package_name,
                branch=branch,
                version=version or None,
            ),
        )
    return version or None
