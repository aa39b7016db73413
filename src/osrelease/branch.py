"""Branch name normalization for catalog queries.

The catalog expects branch names such as 'v3.17' or 'edge'. A bare '3.17'
(the way Alpine releases are written in a Dockerfile) yields a 404 from the
catalog, and 'edge' must never get a 'v' in front, so only names starting
with a digit are prefixed.
"""
from __future__ import annotations

import logging
from typing import Optional

from constants import Constants
from osrelease.inspector import get_release_version

logger = logging.getLogger(__name__)


def normalize_branch(branch: Optional[str]) -> str:
    """Prefix 'v' when branch starts with a digit; otherwise return it unchanged."""
    branch = (branch or "").strip()
    if branch[:1].isdigit():
        return "v" + branch
    return branch


def resolve_branch(
    branch: Optional[str] = None,
    os_release_filename: str = Constants.OS_RELEASE_FILE,
    desired_distribution: str = Constants.TARGET_DISTRIBUTION,
) -> str:
    """Return the canonical branch for this run.

    An explicit branch is normalized without reading release metadata.
    Otherwise the running release is detected, which raises
    DistributionError when not on the target distribution.

    Returns:
        str: The branch, or "" if none could be determined.
    """
    if branch and branch.strip():
        return normalize_branch(branch)
    detected = get_release_version(os_release_filename, desired_distribution)
    logger.debug("Detected release %r from %s", detected, os_release_filename)
    return normalize_branch(detected)
