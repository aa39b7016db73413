"""Release metadata inspection and branch resolution.

- inspector.py: os-release parsing, distribution check, release detection
- branch.py: branch normalization and per-run branch resolution
"""

from .inspector import (  # noqa: F401
    confirm_distribution,
    get_distribution,
    get_os_release_value,
    get_release_version,
    read_distribution_info,
)
from .branch import normalize_branch, resolve_branch  # noqa: F401

__all__ = [
    "confirm_distribution",
    "get_distribution",
    "get_os_release_value",
    "get_release_version",
    "read_distribution_info",
    "normalize_branch",
    "resolve_branch",
]
