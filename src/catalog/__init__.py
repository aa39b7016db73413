"""Alpine package catalog support.

- parser.py: version extraction from the catalog's HTML result page
- client.py: query construction and the per-package lookup
"""

# Patch point exposed for tests
from common.http_client import safe_get  # noqa: F401

from .parser import extract_version  # noqa: F401
from .client import build_query, resolve_version  # noqa: F401

__all__ = [
    "extract_version",
    "build_query",
    "resolve_version",
    "safe_get",
]
