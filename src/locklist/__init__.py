"""Package list input and lock listing output.

- reader.py: input parsing with version annotations stripped
- writer.py: staged, atomically committed lock listing
"""

from .reader import load_package_list, parse_package_line  # noqa: F401
from .writer import LockWriter, StagingHandle  # noqa: F401

__all__ = [
    "load_package_list",
    "parse_package_line",
    "LockWriter",
    "StagingHandle",
]
