"""Input package list parsing."""
from __future__ import annotations

import logging
import re
from typing import List, Optional

from exceptions import InputFileError
from models import PackageSpec

logger = logging.getLogger(__name__)

_ANNOTATION_RE = re.compile(r"[\s=].*$", re.DOTALL)


def parse_package_line(line: str) -> Optional[PackageSpec]:
    """Strip any '=version' (or anything after whitespace) from one input line.

    Blank lines and '#' comments give None.
    """
    token = line.strip()
    if not token or token.startswith("#"):
        return None
    name = _ANNOTATION_RE.sub("", token)
    if not name:
        return None
    return PackageSpec(name=name, raw=line.rstrip("\r\n"))


def load_package_list(file_name: str) -> List[PackageSpec]:
    """Read the whole package list into memory.

    The list is fully consumed before any output is written, so the same
    path may be used for input and output.

    Raises:
        InputFileError: If the file cannot be read.
    """
    try:
        with open(file_name, encoding="utf-8-sig") as file:
            lines = file.read().splitlines()
    except (OSError, UnicodeDecodeError) as e:
        raise InputFileError(
            f"Cannot read package list: {e}", operation="load_package_list", target=file_name
        ) from e

    specs = []
    for number, line in enumerate(lines, start=1):
        spec = parse_package_line(line)
        if spec is None:
            if line.strip() and not line.strip().startswith("#"):
                logger.debug("Skipping line %d of %s: %r", number, file_name, line)
            continue
        specs.append(spec)
    return specs
