"""Read distribution identity and release from an os-release file."""
from __future__ import annotations

import logging
import re

from constants import Constants
from exceptions import DistributionError
from models import DistributionInfo

logger = logging.getLogger(__name__)

_VERSION_ID_RE = re.compile(
    r"^" + re.escape(Constants.OS_VERSION_FIELD) + r"\s*=\s*[\"']?(\d+)\.(\d+)"
)


def _read_lines(os_release_filename: str) -> list[str]:
    try:
        with open(os_release_filename, encoding="utf-8") as file:
            return file.read().splitlines()
    except OSError as e:
        raise DistributionError(
            f"Cannot read release metadata: {e}",
            operation="read_os_release",
            target=os_release_filename,
        ) from e


def _unquote(value: str) -> str:
    value = value.strip()
    if len(value) >= 2 and value[0] == value[-1] and value[0] in ("'", '"'):
        return value[1:-1]
    return value


def get_os_release_value(
    os_release_filename: str = Constants.OS_RELEASE_FILE,
    os_id_field: str = Constants.OS_ID_FIELD,
) -> str:
    """Return the value of a KEY=VALUE entry in an os-release style file.

    The key is matched case-sensitively at the start of the line, with
    optional whitespace around '='. Only the first match counts.

    Args:
        os_release_filename (str): File to query.
        os_id_field (str): Key to look up. Defaults to ID.

    Raises:
        DistributionError: If the file cannot be read.

    Returns:
        str: The value, or "" when the key is absent.
    """
    pattern = re.compile(r"^" + re.escape(os_id_field) + r"\s*=\s*(.*)$")
    for line in _read_lines(os_release_filename):
        match = pattern.match(line)
        if match:
            return _unquote(match.group(1))
    return ""


def get_distribution(os_release_filename: str = Constants.OS_RELEASE_FILE) -> str:
    """Return the distribution identifier, e.g. 'alpine'."""
    return get_os_release_value(os_release_filename, Constants.OS_ID_FIELD)


def confirm_distribution(
    os_release_filename: str = Constants.OS_RELEASE_FILE,
    desired_distribution: str = Constants.TARGET_DISTRIBUTION,
) -> bool:
    """Check whether the running distribution is the desired one (case-insensitive)."""
    running = get_distribution(os_release_filename)
    return bool(running) and running.lower() == desired_distribution.lower()


def read_distribution_info(os_release_filename: str = Constants.OS_RELEASE_FILE) -> DistributionInfo:
    """Collect identity and release without enforcing the target distribution."""
    identifier = ""
    release = ""
    id_re = re.compile(r"^" + re.escape(Constants.OS_ID_FIELD) + r"\s*=\s*(.*)$")
    for line in _read_lines(os_release_filename):
        if not identifier:
            match = id_re.match(line)
            if match:
                identifier = _unquote(match.group(1))
                continue
        if not release:
            match = _VERSION_ID_RE.match(line)
            if match:
                release = f"v{match.group(1)}.{match.group(2)}"
    return DistributionInfo(identifier=identifier, release=release)


def get_release_version(
    os_release_filename: str = Constants.OS_RELEASE_FILE,
    desired_distribution: str = Constants.TARGET_DISTRIBUTION,
) -> str:
    """Return the running release as 'v<major>.<minor>', patch level dropped.

    Only meaningful on the target distribution, so anything else is refused.

    Raises:
        DistributionError: If the file is unreadable or describes another distribution.

    Returns:
        str: e.g. 'v3.17', or "" when VERSION_ID has no major.minor form.
    """
    info = read_distribution_info(os_release_filename)
    if not info.identifier or not info.matches(desired_distribution):
        raise DistributionError(
            f"This system is not running '{desired_distribution}' "
            f"(found '{info.identifier or 'unknown'}')",
            operation="get_release_version",
            target=os_release_filename,
        )
    if not info.release:
        logger.debug("No numeric %s in %s", Constants.OS_VERSION_FIELD, os_release_filename)
    return info.release
