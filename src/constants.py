"""Constants used in the project."""

from enum import Enum


class ExitCodes(Enum):
    """Exit codes for the program.

    Args:
        Enum (int): Exit codes for the program.
    """

    SUCCESS = 0
    FILE_ERROR = 1
    USAGE_ERROR = 2
    DISTRIBUTION_ERROR = 3
    CONFIG_ERROR = 4
    UNEXPECTED_ERROR = 5


class Constants:  # pylint: disable=too-few-public-methods
    """General constants used in the project.
    Data holder for configuration constants; not intended to provide behavior.
    """

    VERSION = "1.0.0"
    CATALOG_URL = "https://pkgs.alpinelinux.org/packages"
    CATALOG_VERSION_CLASS = "version"
    USER_AGENT = f"apkpin/{VERSION}"
    TARGET_DISTRIBUTION = "alpine"
    OS_RELEASE_FILE = "/etc/os-release"
    OS_ID_FIELD = "ID"
    OS_VERSION_FIELD = "VERSION_ID"
    DEFAULT_INPUT_FILE = "apk.txt"
    DEFAULT_OUTPUT_FILE = "apk-lock.txt"
    LOG_FORMAT = "[%(levelname)s] %(message)s"
    LOG_FILE_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"
    LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
    ENV_PREFIX = "APKPIN_"
    ENV_LOG_LEVEL = "APKPIN_LOG_LEVEL"
    ENV_CONFIG = "APKPIN_CONFIG"
    STAGING_PREFIX = "apkpin-"
    STAGING_SUFFIX = ".lock.tmp"
