"""Fatal error types raised by the pinning pipeline.

Every error here aborts the run before the output file is touched. The
top-level boundary in ``apkpin.main`` maps them to process exit codes.
"""

from constants import ExitCodes


class ApkPinError(Exception):
    """Base class for fatal errors; carries the exit code for the CLI."""

    exit_code = ExitCodes.UNEXPECTED_ERROR

    def __init__(self, message: str, *, operation: str = "", target: str = ""):
        super().__init__(message)
        self.operation = operation
        self.target = target


class InputFileError(ApkPinError):
    """The package list could not be read."""

    exit_code = ExitCodes.FILE_ERROR


class StagingError(ApkPinError):
    """The staging file could not be created, written or promoted."""

    exit_code = ExitCodes.FILE_ERROR


class DistributionError(ApkPinError):
    """The running distribution could not be inspected or is not the target."""

    exit_code = ExitCodes.DISTRIBUTION_ERROR


class ConfigError(ApkPinError):
    """The configuration file or an override is invalid."""

    exit_code = ExitCodes.CONFIG_ERROR
