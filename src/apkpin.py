"""apkpin - pin Alpine Linux package versions to a lock file

    Reads a list of package names (default apk.txt), looks up the version
    each one currently has on an Alpine release branch, and writes the
    pinned list (default apk-lock.txt) in the form accepted by `apk add`.

    Returns:
        int: Exit code
"""
import logging
import sys

from args import parse_args
from config import PinnerConfig
from constants import ExitCodes
from common.logging_utils import add_file_handler, configure_logging, extra_context
from exceptions import ApkPinError
from pipeline import run_pipeline

logger = logging.getLogger(__name__)


def _setup_logging(args) -> None:
    """Configure logging based on CLI arguments."""
    level = getattr(args, "LOG_LEVEL", None)
    if getattr(args, "QUIET", False) and not level:
        level = "ERROR"
    configure_logging(level)
    log_file = getattr(args, "LOG_FILE", None)
    if log_file:
        add_file_handler(log_file)
        logger.debug("Logging to file: %s", log_file)


def run(argv=None) -> int:
    """Parse arguments, run the pipeline and map failures to an exit code."""
    args = parse_args(argv)
    _setup_logging(args)

    try:
        config = PinnerConfig.from_sources(args)
        logger.debug("Configuration: %s", config)
        run_pipeline(config)
    except ApkPinError as e:
        logger.error(
            "%s failed for %s: %s",
            e.operation or "apkpin", e.target or "-", e,
            extra=extra_context(
                event="fatal_error",
                component="cli",
                action=e.operation or None,
                target=e.target or None,
                outcome=type(e).__name__,
            ),
        )
        return e.exit_code.value
    except KeyboardInterrupt:
        logger.error("Interrupted")
        return ExitCodes.UNEXPECTED_ERROR.value
    except Exception:  # pylint: disable=broad-exception-caught
        logger.exception("Unexpected error while pinning packages")
        return ExitCodes.UNEXPECTED_ERROR.value
    return ExitCodes.SUCCESS.value


def main():
    """Main function of the program."""
    sys.exit(run())


if __name__ == "__main__":
    main()
