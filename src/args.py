"""Argument parsing functionality for apkpin."""

import argparse
from constants import Constants


def build_parser():
    """Build the argument parser; every flag is declared here with its help text."""
    parser = argparse.ArgumentParser(
        prog="apkpin",
        description=(
            "Pin Alpine Linux packages to the versions currently published on a "
            "release branch and write them to a lock file (name=version per line)."
        ),
        epilog=(
            "Environment: APKPIN_BRANCH, APKPIN_INPUT, APKPIN_OUTPUT, APKPIN_ARCH, "
            "APKPIN_REPO, APKPIN_MAINTAINER, APKPIN_OS_RELEASE, APKPIN_DISTRIBUTION, "
            "APKPIN_CATALOG_URL, APKPIN_TIMEOUT, APKPIN_STAGING_DIR, APKPIN_CONFIG, "
            "APKPIN_LOG_LEVEL. Command line flags take precedence."
        ),
        add_help=True,
    )

    parser.add_argument("-b", "--branch",
                        dest="BRANCH",
                        help="Release branch to query, e.g. 3.17, v3.17 or edge "
                             "(default: detected from the running system)",
                        action="store", type=str)
    parser.add_argument("-i", "--input",
                        dest="INPUT",
                        help=f"Package list to read (default: {Constants.DEFAULT_INPUT_FILE})",
                        action="store", type=str)
    parser.add_argument("-o", "--output",
                        dest="OUTPUT",
                        help=f"Lock file to write (default: {Constants.DEFAULT_OUTPUT_FILE})",
                        action="store", type=str)

    query_group = parser.add_argument_group("catalog query")
    query_group.add_argument("-a", "--arch",
                             dest="ARCH",
                             help="Architecture to query (default: this machine's)",
                             action="store", type=str)
    query_group.add_argument("-r", "--repo",
                             dest="REPO",
                             help="Restrict to a repository, e.g. main or community",
                             action="store", type=str)
    query_group.add_argument("-m", "--maintainer",
                             dest="MAINTAINER",
                             help="Restrict to a package maintainer",
                             action="store", type=str)
    query_group.add_argument("--catalog-url",
                             dest="CATALOG_URL",
                             help=f"Catalog search endpoint (default: {Constants.CATALOG_URL})",
                             action="store", type=str)
    query_group.add_argument("--timeout",
                             dest="TIMEOUT",
                             help="Seconds to wait for each catalog response (default: no limit)",
                             action="store", type=float)

    system_group = parser.add_argument_group("system detection")
    system_group.add_argument("--os-release",
                              dest="OS_RELEASE",
                              help=f"Release metadata file (default: {Constants.OS_RELEASE_FILE})",
                              action="store", type=str)
    system_group.add_argument("--distribution",
                              dest="DISTRIBUTION",
                              help=f"Distribution that must be running when no branch is given "
                                   f"(default: {Constants.TARGET_DISTRIBUTION})",
                              action="store", type=str)
    system_group.add_argument("--staging-dir",
                              dest="STAGING_DIR",
                              help="Directory for the temporary staging file (default: $TMPDIR)",
                              action="store", type=str)

    parser.add_argument("-c", "--config",
                        dest="CONFIG",
                        help="Path to a YAML configuration file",
                        action="store", type=str)
    parser.add_argument("--loglevel",
                        dest="LOG_LEVEL",
                        help="Set the logging level",
                        action="store",
                        type=str.upper,
                        choices=Constants.LOG_LEVELS)
    parser.add_argument("--logfile",
                        dest="LOG_FILE",
                        help="Log output file",
                        action="store",
                        type=str)
    parser.add_argument("-q", "--quiet",
                        dest="QUIET",
                        help="Only report errors.",
                        action="store_true")
    parser.add_argument("-V", "--version",
                        action="version",
                        version=f"%(prog)s {Constants.VERSION}")
    return parser


def parse_args(argv=None):
    """Parses the arguments passed to the program."""
    return build_parser().parse_args(argv)
