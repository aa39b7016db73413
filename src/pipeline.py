"""Pinning pipeline: read the package list, resolve each package, commit the lock."""
from __future__ import annotations

import logging
from typing import Callable, Optional

from config import PinnerConfig
from common.logging_utils import extra_context, is_debug_enabled, Timer
from locklist import LockWriter, load_package_list
from models import PinResult, VersionedPackage
from osrelease import resolve_branch
from catalog import resolve_version

logger = logging.getLogger(__name__)

Resolver = Callable[..., Optional[str]]


def run_pipeline(
    config: PinnerConfig,
    resolver: Resolver = resolve_version,
    writer: Optional[LockWriter] = None,
) -> PinResult:
    """Resolve every package in config.input_file and write config.output_file.

    Packages are looked up one at a time in input order. Packages the
    catalog does not report are left out. The output file is only replaced
    when at least one package resolved.

    Raises:
        InputFileError: If the package list cannot be read.
        DistributionError: If no branch was given and the system is not the target.
        StagingError: If the staging file cannot be created or promoted.
    """
    packages = load_package_list(config.input_file)
    logger.info("Loaded %d package(s) from %s", len(packages), config.input_file)

    branch = resolve_branch(config.branch, config.os_release_file, config.target_distribution)
    if branch:
        logger.info("Querying branch %s", branch)
    else:
        logger.error("Could not determine the %s release to query", config.target_distribution)

    writer = writer or LockWriter(config.staging_dir)
    result = PinResult(branch=branch, output_path=config.output_file)

    with writer.staging() as handle:
        for spec in packages:
            with Timer() as timer:
                version = resolver(
                    spec.name,
                    branch,
                    arch=config.arch or None,
                    repo=config.repo,
                    maintainer=config.maintainer,
                    catalog_url=config.catalog_url,
                    timeout=config.timeout,
                )
            if version:
                writer.append(handle, spec.name, version)
                result.resolved.append(VersionedPackage(spec.name, version))
            else:
                result.missing.append(spec.name)
            if is_debug_enabled(logger):
                logger.debug(
                    "Package processed",
                    extra=extra_context(
                        event="resolve",
                        component="pipeline",
                        action="resolve_version",
                        outcome="found" if version else "missing",
                        package=spec.name,
                        version=version,
                        duration_ms=timer.duration_ms(),
                    ),
                )
        result.committed = writer.commit(handle, config.output_file)

    if result.committed:
        logger.info(
            "Wrote %d of %d package(s) to %s",
            len(result.resolved), result.attempted, config.output_file,
        )
    else:
        logger.warning(
            "No package versions resolved; %s left unchanged", config.output_file
        )
    return result
