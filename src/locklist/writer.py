"""Crash-safe lock listing writer.

Lines are staged in a private temporary file and only promoted onto the
final path by an atomic rename once the run has produced at least one
line. A run that resolves nothing leaves any previous lock file in place.
"""
from __future__ import annotations

import errno
import logging
import os
import shutil
import stat
import tempfile
from contextlib import contextmanager
from dataclasses import dataclass
from typing import IO, Iterator, Optional

from constants import Constants
from exceptions import StagingError

logger = logging.getLogger(__name__)


@dataclass
class StagingHandle:
    """An open staging file owned by one run."""
    path: str
    stream: IO[str]
    lines: int = 0


class LockWriter:
    """Stage name=version lines and promote them atomically."""

    def __init__(self, staging_dir: Optional[str] = None):
        self.staging_dir = staging_dir or None

    def begin(self) -> StagingHandle:
        """Create a fresh, uniquely named staging file.

        Raises:
            StagingError: If the file cannot be created.
        """
        try:
            fd, path = tempfile.mkstemp(
                prefix=Constants.STAGING_PREFIX,
                suffix=Constants.STAGING_SUFFIX,
                dir=self.staging_dir,
            )
        except OSError as e:
            raise StagingError(
                f"Cannot create staging file: {e}",
                operation="begin",
                target=self.staging_dir or tempfile.gettempdir(),
            ) from e
        stream = os.fdopen(fd, "w", encoding="utf-8", newline="\n")
        logger.debug("Staging file: %s", path)
        return StagingHandle(path=path, stream=stream)

    def append(self, handle: StagingHandle, name: str, version: str) -> None:
        """Write one name=version line in call order."""
        try:
            handle.stream.write(f"{name}={version}\n")
        except OSError as e:
            raise StagingError(
                f"Cannot write to staging file: {e}", operation="append", target=handle.path
            ) from e
        handle.lines += 1

    def commit(self, handle: StagingHandle, final_path: str) -> bool:
        """Promote the staging file onto final_path, or discard it if empty.

        Returns:
            bool: True when final_path was replaced, False when nothing was written.
        """
        try:
            handle.stream.flush()
            os.fsync(handle.stream.fileno())
        except OSError as e:
            self.discard(handle)
            raise StagingError(
                f"Cannot flush staging file: {e}", operation="commit", target=handle.path
            ) from e
        handle.stream.close()

        if handle.lines == 0:
            self.discard(handle)
            logger.debug("Nothing staged; leaving %s untouched", final_path)
            return False

        _copy_existing_mode(final_path, handle.path)
        try:
            os.replace(handle.path, final_path)
        except OSError as e:
            if e.errno != errno.EXDEV:
                self.discard(handle)
                raise StagingError(
                    f"Cannot move staging file into place: {e}",
                    operation="commit",
                    target=final_path,
                ) from e
            self._replace_across_devices(handle, final_path)
        logger.debug("Committed %d line(s) to %s", handle.lines, final_path)
        return True

    def discard(self, handle: StagingHandle) -> None:
        """Close and remove the staging file if it still exists."""
        if not handle.stream.closed:
            handle.stream.close()
        try:
            os.unlink(handle.path)
        except FileNotFoundError:
            pass
        except OSError as e:
            logger.warning("Could not remove staging file %s: %s", handle.path, e)

    @contextmanager
    def staging(self) -> Iterator[StagingHandle]:
        """Yield a staging handle that is discarded if the block raises."""
        handle = self.begin()
        try:
            yield handle
        except BaseException:
            self.discard(handle)
            raise

    def _replace_across_devices(self, handle: StagingHandle, final_path: str) -> None:
        # Renames cannot cross filesystems; copy next to the target first so
        # the final step is still a same-directory rename.
        target_dir = os.path.dirname(os.path.abspath(final_path))
        sibling = None
        try:
            fd, sibling = tempfile.mkstemp(
                prefix=Constants.STAGING_PREFIX, suffix=Constants.STAGING_SUFFIX, dir=target_dir
            )
            os.close(fd)
            shutil.copy2(handle.path, sibling)
        except OSError as e:
            if sibling is not None:
                _unlink_quietly(sibling)
            self.discard(handle)
            raise StagingError(
                f"Cannot stage next to output: {e}", operation="commit", target=target_dir
            ) from e
        try:
            os.replace(sibling, final_path)
        except OSError as e:
            _unlink_quietly(sibling)
            self.discard(handle)
            raise StagingError(
                f"Cannot move staging file into place: {e}", operation="commit", target=final_path
            ) from e
        self.discard(handle)


def _unlink_quietly(path: str) -> None:
    try:
        os.unlink(path)
    except OSError as e:
        logger.debug("Could not remove %s: %s", path, e)


def _copy_existing_mode(final_path: str, staged_path: str) -> None:
    try:
        mode = stat.S_IMODE(os.stat(final_path).st_mode)
    except OSError:
        return
    try:
        os.chmod(staged_path, mode)
    except OSError as e:
        logger.debug("Could not copy mode of %s: %s", final_path, e)
