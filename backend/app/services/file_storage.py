"""
File Storage Service
Reconciles media files on disk with the rows that reference them.

The database cascades rows only. Every service that deletes a Video or
Image row calls this service afterwards to remove the file itself.
Files left behind by a failed removal are picked up by sweep_orphans.
"""

import logging
import os
import time
from pathlib import Path
from typing import Iterable

from app.core.exceptions import BadRequestError


logger = logging.getLogger(__name__)


class FileStorage:
    """
    Filesystem access restricted to one media root.

    Args:
        media_root: Directory all stored media must live under
    """

    def __init__(self, media_root: str):
        self.media_root = Path(media_root).resolve()

    def ensure_root(self) -> Path:
        """Create the media root if it doesn't exist yet."""
        self.media_root.mkdir(parents=True, exist_ok=True)
        return self.media_root

    def _absolute(self, path: str) -> Path:
        candidate = Path(path)
        if not candidate.is_absolute():
            candidate = self.media_root / candidate
        return candidate

    def resolve(self, path: str) -> Path:
        """
        Resolve a stored file path and check it lies under the media root.

        Relative paths are taken relative to the media root.

        Raises:
            BadRequestError: If the path escapes the media root
        """
        resolved = self._absolute(path).resolve()
        if resolved != self.media_root and self.media_root not in resolved.parents:
            raise BadRequestError("File path is outside the media directory", {"path": path})
        return resolved

    def remove(self, path: str) -> bool:
        """
        Remove one file if it exists.

        Returns:
            True if a file was removed, False if nothing was there

        Raises:
            OSError: If the file exists but cannot be removed
        """
        if not path or not os.path.exists(path):
            return False
        os.remove(path)
        logger.info(f"Removed media file {path}")
        return True

    def remove_many(self, paths: Iterable[str]) -> list[str]:
        """
        Best-effort removal of several files.

        Keeps going after a failure so one locked file doesn't keep the
        others on disk.

        Returns:
            Paths that could not be removed
        """
        failed = []
        for path in paths:
            try:
                self.remove(path)
            except OSError as e:
                logger.error(f"Failed to remove media file {path}: {e}")
                failed.append(path)
        return failed

    def sweep_orphans(self, referenced: set[str], grace_seconds: int) -> tuple[list[str], list[str]]:
        """
        Delete files under the media root that no row references.

        Files modified less than grace_seconds ago are kept: they may belong
        to an upload whose row has not been written yet.

        Args:
            referenced: Paths still in use (media rows, user avatars); relative
                ones are taken relative to the media root
            grace_seconds: Minimum file age before it can be removed

        Returns:
            (removed paths, paths that failed to be removed)
        """
        if not self.media_root.exists():
            return [], []

        keep = {str(self._absolute(p).resolve()) for p in referenced if p}
        cutoff = time.time() - grace_seconds
        removed, failed = [], []

        for file_path in self.media_root.rglob("*"):
            if not file_path.is_file():
                continue
            resolved = str(file_path.resolve())
            if resolved in keep:
                continue
            if file_path.stat().st_mtime > cutoff:
                continue
            try:
                os.remove(resolved)
                removed.append(resolved)
            except OSError as e:
                logger.error(f"Failed to remove orphan file {resolved}: {e}")
                failed.append(resolved)

        if removed:
            logger.info(f"Orphan sweep removed {len(removed)} file(s)")
        return removed, failed
