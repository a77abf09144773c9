"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/reaper.py
Removes directories left with zero entries after duplicate deletion.

Two strategies:
    - single-pass: collect the directories that are empty now, remove them, stop.
      A parent emptied by one of those removals survives until the next run.
    - bottom-up: visit deepest directories first and re-check each one when reached,
      so whole chains of empty directories disappear in one run.
The root directory itself is never removed.
"""
import os
import logging
from typing import List, Tuple, Optional

from dirdiff.core.errors import DeletionError
from dirdiff.core.interfaces import EmptyDirectoryReaper
from dirdiff.core.models import ReapStrategy, ErrorPolicy, DeletionFailure
from dirdiff.services.file_service import FileService

logger = logging.getLogger(__name__)


class EmptyDirectoryReaperImpl(EmptyDirectoryReaper):

    def __init__(self, file_service: Optional[FileService] = None,
                 strategy: ReapStrategy = ReapStrategy.BOTTOM_UP):
        self.file_service = file_service or FileService()
        self.strategy = strategy

    def find_empty_dirs(self, root_dir: str) -> List[str]:
        """Directories under root_dir (root excluded) that hold no entries right now."""
        root_dir = os.path.abspath(root_dir)
        empty_dirs = []
        for dirpath, _, _ in os.walk(root_dir, onerror=self._on_walk_error):
            if dirpath == root_dir:
                continue
            if self.file_service.is_empty_dir(dirpath):
                empty_dirs.append(dirpath)
        return empty_dirs

    def reap(
        self,
        root_dir: str,
        on_error: ErrorPolicy = ErrorPolicy.ABORT,
        dry_run: bool = False
    ) -> Tuple[List[str], List[DeletionFailure]]:
        root_dir = os.path.abspath(root_dir)
        if dry_run:
            return self.find_empty_dirs(root_dir), []

        if self.strategy == ReapStrategy.SINGLE_PASS:
            candidates = self.find_empty_dirs(root_dir)
        else:
            candidates = self._walk_bottom_up(root_dir)

        removed: List[str] = []
        failures: List[DeletionFailure] = []
        # Bottom-up candidates come from a generator, so each is checked after its children are gone
        for dirpath in candidates:
            try:
                self.file_service.remove_dir(dirpath)
            except (OSError, RuntimeError) as e:
                logger.error(f"Could not remove directory {dirpath}: {e}")
                if on_error == ErrorPolicy.ABORT:
                    raise DeletionError(dirpath, str(e)) from e
                failures.append(DeletionFailure(path=dirpath, error=str(e)))
                continue
            removed.append(dirpath)

        logger.debug(f"Removed {len(removed)} empty directories under {root_dir}")
        return removed, failures

    def _walk_bottom_up(self, root_dir: str):
        """Yields each directory that is empty at the moment it is reached, deepest first."""
        for dirpath, _, _ in os.walk(root_dir, topdown=False, onerror=self._on_walk_error):
            if dirpath == root_dir:
                continue
            if self.file_service.is_empty_dir(dirpath):
                yield dirpath

    @staticmethod
    def _on_walk_error(error: OSError) -> None:
        logger.debug(f"Skipping unreadable directory {error.filename}: {error.strerror}")
