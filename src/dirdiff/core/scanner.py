"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/scanner.py
Implements tree enumeration: every regular file under a root, paired with its fingerprint.
Features:
- Recursively walks directories with os.walk (symlinked directories are never entered)
- Skips symlinks, FIFOs, sockets and devices
- Tolerates unreadable directories and entries that vanish mid-walk
- Yields FileRecords lazily, one file hashed at a time
- Record paths are absolute whatever form the root was given in
"""

import os
import stat
import time
import logging
from typing import Iterator, Optional, Callable
from pathlib import Path

logger = logging.getLogger(__name__)

# Local imports
from dirdiff.core.models import FileRecord
from dirdiff.core.interfaces import TreeScanner, Hasher
from dirdiff.core.hasher import HasherImpl


class FileScannerImpl(TreeScanner):
    """
    Walks a directory tree and fingerprints each regular file it finds.

    Attributes:
        root_dir: Root directory to scan
        hasher: Hasher used for fingerprints (xxHash64, seed 0 by default)
    """

    # Progress throttling: report every N files to reduce console overhead
    PROGRESS_INTERVAL = 1000

    def __init__(self, root_dir: str, hasher: Optional[Hasher] = None):
        self.root_dir = root_dir
        self.hasher = hasher or HasherImpl()

    def validate(self) -> None:
        """Raise RuntimeError if the root is missing or not a directory."""
        root_path = Path(self.root_dir)
        if not root_path.exists():
            error_msg = f"Directory does not exist: {self.root_dir}"
            logger.error(error_msg)
            raise RuntimeError(error_msg)
        if not root_path.is_dir():
            error_msg = f"Not a directory: {self.root_dir}"
            logger.error(error_msg)
            raise RuntimeError(error_msg)

    def scan(self,
             progress_callback: Optional[Callable[[str, int, object], None]] = None) -> Iterator[FileRecord]:
        """
        Lazily yield a FileRecord for every regular file under the root.
        Traversal order is depth-first and otherwise unspecified.
        """
        self.validate()
        # Absolute paths, so parent folder names never depend on how the root was spelled
        root_dir = os.path.abspath(self.root_dir)
        logger.debug(f"Scanning directory: {root_dir}")

        processed_files = 0
        start_time = time.time()

        for root, dirs, files in os.walk(root_dir, onerror=self._on_walk_error):
            for filename in files:
                path = os.path.join(root, filename)
                if not self._is_regular_file(path):
                    continue

                yield FileRecord(path=path, fingerprint=self.hasher.compute_fingerprint(path))
                processed_files += 1

                if progress_callback and processed_files % self.PROGRESS_INTERVAL == 0:
                    progress_callback('hashing', processed_files, None)

        if progress_callback and processed_files % self.PROGRESS_INTERVAL:
            progress_callback('hashing', processed_files, None)

        logger.debug(
            f"Scan of {root_dir} completed: {processed_files} files "
            f"in {time.time() - start_time:.2f} seconds"
        )

    @staticmethod
    def _is_regular_file(path: str) -> bool:
        """True for regular files only; symlinks are not followed."""
        try:
            mode = os.lstat(path).st_mode
        except OSError as e:
            logger.debug(f"Skipping {path}: {e}")
            return False

        if stat.S_ISLNK(mode):
            logger.debug(f"Skipping symbolic link: {path}")
            return False
        return stat.S_ISREG(mode)

    @staticmethod
    def _on_walk_error(error: OSError) -> None:
        logger.debug(f"Skipping unreadable directory {error.filename}: {error.strerror}")
