"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

services/file_service.py
Filesystem mutations used by the deduplication run.
Files are either unlinked or moved to the system trash; directories are only ever removed when empty.
"""
import os
import logging
from pathlib import Path
from send2trash import send2trash

from dirdiff.core.models import DeletionMethod

logger = logging.getLogger(__name__)


class FileService:
    """
    File and directory removal with uniform error reporting.
    Every failure surfaces as FileNotFoundError (target vanished) or RuntimeError.
    """

    @staticmethod
    def delete_file(file_path: str, method: DeletionMethod = DeletionMethod.DELETE):
        """Deletes a file permanently or moves it to the system trash."""
        if method == DeletionMethod.TRASH:
            FileService.move_to_trash(file_path)
            return

        path = Path(file_path)
        if not path.exists() and not path.is_symlink():
            raise FileNotFoundError(f"File not found: {path}")

        try:
            os.remove(path)
        except OSError as e:
            raise RuntimeError(f"Failed to delete file: {e}") from e
        logger.debug(f"Deleted {path}")

    @staticmethod
    def move_to_trash(file_path: str):
        """Moves a file to the system trash."""
        path = Path(file_path).resolve()

        if not path.exists():
            raise FileNotFoundError(f"File not found: {path}")

        try:
            send2trash(str(path))
        except Exception as e:
            raise RuntimeError(f"Failed to move to trash: {e}") from e
        logger.debug(f"Moved {path} to trash")

    @staticmethod
    def remove_dir(dir_path: str):
        """Removes an empty directory."""
        try:
            os.rmdir(dir_path)
        except FileNotFoundError:
            raise
        except OSError as e:
            raise RuntimeError(f"Failed to remove directory: {e}") from e
        logger.debug(f"Removed directory {dir_path}")

    @staticmethod
    def is_empty_dir(dir_path: str) -> bool:
        """True for a directory with zero entries. Unreadable directories are not empty."""
        try:
            with os.scandir(dir_path) as entries:
                return next(entries, None) is None
        except OSError as e:
            logger.debug(f"Could not list {dir_path}: {e}")
            return False

    @staticmethod
    def file_size(file_path: str) -> int:
        try:
            return os.lstat(file_path).st_size
        except OSError:
            return 0
