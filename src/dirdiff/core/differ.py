"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/differ.py
Compares two independently scanned trees by content.
A file is matched when its fingerprint occurs anywhere in the other tree, whatever its path.
"""
import logging
from typing import Iterable

from dirdiff.core.models import FileRecord, FingerprintSet, DiffResult

logger = logging.getLogger(__name__)


class TreeDiffer:
    """Symmetric difference of two FingerprintSets. Read-only."""

    @staticmethod
    def build_set(records: Iterable[FileRecord]) -> FingerprintSet:
        return FingerprintSet(records)

    @staticmethod
    def diff(left: FingerprintSet, right: FingerprintSet) -> DiffResult:
        """
        One representative per fingerprint present on exactly one side.
        Each side of the result is sorted by path.
        """
        only_in_left = [r for r in left if r not in right]
        only_in_right = [r for r in right if r not in left]

        logger.debug(
            f"Diff: {len(only_in_left)} only in left, {len(only_in_right)} only in right"
        )
        return DiffResult(
            only_in_left=sorted(only_in_left, key=lambda r: r.path),
            only_in_right=sorted(only_in_right, key=lambda r: r.path),
        )
