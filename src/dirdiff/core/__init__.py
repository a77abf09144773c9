"""
Core fingerprinting engine: scanner, hasher, grouper, deletion policy, reaper and differ.

This package contains the performance-critical foundation of dirdiff:
- FileScannerImpl: recursive traversal yielding FileRecords for regular files
- HasherImpl + XXHashAlgorithmImpl: streaming xxHash64 (seed 0) content fingerprints
- FileGrouperImpl: sort-and-cut grouping by fingerprint
- DeletionPolicy: date-folder vs album-folder heuristic
- EmptyDirectoryReaperImpl: single-pass or bottom-up empty directory removal
- TreeDiffer: symmetric difference of two trees by content
- Models: FileRecord, DuplicateGroup, FingerprintSet and configuration objects

All components are pure Python with no console dependencies.
"""

from .scanner import FileScannerImpl
from .grouper import FileGrouperImpl
from .hasher import HasherImpl, XXHashAlgorithmImpl
from .policy import DeletionPolicy, is_date_like
from .reaper import EmptyDirectoryReaperImpl
from .differ import TreeDiffer
from .errors import DeletionError
from .models import (
    FileRecord, DuplicateGroup, FingerprintSet, DiffResult, DeletionFailure,
    DeduplicationReport, RunStats, ReapStrategy, ErrorPolicy, DeletionMethod,
    DeduplicationParams, DiffParams, SENTINEL_FINGERPRINT, fingerprint_key)

__all__ = [
    "FileScannerImpl",
    "FileGrouperImpl",
    "HasherImpl",
    "XXHashAlgorithmImpl",
    "DeletionPolicy",
    "is_date_like",
    "EmptyDirectoryReaperImpl",
    "TreeDiffer",
    "DeletionError",
    "FileRecord",
    "DuplicateGroup",
    "FingerprintSet",
    "DiffResult",
    "DeletionFailure",
    "DeduplicationReport",
    "RunStats",
    "ReapStrategy",
    "ErrorPolicy",
    "DeletionMethod",
    "DeduplicationParams",
    "DiffParams",
    "SENTINEL_FINGERPRINT",
    "fingerprint_key",
]
