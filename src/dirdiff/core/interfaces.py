"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

interfaces.py

Defines core interfaces (Protocols) used throughout the fingerprinting engine.
These protocols enforce structural typing using Python's `typing.Protocol` to ensure
consistency across modules while maintaining flexibility and modularity.

Key Components:
---------------
- ByteSink: Incremental hash state that accepts chunks of bytes.
- HashAlgorithm: Factory for fresh ByteSinks (e.g., xxHash64 with a fixed seed).
- Hasher: Interface for fingerprinting files and byte streams.
- TreeScanner: Interface for walking a tree and producing FileRecords.
- FileGrouper: Interface for partitioning FileRecords into DuplicateGroups.
- EmptyDirectoryReaper: Interface for removing directories left empty after deletion.
"""

from typing import Protocol, List, Tuple, Iterable, Iterator, Optional, Callable, BinaryIO
from dirdiff.core.models import (
    FileRecord,
    DuplicateGroup,
    DeletionFailure,
    ErrorPolicy,
)


# ===== Interfaces =====

class ByteSink(Protocol):
    """Accepts a sequence of byte chunks and folds them into internal state."""
    def update(self, data: bytes) -> None: ...
    def intdigest(self) -> int: ...


class HashAlgorithm(Protocol):
    """
    Interface for streaming hash algorithms.

    Allows plugging in different hashing functions without affecting
    the rest of the fingerprinting logic.
    """

    def new_sink(self) -> ByteSink:
        """Returns a fresh hash state."""
        ...


class Hasher(Protocol):
    """Interface for computing content fingerprints."""
    def hash_stream(self, stream: BinaryIO) -> int: ...
    def compute_fingerprint(self, path: str) -> int: ...


class TreeScanner(Protocol):
    """
    Interface for walking a directory tree.

    Methods:
        scan: Lazily yields a FileRecord for every regular file under the root.
    """
    def scan(
        self,
        progress_callback: Optional[Callable[[str, int, object], None]] = None
    ) -> Iterator[FileRecord]:
        ...


class FileGrouper(Protocol):
    """
    Interface for partitioning fingerprinted files into groups of equal content.
    """
    def group_by_fingerprint(self, records: Iterable[FileRecord]) -> Iterator[DuplicateGroup]:
        """Yield one group per distinct fingerprint, singletons included."""
        ...


class EmptyDirectoryReaper(Protocol):
    """
    Interface for removing directories that hold no entries.
    """
    def find_empty_dirs(self, root_dir: str) -> List[str]:
        ...

    def reap(
        self,
        root_dir: str,
        on_error: ErrorPolicy = ErrorPolicy.ABORT,
        dry_run: bool = False
    ) -> Tuple[List[str], List[DeletionFailure]]:
        """
        Remove empty directories under root_dir.

        Returns:
            A tuple of (removed directory paths, recorded failures).
        """
        ...
