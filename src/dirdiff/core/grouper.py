"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/grouper.py
Partitions fingerprinted files into groups of equal content.
A single sorted pass: sort by fingerprint, then cut the sequence wherever the fingerprint changes.
"""

from typing import Iterable, Iterator, List
from dirdiff.core.interfaces import FileGrouper
from dirdiff.core.models import FileRecord, DuplicateGroup, fingerprint_key


class FileGrouperImpl(FileGrouper):
    """
    Groups FileRecords by fingerprint.
    Every record lands in exactly one group; singleton groups are emitted too.
    """

    def group_by_fingerprint(self, records: Iterable[FileRecord]) -> Iterator[DuplicateGroup]:
        """Yields groups in ascending fingerprint order."""
        current_run: List[FileRecord] = []

        for record in sorted(records, key=fingerprint_key):
            if current_run and current_run[-1].fingerprint != record.fingerprint:
                yield DuplicateGroup.from_records(current_run)
                current_run = []
            current_run.append(record)

        # Last run
        if current_run:
            yield DuplicateGroup.from_records(current_run)
