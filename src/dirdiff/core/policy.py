"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/policy.py
Pure deletion logic for duplicate groups. It decides and never touches the filesystem.

Archive convention: "album" folders hold curated canonical copies, folders whose
name starts with a year ("2024-03-01") hold raw imports. A date-folder copy is
only redundant when an album copy of the same content exists.
"""
from pathlib import PurePath
from typing import List
from dirdiff.core.models import DuplicateGroup, FileRecord

DEFAULT_DATE_PREFIX = "20"


def is_date_like(path: str, prefix: str = DEFAULT_DATE_PREFIX) -> bool:
    """True if the file's immediate parent directory name starts with prefix."""
    return PurePath(path).parent.name.startswith(prefix)


class DeletionPolicy:
    """
    Selects the members of a duplicate group that are safe to delete.

    Rules:
    1. A member is date-like if its parent directory name starts with the prefix,
       album-like otherwise.
    2. With more than one member and at least one album-like member,
       every date-like member is selected.
    3. All-date groups and singletons select nothing.
    """

    def __init__(self, date_prefix: str = DEFAULT_DATE_PREFIX):
        if not date_prefix:
            raise ValueError("Date prefix cannot be empty")
        self.date_prefix = date_prefix

    def is_date_like(self, record: FileRecord) -> bool:
        return is_date_like(record.path, self.date_prefix)

    def select_for_deletion(self, group: DuplicateGroup) -> List[FileRecord]:
        if not group.is_duplicate():
            return []

        in_album = any(not self.is_date_like(f) for f in group.files)
        if not in_album:
            return []

        return [f for f in group.files if self.is_date_like(f)]
