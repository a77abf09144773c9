"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/models.py
Data models for fingerprinting, grouping, diffing and deleting files.
"""

from dataclasses import dataclass, field
from typing import List, Dict, Iterable, Iterator, Optional, Tuple, Union
from enum import Enum


# Fingerprint reported for files that could not be opened or read
SENTINEL_FINGERPRINT = 0


# =============================
# Enums
# =============================

class ReapStrategy(Enum):
    """
    How empty directories are removed after deletion.
    """
    SINGLE_PASS = "single-pass"
    BOTTOM_UP = "bottom-up"

    @property
    def description(self) -> str:
        """Detailed description for help text."""
        mapping = {
            ReapStrategy.SINGLE_PASS:
                "Remove directories that are empty when the pass starts",
            ReapStrategy.BOTTOM_UP:
                "Remove deepest directories first, so emptied parents go too",
        }
        return mapping.get(self, self.value)

    def __repr__(self) -> str:
        return self.value


class ErrorPolicy(Enum):
    """
    What to do when a file or directory cannot be removed.
    """
    ABORT = "abort"
    CONTINUE = "continue"

    def __repr__(self) -> str:
        return self.value


class DeletionMethod(Enum):
    DELETE = "delete"
    TRASH = "trash"

    @property
    def display_name(self) -> str:
        mapping = {
            DeletionMethod.DELETE: "Delete permanently",
            DeletionMethod.TRASH: "Move to trash",
        }
        return mapping.get(self, self.value)


# ======================
#  Core Data Models
# ======================

@dataclass(frozen=True, order=True)
class FileRecord:
    """
    A regular file paired with the fingerprint of its content.
    Identity and ordering come from the fingerprint alone, the path is payload.
    """
    path: str = field(compare=False)
    fingerprint: int

    def __repr__(self):
        return f"<FileRecord path={self.path}, fingerprint={self.fingerprint:016x}>"


def fingerprint_key(record: FileRecord) -> int:
    """Sort key used to bring equal fingerprints next to each other."""
    return record.fingerprint


@dataclass(frozen=True)
class DuplicateGroup:
    """
    A run of files sharing one fingerprint.
    Singleton groups are valid, they are simply never acted upon.
    """
    fingerprint: int
    files: Tuple[FileRecord, ...]

    def __post_init__(self):
        if not self.files:
            raise ValueError("DuplicateGroup cannot be empty")
        for file in self.files:
            if file.fingerprint != self.fingerprint:
                raise ValueError(
                    f"Cannot add {file.path} with fingerprint {file.fingerprint:016x} "
                    f"to group {self.fingerprint:016x}"
                )

    @classmethod
    def from_records(cls, records: Iterable[FileRecord]) -> 'DuplicateGroup':
        records = tuple(records)
        if not records:
            raise ValueError("DuplicateGroup cannot be empty")
        return cls(fingerprint=records[0].fingerprint, files=records)

    @property
    def duplicate_count(self) -> int:
        """How many files are in this group."""
        return len(self.files)

    @property
    def paths(self) -> List[str]:
        return [f.path for f in self.files]

    def is_duplicate(self) -> bool:
        """True if this group contains at least two files."""
        return self.duplicate_count >= 2

    def __repr__(self):
        return f"<DuplicateGroup fingerprint={self.fingerprint:016x}, count={len(self.files)}>"


class FingerprintSet:
    """
    Files of one tree keyed by fingerprint.
    The first record seen for a fingerprint stays its representative.
    """

    def __init__(self, records: Optional[Iterable[FileRecord]] = None):
        self._by_fingerprint: Dict[int, FileRecord] = {}
        self.scanned_count = 0
        if records is not None:
            for record in records:
                self.add(record)

    def add(self, record: FileRecord) -> None:
        self.scanned_count += 1
        self._by_fingerprint.setdefault(record.fingerprint, record)

    def get(self, fingerprint: int) -> Optional[FileRecord]:
        return self._by_fingerprint.get(fingerprint)

    def fingerprints(self):
        return self._by_fingerprint.keys()

    def __contains__(self, item: Union[FileRecord, int]) -> bool:
        fingerprint = item.fingerprint if isinstance(item, FileRecord) else item
        return fingerprint in self._by_fingerprint

    def __iter__(self) -> Iterator[FileRecord]:
        return iter(self._by_fingerprint.values())

    def __len__(self) -> int:
        return len(self._by_fingerprint)

    def __repr__(self):
        return f"<FingerprintSet unique={len(self)}, scanned={self.scanned_count}>"


@dataclass
class DiffResult:
    """Files whose content appears under only one of two compared roots."""
    only_in_left: List[FileRecord] = field(default_factory=list)
    only_in_right: List[FileRecord] = field(default_factory=list)

    @property
    def unmatched(self) -> List[FileRecord]:
        return self.only_in_left + self.only_in_right

    def __len__(self) -> int:
        return len(self.only_in_left) + len(self.only_in_right)


@dataclass
class DeletionFailure:
    path: str
    error: str


@dataclass
class RunStats:
    """
    Timing and volume statistics collected stage by stage during a run.
    """
    total_time: float = 0.0
    stage_stats: Dict[str, Dict[str, Union[int, float]]] = field(default_factory=dict)

    def update_stage(self, stage_name: str, items: int, duration: float) -> None:
        if stage_name not in self.stage_stats:
            self.stage_stats[stage_name] = {"items": 0, "time": 0.0}
        self.stage_stats[stage_name]["items"] += items
        self.stage_stats[stage_name]["time"] += duration
        self.total_time += duration

    def print_summary(self) -> str:
        labels = {
            "hashing": "Hashed files",
            "grouping": "Fingerprint groups",
            "deleting": "Deleted files",
            "reaping": "Removed directories",
            "diffing": "Unmatched files",
        }

        lines = [
            "Run Statistics:",
            f"Total Execution Time: {self.total_time:.3f}s\n",
            "Stage: ITEMS / TIME"
        ]

        for stage, data in self.stage_stats.items():
            label = labels.get(stage.lower(), stage.title())
            lines.append(f"{label}: {data['items']} / {data['time']:.3f}s")

        return "\n".join(lines)


@dataclass
class DeduplicationReport:
    """Outcome of one single-tree deduplication run."""
    files_scanned: int = 0
    groups_found: int = 0
    duplicate_groups: int = 0
    deleted: List[str] = field(default_factory=list)
    bytes_reclaimed: int = 0
    removed_dirs: List[str] = field(default_factory=list)
    failures: List[DeletionFailure] = field(default_factory=list)
    dry_run: bool = False
    stats: RunStats = field(default_factory=RunStats)

    @property
    def failed_count(self) -> int:
        return len(self.failures)


"""
DTOs for run parameters with built-in validation.
Interface-agnostic: built by the CLI, consumed by the commands.
"""

@dataclass
class DeduplicationParams:
    """Parameters for a single-tree deduplication run."""
    root_dir: str
    date_prefix: str = "20"
    reap: ReapStrategy = ReapStrategy.BOTTOM_UP
    on_error: ErrorPolicy = ErrorPolicy.ABORT
    method: DeletionMethod = DeletionMethod.DELETE
    dry_run: bool = False

    def __post_init__(self):
        """Validate parameters immediately after creation."""
        if not self.root_dir:
            raise ValueError("Root directory cannot be empty")
        if not self.date_prefix:
            raise ValueError("Date prefix cannot be empty")


@dataclass
class DiffParams:
    """Parameters for a two-tree diff run."""
    left_dir: str
    right_dir: str

    def __post_init__(self):
        if not self.left_dir or not self.right_dir:
            raise ValueError("Both directories must be given for a diff")
