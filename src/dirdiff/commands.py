"""
Command orchestrators for both run modes.
This is the SINGLE source of truth for run logic. The CLI only parses, prints and exits.
No console dependencies.
"""
import time
import logging
from typing import Optional, Callable, Tuple

from dirdiff.core.models import (
    DeduplicationParams, DeduplicationReport, DeletionFailure, DiffParams, DiffResult,
    DuplicateGroup, ErrorPolicy, FingerprintSet, RunStats, SENTINEL_FINGERPRINT)
from dirdiff.core.errors import DeletionError
from dirdiff.core.scanner import FileScannerImpl
from dirdiff.core.grouper import FileGrouperImpl
from dirdiff.core.hasher import HasherImpl
from dirdiff.core.policy import DeletionPolicy
from dirdiff.core.reaper import EmptyDirectoryReaperImpl
from dirdiff.core.differ import TreeDiffer
from dirdiff.core.interfaces import Hasher, FileGrouper
from dirdiff.services.file_service import FileService
from dirdiff.utils.convert_utils import ConvertUtils

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[str, int, Optional[int]], None]
# (action, path): action is one of "delete", "would-delete", "rmdir", "would-rmdir"
ActionCallback = Callable[[str, str], None]


class DeduplicationCommand:
    """
    Orchestrates a single-tree run:
    1. Scan and fingerprint every regular file under the root
    2. Group files by fingerprint
    3. Ask the deletion policy which members of each group go, and delete them
    4. Remove directories left empty

    Deletion and reaping only start after grouping has seen every file.

    Usage:
        params = DeduplicationParams(root_dir="/photos")
        report = DeduplicationCommand().execute(
            params,
            progress_callback=cli_progress_printer,
            action_callback=cli_action_printer
        )
    """

    def __init__(
            self,
            hasher: Optional[Hasher] = None,
            grouper: Optional[FileGrouper] = None,
            policy: Optional[DeletionPolicy] = None,
            file_service: Optional[FileService] = None
    ):
        self._hasher = hasher or HasherImpl()
        self._grouper = grouper or FileGrouperImpl()
        self._policy = policy
        self._file_service = file_service or FileService()

    def execute(
            self,
            params: DeduplicationParams,
            progress_callback: Optional[ProgressCallback] = None,
            action_callback: Optional[ActionCallback] = None
    ) -> DeduplicationReport:
        """
        Execute a deduplication run with given parameters.

        Returns:
            DeduplicationReport with deleted paths, removed directories and failures

        Raises:
            RuntimeError: If the root directory is missing or not a directory
            DeletionError: If a removal fails under ErrorPolicy.ABORT
        """
        report = DeduplicationReport(dry_run=params.dry_run)
        stats = report.stats
        policy = self._policy or DeletionPolicy(params.date_prefix)

        # Step 1: Scan and fingerprint
        scanner = FileScannerImpl(params.root_dir, hasher=self._hasher)
        start_time = time.time()
        files = list(scanner.scan(progress_callback=progress_callback))
        stats.update_stage("hashing", len(files), time.time() - start_time)
        report.files_scanned = len(files)

        # Step 2: Group
        start_time = time.time()
        groups = list(self._grouper.group_by_fingerprint(files))
        stats.update_stage("grouping", len(groups), time.time() - start_time)
        report.groups_found = len(groups)
        report.duplicate_groups = sum(1 for g in groups if g.is_duplicate())

        # Step 3: Delete
        start_time = time.time()
        for group in groups:
            self._apply_policy(group, policy, params, report, action_callback)
        stats.update_stage("deleting", len(report.deleted), time.time() - start_time)

        # Step 4: Reap empty directories
        start_time = time.time()
        reaper = EmptyDirectoryReaperImpl(self._file_service, params.reap)
        removed, failures = reaper.reap(params.root_dir, on_error=params.on_error, dry_run=params.dry_run)
        report.removed_dirs.extend(removed)
        report.failures.extend(failures)
        if action_callback:
            for dirpath in removed:
                action_callback("would-rmdir" if params.dry_run else "rmdir", dirpath)
        stats.update_stage("reaping", len(removed), time.time() - start_time)

        if report.failures:
            logger.warning(f"{report.failed_count} item(s) could not be removed")
        return report

    def _apply_policy(
            self,
            group: DuplicateGroup,
            policy: DeletionPolicy,
            params: DeduplicationParams,
            report: DeduplicationReport,
            action_callback: Optional[ActionCallback]
    ) -> None:
        """Delete the members of one group the policy selects."""
        if group.fingerprint == SENTINEL_FINGERPRINT and group.is_duplicate():
            # Unreadable files share the sentinel, their content was never compared
            logger.warning(
                f"Skipping {group.duplicate_count} files with unknown content "
                f"(fingerprint {SENTINEL_FINGERPRINT})"
            )
            return

        selected = policy.select_for_deletion(group)
        if selected:
            logger.debug(
                f"Group {ConvertUtils.fingerprint_to_hex(group.fingerprint)}: "
                f"removing {len(selected)} of {len(group.files)} copies"
            )
        for record in selected:
            size = self._file_service.file_size(record.path)

            if params.dry_run:
                if action_callback:
                    action_callback("would-delete", record.path)
                report.deleted.append(record.path)
                report.bytes_reclaimed += size
                continue

            if action_callback:
                action_callback("delete", record.path)
            try:
                self._file_service.delete_file(record.path, params.method)
            except (OSError, RuntimeError) as e:
                logger.error(f"Could not delete {record.path}: {e}")
                if params.on_error == ErrorPolicy.ABORT:
                    raise DeletionError(record.path, str(e)) from e
                report.failures.append(DeletionFailure(path=record.path, error=str(e)))
                continue

            report.deleted.append(record.path)
            report.bytes_reclaimed += size


class DiffCommand:
    """
    Orchestrates a two-tree run: scan both roots, then report the files
    whose content has no match on the other side. Never mutates the filesystem.
    """

    def __init__(self, hasher: Optional[Hasher] = None):
        self._hasher = hasher or HasherImpl()
        self.left_set: Optional[FingerprintSet] = None
        self.right_set: Optional[FingerprintSet] = None

    def execute(
            self,
            params: DiffParams,
            progress_callback: Optional[ProgressCallback] = None
    ) -> Tuple[DiffResult, RunStats]:
        stats = RunStats()

        # Validate both roots before hashing anything
        left_scanner = FileScannerImpl(params.left_dir, hasher=self._hasher)
        right_scanner = FileScannerImpl(params.right_dir, hasher=self._hasher)
        left_scanner.validate()
        right_scanner.validate()

        start_time = time.time()
        self.left_set = TreeDiffer.build_set(left_scanner.scan(progress_callback=progress_callback))
        stats.update_stage("hashing", self.left_set.scanned_count, time.time() - start_time)

        start_time = time.time()
        self.right_set = TreeDiffer.build_set(right_scanner.scan(progress_callback=progress_callback))
        stats.update_stage("hashing", self.right_set.scanned_count, time.time() - start_time)

        start_time = time.time()
        result = TreeDiffer.diff(self.left_set, self.right_set)
        stats.update_stage("diffing", len(result), time.time() - start_time)

        return result, stats
