#!/usr/bin/env python3
"""
dirdiff CLI: command line interface for content-based duplicate removal and tree diffing.

  dirdiff DIR1          delete date-folder copies that also exist in an album folder,
                        then remove directories left empty
  dirdiff DIR1 DIR2     print files whose content exists under only one of the two roots
"""
from __future__ import annotations  # Enable postponed evaluation of annotations (PEP 563)
import argparse
import sys
import time
from pathlib import Path
from typing import Optional, NoReturn
import logging

LOG_FORMAT = "%(levelname)-8s | %(name)-25s | %(message)s"

# === EARLY DEPENDENCY VALIDATION ===
_MISSING_DEPS = []
try:
    import xxhash
except ImportError:
    _MISSING_DEPS.append("xxhash")

try:
    from send2trash import send2trash
except ImportError:
    _MISSING_DEPS.append("send2trash")

if _MISSING_DEPS:
    print("❌ Missing required dependencies:", file=sys.stderr)
    print(f"   pip install {' '.join(_MISSING_DEPS)}", file=sys.stderr)
    sys.exit(1)

# === NORMAL IMPORTS (after validation) ===
from dirdiff.core.models import (
    DeduplicationParams, DeduplicationReport, DeletionMethod, DiffParams, DiffResult)
from dirdiff.core.errors import DeletionError
from dirdiff.core.policy import DEFAULT_DATE_PREFIX
from dirdiff.commands import DeduplicationCommand, DiffCommand
from dirdiff.utils.convert_utils import ConvertUtils
from dirdiff.aliases import (
    REAP_ALIASES, REAP_CHOICES, REAP_HELP_TEXT,
    ON_ERROR_ALIASES, ON_ERROR_CHOICES, ON_ERROR_HELP_TEXT,
    DIR2_HELP_TEXT, EPILOG_TEXT
)

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_PARTIAL = 3
EXIT_INTERRUPTED = 130

# Options that only apply when a single directory is deduplicated
DEDUP_ONLY_OPTIONS = ("dry_run", "trash", "on_error", "reap", "date_prefix")

ACTION_LABELS = {
    "delete": "Deleting",
    "would-delete": "Would delete",
    "rmdir": "Removing empty directory",
    "would-rmdir": "Would remove empty directory",
}


class CLIApplication:
    """Main CLI application controller."""

    def __init__(self):
        self.start_time: float = time.time()
        self.verbose: bool = False
        self.quiet: bool = False

        # Fix encoding for Windows consoles to prevent UnicodeEncodeError
        if hasattr(sys.stdout, "reconfigure"):
            sys.stdout.reconfigure(encoding='utf-8')
            sys.stderr.reconfigure(encoding='utf-8')

    @staticmethod
    def parse_args(args=None) -> argparse.Namespace:
        """Parse command-line arguments."""
        parser = argparse.ArgumentParser(
            prog="dirdiff",
            description="dirdiff — find duplicate and divergent files by content hash",
            formatter_class=argparse.RawTextHelpFormatter,
            epilog=EPILOG_TEXT
        )

        parser.add_argument(
            "dir1",
            type=str,
            help="A directory."
        )
        parser.add_argument(
            "dir2",
            nargs="?",
            default=None,
            type=str,
            help=DIR2_HELP_TEXT
        )

        # Single directory options (defaults filled in create_dedup_params)
        parser.add_argument(
            "--dry-run", "-n",
            action="store_true",
            default=None,
            dest="dry_run",
            help="Show what would be deleted without touching the filesystem"
        )
        parser.add_argument(
            "--trash",
            action="store_true",
            default=None,
            help="Move duplicates to the system trash instead of deleting them"
        )
        parser.add_argument(
            "--on-error",
            choices=ON_ERROR_CHOICES,
            default=None,
            type=str,
            dest="on_error",
            help=ON_ERROR_HELP_TEXT
        )
        parser.add_argument(
            "--reap",
            choices=REAP_CHOICES,
            default=None,
            type=str,
            help=REAP_HELP_TEXT
        )
        parser.add_argument(
            "--date-prefix",
            default=None,
            type=str,
            metavar='PREFIX',
            dest="date_prefix",
            help=f"Parent folder name prefix marking a date folder. Default: {DEFAULT_DATE_PREFIX}"
        )

        # Output options
        parser.add_argument(
            "--quiet", "-q",
            action="store_true",
            help="Suppress non-essential output"
        )
        parser.add_argument(
            "--verbose", "-v",
            action="store_true",
            help="Show detailed statistics, progress and debug logging"
        )

        return parser.parse_args(args)

    def validate_args(self, args: argparse.Namespace) -> None:
        """Validate command-line arguments before anything is scanned."""
        if args.quiet and args.verbose:
            self.error_exit("--quiet and --verbose cannot be used together")

        for value in (args.dir1, args.dir2):
            if value is None:
                continue
            path = Path(value)
            if not path.exists():
                self.error_exit(f"Directory not found: {value}")
            if not path.is_dir():
                self.error_exit(f"Path is not a directory: {value}")

        if args.dir2 is not None:
            given = [opt for opt in DEDUP_ONLY_OPTIONS if getattr(args, opt) is not None]
            if given:
                flags = ", ".join("--" + opt.replace("_", "-") for opt in given)
                self.error_exit(f"{flags} only apply when a single directory is given")
            if Path(args.dir1).resolve() == Path(args.dir2).resolve():
                self.warning("dir1 and dir2 are the same directory, every file will match")

        if args.date_prefix is not None and not args.date_prefix.strip():
            self.error_exit("Date prefix cannot be empty")

    def create_dedup_params(self, args: argparse.Namespace) -> DeduplicationParams:
        """Create DeduplicationParams from CLI arguments."""
        try:
            return DeduplicationParams(
                root_dir=args.dir1,
                date_prefix=args.date_prefix or DEFAULT_DATE_PREFIX,
                reap=REAP_ALIASES[args.reap or "bottom-up"],
                on_error=ON_ERROR_ALIASES[args.on_error or "abort"],
                method=DeletionMethod.TRASH if args.trash else DeletionMethod.DELETE,
                dry_run=bool(args.dry_run),
            )
        except ValueError as e:
            self.error_exit(f"Parameter error: {e}")

    def create_diff_params(self, args: argparse.Namespace) -> DiffParams:
        """Create DiffParams from CLI arguments."""
        try:
            return DiffParams(left_dir=args.dir1, right_dir=args.dir2)
        except ValueError as e:
            self.error_exit(f"Parameter error: {e}")

    def progress_callback(self, stage: str, current: int, total: Optional[int]) -> None:
        """CLI progress callback - shows progress in console."""
        if not self.verbose:
            return

        if total and total > 0:
            percent = (current / total) * 100
            sys.stderr.write(f"\r  [{stage}] {current}/{total} ({percent:.1f}%)")
        else:
            sys.stderr.write(f"\r  [{stage}] {current} files processed...")
        sys.stderr.flush()

    def action_callback(self, action: str, path: str) -> None:
        """Prints one line per file or directory removed (or that would be)."""
        if self.quiet:
            return
        print(f"{ACTION_LABELS.get(action, action)} {path}")

    def info(self, message: str, stream=None) -> None:
        if not self.quiet:
            print(message, file=stream or sys.stdout)

    def run_deduplication(self, params: DeduplicationParams) -> DeduplicationReport:
        """Execute the single directory workflow."""
        self.info(f"Removing duplicate files and empty directories in {params.root_dir}")
        if params.dry_run:
            self.info("Dry run: nothing will be deleted")
        self.info(f"Calculating hashes of files in {params.root_dir} recursively...")

        command = DeduplicationCommand()
        try:
            report = command.execute(
                params,
                progress_callback=self.progress_callback if self.verbose else None,
                action_callback=self.action_callback
            )
        except DeletionError as e:
            self.error_exit(f"{e}. Run aborted, no further changes were made.")
        except RuntimeError as e:
            self.error_exit(f"Deduplication failed: {e}")

        if self.verbose:
            sys.stderr.write("\n")
        return report

    def output_dedup_report(self, report: DeduplicationReport) -> None:
        hashing = report.stats.stage_stats.get("hashing", {"time": 0.0})
        self.info(
            f"Took {ConvertUtils.seconds_to_human(hashing['time'])} "
            f"to hash {report.files_scanned} files."
        )
        self.info(
            f"Found {report.duplicate_groups} duplicate groups "
            f"among {report.groups_found} distinct contents."
        )

        verb = "Would delete" if report.dry_run else "Deleted"
        dir_verb = "would remove" if report.dry_run else "removed"
        self.info(
            f"{verb} {len(report.deleted)} files "
            f"({ConvertUtils.bytes_to_human(report.bytes_reclaimed)}), "
            f"{dir_verb} {len(report.removed_dirs)} empty directories."
        )

        if report.failures:
            print(f"\n⚠️  {report.failed_count} item(s) could not be removed:", file=sys.stderr)
            for failure in report.failures[:5]:
                print(f"  • {failure.path}: {failure.error}", file=sys.stderr)
            if report.failed_count > 5:
                print(f"  ...and {report.failed_count - 5} more", file=sys.stderr)

        if self.verbose:
            print()
            print(report.stats.print_summary())

    def run_diff(self, params: DiffParams) -> DiffResult:
        """Execute the two directory workflow. Status lines go to stderr, results to stdout."""
        self.info(f"Diffing the directories {params.left_dir} and {params.right_dir}", sys.stderr)

        command = DiffCommand()
        try:
            result, stats = command.execute(
                params,
                progress_callback=self.progress_callback if self.verbose else None
            )
        except RuntimeError as e:
            self.error_exit(f"Diff failed: {e}")

        if self.verbose:
            sys.stderr.write("\n")
        self.info(
            f"Hashed {command.left_set.scanned_count} + {command.right_set.scanned_count} files, "
            f"{len(result)} unmatched.",
            sys.stderr
        )
        if self.verbose:
            print(stats.print_summary(), file=sys.stderr)
        return result

    @staticmethod
    def output_diff(result: DiffResult) -> None:
        """Unmatched paths, one per line: DIR1-only first, then DIR2-only."""
        for record in result.unmatched:
            print(record.path)

    def warning(self, message: str) -> None:
        """Print a warning message to stderr."""
        if not self.quiet:
            print(f"⚠️  {message}", file=sys.stderr)

    @staticmethod
    def error_exit(message: str, code: int = EXIT_ERROR) -> NoReturn:
        """Print error and exit."""
        print(f"❌ Error: {message}", file=sys.stderr)
        sys.exit(code)

    @staticmethod
    def configure_logging(verbose: bool, quiet: bool) -> None:
        level = logging.WARNING
        if verbose:
            level = logging.DEBUG
        elif quiet:
            level = logging.ERROR
        logging.basicConfig(level=level, format=LOG_FORMAT)

    def run(self) -> int:
        """Main entry point. Returns the process exit code."""
        args = self.parse_args()
        self.verbose = args.verbose
        self.quiet = args.quiet

        self.validate_args(args)
        self.configure_logging(self.verbose, self.quiet)

        if args.dir2 is not None:
            params = self.create_diff_params(args)
            result = self.run_diff(params)
            self.output_diff(result)
            exit_code = EXIT_OK
        else:
            params = self.create_dedup_params(args)
            report = self.run_deduplication(params)
            self.output_dedup_report(report)
            exit_code = EXIT_PARTIAL if report.failures else EXIT_OK

        # Show completion time
        elapsed = time.time() - self.start_time
        if self.verbose:
            print(f"\n✅ Completed in {ConvertUtils.seconds_to_human(elapsed)}", file=sys.stderr)
        return exit_code


def main() -> None:
    """Application entry point."""
    app = CLIApplication()
    try:
        sys.exit(app.run())
    except KeyboardInterrupt:
        print("\n⚠️  Operation cancelled by user (Ctrl+C)", file=sys.stderr)
        sys.exit(EXIT_INTERRUPTED)
    except Exception as e:
        if app.verbose:
            raise
        print(f"❌ Unexpected error: {e}", file=sys.stderr)
        sys.exit(EXIT_ERROR)


if __name__ == "__main__":
    main()
