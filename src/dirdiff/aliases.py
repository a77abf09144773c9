from dirdiff.core.models import ReapStrategy, ErrorPolicy

REAP_ALIASES = {
    "single-pass": ReapStrategy.SINGLE_PASS,
    "bottom-up": ReapStrategy.BOTTOM_UP,
}

REAP_CHOICES = list(REAP_ALIASES.keys())

REAP_HELP_TEXT = (
    "How empty directories are removed after deletion:\n"
    "  single-pass : Remove directories that are empty before reaping starts\n"
    "  bottom-up   : Deepest first, parents emptied on the way are removed too\n"
    "Default: bottom-up"
)

ON_ERROR_ALIASES = {
    "abort": ErrorPolicy.ABORT,
    "continue": ErrorPolicy.CONTINUE,
}

ON_ERROR_CHOICES = list(ON_ERROR_ALIASES.keys())

ON_ERROR_HELP_TEXT = (
    "What to do when a file or directory cannot be removed:\n"
    "  abort    : Stop the run immediately (exit code 1)\n"
    "  continue : Skip it, finish the run, report failures (exit code 3)\n"
    "Default: abort"
)

DIR2_HELP_TEXT = (
    "Another directory. If specified, prints the files that are unique\n"
    "to DIR1 or DIR2 according to their content hashes. If unspecified,\n"
    "deletes duplicate files and empty directories in DIR1."
)

EPILOG_TEXT = """
Duplicate rule (single directory mode):
  A copy whose parent folder name starts with the date prefix ("20" by default,
  e.g. 2024-03-01/) is deleted when the same content also exists in a folder
  that does not (an album). Copies found only in date folders are kept.

Examples:
  Preview what would be deleted in a photo archive
  %(prog)s ~/Pictures --dry-run

  Delete duplicates, moving them to trash, and keep going on errors
  %(prog)s ~/Pictures --trash --on-error continue

  List files whose content exists in only one of two trees
  %(prog)s ~/Pictures /mnt/backup/Pictures
"""
