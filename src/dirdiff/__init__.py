"""
dirdiff: content-fingerprint duplicate remover and tree differ.

Core features:
- Streaming xxHash64 fingerprints of every regular file in a tree
- Single directory mode: deletes date-folder copies that also exist in an album folder,
  then removes directories left empty
- Two directory mode: lists files whose content exists under only one root
- Optional safe deletion to system trash (via send2trash)
"""

# Get version
try:
    from importlib.metadata import version as _version
    __version__ = _version("dirdiff")
except Exception:
    __version__ = "0.0.0"

# Public API, only what users should import directly
# core first: services import core models
from dirdiff.core import (
    FileRecord, DuplicateGroup, FingerprintSet, DiffResult, DeduplicationParams, DiffParams,
    DeduplicationReport, ReapStrategy, ErrorPolicy, DeletionMethod, DeletionError)
from dirdiff.commands import DeduplicationCommand, DiffCommand
from dirdiff.services.file_service import FileService
from dirdiff.utils.convert_utils import ConvertUtils

__all__ = [
    "DeduplicationCommand",
    "DiffCommand",
    "DeduplicationParams",
    "DiffParams",
    "DeduplicationReport",
    "FileRecord",
    "DuplicateGroup",
    "FingerprintSet",
    "DiffResult",
    "ReapStrategy",
    "ErrorPolicy",
    "DeletionMethod",
    "DeletionError",
    "FileService",
    "ConvertUtils",
    "__version__",
]
