"""
Local file-based storage for crash reporting.

Key pieces:
- FileStore: Owns the common/session/report layout under a base directory
- file_ops: Directory preparation, recursive delete, listings, atomic report I/O
"""

from .file_ops import (
    list_entries,
    list_names,
    prepare_dir,
    read_bytes,
    recursive_delete,
    write_bytes_atomic,
)
from .file_store import (
    FILES_PATH,
    LEGACY_FILES_PATH,
    NATIVE_REPORT_EXTENSION,
    PREPARED_REPORTS_PATH,
    PRIORITY_REPORT_EXTENSION,
    REPORT_EXTENSIONS,
    SESSIONS_PATH,
    FileStore,
    validate_session_id,
)

__all__ = [
    "FileStore",
    "validate_session_id",
    # Layout constants
    "FILES_PATH",
    "LEGACY_FILES_PATH",
    "SESSIONS_PATH",
    "PREPARED_REPORTS_PATH",
    "PRIORITY_REPORT_EXTENSION",
    "NATIVE_REPORT_EXTENSION",
    "REPORT_EXTENSIONS",
    # Low-level file operations
    "prepare_dir",
    "recursive_delete",
    "list_entries",
    "list_names",
    "write_bytes_atomic",
    "read_bytes",
]
