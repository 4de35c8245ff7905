"""
Crash Report Storage

On-device file layout for a crash reporting SDK.

Provides:
- Common files shared by the whole SDK
- Per-session directories for temporary crash/monitoring files
- A flat directory of prepared reports awaiting upload

Usage:

    >>> from crash_report_storage import FileStore
    >>> store = FileStore("/data/app/files")
    >>> trace = store.session_file("abc", "trace.tmp")
    >>> trace.write_bytes(b"...")
    >>> store.list_open_session_ids()
    ['abc']
    >>> store.delete_session_files("abc")
    True
"""

from .config import FileStoreConfig
from .exceptions import (
    DirectoryPreparationError,
    FileStoreError,
    SessionValidationError,
    StorageIOError,
)
from .local import (
    NATIVE_REPORT_EXTENSION,
    PRIORITY_REPORT_EXTENSION,
    FileStore,
    read_bytes,
    recursive_delete,
    write_bytes_atomic,
)
from .logging_utils import StorageLoggerAdapter, configure_structured_logging

__version__ = "0.1.0"

__all__ = [
    # Store
    "FileStore",
    "FileStoreConfig",
    "PRIORITY_REPORT_EXTENSION",
    "NATIVE_REPORT_EXTENSION",
    # File operations
    "recursive_delete",
    "write_bytes_atomic",
    "read_bytes",
    # Logging
    "configure_structured_logging",
    "StorageLoggerAdapter",
    # Exceptions
    "FileStoreError",
    "DirectoryPreparationError",
    "SessionValidationError",
    "StorageIOError",
]
