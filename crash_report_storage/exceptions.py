"""
Custom exceptions for crash report storage.

Everything raised by the file store derives from FileStoreError so
callers can catch storage failures in one place.
"""


class FileStoreError(Exception):
    """Base exception for all file store errors."""

    def __init__(self, message: str, details: dict | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class DirectoryPreparationError(FileStoreError):
    """Raised when a required storage directory cannot be created.

    There is no fallback location, so this is fatal for the store.
    """

    def __init__(self, path: str, cause: Exception | None = None):
        details = {"path": path}
        if cause:
            details["cause"] = str(cause)
        super().__init__(f"Could not create crash report storage directory: {path}", details)
        self.path = path
        self.cause = cause


class SessionValidationError(FileStoreError):
    """Raised when a session id cannot be used as a path component."""

    def __init__(self, message: str, field: str | None = None):
        details = {}
        if field:
            details["field"] = field
        super().__init__(message, details)
        self.field = field


class StorageIOError(FileStoreError):
    """Raised when a storage I/O operation fails."""

    def __init__(self, operation: str, path: str | None = None, cause: Exception | None = None):
        details = {"operation": operation}
        if path:
            details["path"] = path
        if cause:
            details["cause"] = str(cause)
        message = f"Storage I/O error during {operation}"
        if path:
            message += f": {path}"
        super().__init__(message, details)
        self.operation = operation
        self.path = path
        self.cause = cause
