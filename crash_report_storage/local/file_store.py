"""
Namespaced file layout for crash reporting.

Three kinds of files live under the store:
- "Common" files, independent of any session.
- "Open session" files, temporary files specific to one session. Each
  session gets its own directory so all of its files can be cleaned up
  by deleting that directory.
- "Report" files, processed reports ready for upload.

The root directory name carries a version so the layout can change later:

    .com.google.firebase.crashlytics.files.v1/
      open-sessions/
        SESSION-ID-A/
          file1
          file2
        SESSION-ID-B/
          ...
      prepared-reports/
        SESSION-ID-A.priority
        SESSION-ID-B
        SESSION-ID-C.native

Building paths into this tree anywhere outside FileStore is a code smell.
"""

from __future__ import annotations

import logging
from pathlib import Path

from ..config import FileStoreConfig
from ..exceptions import SessionValidationError
from ..logging_utils import StorageLoggerAdapter
from .file_ops import (
    NameFilter,
    list_entries,
    list_names,
    prepare_dir,
    read_bytes,
    recursive_delete,
    write_bytes_atomic,
)

logger = logging.getLogger(__name__)

FILES_PATH = ".com.google.firebase.crashlytics.files.v1"
LEGACY_FILES_PATH = ".com.google.firebase.crashlytics"
SESSIONS_PATH = "open-sessions"
PREPARED_REPORTS_PATH = "prepared-reports"

PRIORITY_REPORT_EXTENSION = ".priority"
NATIVE_REPORT_EXTENSION = ".native"
REPORT_EXTENSIONS = ("", PRIORITY_REPORT_EXTENSION, NATIVE_REPORT_EXTENSION)


def validate_session_id(session_id: str) -> None:
    """Reject session ids that would escape their directory.

    Raises:
        SessionValidationError: If session_id is empty or contains a
            path separator
    """
    if not session_id or not session_id.strip():
        raise SessionValidationError("session_id cannot be empty", field="session_id")

    if "/" in session_id or "\\" in session_id or session_id in (".", ".."):
        raise SessionValidationError(f"Invalid session_id: {session_id}", field="session_id")


class FileStore:
    """
    Owns the on-disk layout for crash reporting files.

    Contract:
    - Inputs: session ids (str), filenames (str), optional name filters
    - Outputs: Paths into the layout, listings, deletion results
    - Side Effects: Creates the root, sessions and reports directories on
      construction; session directories on first session_file() call
    - Errors: DirectoryPreparationError if the layout cannot be created,
      SessionValidationError for unusable session ids. Missing files and
      directories are not errors.
    """

    def __init__(
        self,
        base_dir: Path | str | None = None,
        *,
        config: FileStoreConfig | None = None,
    ):
        """Prepare the layout under a base directory.

        Args:
            base_dir: Application-private storage directory. Falls back to
                config.base_dir, then to FileStoreConfig.from_env().
            config: Store configuration

        Raises:
            DirectoryPreparationError: If a required directory cannot be created
        """
        self.config = config or FileStoreConfig.from_env()
        if base_dir is None:
            base_dir = self.config.base_dir
        self._base_dir = Path(base_dir).expanduser()

        self._root_dir = prepare_dir(self._base_dir / FILES_PATH)
        self._sessions_dir = prepare_dir(self._root_dir / SESSIONS_PATH)
        self._reports_dir = prepare_dir(self._root_dir / PREPARED_REPORTS_PATH)

        if self.config.cleanup_legacy:
            self.cleanup_legacy_files()

    @property
    def base_dir(self) -> Path:
        return self._base_dir

    @property
    def root_dir(self) -> Path:
        return self._root_dir

    @property
    def sessions_dir(self) -> Path:
        return self._sessions_dir

    @property
    def reports_dir(self) -> Path:
        return self._reports_dir

    def cleanup_legacy_files(self) -> bool:
        """Delete files left by the unversioned layout.

        Returns:
            True if the legacy directory existed and was removed
        """
        legacy_dir = self._base_dir / LEGACY_FILES_PATH
        if recursive_delete(legacy_dir):
            _file_logger(legacy_dir).debug("Deleted legacy crash report files")
            return True
        return False

    def common_file(self, filename: str) -> Path:
        """Return a file that is not specific to a session."""
        return prepare_dir(self._root_dir) / filename

    def list_common_files(self, name_filter: NameFilter | None = None) -> list[Path]:
        """Return all common files whose name matches name_filter.

        The sessions and reports directories are entries of the root too;
        pass a filter to exclude them.
        """
        return list_entries(self._root_dir, name_filter)

    def session_file(self, session_id: str, filename: str) -> Path:
        """Return a file in the directory of the given session.

        The session directory is created if needed, so the path can be
        opened for writing right away.
        """
        return prepare_dir(self._session_dir(session_id)) / filename

    def list_session_files(
        self, session_id: str, name_filter: NameFilter | None = None
    ) -> list[Path]:
        return list_entries(self._session_dir(session_id), name_filter)

    def delete_session_files(self, session_id: str) -> bool:
        """Delete the session directory and everything in it.

        Returns:
            True if the session directory itself was removed
        """
        session_dir = self._session_dir(session_id)
        deleted = recursive_delete(session_dir)
        _file_logger(session_dir, session_id).debug(
            "Session files deleted" if deleted else "Session files not deleted"
        )
        return deleted

    def list_open_session_ids(self) -> list[str]:
        return list_names(self._sessions_dir)

    def report_file(self, session_id: str) -> Path:
        return self._report_path(session_id, "")

    def priority_report_file(self, session_id: str) -> Path:
        return self._report_path(session_id, PRIORITY_REPORT_EXTENSION)

    def native_report_file(self, session_id: str) -> Path:
        return self._report_path(session_id, NATIVE_REPORT_EXTENSION)

    def list_all_report_files(self) -> list[Path]:
        return list_entries(self._reports_dir)

    def delete_report(self, session_id: str) -> bool:
        """Delete the default report for a session.

        Priority and native variants are left alone.

        Returns:
            True if the report existed and was removed
        """
        report_file = self.report_file(session_id)
        log = _file_logger(report_file, session_id)
        if report_file.exists():
            log.debug("Deleting session report")
            try:
                report_file.unlink()
                return True
            except OSError as e:
                log.debug(f"Could not delete report file: {e}")
                return False

        log.debug("Could not find report file to delete")
        return False

    async def write_report(self, session_id: str, data: bytes, extension: str = "") -> Path:
        """Publish a finished report for upload.

        The content is written atomically, so listings never expose a
        partially written report under its final name.

        Args:
            session_id: Session the report belongs to
            data: Report content, opaque to the store
            extension: "", PRIORITY_REPORT_EXTENSION or NATIVE_REPORT_EXTENSION

        Returns:
            Path of the written report

        Raises:
            StorageIOError: If the report cannot be written
        """
        report_file = self._report_path(session_id, extension)
        prepare_dir(self._reports_dir)
        await write_bytes_atomic(report_file, data)
        _file_logger(report_file, session_id).debug(f"Wrote report ({len(data)} bytes)")
        return report_file

    async def read_report(self, session_id: str, extension: str = "") -> bytes | None:
        """Read a prepared report.

        Returns:
            Report content, or None if no such report exists
        """
        return await read_bytes(self._report_path(session_id, extension))

    def _report_path(self, session_id: str, extension: str) -> Path:
        validate_session_id(session_id)
        if extension not in REPORT_EXTENSIONS:
            raise ValueError(f"Unknown report extension: {extension!r}")
        return self._reports_dir / (session_id + extension)

    def _session_dir(self, session_id: str) -> Path:
        validate_session_id(session_id)
        return self._sessions_dir / session_id


def _file_logger(path: Path, session_id: str | None = None) -> StorageLoggerAdapter:
    return StorageLoggerAdapter(logger, {"session_id": session_id, "path": str(path)})
