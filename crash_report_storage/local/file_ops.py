"""
Filesystem primitives for the crash report file store.

Provides:
- Self-healing directory preparation, serialized by one process-wide lock
- Best-effort depth-first recursive delete
- Directory listings that degrade to empty lists
- Async byte I/O with atomic writes, used for prepared reports
"""

import contextlib
import logging
import os
import tempfile
import threading
from collections.abc import Callable
from pathlib import Path

import aiofiles
import aiofiles.os

from ..exceptions import DirectoryPreparationError, StorageIOError

logger = logging.getLogger(__name__)

NameFilter = Callable[[str], bool]

# Shared by every FileStore in the process.
_prepare_lock = threading.Lock()


def prepare_dir(path: Path) -> Path:
    """Ensure a directory exists at path.

    A regular file (or dangling link) occupying the path is deleted and
    replaced by a directory.

    Args:
        path: Directory to prepare

    Returns:
        The same path, now a directory

    Raises:
        DirectoryPreparationError: If the directory cannot be created
    """
    with _prepare_lock:
        if path.is_dir():
            return path

        if path.exists() or path.is_symlink():
            logger.debug(
                f"Unexpected non-directory file: {path}; deleting file and creating new directory."
            )
            try:
                path.unlink()
            except OSError as e:
                raise DirectoryPreparationError(str(path), e) from e

        try:
            path.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise DirectoryPreparationError(str(path), e) from e

        return path


def recursive_delete(path: Path) -> bool:
    """Delete a file or directory tree, children first.

    Symbolic links are removed, never followed. Failures below the top
    level are logged and skipped.

    Args:
        path: File or directory to delete

    Returns:
        True if path itself was removed
    """
    if path.is_dir() and not path.is_symlink():
        try:
            children = list(path.iterdir())
        except OSError as e:
            logger.debug(f"Could not list {path} for deletion: {e}")
            children = []

        for child in children:
            recursive_delete(child)

        try:
            path.rmdir()
            return True
        except OSError as e:
            logger.debug(f"Could not remove directory {path}: {e}")
            return False

    try:
        path.unlink()
        return True
    except FileNotFoundError:
        return False
    except OSError as e:
        logger.debug(f"Could not remove file {path}: {e}")
        return False


def list_entries(directory: Path, name_filter: NameFilter | None = None) -> list[Path]:
    """List entries directly under a directory, sorted by name.

    Args:
        directory: Directory to list
        name_filter: Optional predicate on entry names

    Returns:
        Matching paths; empty if the directory is missing or unreadable
    """
    try:
        entries = sorted(directory.iterdir())
    except OSError:
        return []

    if name_filter is None:
        return entries
    return [entry for entry in entries if name_filter(entry.name)]


def list_names(directory: Path) -> list[str]:
    """List entry names directly under a directory, sorted.

    Returns:
        Entry names; empty if the directory is missing or unreadable
    """
    return [entry.name for entry in list_entries(directory)]


async def write_bytes_atomic(path: Path, data: bytes) -> None:
    """Replace the content of path without exposing a partial file.

    The bytes go to a hidden sibling first and are renamed into place
    once flushed to disk. FileStore.write_report publishes reports this
    way; the parent directory must already exist.

    Raises:
        StorageIOError: If the write or the rename fails
    """
    try:
        fd, staging = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.")
    except OSError as e:
        raise StorageIOError("write_bytes", str(path), e) from e
    os.close(fd)
    try:
        async with aiofiles.open(staging, "wb") as f:
            await f.write(data)
            await f.flush()
            os.fsync(f.fileno())
        await aiofiles.os.replace(staging, path)
    except OSError as e:
        with contextlib.suppress(OSError):
            await aiofiles.os.remove(staging)
        raise StorageIOError("write_bytes", str(path), e) from e


async def read_bytes(path: Path) -> bytes | None:
    """Read a whole file, or None if it is absent.

    Used by FileStore.read_report.

    Raises:
        StorageIOError: If the file exists but cannot be read
    """
    try:
        async with aiofiles.open(path, "rb") as f:
            return await f.read()
    except FileNotFoundError:
        return None
    except OSError as e:
        raise StorageIOError("read_bytes", str(path), e) from e
