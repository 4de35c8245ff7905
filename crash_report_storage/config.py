"""
Configuration for the crash report file store.

Settings come from environment variables or from a YAML settings file:

```yaml
storage:
  base_dir: "~/.crash_reports"
  cleanup_legacy: true
```
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from .exceptions import FileStoreError

ENV_BASE_DIR = "CRASH_REPORT_STORAGE_DIR"
ENV_CLEANUP_LEGACY = "CRASH_REPORT_CLEANUP_LEGACY"

_TRUE_VALUES = ("1", "true", "yes", "on")


def default_base_dir() -> Path:
    """Application-private directory used when nothing else is configured."""
    return Path.home() / ".crash_reports"


def _as_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in _TRUE_VALUES


@dataclass
class FileStoreConfig:
    """Configuration for FileStore."""

    base_dir: Path = field(default_factory=default_base_dir)
    cleanup_legacy: bool = False

    def __post_init__(self) -> None:
        self.base_dir = Path(self.base_dir).expanduser()

    @classmethod
    def from_env(cls) -> FileStoreConfig:
        """Create config from environment variables."""
        base_dir = os.environ.get(ENV_BASE_DIR)
        cleanup = os.environ.get(ENV_CLEANUP_LEGACY, "false")

        return cls(
            base_dir=Path(base_dir) if base_dir else default_base_dir(),
            cleanup_legacy=_as_bool(cleanup),
        )

    @classmethod
    def from_file(cls, path: Path | str) -> FileStoreConfig:
        """Create config from the ``storage`` section of a YAML file.

        A missing file or section yields the defaults.

        Raises:
            FileStoreError: If the file is not valid YAML or the section
                is not a mapping
        """
        path = Path(path).expanduser()
        if not path.exists():
            return cls()

        try:
            data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
        except yaml.YAMLError as e:
            raise FileStoreError(
                f"Invalid settings file: {path}", {"path": str(path), "cause": str(e)}
            ) from e

        section = data.get("storage", {}) if isinstance(data, dict) else {}
        if not isinstance(section, dict):
            raise FileStoreError(
                f"'storage' section must be a mapping in {path}", {"path": str(path)}
            )

        base_dir = section.get("base_dir")
        return cls(
            base_dir=Path(base_dir) if base_dir else default_base_dir(),
            cleanup_legacy=_as_bool(section.get("cleanup_legacy", False)),
        )
