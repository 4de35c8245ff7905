"""
Shared test configuration and fixtures.
"""

import tempfile
from pathlib import Path

import pytest

from crash_report_storage.config import ENV_BASE_DIR, ENV_CLEANUP_LEGACY
from crash_report_storage.local import FileStore


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Keep host settings from leaking into store construction."""
    monkeypatch.delenv(ENV_BASE_DIR, raising=False)
    monkeypatch.delenv(ENV_CLEANUP_LEGACY, raising=False)


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def store(temp_dir):
    """Create a FileStore rooted in the temporary directory."""
    return FileStore(base_dir=temp_dir)
