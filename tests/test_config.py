"""
Tests for FileStoreConfig loading.
"""

from pathlib import Path

import pytest

from crash_report_storage.config import (
    ENV_BASE_DIR,
    ENV_CLEANUP_LEGACY,
    FileStoreConfig,
    default_base_dir,
)
from crash_report_storage.exceptions import FileStoreError


class TestFileStoreConfig:
    """Tests for defaults and direct construction."""

    def test_defaults(self):
        config = FileStoreConfig()
        assert config.base_dir == Path.home() / ".crash_reports"
        assert config.cleanup_legacy is False

    def test_expands_user(self):
        config = FileStoreConfig(base_dir="~/crashes")
        assert config.base_dir == Path.home() / "crashes"


class TestFromEnv:
    """Tests for FileStoreConfig.from_env."""

    def test_unset_environment(self):
        config = FileStoreConfig.from_env()
        assert config.base_dir == default_base_dir()
        assert config.cleanup_legacy is False

    def test_reads_environment(self, monkeypatch, temp_dir):
        monkeypatch.setenv(ENV_BASE_DIR, str(temp_dir))
        monkeypatch.setenv(ENV_CLEANUP_LEGACY, "yes")

        config = FileStoreConfig.from_env()
        assert config.base_dir == temp_dir
        assert config.cleanup_legacy is True

    @pytest.mark.parametrize("value", ["0", "false", "no", "off", ""])
    def test_false_values(self, monkeypatch, value):
        monkeypatch.setenv(ENV_CLEANUP_LEGACY, value)
        assert FileStoreConfig.from_env().cleanup_legacy is False


class TestFromFile:
    """Tests for FileStoreConfig.from_file."""

    def test_missing_file(self, temp_dir):
        config = FileStoreConfig.from_file(temp_dir / "settings.yaml")
        assert config == FileStoreConfig()

    def test_reads_storage_section(self, temp_dir):
        settings = temp_dir / "settings.yaml"
        settings.write_text(
            f"storage:\n  base_dir: {temp_dir / 'files'}\n  cleanup_legacy: true\n"
        )

        config = FileStoreConfig.from_file(settings)
        assert config.base_dir == temp_dir / "files"
        assert config.cleanup_legacy is True

    def test_missing_section(self, temp_dir):
        settings = temp_dir / "settings.yaml"
        settings.write_text("identity:\n  user_id: someone\n")

        assert FileStoreConfig.from_file(settings) == FileStoreConfig()

    def test_empty_file(self, temp_dir):
        settings = temp_dir / "settings.yaml"
        settings.write_text("")

        assert FileStoreConfig.from_file(settings) == FileStoreConfig()

    def test_malformed_yaml(self, temp_dir):
        settings = temp_dir / "settings.yaml"
        settings.write_text("storage: [unclosed\n")

        with pytest.raises(FileStoreError) as exc_info:
            FileStoreConfig.from_file(settings)
        assert exc_info.value.details["path"] == str(settings)

    def test_section_not_a_mapping(self, temp_dir):
        settings = temp_dir / "settings.yaml"
        settings.write_text("storage: 5\n")

        with pytest.raises(FileStoreError):
            FileStoreConfig.from_file(settings)
