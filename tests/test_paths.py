"""Tests for devinfo.paths module."""

import sys
from pathlib import Path

import pytest

from devinfo.paths import DATA_DIR_ENV, get_config_path, get_data_dir


@pytest.fixture
def fake_home(monkeypatch, tmp_path):
    """Point Path.home() at a temporary directory."""
    monkeypatch.delenv(DATA_DIR_ENV, raising=False)
    monkeypatch.setattr(Path, "home", lambda: tmp_path)
    return tmp_path


class TestGetDataDir:
    """Test cases for get_data_dir()."""

    @pytest.mark.parametrize("platform,expected", [
        ("darwin", Path("Library") / "Application Support" / "devinfo"),
        ("win32", Path("AppData") / "Local" / "devinfo"),
        ("linux", Path(".config") / "devinfo"),
    ])
    def test_platform_specific(self, monkeypatch, fake_home, platform, expected):
        """Test data directory follows platform conventions."""
        monkeypatch.setattr(sys, "platform", platform)

        assert get_data_dir() == fake_home / expected

    def test_env_override(self, monkeypatch, tmp_path):
        """Test DEVINFO_HOME takes precedence."""
        target = tmp_path / "custom"
        monkeypatch.setenv(DATA_DIR_ENV, str(target))

        assert get_data_dir() == target

    def test_data_dir_created(self, monkeypatch, fake_home):
        """Test that get_data_dir() creates directory if it doesn't exist."""
        monkeypatch.setattr(sys, "platform", "linux")

        data_dir = get_data_dir()

        assert data_dir.exists()
        assert data_dir.is_dir()


class TestGetConfigPath:
    """Test cases for get_config_path()."""

    def test_config_path(self, monkeypatch, tmp_path):
        """Test get_config_path() returns data_dir/config.json."""
        monkeypatch.setenv(DATA_DIR_ENV, str(tmp_path))

        assert get_config_path() == tmp_path / "config.json"
