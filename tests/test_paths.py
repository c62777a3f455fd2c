"""Tests for paths module - XDG compliance and platform directories."""

import sys
from pathlib import Path

import pytest

from async_git_reader import paths


class TestAppNameConstant:
    """Test APP_NAME constant is correctly defined."""

    def test_app_name(self):
        """Test APP_NAME is the distribution name."""
        assert paths.APP_NAME == 'async-git-reader'

    def test_app_name_in_all_exports(self):
        """Test APP_NAME is exported."""
        assert 'APP_NAME' in paths.__all__


class TestGetConfigDir:
    """Test get_config_dir() for each platform."""

    @pytest.mark.skipif(sys.platform != "linux", reason="Linux-specific test")
    def test_linux_with_xdg_config_home(self, monkeypatch, tmp_path):
        """Linux: get_config_dir() respects XDG_CONFIG_HOME env var."""
        monkeypatch.setenv('XDG_CONFIG_HOME', str(tmp_path / "cfg"))

        assert paths.get_config_dir() == tmp_path / "cfg" / 'async-git-reader'

    @pytest.mark.skipif(sys.platform != "linux", reason="Linux-specific test")
    def test_linux_without_xdg_config_home(self, monkeypatch):
        """Linux: get_config_dir() falls back to ~/.config."""
        monkeypatch.delenv('XDG_CONFIG_HOME', raising=False)

        assert paths.get_config_dir() == Path.home() / '.config' / 'async-git-reader'

    def test_windows_uses_appdata(self, monkeypatch, tmp_path):
        """Test Windows config dir uses APPDATA."""
        monkeypatch.setattr(paths, '_get_platform', lambda: 'windows')
        monkeypatch.setenv('APPDATA', str(tmp_path))

        assert paths.get_config_dir() == tmp_path / 'async-git-reader'

    def test_darwin(self, monkeypatch):
        """Test macOS config dir is under Library/Preferences."""
        monkeypatch.setattr(paths, '_get_platform', lambda: 'darwin')

        assert paths.get_config_dir() == Path.home() / 'Library' / 'Preferences' / 'async-git-reader'

    def test_config_file_path(self):
        """Test the config file lives in the config dir."""
        assert paths.get_config_file_path() == paths.get_config_dir() / 'config.json'


class TestGetLogsDir:
    """Test get_logs_dir() for each platform."""

    @pytest.mark.skipif(sys.platform != "linux", reason="Linux-specific test")
    def test_linux_with_xdg_state_home(self, monkeypatch, tmp_path):
        """Test Linux logs dir honors XDG_STATE_HOME."""
        monkeypatch.setenv('XDG_STATE_HOME', str(tmp_path))

        assert paths.get_logs_dir() == tmp_path / 'async-git-reader' / 'logs'

    def test_windows_uses_localappdata(self, monkeypatch, tmp_path):
        """Test Windows logs dir uses LOCALAPPDATA."""
        monkeypatch.setattr(paths, '_get_platform', lambda: 'windows')
        monkeypatch.setenv('LOCALAPPDATA', str(tmp_path))

        assert paths.get_logs_dir() == tmp_path / 'async-git-reader' / 'logs'

    def test_darwin(self, monkeypatch):
        """Test macOS logs dir is under Library/Logs."""
        monkeypatch.setattr(paths, '_get_platform', lambda: 'darwin')

        assert paths.get_logs_dir() == Path.home() / 'Library' / 'Logs' / 'async-git-reader'
