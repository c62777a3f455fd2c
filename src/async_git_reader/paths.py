"""Cross-platform path helpers for async-git-reader.

All functions return Path objects. Directories are NOT created automatically;
callers should call ``path.mkdir(parents=True, exist_ok=True)`` as needed.
"""

import os
import sys
from pathlib import Path

APP_NAME = 'async-git-reader'

__all__ = [
    'APP_NAME',
    'get_config_dir',
    'get_logs_dir',
    'get_config_file_path',
]


def _get_platform() -> str:
    """Detect the current platform.

    Returns:
        'windows', 'darwin', or 'linux'
    """
    if sys.platform == 'win32':
        return 'windows'
    elif sys.platform == 'darwin':
        return 'darwin'
    else:
        return 'linux'


def _get_xdg_path(xdg_var: str, default_subpath: str) -> Path:
    """Get XDG-compliant path with environment variable support.

    Args:
        xdg_var: XDG environment variable name (e.g., 'XDG_CONFIG_HOME')
        default_subpath: Default path relative to home (e.g., '.config')

    Returns:
        Path with APP_NAME appended
    """
    xdg_base = os.environ.get(xdg_var)
    if xdg_base:
        return Path(xdg_base) / APP_NAME
    return Path.home() / default_subpath / APP_NAME


def get_config_dir() -> Path:
    """Get platform-appropriate configuration directory.

    Returns:
        - Windows: %APPDATA%\\async-git-reader
        - macOS: ~/Library/Preferences/async-git-reader
        - Linux: XDG_CONFIG_HOME/async-git-reader or ~/.config/async-git-reader
    """
    platform = _get_platform()

    if platform == 'windows':
        appdata = os.environ.get('APPDATA')
        if appdata:
            return Path(appdata) / APP_NAME
        return Path.home() / 'AppData' / 'Roaming' / APP_NAME

    elif platform == 'darwin':
        return Path.home() / 'Library' / 'Preferences' / APP_NAME

    else:  # linux
        return _get_xdg_path('XDG_CONFIG_HOME', '.config')


def get_logs_dir() -> Path:
    """Get platform-appropriate logs directory.

    Returns:
        - Windows: %LOCALAPPDATA%\\async-git-reader\\logs
        - macOS: ~/Library/Logs/async-git-reader
        - Linux: XDG_STATE_HOME/async-git-reader/logs or ~/.local/state/async-git-reader/logs
    """
    platform = _get_platform()

    if platform == 'windows':
        localappdata = os.environ.get('LOCALAPPDATA')
        if localappdata:
            return Path(localappdata) / APP_NAME / 'logs'
        return Path.home() / 'AppData' / 'Local' / APP_NAME / 'logs'

    elif platform == 'darwin':
        return Path.home() / 'Library' / 'Logs' / APP_NAME

    else:  # linux
        return _get_xdg_path('XDG_STATE_HOME', '.local/state') / 'logs'


def get_config_file_path() -> Path:
    """Get platform-appropriate configuration file path (config.json)."""
    return get_config_dir() / 'config.json'
