"""
Cross-platform storage roots for dirkit.

Resolves the per-user data, config, cache and log directories with the
platformdirs library and returns them as ``Dir`` handles, so callers get the
same lazy creation and file helpers as any other namespace.

Storage Location Standards:
- Linux: ~/.local/share/<app>/ (data), ~/.config/<app>/ (config), ~/.cache/<app>/ (cache)
- macOS: ~/Library/Application Support/<app>/, ~/Library/Caches/<app>/
- Windows: %LOCALAPPDATA%\\<author>\\<app>\\
"""

from pathlib import Path
from typing import Dict

import platformdirs

from dirkit.models.settings import StorageSettings
from dirkit.storage.dir import Dir


class StoragePaths:
    """
    Per-user storage roots for an application.

    Nothing is created on disk until a returned Dir's path is first used.
    The cache root is a temp Dir, since its contents can always be rebuilt.
    """

    def __init__(self, app_name: str = "dirkit", app_author: str = "dirkit"):
        """
        Args:
            app_name: Application name used for directory naming
            app_author: Application author/organization name
        """
        self.app_name = app_name
        self.app_author = app_author

        self._data_dir = platformdirs.user_data_dir(appname=self.app_name, appauthor=self.app_author)
        self._config_dir = platformdirs.user_config_dir(appname=self.app_name, appauthor=self.app_author)
        self._cache_dir = platformdirs.user_cache_dir(appname=self.app_name, appauthor=self.app_author)
        self._log_dir = platformdirs.user_log_dir(appname=self.app_name, appauthor=self.app_author)

    @classmethod
    def from_settings(cls, settings: StorageSettings) -> "StoragePaths":
        return cls(app_name=settings.app_name, app_author=settings.app_author)

    def data_dir(self) -> Dir:
        """Persistent user data."""
        return Dir(self._data_dir)

    def config_dir(self) -> Dir:
        return Dir(self._config_dir)

    def cache_dir(self) -> Dir:
        """Cached data that can be safely deleted; clear() is allowed here."""
        return Dir(self._cache_dir, temp=True)

    def logs_dir(self) -> Dir:
        return Dir(self._log_dir)

    def all_dirs(self) -> Dict[str, Dir]:
        return {
            "data": self.data_dir(),
            "config": self.config_dir(),
            "cache": self.cache_dir(),
            "logs": self.logs_dir(),
        }

    def get_storage_info(self) -> Dict[str, str]:
        """Human-readable locations, without creating any of them."""
        return {
            "data": str(Path(self._data_dir)),
            "config": str(Path(self._config_dir)),
            "cache": str(Path(self._cache_dir)),
            "logs": str(Path(self._log_dir)),
        }
