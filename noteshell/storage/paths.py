"""
Application data directory resolution.

The host decides where an application may keep private files. An
AppDataProvider answers that question; AppDataLocator asks it once,
creates the directory and caches the answer.
"""

from __future__ import annotations

import logging
import os
import platform
from abc import ABC, abstractmethod
from pathlib import Path

import aiofiles.os

from ..exceptions import DirectoryCreationError, DirectoryResolutionError

logger = logging.getLogger(__name__)


class AppDataProvider(ABC):
    """Host capability that knows the application-private data directory."""

    @abstractmethod
    def app_data_dir(self) -> Path:
        """Return the application data directory.

        Raises:
            Exception: Any failure is reported by the locator as
                DirectoryResolutionError
        """
        ...


class PlatformAppDataProvider(AppDataProvider):
    """Resolves the per-user data directory the way desktop hosts do.

    - windows: %APPDATA%\\<identifier>
    - macos: ~/Library/Application Support/<identifier>
    - linux and others: $XDG_DATA_HOME/<identifier>, falling back to
      ~/.local/share/<identifier>
    """

    def __init__(self, identifier: str):
        if not identifier or any(sep in identifier for sep in ("/", "\\")):
            raise ValueError(f"Invalid application identifier: {identifier!r}")
        self.identifier = identifier

    def app_data_dir(self) -> Path:
        return self._data_root() / self.identifier

    def _data_root(self) -> Path:
        os_type = self._get_os_type()
        if os_type == "windows":
            appdata = os.environ.get("APPDATA")
            if not appdata:
                raise OSError("APPDATA is not set")
            return Path(appdata)
        if os_type == "macos":
            return Path.home() / "Library" / "Application Support"

        xdg = os.environ.get("XDG_DATA_HOME")
        # XDG requires an absolute path; relative values are ignored
        if xdg and Path(xdg).is_absolute():
            return Path(xdg)
        return Path.home() / ".local" / "share"

    def _get_os_type(self) -> str:
        """Get the OS type (windows, macos, linux)."""
        system = platform.system().lower()
        if system == "darwin":
            return "macos"
        return system


class FixedAppDataProvider(AppDataProvider):
    """Provider for an explicitly configured directory."""

    def __init__(self, path: Path | str):
        self.path = Path(path).expanduser()

    def app_data_dir(self) -> Path:
        return self.path


class AppDataLocator:
    """Resolves and creates the directory that holds device documents."""

    def __init__(self, provider: AppDataProvider):
        self.provider = provider
        self._resolved: Path | None = None
        self._ensured = False

    def resolve(self) -> Path:
        """Ask the provider for the directory without creating it.

        Raises:
            DirectoryResolutionError: If the provider fails or has no answer
        """
        if self._resolved is not None:
            return self._resolved

        try:
            path = self.provider.app_data_dir()
        except Exception as e:
            raise DirectoryResolutionError(e) from e
        if path is None:
            raise DirectoryResolutionError()

        self._resolved = Path(path)
        logger.debug(f"Resolved app data dir: {self._resolved}")
        return self._resolved

    async def resolve_and_ensure(self) -> Path:
        """Resolve the directory and create it with parents if absent.

        Returns:
            The app data directory

        Raises:
            DirectoryResolutionError: If the directory cannot be resolved
            DirectoryCreationError: If the directory cannot be created
        """
        path = self.resolve()
        if self._ensured and await aiofiles.os.path.isdir(path):
            return path

        await ensure_directory(path)
        self._ensured = True
        return path


async def ensure_directory(path: Path) -> None:
    """Ensure directory exists, creating if necessary.

    Args:
        path: Directory path to ensure exists
    """
    try:
        await aiofiles.os.makedirs(path, exist_ok=True)
    except OSError as e:
        raise DirectoryCreationError(str(path), e) from e
