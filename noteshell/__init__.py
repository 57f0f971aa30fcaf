"""
noteshell

Backend command layer for a small desktop note-taking shell.

Provides:
- A lock-guarded session holding the current user
- A sandboxed store of .txt documents in the app data directory
- A bridge to the host's native open/save dialogs, reporting via notifications
- A command router the host calls by command name

Usage:

    >>> from noteshell import create_router, load_config
    >>> router = create_router(load_config(), dialogs=host_dialogs)
    >>> result = await router.execute(
    ...     {"command": "save_device_file", "filename": "notes", "content": "hello"}
    ... )
    >>> result.output["path"]
    '/home/alice/.local/share/com.noteshell.app/notes.txt'

Dialog outcomes:

    async with router.channel.subscribe() as sub:
        await router.execute({"command": "open_file"})
        notification = await sub.get()   # "content" or "file_error"
"""

from .bridge import (
    CONTENT_EVENT,
    FILE_ERROR_EVENT,
    SAVE_STATE_EVENT,
    DialogProvider,
    FileFilter,
    HostFileBridge,
    Notification,
    NotificationChannel,
)
from .commands import CommandResult, CommandRouter, create_router
from .config import ShellConfig, load_config, save_config
from .exceptions import (
    ConfigError,
    DialogError,
    DirectoryCreationError,
    DirectoryResolutionError,
    DocumentIOError,
    DocumentListError,
    DocumentReadError,
    DocumentWriteError,
    InvalidFilenameError,
    InvalidUserError,
    NoteShellError,
)
from .logging_utils import configure_logging
from .sanitization import sanitize_filename
from .session import SessionContext, User
from .storage import (
    AppDataLocator,
    AppDataProvider,
    DeviceFileStore,
    FixedAppDataProvider,
    PlatformAppDataProvider,
)

__all__ = [
    # Commands
    "CommandRouter",
    "CommandResult",
    "create_router",
    # Session
    "SessionContext",
    "User",
    # Storage
    "DeviceFileStore",
    "AppDataLocator",
    "AppDataProvider",
    "FixedAppDataProvider",
    "PlatformAppDataProvider",
    "sanitize_filename",
    # Dialog bridge
    "HostFileBridge",
    "DialogProvider",
    "FileFilter",
    "NotificationChannel",
    "Notification",
    "CONTENT_EVENT",
    "SAVE_STATE_EVENT",
    "FILE_ERROR_EVENT",
    # Configuration
    "ShellConfig",
    "load_config",
    "save_config",
    "configure_logging",
    # Exceptions
    "NoteShellError",
    "InvalidFilenameError",
    "DirectoryResolutionError",
    "DirectoryCreationError",
    "DocumentIOError",
    "DocumentReadError",
    "DocumentWriteError",
    "DocumentListError",
    "DialogError",
    "InvalidUserError",
    "ConfigError",
]

__version__ = "0.1.0"
