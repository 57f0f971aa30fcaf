"""
Sandboxed device storage.

Key classes:
- AppDataLocator: resolves and creates the app-private directory
- DeviceFileStore: save/read/list .txt documents inside it
"""

from .device_store import DeviceFileStore
from .file_ops import list_text_files, read_text, write_text, write_text_atomic
from .paths import (
    AppDataLocator,
    AppDataProvider,
    FixedAppDataProvider,
    PlatformAppDataProvider,
)

__all__ = [
    "DeviceFileStore",
    "AppDataLocator",
    "AppDataProvider",
    "FixedAppDataProvider",
    "PlatformAppDataProvider",
    # Low-level file operations
    "read_text",
    "write_text",
    "write_text_atomic",
    "list_text_files",
]
