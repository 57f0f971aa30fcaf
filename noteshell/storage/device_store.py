"""
Sandboxed document store.

Keeps plain-text documents in the application data directory. Every
filename is sanitized before it touches the filesystem, so callers can
only address .txt files directly inside that one directory.

Contract:
- Inputs: caller-chosen filenames (with or without .txt), text content
- Outputs: absolute paths, document text, sorted document names
- Side Effects: writes <app data dir>/<sanitized name>
- Concurrency: none; concurrent writes to one name are last-writer-wins
"""

from __future__ import annotations

import logging
from pathlib import Path

from ..sanitization import sanitize_filename
from .file_ops import file_exists, list_text_files, read_text, write_text_atomic
from .paths import AppDataLocator

logger = logging.getLogger(__name__)


class DeviceFileStore:
    """Store of .txt documents in the app data directory. There is no delete."""

    def __init__(self, locator: AppDataLocator):
        self.locator = locator

    async def document_path(self, filename: str) -> Path:
        """Sanitize a filename and return its path in the ensured directory.

        Raises:
            InvalidFilenameError: If the filename is rejected
            DirectoryResolutionError: If the directory cannot be resolved
            DirectoryCreationError: If the directory cannot be created
        """
        name = sanitize_filename(filename)
        directory = await self.locator.resolve_and_ensure()
        return directory / name

    async def save(self, filename: str, content: str) -> Path:
        """Write a document, replacing any existing one with the same name.

        Args:
            filename: Document name, .txt is appended if missing
            content: Text to store

        Returns:
            Absolute path of the written file

        Raises:
            InvalidFilenameError: If the filename is rejected
            DocumentWriteError: If the file cannot be written
        """
        path = await self.document_path(filename)
        await write_text_atomic(path, content)
        logger.info(f"Saved device file {path.name}")
        return path.absolute()

    async def read(self, filename: str) -> str:
        """Read a document.

        Raises:
            InvalidFilenameError: If the filename is rejected
            DocumentReadError: If the document is missing or unreadable
        """
        path = await self.document_path(filename)
        content = await read_text(path)
        logger.debug(f"Read device file {path.name}")
        return content

    async def list(self) -> list[str]:
        """List stored document names in ascending order.

        A directory that does not exist yet holds no documents.

        Raises:
            DirectoryResolutionError: If the directory cannot be resolved
            DocumentListError: If the directory cannot be enumerated
        """
        directory = self.locator.resolve()
        return await list_text_files(directory)

    async def exists(self, filename: str) -> bool:
        """Check whether a document with this name is stored."""
        path = await self.document_path(filename)
        return await file_exists(path)
