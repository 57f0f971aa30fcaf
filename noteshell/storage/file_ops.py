"""
Text file operations for the document store and the dialog bridge.

Provides:
- Atomic writes using temp file + rename
- UTF-8 reads that report any failure as DocumentReadError
- Listing of .txt documents in a directory
"""

import os
import stat
import tempfile
from pathlib import Path

import aiofiles
import aiofiles.os

from ..exceptions import DocumentListError, DocumentReadError, DocumentWriteError
from ..sanitization import is_text_filename

# Temp files must not look like documents to list_text_files()
TEMP_PREFIX = ".tmp_"
TEMP_SUFFIX = ".partial"


async def read_text(path: Path) -> str:
    """Read a UTF-8 text file.

    Args:
        path: Path to the file

    Returns:
        File content

    Raises:
        DocumentReadError: If the file is missing, unreadable or not UTF-8
    """
    try:
        async with aiofiles.open(path, encoding="utf-8") as f:
            return await f.read()
    except (OSError, ValueError) as e:
        raise DocumentReadError("read", str(path), e) from e


async def write_text(path: Path, content: str) -> None:
    """Write a text file in place, replacing any existing content.

    Used for files outside the sandbox, where the parent directory may
    not accept temp files.

    Args:
        path: Target path
        content: Text to write
    """
    try:
        async with aiofiles.open(path, "w", encoding="utf-8") as f:
            await f.write(content)
            await f.flush()
    except (OSError, ValueError) as e:
        raise DocumentWriteError("write", str(path), e) from e


async def write_text_atomic(path: Path, content: str) -> None:
    """Write a text file atomically using temp file + rename.

    Args:
        path: Target path; its parent directory must exist
        content: Text to write
    """
    try:
        fd, temp_path = tempfile.mkstemp(dir=path.parent, prefix=TEMP_PREFIX, suffix=TEMP_SUFFIX)
    except OSError as e:
        raise DocumentWriteError("write", str(path), e) from e

    try:
        os.close(fd)
        async with aiofiles.open(temp_path, "w", encoding="utf-8") as f:
            await f.write(content)
            await f.flush()
            os.fsync(f.fileno())

        await aiofiles.os.replace(temp_path, path)
    except Exception as e:
        try:
            await aiofiles.os.remove(temp_path)
        except OSError:
            pass
        raise DocumentWriteError("write", str(path), e) from e


async def list_text_files(path: Path) -> list[str]:
    """List regular .txt files in a directory.

    Args:
        path: Directory to list

    Returns:
        Sorted file names; empty if the directory does not exist

    Raises:
        DocumentListError: If the directory or an entry cannot be inspected
    """
    if not await aiofiles.os.path.exists(path):
        return []

    try:
        entries = await aiofiles.os.listdir(path)
    except OSError as e:
        raise DocumentListError("list", str(path), e) from e

    names = []
    for entry in entries:
        if not is_text_filename(entry):
            continue
        entry_path = path / entry
        try:
            info = await aiofiles.os.stat(entry_path)
        except FileNotFoundError:
            # Removed since listdir, or a dangling symlink
            continue
        except OSError as e:
            raise DocumentListError("inspect", str(entry_path), e) from e
        if stat.S_ISREG(info.st_mode):
            names.append(entry)

    names.sort()
    return names


async def file_exists(path: Path) -> bool:
    """Check if a regular file exists.

    Args:
        path: Path to check

    Returns:
        True if file exists
    """
    try:
        return await aiofiles.os.path.isfile(path)
    except OSError:
        return False
