"""
Filename sanitization for the sandboxed document store.

Every filename that reaches the filesystem passes through
sanitize_filename(), which keeps documents confined to a single
directory and guarantees the .txt suffix.
"""

from __future__ import annotations

from .exceptions import InvalidFilenameError

TEXT_SUFFIX = ".txt"

# Characters that would let a name escape the document directory
PATH_SEPARATORS = ("/", "\\")


def is_text_filename(name: str) -> bool:
    """Check whether a name carries the .txt suffix (case-insensitive)."""
    return name.lower().endswith(TEXT_SUFFIX)


def sanitize_filename(filename: str) -> str:
    """
    Validate and normalize a document filename.

    Rules:
    - Leading and trailing whitespace is stripped
    - Empty names are rejected
    - Names containing / or \\ are rejected
    - .txt is appended unless already present in any case

    Args:
        filename: Name supplied by the caller

    Returns:
        The validated name, always ending in .txt

    Raises:
        InvalidFilenameError: If the name is empty or contains a path separator
    """
    if not isinstance(filename, str):
        raise InvalidFilenameError(repr(filename), "Filename must be a string")

    trimmed = filename.strip()
    if not trimmed:
        raise InvalidFilenameError(filename, "Filename cannot be empty")
    if any(sep in trimmed for sep in PATH_SEPARATORS):
        raise InvalidFilenameError(filename, "Filename cannot include path separators")

    if not is_text_filename(trimmed):
        trimmed += TEXT_SUFFIX
    return trimmed
