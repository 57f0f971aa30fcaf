"""
Custom exceptions for the note shell backend.

Every component raises these exceptions so the command layer can
report failures uniformly.
"""


class NoteShellError(Exception):
    """Base exception for all note shell errors."""

    def __init__(self, message: str, details: dict | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class InvalidFilenameError(NoteShellError):
    """Raised when a document filename is empty or contains path separators."""

    def __init__(self, filename: str, reason: str):
        super().__init__(reason, {"filename": filename, "reason": reason})
        self.filename = filename
        self.reason = reason


class DirectoryResolutionError(NoteShellError):
    """Raised when the host cannot provide an application data directory."""

    def __init__(self, cause: Exception | None = None):
        details = {}
        if cause:
            details["cause"] = str(cause)
        message = "Failed to resolve app data dir"
        if cause:
            message += f": {cause}"
        super().__init__(message, details)
        self.cause = cause


class DirectoryCreationError(NoteShellError):
    """Raised when the application data directory cannot be created."""

    def __init__(self, path: str, cause: Exception | None = None):
        details = {"path": path}
        if cause:
            details["cause"] = str(cause)
        message = f"Failed to create app data dir: {path}"
        if cause:
            message += f" ({cause})"
        super().__init__(message, details)
        self.path = path
        self.cause = cause


class DocumentIOError(NoteShellError):
    """Raised when a document I/O operation fails."""

    description = "Document I/O failed"

    def __init__(self, operation: str, path: str | None = None, cause: Exception | None = None):
        details = {"operation": operation}
        if path:
            details["path"] = path
        if cause:
            details["cause"] = str(cause)
        message = self.description
        if path:
            message += f": {path}"
        if cause:
            message += f" ({cause})"
        super().__init__(message, details)
        self.operation = operation
        self.path = path
        self.cause = cause


class DocumentReadError(DocumentIOError):
    """Raised when a document is missing or unreadable."""

    description = "Failed to read file"


class DocumentWriteError(DocumentIOError):
    """Raised when a document cannot be written."""

    description = "Failed to write file"


class DocumentListError(DocumentIOError):
    """Raised when the document directory or one of its entries cannot be inspected."""

    description = "Failed to list files"


class DialogError(NoteShellError):
    """Raised when the host file dialog itself fails.

    A user dismissing the dialog is not an error; providers report it
    by returning None.
    """

    def __init__(self, operation: str, cause: Exception | None = None):
        details = {"operation": operation}
        if cause:
            details["cause"] = str(cause)
        message = f"File dialog failed during {operation}"
        if cause:
            message += f": {cause}"
        super().__init__(message, details)
        self.operation = operation
        self.cause = cause


class InvalidUserError(NoteShellError):
    """Raised when a user record has a missing or mistyped field."""

    def __init__(self, field: str, reason: str):
        super().__init__(f"Invalid user {field}: {reason}", {"field": field, "reason": reason})
        self.field = field
        self.reason = reason


class ConfigError(NoteShellError):
    """Raised when the settings file cannot be loaded."""

    def __init__(self, path: str, reason: str):
        super().__init__(f"Invalid configuration in {path}: {reason}", {"path": path, "reason": reason})
        self.path = path
        self.reason = reason
