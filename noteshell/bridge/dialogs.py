"""
Host file dialog interface.

Defines the contract a host must implement to show its native
open/save dialogs. Both calls block until the user answers.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import Path


@dataclass(frozen=True)
class FileFilter:
    """A named set of extensions offered by a dialog (without dots)."""

    name: str
    extensions: tuple[str, ...] = field(default_factory=tuple)


TEXT_FILES_FILTER = FileFilter("Text Files", ("txt",))


class DialogProvider(ABC):
    """Abstract native dialog provider.

    Implementations wrap whatever the host offers (a GUI toolkit, a
    webview runtime, a scripted fake in tests). They are always called
    from a worker thread, never from the interactive one.
    """

    @abstractmethod
    def pick_file(self) -> Path | None:
        """Show the "open file" dialog.

        Returns:
            The chosen absolute path, or None if the user cancelled

        Raises:
            Exception: If the dialog could not be shown
        """
        ...

    @abstractmethod
    def save_file(self, filters: list[FileFilter]) -> Path | None:
        """Show the "save file" dialog restricted to the given filters.

        Returns:
            The chosen absolute path, or None if the user cancelled

        Raises:
            Exception: If the dialog could not be shown
        """
        ...
