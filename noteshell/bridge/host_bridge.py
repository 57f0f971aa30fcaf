"""
Bridge between shell commands and the host's native file dialogs.

Both operations are fire-and-forget: the caller gets a task handle
back immediately, the dialog runs in a worker thread, and the outcome
arrives on the notification channel.

Outcomes:
- open_file: "content" with the file text
- save_file: "save_state" with the chosen path
- any dialog or I/O failure: "file_error" with {"operation", "error"}
- user cancelled: nothing is emitted
"""

from __future__ import annotations

import asyncio
from collections.abc import Callable, Coroutine
from pathlib import Path
from typing import Any

from ..exceptions import DialogError, DocumentReadError, DocumentWriteError, NoteShellError
from ..logging_utils import get_shell_logger
from ..storage.file_ops import read_text, write_text
from .dialogs import TEXT_FILES_FILTER, DialogProvider, FileFilter
from .notifications import (
    CONTENT_EVENT,
    FILE_ERROR_EVENT,
    SAVE_STATE_EVENT,
    NotificationChannel,
)

logger = get_shell_logger("bridge")


class HostFileBridge:
    """Runs host dialogs off the interactive thread and reports via notifications."""

    def __init__(
        self,
        dialogs: DialogProvider,
        channel: NotificationChannel,
        save_filters: list[FileFilter] | None = None,
    ) -> None:
        """Initialize the bridge.

        Args:
            dialogs: Host dialog capability
            channel: Channel that receives completion notifications
            save_filters: Filters for the save dialog (default: text files)
        """
        self.dialogs = dialogs
        self.channel = channel
        self.save_filters = save_filters or [TEXT_FILES_FILTER]

        # Strong references so dropped handles are not garbage collected mid-flight
        self._tasks: set[asyncio.Task[None]] = set()

    @property
    def pending(self) -> int:
        """Number of dialog operations still running."""
        return len(self._tasks)

    def open_file(self) -> asyncio.Task[None]:
        """Let the user pick a file and broadcast its content.

        Must be called from a running event loop.
        """
        return self._spawn(self._open_file(), "open_file")

    def save_file(self, content: str) -> asyncio.Task[None]:
        """Let the user choose a destination and write content to it.

        Must be called from a running event loop.
        """
        return self._spawn(self._save_file(content), "save_file")

    async def wait_idle(self) -> None:
        """Wait until every in-flight dialog operation has finished."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)

    def _spawn(self, coro: Coroutine[Any, Any, None], operation: str) -> asyncio.Task[None]:
        task = asyncio.create_task(coro, name=f"noteshell-{operation}")
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        logger.debug(f"Dispatched {operation}")
        return task

    async def _open_file(self) -> None:
        try:
            path = await self._ask(self.dialogs.pick_file, "open_file")
            if path is None:
                logger.debug("Open dialog cancelled")
                return

            content = await read_text(path)
        except NoteShellError as e:
            self._report_failure("open_file", e)
            return
        except Exception as e:
            logger.exception("Unexpected error in open_file")
            self._report_failure("open_file", DocumentReadError("read", cause=e))
            return

        logger.info(f"Opened host file {path}")
        self.channel.emit(CONTENT_EVENT, content)

    async def _save_file(self, content: str) -> None:
        try:
            path = await self._ask(lambda: self.dialogs.save_file(self.save_filters), "save_file")
            if path is None:
                logger.debug("Save dialog cancelled")
                return

            await write_text(path, content)
        except NoteShellError as e:
            self._report_failure("save_file", e)
            return
        except Exception as e:
            logger.exception("Unexpected error in save_file")
            self._report_failure("save_file", DocumentWriteError("write", cause=e))
            return

        logger.info(f"Saved host file {path}")
        self.channel.emit(SAVE_STATE_EVENT, str(path))

    async def _ask(self, show_dialog: Callable[[], Any], operation: str) -> Path | None:
        """Run a blocking dialog call in a worker thread.

        Returns:
            The chosen absolute path, or None when the dialog was dismissed.
            Toolkits report dismissal as None or as an empty string.

        Raises:
            DialogError: If the dialog fails or answers with something that is not a path
        """
        try:
            chosen = await asyncio.to_thread(show_dialog)
        except Exception as e:
            raise DialogError(operation, e) from e

        if chosen is None or chosen == "":
            return None

        try:
            path = Path(chosen)
        except TypeError as e:
            raise DialogError(operation, e) from e
        if "\x00" in str(path):
            raise DialogError(operation, ValueError("embedded null byte"))
        return path.absolute()

    def _report_failure(self, operation: str, error: NoteShellError) -> None:
        logger.warning(f"{operation} failed: {error.message}")
        self.channel.emit(FILE_ERROR_EVENT, {"operation": operation, "error": error.message})
