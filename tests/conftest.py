"""
Shared test configuration and fixtures.

Provides a scripted dialog provider standing in for the host's native
file dialogs, and routers wired to temporary directories.
"""

import tempfile
import threading
from pathlib import Path

import pytest

from noteshell.bridge import DialogProvider, FileFilter, NotificationChannel
from noteshell.commands import CommandRouter, create_router
from noteshell.config import ShellConfig
from noteshell.storage import AppDataLocator, DeviceFileStore, FixedAppDataProvider


class ScriptedDialogProvider(DialogProvider):
    """
    Dialog provider that answers from preset values.

    An answer may be a path, None (user cancelled) or an exception
    instance, which is raised as if the host dialog had failed.
    """

    def __init__(self, pick=None, save=None):
        self.pick_answer = pick
        self.save_answer = save
        self.pick_calls = 0
        self.save_calls: list[list[FileFilter]] = []
        self.threads: list[str] = []

    def pick_file(self):
        self.pick_calls += 1
        self.threads.append(threading.current_thread().name)
        if isinstance(self.pick_answer, Exception):
            raise self.pick_answer
        return self.pick_answer

    def save_file(self, filters):
        self.save_calls.append(list(filters))
        self.threads.append(threading.current_thread().name)
        if isinstance(self.save_answer, Exception):
            raise self.save_answer
        return self.save_answer


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def data_dir(temp_dir):
    """App data directory that does not exist yet."""
    return temp_dir / "app-data" / "com.noteshell.test"


@pytest.fixture
def store(data_dir):
    """DeviceFileStore rooted in a temporary app data directory."""
    return DeviceFileStore(AppDataLocator(FixedAppDataProvider(data_dir)))


@pytest.fixture
def dialogs():
    """Scripted dialog provider; tests set its answers."""
    return ScriptedDialogProvider()


@pytest.fixture
def channel():
    """Fresh notification channel."""
    return NotificationChannel()


@pytest.fixture
def router(data_dir, dialogs, channel) -> CommandRouter:
    """Router wired to temporary storage and the scripted dialogs."""
    config = ShellConfig(data_dir=data_dir)
    return create_router(config, dialogs, channel=channel)
