"""Tests for the host dialog bridge."""

import asyncio
import threading

import pytest

from noteshell.bridge import (
    CONTENT_EVENT,
    FILE_ERROR_EVENT,
    SAVE_STATE_EVENT,
    TEXT_FILES_FILTER,
    HostFileBridge,
)


@pytest.fixture
def bridge(dialogs, channel):
    """Bridge wired to the scripted dialogs."""
    return HostFileBridge(dialogs, channel)


class TestOpenFile:
    """Tests for HostFileBridge.open_file."""

    @pytest.mark.asyncio
    async def test_emits_content(self, bridge, dialogs, channel, temp_dir):
        source = temp_dir / "picked.txt"
        source.write_text("from disk", encoding="utf-8")
        dialogs.pick_answer = source
        sub = channel.subscribe()

        await bridge.open_file()

        notification = sub.get_nowait()
        assert notification.event == CONTENT_EVENT
        assert notification.payload == "from disk"

    @pytest.mark.asyncio
    async def test_dialog_runs_off_the_loop_thread(self, bridge, dialogs, temp_dir):
        source = temp_dir / "picked.txt"
        source.write_text("x", encoding="utf-8")
        dialogs.pick_answer = source

        await bridge.open_file()

        assert len(dialogs.threads) == 1
        assert dialogs.threads[0] != threading.current_thread().name

    @pytest.mark.asyncio
    async def test_cancel_emits_nothing(self, bridge, dialogs, channel):
        dialogs.pick_answer = None
        sub = channel.subscribe()

        await bridge.open_file()

        assert dialogs.pick_calls == 1
        assert sub.pending() == 0

    @pytest.mark.asyncio
    async def test_missing_file_emits_error(self, bridge, dialogs, channel, temp_dir):
        dialogs.pick_answer = temp_dir / "gone.txt"
        sub = channel.subscribe()

        await bridge.open_file()

        notification = sub.get_nowait()
        assert notification.event == FILE_ERROR_EVENT
        assert notification.payload["operation"] == "open_file"
        assert "Failed to read file" in notification.payload["error"]

    @pytest.mark.asyncio
    async def test_dialog_failure_emits_error(self, bridge, dialogs, channel):
        dialogs.pick_answer = RuntimeError("no display")
        sub = channel.subscribe()

        await bridge.open_file()

        notification = sub.get_nowait()
        assert notification.event == FILE_ERROR_EVENT
        assert "no display" in notification.payload["error"]


class TestSaveFile:
    """Tests for HostFileBridge.save_file."""

    @pytest.mark.asyncio
    async def test_writes_and_emits_path(self, bridge, dialogs, channel, temp_dir):
        target = temp_dir / "out.txt"
        target.write_text("old content that is longer", encoding="utf-8")
        dialogs.save_answer = target
        sub = channel.subscribe()

        await bridge.save_file("new")

        assert target.read_text(encoding="utf-8") == "new"
        notification = sub.get_nowait()
        assert notification.event == SAVE_STATE_EVENT
        assert notification.payload == str(target.absolute())

    @pytest.mark.asyncio
    async def test_offers_text_filter(self, bridge, dialogs):
        dialogs.save_answer = None
        await bridge.save_file("x")
        assert dialogs.save_calls == [[TEXT_FILES_FILTER]]

    @pytest.mark.asyncio
    async def test_cancel_writes_and_emits_nothing(self, bridge, dialogs, channel, temp_dir):
        dialogs.save_answer = None
        sub = channel.subscribe()

        await bridge.save_file("content")

        assert sub.pending() == 0
        assert list(temp_dir.iterdir()) == []

    @pytest.mark.asyncio
    async def test_write_failure_emits_error(self, bridge, dialogs, channel, temp_dir):
        dialogs.save_answer = temp_dir / "no-such-dir" / "out.txt"
        sub = channel.subscribe()

        await bridge.save_file("content")

        notification = sub.get_nowait()
        assert notification.event == FILE_ERROR_EVENT
        assert notification.payload["operation"] == "save_file"


class TestDispatch:
    """Tests for background dispatch bookkeeping."""

    @pytest.mark.asyncio
    async def test_returns_before_dialog_answers(self, bridge, dialogs, channel, temp_dir):
        """The caller is not blocked while the dialog is open."""
        release = threading.Event()
        target = temp_dir / "slow.txt"

        def slow_save(filters):
            release.wait(timeout=5)
            return target

        dialogs.save_file = slow_save
        sub = channel.subscribe()

        task = bridge.save_file("slow")
        await asyncio.sleep(0)
        assert bridge.pending == 1
        assert sub.pending() == 0

        release.set()
        await task
        assert bridge.pending == 0
        assert sub.get_nowait().event == SAVE_STATE_EVENT

    @pytest.mark.asyncio
    async def test_dropped_handles_complete(self, bridge, dialogs, channel, temp_dir):
        source = temp_dir / "a.txt"
        source.write_text("a", encoding="utf-8")
        dialogs.pick_answer = source
        sub = channel.subscribe()

        bridge.open_file()
        bridge.open_file()
        await bridge.wait_idle()

        assert bridge.pending == 0
        assert sub.pending() == 2


class TestDialogAnswers:
    """Tests for unusual answers from the host dialog."""

    @pytest.mark.asyncio
    async def test_empty_string_open_is_cancel(self, bridge, dialogs, channel):
        """Toolkits that report dismissal as "" emit nothing."""
        dialogs.pick_answer = ""
        sub = channel.subscribe()

        await bridge.open_file()

        assert sub.pending() == 0

    @pytest.mark.asyncio
    async def test_empty_string_save_is_cancel(self, bridge, dialogs, channel, temp_dir):
        dialogs.save_answer = ""
        sub = channel.subscribe()

        await bridge.save_file("content")

        assert sub.pending() == 0
        assert list(temp_dir.iterdir()) == []

    @pytest.mark.asyncio
    @pytest.mark.parametrize("answer", ["bad\0name.txt", 42])
    async def test_unusable_open_answer_emits_error(self, bridge, dialogs, channel, answer):
        """A path that cannot be opened is reported, not raised out of the task."""
        dialogs.pick_answer = answer
        sub = channel.subscribe()

        task = bridge.open_file()
        await task

        assert task.exception() is None
        notification = sub.get_nowait()
        assert notification.event == FILE_ERROR_EVENT
        assert notification.payload["operation"] == "open_file"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("answer", ["bad\0name.txt", 42])
    async def test_unusable_save_answer_emits_error(self, bridge, dialogs, channel, answer):
        dialogs.save_answer = answer
        sub = channel.subscribe()

        task = bridge.save_file("content")
        await task

        assert task.exception() is None
        notification = sub.get_nowait()
        assert notification.event == FILE_ERROR_EVENT
        assert notification.payload["operation"] == "save_file"
