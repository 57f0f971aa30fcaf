"""
Host dialog bridge and notification channel.

Key classes:
- HostFileBridge: open/save through native dialogs in the background
- NotificationChannel: broadcast of completion events
- DialogProvider: contract the host implements for its dialogs
"""

from .dialogs import TEXT_FILES_FILTER, DialogProvider, FileFilter
from .host_bridge import HostFileBridge
from .notifications import (
    CONTENT_EVENT,
    FILE_ERROR_EVENT,
    SAVE_STATE_EVENT,
    Notification,
    NotificationChannel,
    Subscription,
)

__all__ = [
    "HostFileBridge",
    "DialogProvider",
    "FileFilter",
    "TEXT_FILES_FILTER",
    "NotificationChannel",
    "Notification",
    "Subscription",
    # Event names
    "CONTENT_EVENT",
    "SAVE_STATE_EVENT",
    "FILE_ERROR_EVENT",
]
