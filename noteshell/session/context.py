"""
Session context.

Holds the single "current user" record behind a lock. The context is
constructed explicitly and handed to the command router, so each
router (and each test) owns its own session.
"""

import logging
import threading
from dataclasses import replace

from .types import User

logger = logging.getLogger(__name__)


class SessionContext:
    """Mutually exclusive slot for the current user.

    Usage:
        session = SessionContext()
        session.set_current(User(id=1, username="alice", password="pw"))
        user = session.get_current()

    Both accessors hand out copies, so callers never share the stored
    record. The lock is held only for the copy or the replacement.
    """

    def __init__(self, initial: User | None = None) -> None:
        self._lock = threading.Lock()
        self._user = replace(initial) if initial is not None else User()

    def set_current(self, user: User) -> User:
        """Replace the held record and return a copy of what was stored."""
        stored = replace(user)
        with self._lock:
            self._user = stored
            result = replace(self._user)
        logger.info(f"Session user set to '{result.username}' (id={result.id})")
        return result

    def get_current(self) -> User:
        """Return a copy of the held record."""
        with self._lock:
            return replace(self._user)

    def reset(self) -> None:
        """Restore the default empty record."""
        with self._lock:
            self._user = User()
        logger.debug("Session user reset")
