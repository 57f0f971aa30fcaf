"""
Session management for the note shell.

Provides the user record and the lock-guarded context that holds it.
"""

from .context import SessionContext
from .types import User

__all__ = [
    "User",
    "SessionContext",
]
