"""
Session user record.

The password is held in plaintext exactly as the host submits it.
It is masked in repr() and never written to logs.
"""

from dataclasses import dataclass, field
from typing import Any

from ..exceptions import InvalidUserError


@dataclass
class User:
    """The current user of the shell session."""

    id: int = 0
    username: str = ""
    password: str = field(default="", repr=False)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary."""
        return {
            "id": self.id,
            "username": self.username,
            "password": self.password,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "User":
        """Deserialize from dictionary.

        Missing fields take the default-record values.

        Raises:
            InvalidUserError: If a field has the wrong type or id is negative
        """
        if not isinstance(data, dict):
            raise InvalidUserError("user", "must be an object")

        user_id = data.get("id", 0)
        # bool is an int subclass but never a valid id
        if isinstance(user_id, bool) or not isinstance(user_id, int):
            raise InvalidUserError("id", "must be an unsigned integer")
        if user_id < 0:
            raise InvalidUserError("id", "must be an unsigned integer")

        username = data.get("username", "")
        if not isinstance(username, str):
            raise InvalidUserError("username", "must be a string")

        password = data.get("password", "")
        if not isinstance(password, str):
            raise InvalidUserError("password", "must be a string")

        return cls(id=user_id, username=username, password=password)
