"""Tests for the session user record and context."""

from __future__ import annotations

import threading

import pytest

from noteshell.exceptions import InvalidUserError
from noteshell.session import SessionContext, User


class TestUser:
    """Tests for User dataclass."""

    def test_defaults_are_empty_record(self) -> None:
        """The default record has id 0 and empty strings."""
        user = User()
        assert user.id == 0
        assert user.username == ""
        assert user.password == ""

    def test_to_dict(self) -> None:
        """Test serialization to dictionary."""
        user = User(id=7, username="alice", password="secret")
        assert user.to_dict() == {"id": 7, "username": "alice", "password": "secret"}

    def test_from_dict(self) -> None:
        """Test deserialization from dictionary."""
        user = User.from_dict({"id": 3, "username": "bob", "password": "pw"})
        assert user == User(id=3, username="bob", password="pw")

    def test_from_dict_missing_fields_default(self) -> None:
        """Missing fields take the default values."""
        assert User.from_dict({"username": "carol"}) == User(id=0, username="carol", password="")

    @pytest.mark.parametrize(
        "data,field",
        [
            ({"id": -1}, "id"),
            ({"id": "1"}, "id"),
            ({"id": True}, "id"),
            ({"username": 5}, "username"),
            ({"password": None}, "password"),
        ],
    )
    def test_from_dict_rejects_bad_fields(self, data, field) -> None:
        """Mistyped fields raise InvalidUserError naming the field."""
        with pytest.raises(InvalidUserError) as exc_info:
            User.from_dict(data)
        assert exc_info.value.field == field

    def test_from_dict_rejects_non_mapping(self) -> None:
        with pytest.raises(InvalidUserError):
            User.from_dict(["alice"])  # type: ignore[arg-type]

    def test_repr_masks_password(self) -> None:
        """The password never appears in repr()."""
        assert "hunter2" not in repr(User(id=1, username="dave", password="hunter2"))


class TestSessionContext:
    """Tests for SessionContext."""

    def test_starts_with_default_record(self) -> None:
        assert SessionContext().get_current() == User()

    def test_set_then_get_returns_same_value(self) -> None:
        """set_current followed by get_current yields an equal record."""
        session = SessionContext()
        user = User(id=1, username="alice", password="pw")
        session.set_current(user)
        assert session.get_current() == user

    def test_set_returns_stored_value(self) -> None:
        session = SessionContext()
        user = User(id=2, username="bob", password="pw")
        assert session.set_current(user) == user

    def test_returned_values_are_copies(self) -> None:
        """Mutating a returned record does not touch the stored one."""
        session = SessionContext()
        user = User(id=1, username="alice", password="pw")
        returned = session.set_current(user)
        returned.username = "mallory"
        user.username = "eve"
        fetched = session.get_current()
        fetched.id = 99
        assert session.get_current() == User(id=1, username="alice", password="pw")

    def test_replacement_is_wholesale(self) -> None:
        """A new record replaces every field of the old one."""
        session = SessionContext(User(id=1, username="alice", password="pw"))
        session.set_current(User(id=2, username="bob"))
        assert session.get_current() == User(id=2, username="bob", password="")

    def test_reset(self) -> None:
        session = SessionContext(User(id=5, username="x", password="y"))
        session.reset()
        assert session.get_current() == User()

    def test_contexts_are_isolated(self) -> None:
        """Each context owns its own record."""
        first = SessionContext()
        second = SessionContext()
        first.set_current(User(id=1, username="alice"))
        assert second.get_current() == User()

    def test_concurrent_sets_leave_one_whole_record(self) -> None:
        """Racing writers leave exactly one of the written records."""
        session = SessionContext()
        candidates = [User(id=i, username=f"user{i}", password=f"pw{i}") for i in range(2)]
        barrier = threading.Barrier(len(candidates))

        def writer(user: User) -> None:
            barrier.wait()
            for _ in range(500):
                session.set_current(user)

        threads = [threading.Thread(target=writer, args=(u,)) for u in candidates]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert session.get_current() in candidates
