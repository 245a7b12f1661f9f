"""Tests for the user and message store functions against SQLite."""

import pytest

from core.errors import Conflict
from core.messages import create_message, get_message, list_messages, parse_message_id
from core.security import get_password_hash
from core.users import create_user, find_user_by_username, verify_password
from models.user import User


class TestUserStore:

    def test_create_and_find_user(self, db):
        created = create_user(db, "alice", get_password_hash("secret123"))

        found = find_user_by_username(db, "alice")

        assert found is not None
        assert found.id == created.id
        assert found.hashed_password != "secret123"

    def test_find_unknown_user_returns_none(self, db):
        assert find_user_by_username(db, "nobody") is None

    def test_duplicate_insert_rejected_by_unique_index(self, db):
        create_user(db, "alice", get_password_hash("secret123"))

        with pytest.raises(Conflict) as excinfo:
            create_user(db, "alice", get_password_hash("other"))

        assert excinfo.value.status_code == 400
        assert excinfo.value.message == "Username already exists"
        assert db.query(User).filter(User.username == "alice").count() == 1

    def test_session_usable_after_conflict(self, db):
        create_user(db, "alice", get_password_hash("secret123"))
        with pytest.raises(Conflict):
            create_user(db, "alice", get_password_hash("other"))

        bob = create_user(db, "bob", get_password_hash("hunter2"))

        assert bob.id is not None

    def test_verify_password(self, db):
        user = create_user(db, "alice", get_password_hash("secret123"))

        assert verify_password(user, "secret123")
        assert not verify_password(user, "wrong")
        assert not verify_password(user, None)


class TestMessageStore:

    def test_create_assigns_id_and_timestamp(self, db):
        msg = create_message(db, "Ann", "ann@example.com", "Hello")

        assert msg.id is not None
        assert msg.created_at is not None

    def test_get_by_id(self, db):
        msg = create_message(db, "Ann", "ann@example.com", "Hello")

        fetched = get_message(db, str(msg.id))

        assert fetched is not None
        assert fetched.message == "Hello"

    def test_list_in_insertion_order(self, db):
        first = create_message(db, "Ann", "ann@example.com", "one")
        second = create_message(db, "Ben", "ben@example.com", "two")

        assert [m.id for m in list_messages(db)] == [first.id, second.id]

    @pytest.mark.parametrize(
        "raw_id",
        ["abc", "-1", "0", "1.5", "", " 1", "１", "507f1f77bcf86cd799439011", str(2 ** 64), None],
    )
    def test_malformed_ids_are_not_found(self, db, raw_id):
        create_message(db, "Ann", "ann@example.com", "Hello")

        assert get_message(db, raw_id) is None

    def test_unknown_id_is_not_found(self, db):
        assert get_message(db, "999") is None

    def test_parse_message_id(self):
        assert parse_message_id("42") == 42
        assert parse_message_id(42) == 42
        assert parse_message_id(True) is None
