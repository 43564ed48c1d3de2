"""Tests for registration, login and session lookup in the user directory."""

from __future__ import annotations

from datetime import timedelta

import pytest

from auth import create_token
from database import utcnow
from errors import AuthError, ConflictError, NoSessionError, NotFoundError, ValidationError
from services.user_service import UserService


class TestRegister:

    @pytest.mark.parametrize(
        "username,email,password,message",
        [
            ("", "a@example.com", "pw", "Username is required"),
            ("alice", "", "pw", "Email is required"),
            ("alice", "a@example.com", "", "Password is required"),
        ],
    )
    def test_empty_fields_are_rejected(self, db_session, username, email, password, message):
        with pytest.raises(ValidationError) as exc:
            UserService.register(db_session, username, email, password)
        assert exc.value.message == message

    def test_password_is_not_stored_verbatim(self, db_session):
        user = UserService.register(db_session, "alice", "alice@example.com", "hunter2")

        assert user.id is not None
        assert user.hashed_password != "hunter2"
        assert user.last_login is None

    @pytest.mark.parametrize(
        "username,email",
        [("alice", "other@example.com"), ("bob", "alice@example.com")],
    )
    def test_duplicate_username_or_email_conflicts(self, db_session, user_factory, username, email):
        user_factory("alice", "alice@example.com")

        with pytest.raises(ConflictError):
            UserService.register(db_session, username, email, "pw")


class TestLogin:

    def test_login_updates_last_login(self, db_session, user_factory):
        user_factory("alice", password="pw")
        before = utcnow()

        user = UserService.authenticate(db_session, "alice", "pw")

        assert user.last_login is not None
        assert user.last_login >= before.replace(microsecond=0)

    def test_unknown_username(self, db_session):
        with pytest.raises(NotFoundError):
            UserService.authenticate(db_session, "ghost", "pw")

    def test_wrong_password(self, db_session, user_factory):
        user_factory("alice", password="pw")

        with pytest.raises(AuthError) as exc:
            UserService.authenticate(db_session, "alice", "PW")
        assert exc.value.message == "Invalid password"

    def test_long_passwords_differing_after_72_bytes(self, db_session, user_factory):
        user_factory("alice", password="A" * 72 + "right")

        with pytest.raises(AuthError):
            UserService.authenticate(db_session, "alice", "A" * 72 + "WRONG")
        assert UserService.authenticate(db_session, "alice", "A" * 72 + "right").username == "alice"

    def test_multibyte_password_matches_only_itself(self, db_session, user_factory):
        user_factory("alice", password="пароль" * 20)

        with pytest.raises(AuthError):
            UserService.authenticate(db_session, "alice", "пароль" * 19)
        assert UserService.authenticate(db_session, "alice", "пароль" * 20).username == "alice"


class TestCurrentUser:

    def test_no_login_yet_means_no_session(self, db_session, user_factory):
        user_factory("alice")

        with pytest.raises(NoSessionError):
            UserService.current_user(db_session)

    def test_most_recent_login_wins(self, db_session, user_factory):
        alice = user_factory("alice")
        bob = user_factory("bob")
        alice.last_login = utcnow()
        bob.last_login = alice.last_login - timedelta(minutes=5)
        db_session.commit()

        assert UserService.current_user(db_session).username == "alice"

        bob.last_login = alice.last_login + timedelta(seconds=1)
        db_session.commit()

        assert UserService.current_user(db_session).username == "bob"


class TestResolveToken:

    def test_valid_token(self, db_session, user_factory):
        alice = user_factory("alice")
        token = create_token(alice.id, alice.username)

        assert UserService.resolve_token(db_session, token).id == alice.id

    def test_garbage_token(self, db_session):
        with pytest.raises(AuthError):
            UserService.resolve_token(db_session, "not-a-jwt")

    def test_token_for_missing_user(self, db_session):
        token = create_token(999, "ghost")

        with pytest.raises(AuthError):
            UserService.resolve_token(db_session, token)
