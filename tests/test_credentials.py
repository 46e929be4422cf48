"""Tests for password hashing and session tokens."""

from datetime import UTC, datetime, timedelta

import pytest

from prooflog.services.auth import (
    get_password_hash,
    issue_session,
    verify_password,
    verify_session,
)
from prooflog.services.errors import InvalidSession
from prooflog.services.identity import handle_of


class TestPasswords:
    """Tests for password hashing."""

    def test_hash_is_salted_and_verifies(self):
        first = get_password_hash("secret1")
        second = get_password_hash("secret1")

        assert first != "secret1"
        assert first != second
        assert verify_password("secret1", first)
        assert verify_password("secret1", second)

    def test_wrong_password_returns_false(self):
        assert verify_password("secret2", get_password_hash("secret1")) is False

    def test_malformed_hash_returns_false(self):
        assert verify_password("secret1", "not-a-bcrypt-hash") is False


class TestSessions:
    """Tests for session token issue and verification."""

    def test_round_trip(self, settings):
        token = issue_session("account-1", settings)
        assert verify_session(token, settings) == "account-1"

    def test_expires_after_seven_days(self, settings):
        issued = datetime.now(UTC) - timedelta(days=7, seconds=5)
        with pytest.raises(InvalidSession):
            verify_session(issue_session("account-1", settings, issued_at=issued), settings)

    def test_still_valid_within_seven_days(self, settings):
        issued = datetime.now(UTC) - timedelta(days=6, hours=23)
        token = issue_session("account-1", settings, issued_at=issued)
        assert verify_session(token, settings) == "account-1"

    def test_other_secret_rejected(self, settings):
        other = settings.model_copy(update={"jwt_secret": "some-other-secret"})
        with pytest.raises(InvalidSession):
            verify_session(issue_session("account-1", other), settings)

    @pytest.mark.parametrize("token", ["", "abc", "a.b.c"])
    def test_malformed(self, token, settings):
        with pytest.raises(InvalidSession):
            verify_session(token, settings)


@pytest.mark.parametrize(
    "email,expected",
    [
        ("sak2@x.com", "sak2"),
        ("First.Last@Example.com", "first.last"),
        (" padded@example.com ", "padded"),
    ],
)
def test_handle_of(email, expected):
    assert handle_of(email) == expected
