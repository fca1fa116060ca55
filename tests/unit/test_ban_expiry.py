"""Unit tests for lazy ban expiry."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

from skillswap.auth.service import lift_expired_ban
from skillswap.db.models import User

NOW = datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc)


def _user(is_active: bool, ban_expires_at: datetime | None) -> User:
    return User(
        name="Test",
        email="test@example.com",
        password_hash="x",
        is_active=is_active,
        ban_expires_at=ban_expires_at,
    )


class TestLiftExpiredBan:
    def test_expired_ban_is_lifted(self):
        user = _user(False, NOW - timedelta(seconds=1))
        assert lift_expired_ban(user, NOW) is True
        assert user.is_active is True
        assert user.ban_expires_at is None

    def test_running_ban_is_kept(self):
        user = _user(False, NOW + timedelta(days=2))
        assert lift_expired_ban(user, NOW) is False
        assert user.is_active is False

    def test_indefinite_ban_is_kept(self):
        user = _user(False, None)
        assert lift_expired_ban(user, NOW) is False
        assert user.is_active is False

    def test_active_user_untouched(self):
        user = _user(True, None)
        assert lift_expired_ban(user, NOW) is False

    def test_naive_timestamp_treated_as_utc(self):
        user = _user(False, (NOW - timedelta(hours=1)).replace(tzinfo=None))
        assert lift_expired_ban(user, NOW) is True
