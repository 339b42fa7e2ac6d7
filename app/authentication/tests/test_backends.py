"""
Tests for ActiveAccountBackend.
"""

from authentication.backends import ActiveAccountBackend
from authentication.tests.factories import DEFAULT_PASSWORD, UserFactory


class TestActiveAccountBackend:
    def test_authenticates_active_user(self, db):
        user = UserFactory(username="alice")

        assert ActiveAccountBackend().authenticate(
            None, username="alice", password=DEFAULT_PASSWORD
        ) == user

    def test_refuses_suspended_credentials(self, db):
        UserFactory(username="banned", suspended=True)

        assert (
            ActiveAccountBackend().authenticate(
                None, username="banned", password=DEFAULT_PASSWORD
            )
            is None
        )

    def test_session_lookup_still_finds_suspended_user(self, db):
        """The middleware needs the real user to report the suspension."""
        user = UserFactory(username="banned", suspended=True)

        assert ActiveAccountBackend().get_user(user.pk) == user

    def test_session_lookup_skips_inactive_user(self, db):
        user = UserFactory(username="gone", is_active=False)

        assert ActiveAccountBackend().get_user(user.pk) is None
