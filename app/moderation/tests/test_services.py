"""
Tests for ModerationService.

Rules under test:
    - Mute / unmute need moderator or above; suspend, unsuspend and role
      changes need admin or above
    - Nobody acts on themselves
    - The actor must outrank the target, except owners
    - Nobody grants a role above their own
"""

from datetime import timedelta

import pytest
from django.utils import timezone
from freezegun import freeze_time

from authentication.models import User, UserRole
from moderation.services import ModerationService


# =============================================================================
# Mutes
# =============================================================================


@pytest.mark.django_db
class TestMute:
    def test_moderator_mutes_user(self, moderator, regular):
        with freeze_time("2026-06-01 09:00:00"):
            result = ModerationService.mute(moderator, regular, 30, "  spam  ")

        regular.refresh_from_db()
        assert result.success
        assert regular.muted
        assert regular.muted_reason == "spam"
        assert regular.muted_until.isoformat() == "2026-06-01T09:30:00+00:00"

    def test_remute_replaces_expiry(self, moderator, regular):
        ModerationService.mute(moderator, regular, 30, "spam")
        ModerationService.mute(moderator, regular, 120, "more spam")

        regular.refresh_from_db()
        assert regular.muted_reason == "more spam"
        assert regular.muted_until > timezone.now() + timedelta(minutes=100)

    @pytest.mark.parametrize("minutes", [0, -5, None])
    def test_invalid_duration(self, moderator, regular, minutes):
        result = ModerationService.mute(moderator, regular, minutes, "spam")

        assert result.error_code == "INVALID_DURATION"
        regular.refresh_from_db()
        assert not regular.muted

    def test_user_cannot_mute(self, regular):
        plain = User.objects.create_user(username="plain", password="secret1")

        result = ModerationService.mute(plain, regular, 10, "x")

        assert result.error_code == "INSUFFICIENT_ROLE"

    def test_cannot_mute_self(self, moderator):
        assert ModerationService.mute(moderator, moderator, 10, "x").error_code == (
            "CANNOT_TARGET_SELF"
        )

    def test_moderator_cannot_mute_peer_or_superior(self, moderator, other_moderator, admin):
        assert ModerationService.mute(moderator, other_moderator, 10, "x").error_code == (
            "TARGET_PROTECTED"
        )
        assert ModerationService.mute(moderator, admin, 10, "x").error_code == (
            "TARGET_PROTECTED"
        )

    def test_owner_mutes_anyone_but_self(self, owner, admin):
        assert ModerationService.mute(owner, admin, 10, "x").success
        other_owner = User.objects.create_user(
            username="owner2", password="secret1", role=UserRole.OWNER
        )
        assert ModerationService.mute(owner, other_owner, 10, "x").success

    def test_unmute(self, moderator, regular):
        ModerationService.mute(moderator, regular, 30, "spam")

        result = ModerationService.unmute(moderator, regular)

        regular.refresh_from_db()
        assert result.success
        assert not regular.muted
        assert regular.muted_until is None
        assert regular.muted_reason == ""


@pytest.mark.django_db
class TestReleaseExpiredMutes:
    def test_releases_only_expired(self, moderator, regular, admin):
        lasting = User.objects.create_user(username="lasting", password="secret1")
        forever = User.objects.create_user(
            username="forever", password="secret1", muted=True
        )
        with freeze_time("2026-06-01 09:00:00") as frozen:
            ModerationService.mute(moderator, regular, 5, "short")
            ModerationService.mute(moderator, lasting, 60, "long")

            frozen.move_to("2026-06-01 09:06:00")
            released = ModerationService.release_expired_mutes()

        assert released == 1
        assert not User.objects.get(pk=regular.pk).muted
        assert User.objects.get(pk=lasting.pk).muted
        assert User.objects.get(pk=forever.pk).muted


# =============================================================================
# Suspensions
# =============================================================================


@pytest.mark.django_db
class TestSuspend:
    def test_admin_suspends_moderator(self, admin, moderator):
        moderator.is_online = True
        moderator.save()

        result = ModerationService.suspend(admin, moderator, "abuse")

        moderator.refresh_from_db()
        assert result.success
        assert moderator.suspended
        assert moderator.suspended_reason == "abuse"
        assert moderator.suspended_at is not None
        assert not moderator.is_online

    def test_moderator_cannot_suspend(self, moderator, regular):
        assert ModerationService.suspend(moderator, regular, "x").error_code == (
            "INSUFFICIENT_ROLE"
        )

    def test_admin_cannot_suspend_admin(self, admin):
        peer = User.objects.create_user(
            username="admin2", password="secret1", role=UserRole.ADMIN
        )
        assert ModerationService.suspend(admin, peer, "x").error_code == "TARGET_PROTECTED"

    def test_unsuspend(self, admin, regular):
        ModerationService.suspend(admin, regular, "abuse")

        result = ModerationService.unsuspend(admin, regular)

        regular.refresh_from_db()
        assert result.success
        assert not regular.suspended
        assert regular.suspended_at is None
        assert regular.suspended_reason == ""


# =============================================================================
# Roles
# =============================================================================


@pytest.mark.django_db
class TestChangeRole:
    def test_admin_promotes_user_to_moderator(self, admin, regular):
        result = ModerationService.change_role(admin, regular, "moderator")

        regular.refresh_from_db()
        assert result.success
        assert regular.role == UserRole.MODERATOR

    def test_admin_promotes_to_admin(self, admin, regular):
        assert ModerationService.change_role(admin, regular, UserRole.ADMIN).success

    def test_admin_cannot_grant_owner(self, admin, regular):
        result = ModerationService.change_role(admin, regular, UserRole.OWNER)

        regular.refresh_from_db()
        assert result.error_code == "INSUFFICIENT_ROLE"
        assert regular.role == UserRole.USER

    def test_owner_grants_owner(self, owner, admin):
        assert ModerationService.change_role(owner, admin, UserRole.OWNER).success

    def test_unknown_role(self, admin, regular):
        assert ModerationService.change_role(admin, regular, "emperor").error_code == (
            "INVALID_ROLE"
        )

    def test_cannot_change_own_role(self, owner):
        assert ModerationService.change_role(owner, owner, "user").error_code == (
            "CANNOT_TARGET_SELF"
        )

    def test_admin_cannot_demote_owner(self, admin, owner):
        assert ModerationService.change_role(admin, owner, "user").error_code == (
            "TARGET_PROTECTED"
        )

    def test_moderator_cannot_change_roles(self, moderator, regular):
        assert ModerationService.change_role(moderator, regular, "moderator").error_code == (
            "INSUFFICIENT_ROLE"
        )


@pytest.mark.django_db
class TestListUsers:
    def test_sorted_by_username(self, regular, moderator, admin):
        assert [u.username for u in ModerationService.list_users()] == [
            "adminna",
            "moddy",
            "regular",
        ]
