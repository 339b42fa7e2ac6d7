"""
Tests for AuthService.

Covers registration, credential checks (including suspended accounts),
profile updates with the username cooldown, presence and account deletion.
"""

import pytest
from django.utils import timezone
from freezegun import freeze_time

from authentication.models import User
from authentication.services import AuthService
from authentication.tests.factories import DEFAULT_PASSWORD, UserFactory
from chat.models import Room, RoomMember
from chat.services import RoomService


# =============================================================================
# Registration & credentials
# =============================================================================


@pytest.mark.django_db
class TestRegister:
    def test_creates_user(self):
        result = AuthService.register("newbie", "secret1")

        assert result.success
        assert result.data.username == "newbie"
        assert result.data.check_password("secret1")

    def test_username_taken_case_insensitively(self, user):
        result = AuthService.register(user.username.upper(), "secret1")

        assert not result.success
        assert result.error_code == "USERNAME_TAKEN"
        assert User.objects.count() == 1


@pytest.mark.django_db
class TestAuthenticateCredentials:
    def test_valid_credentials(self, user):
        result = AuthService.authenticate_credentials(None, user.username, DEFAULT_PASSWORD)

        assert result.success
        assert result.data == user

    def test_wrong_password(self, user):
        result = AuthService.authenticate_credentials(None, user.username, "wrong-pass")

        assert result.error_code == "INVALID_CREDENTIALS"

    def test_unknown_user(self, db):
        result = AuthService.authenticate_credentials(None, "ghost", "whatever")

        assert result.error_code == "INVALID_CREDENTIALS"

    def test_suspended_user_gets_reason(self, db):
        suspended_at = timezone.now()
        UserFactory(
            username="banned",
            suspended=True,
            suspended_at=suspended_at,
            suspended_reason="spamming",
        )

        result = AuthService.authenticate_credentials(None, "banned", DEFAULT_PASSWORD)

        assert result.error_code == "ACCOUNT_SUSPENDED"
        assert result.details["reason"] == "spamming"
        assert result.details["suspended_at"] == suspended_at.isoformat()

    def test_suspended_user_with_wrong_password_learns_nothing(self, db):
        UserFactory(username="banned", suspended=True, suspended_reason="spamming")

        result = AuthService.authenticate_credentials(None, "banned", "wrong-pass")

        assert result.error_code == "INVALID_CREDENTIALS"
        assert not result.details


# =============================================================================
# Presence
# =============================================================================


@pytest.mark.django_db
class TestSetStatus:
    def test_sets_own_status(self, user):
        result = AuthService.set_status(user, user.id, True)

        user.refresh_from_db()
        assert result.success
        assert user.is_online
        assert user.last_seen is not None

    def test_cannot_set_someone_elses_status(self, user, other_user):
        result = AuthService.set_status(user, other_user.id, True)

        other_user.refresh_from_db()
        assert result.error_code == "PERMISSION_DENIED"
        assert not other_user.is_online


# =============================================================================
# Profile
# =============================================================================


@pytest.mark.django_db
class TestUpdateProfile:
    def test_username_change_requires_current_password(self, user):
        result = AuthService.update_profile(user, username="renamed")

        user.refresh_from_db()
        assert result.error_code == "INVALID_PASSWORD"
        assert user.username == "alice"

    def test_username_change_records_time(self, user):
        result = AuthService.update_profile(
            user, username="renamed", current_password=DEFAULT_PASSWORD
        )

        user.refresh_from_db()
        assert result.success
        assert user.username == "renamed"
        assert user.last_username_change is not None

    def test_username_cooldown(self, user):
        with freeze_time("2026-03-01 12:00:00") as frozen:
            AuthService.update_profile(
                user, username="first", current_password=DEFAULT_PASSWORD
            )

            frozen.move_to("2026-03-05 12:00:00")
            too_soon = AuthService.update_profile(
                user, username="second", current_password=DEFAULT_PASSWORD
            )
            assert too_soon.error_code == "USERNAME_CHANGE_TOO_SOON"
            assert too_soon.details["next_allowed_at"].startswith("2026-03-08T12:00:00")

            frozen.move_to("2026-03-08 12:00:01")
            later = AuthService.update_profile(
                user, username="second", current_password=DEFAULT_PASSWORD
            )
            assert later.success

        user.refresh_from_db()
        assert user.username == "second"

    def test_username_taken(self, user, other_user):
        result = AuthService.update_profile(
            user, username="BOB", current_password=DEFAULT_PASSWORD
        )

        assert result.error_code == "USERNAME_TAKEN"

    def test_same_username_is_not_a_change(self, user):
        result = AuthService.update_profile(user, username="alice")

        assert result.success
        assert user.last_username_change is None

    def test_password_change(self, user):
        result = AuthService.update_profile(
            user, current_password=DEFAULT_PASSWORD, new_password="n3w-secret"
        )

        user.refresh_from_db()
        assert result.success
        assert user.check_password("n3w-secret")

    def test_password_change_with_wrong_current_password(self, user):
        result = AuthService.update_profile(
            user, current_password="nope-nope", new_password="n3w-secret"
        )

        assert result.error_code == "INVALID_PASSWORD"

    def test_avatar_and_visibility_need_no_password(self, user):
        result = AuthService.update_profile(
            user, avatar_url="https://example.com/a.png", appear_offline=True
        )

        user.refresh_from_db()
        assert result.success
        assert user.avatar_url == "https://example.com/a.png"
        assert user.appear_offline


# =============================================================================
# Account deletion
# =============================================================================


@pytest.mark.django_db
class TestDeleteAccount:
    def test_wrong_password(self, user):
        result = AuthService.delete_account(user, "nope-nope")

        assert result.error_code == "INVALID_PASSWORD"
        assert User.objects.filter(pk=user.pk).exists()

    def test_deletes_user_and_rooms_left_empty(self, user, other_user):
        own_room = RoomService.create_room(user, "Mine").data
        shared = RoomService.create_room(other_user, "Shared").data
        RoomService.join_room(user, shared)
        abandoned = RoomService.create_room(other_user, "Abandoned").data
        RoomService.join_room(user, abandoned)
        RoomService.leave_room(other_user, abandoned)

        result = AuthService.delete_account(user, DEFAULT_PASSWORD)

        assert result.success
        assert not User.objects.filter(pk=user.pk).exists()
        assert not Room.objects.filter(pk=own_room.pk).exists()
        assert not Room.objects.filter(pk=abandoned.pk).exists()
        assert Room.objects.filter(pk=shared.pk).exists()
        assert not RoomMember.objects.filter(user_id=user.pk).exists()
