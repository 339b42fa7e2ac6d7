"""
Tests for moderation API views.

Endpoint-level role checks (permission classes) and target-level checks
(ModerationService) both surface as 403 with an error code.
"""

from rest_framework import status

from authentication.models import User, UserRole


USERS_URL = "/api/users"


def action_url(user_id, action):
    return f"{USERS_URL}/{user_id}/{action}"


class TestUserList:
    """Tests for GET /api/users."""

    def test_moderator_lists_users(self, moderator_client, regular, moderator):
        response = moderator_client.get(USERS_URL)

        assert response.status_code == status.HTTP_200_OK
        usernames = [u["username"] for u in response.data]
        assert usernames == ["moddy", "regular"]
        assert "muted_until" in response.data[0]

    def test_regular_user_is_403(self, regular_client):
        response = regular_client.get(USERS_URL)

        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert response.data["error_code"] == "INSUFFICIENT_ROLE"

    def test_anonymous_is_401(self, db, api_client):
        assert api_client.get(USERS_URL).status_code == status.HTTP_401_UNAUTHORIZED


class TestMuteViews:
    """Tests for POST /api/users/<id>/mute and /unmute."""

    def test_mute(self, moderator_client, regular):
        response = moderator_client.post(
            action_url(regular.id, "mute"), {"duration": 15, "reason": "spam"}, format="json"
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.data["muted"] is True
        assert response.data["muted_reason"] == "spam"
        assert response.data["muted_until"] is not None

    def test_mute_needs_positive_duration(self, moderator_client, regular):
        response = moderator_client.post(
            action_url(regular.id, "mute"), {"duration": 0, "reason": "spam"}, format="json"
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert "duration" in response.data["errors"]

    def test_mute_needs_reason(self, moderator_client, regular):
        response = moderator_client.post(
            action_url(regular.id, "mute"), {"duration": 5}, format="json"
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_mute_peer_is_403(self, moderator_client, other_moderator):
        response = moderator_client.post(
            action_url(other_moderator.id, "mute"),
            {"duration": 15, "reason": "spam"},
            format="json",
        )

        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert response.data["error_code"] == "TARGET_PROTECTED"

    def test_unknown_user_is_404(self, moderator_client):
        response = moderator_client.post(
            action_url(999999, "mute"), {"duration": 15, "reason": "spam"}, format="json"
        )

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.data["error_code"] == "USER_NOT_FOUND"

    def test_regular_user_cannot_mute(self, regular_client, moderator):
        response = regular_client.post(
            action_url(moderator.id, "mute"), {"duration": 15, "reason": "x"}, format="json"
        )

        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert User.objects.get(pk=moderator.pk).muted is False

    def test_unmute(self, moderator_client, regular):
        regular.muted = True
        regular.save()

        response = moderator_client.post(action_url(regular.id, "unmute"))

        assert response.status_code == status.HTTP_200_OK
        assert response.data["muted"] is False


class TestSuspendViews:
    """Tests for POST /api/users/<id>/suspend and /unsuspend."""

    def test_admin_suspends(self, admin_client, regular):
        response = admin_client.post(
            action_url(regular.id, "suspend"), {"reason": "abuse"}, format="json"
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.data["suspended"] is True
        assert response.data["suspended_reason"] == "abuse"

    def test_moderator_cannot_suspend(self, moderator_client, regular):
        response = moderator_client.post(
            action_url(regular.id, "suspend"), {"reason": "abuse"}, format="json"
        )

        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert response.data["error_code"] == "INSUFFICIENT_ROLE"

    def test_suspended_user_is_logged_out(
        self, admin_client, regular, regular_client
    ):
        admin_client.post(action_url(regular.id, "suspend"), {"reason": "abuse"}, format="json")

        response = regular_client.get("/api/rooms")

        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert response.json()["error_code"] == "ACCOUNT_SUSPENDED"
        assert response.json()["reason"] == "abuse"

    def test_unsuspend(self, admin_client, regular):
        regular.suspended = True
        regular.save()

        response = admin_client.post(action_url(regular.id, "unsuspend"))

        assert response.status_code == status.HTTP_200_OK
        assert response.data["suspended"] is False


class TestRoleView:
    """Tests for PATCH /api/users/<id>/role."""

    def test_admin_promotes(self, admin_client, regular):
        response = admin_client.patch(
            action_url(regular.id, "role"), {"role": "moderator"}, format="json"
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.data["role"] == "moderator"

    def test_admin_cannot_grant_owner(self, admin_client, regular):
        response = admin_client.patch(
            action_url(regular.id, "role"), {"role": "owner"}, format="json"
        )

        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert response.data["error_code"] == "INSUFFICIENT_ROLE"
        assert User.objects.get(pk=regular.pk).role == UserRole.USER

    def test_unknown_role_is_400(self, admin_client, regular):
        response = admin_client.patch(
            action_url(regular.id, "role"), {"role": "emperor"}, format="json"
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data["error_code"] == "VALIDATION_ERROR"

    def test_self_is_403(self, admin_client, admin):
        response = admin_client.patch(
            action_url(admin.id, "role"), {"role": "user"}, format="json"
        )

        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert response.data["error_code"] == "CANNOT_TARGET_SELF"
