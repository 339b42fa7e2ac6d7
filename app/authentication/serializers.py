"""
Serializers for accounts.

This module provides DRF serializers for:
- User model (public and self views)
- Registration and login requests
- Profile updates, account deletion and status changes

Related files:
    - models.py: User model
    - views.py: Views that use these serializers
    - services.py: AuthService, which applies the validated data

Security:
    - Password fields are write-only
    - Moderation state is only exposed in the self view and to moderators
"""

from django.contrib.auth.password_validation import validate_password
from rest_framework import serializers

from authentication.constants import PROFILE_CONFIG
from authentication.models import User, validate_username_format


class UserSerializer(serializers.ModelSerializer):
    """
    Public view of a user, as other chat members see them.

    Users who appear offline are reported offline.
    """

    is_online = serializers.BooleanField(source="visible_online", read_only=True)

    class Meta:
        model = User
        fields = ["id", "username", "role", "avatar_url", "is_online", "last_seen"]
        read_only_fields = fields


class CurrentUserSerializer(serializers.ModelSerializer):
    """The authenticated user's own account, including moderation state."""

    class Meta:
        model = User
        fields = [
            "id",
            "username",
            "role",
            "avatar_url",
            "is_online",
            "appear_offline",
            "last_seen",
            "muted",
            "muted_until",
            "muted_reason",
            "suspended",
            "suspended_reason",
            "last_username_change",
            "date_joined",
        ]
        read_only_fields = fields


def _validate_username(value: str) -> str:
    # DRF converts the django ValidationError raised here into a field error
    value = value.strip()
    validate_username_format(value)
    return value


class RegisterSerializer(serializers.Serializer):
    """
    Registration request.

    Request body:
        {"username": "alice", "password": "secret1", "consent": true}
    """

    username = serializers.CharField(
        min_length=PROFILE_CONFIG.MIN_USERNAME_LENGTH,
        max_length=PROFILE_CONFIG.MAX_USERNAME_LENGTH,
    )
    password = serializers.CharField(
        write_only=True,
        min_length=PROFILE_CONFIG.MIN_PASSWORD_LENGTH,
        style={"input_type": "password"},
    )
    consent = serializers.BooleanField()

    def validate_username(self, value):
        return _validate_username(value)

    def validate_password(self, value):
        validate_password(value)
        return value

    def validate_consent(self, value):
        if value is not True:
            raise serializers.ValidationError(
                "You must accept the terms to register."
            )
        return value


class LoginSerializer(serializers.Serializer):
    """Login request."""

    username = serializers.CharField()
    password = serializers.CharField(write_only=True, style={"input_type": "password"})


class ProfileUpdateSerializer(serializers.Serializer):
    """
    Profile update request. Every field is optional.

    ``current_password`` is required by AuthService when ``username``
    or ``new_password`` is present.
    """

    username = serializers.CharField(
        required=False,
        min_length=PROFILE_CONFIG.MIN_USERNAME_LENGTH,
        max_length=PROFILE_CONFIG.MAX_USERNAME_LENGTH,
    )
    current_password = serializers.CharField(required=False, write_only=True)
    new_password = serializers.CharField(
        required=False,
        write_only=True,
        min_length=PROFILE_CONFIG.MIN_PASSWORD_LENGTH,
    )
    avatar_url = serializers.URLField(required=False, allow_blank=True, max_length=500)
    appear_offline = serializers.BooleanField(required=False)

    def validate_username(self, value):
        return _validate_username(value)

    def validate_new_password(self, value):
        validate_password(value, user=self.context.get("user"))
        return value


class DeleteAccountSerializer(serializers.Serializer):
    """Account deletion request; the password confirms intent."""

    password = serializers.CharField(write_only=True)


class StatusSerializer(serializers.Serializer):
    """Online status update."""

    is_online = serializers.BooleanField()
