"""
Serializers for moderation API.
"""

from rest_framework import serializers

from authentication.models import User, UserRole

# One year
MAX_MUTE_MINUTES = 60 * 24 * 365


class ModeratedUserSerializer(serializers.ModelSerializer):
    """A user with the moderation state moderators need to see."""

    class Meta:
        model = User
        fields = [
            "id",
            "username",
            "role",
            "avatar_url",
            "is_online",
            "last_seen",
            "muted",
            "muted_until",
            "muted_reason",
            "suspended",
            "suspended_at",
            "suspended_reason",
            "date_joined",
        ]
        read_only_fields = fields


class MuteSerializer(serializers.Serializer):
    """
    Mute request.

    Request body:
        {"duration": 60, "reason": "spam"}   // duration in minutes
    """

    duration = serializers.IntegerField(min_value=1, max_value=MAX_MUTE_MINUTES)
    reason = serializers.CharField(max_length=500)


class SuspendSerializer(serializers.Serializer):
    """Suspend request."""

    reason = serializers.CharField(max_length=500)


class RoleChangeSerializer(serializers.Serializer):
    """Role change request."""

    role = serializers.ChoiceField(choices=UserRole.choices)
